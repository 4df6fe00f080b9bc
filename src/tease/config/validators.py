"""
Configuration validation utilities.

This module turns raw config.toml data into a validated TeaseConfig.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..models.config import (
    DEFAULT_CWD_NAME_TEMPLATE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_REPLAY_CHUNK_SIZE,
    DEFAULT_TMP_NAME_TEMPLATE,
    DEFAULT_WINDOW_SIZE,
    TeaseConfig,
)
from ..validation import (
    ValidationError,
    validate_enum_choice,
    validate_name_template,
    validate_positive_float,
    validate_positive_integer,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
KNOWN_SECTIONS = ("monitor", "replay", "store", "logging")


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ValidationError(f"[{name}] must be a table", field_name=name, value=section)
    return section


def validate_tease_config(
    config_data: Dict[str, Any],
    log_level_override: Optional[str] = None,
) -> TeaseConfig:
    """
    Validate and create a TeaseConfig from raw configuration data.

    Args:
        config_data: Raw configuration parsed from config.toml (may be empty)
        log_level_override: Log level taken from the environment, wins over the file

    Returns:
        Validated TeaseConfig instance

    Raises:
        ValidationError: If validation fails
    """
    for name in config_data:
        if name not in KNOWN_SECTIONS:
            logger.warning(f"Ignoring unknown configuration section [{name}]")

    monitor_settings = _section(config_data, "monitor")
    replay_settings = _section(config_data, "replay")
    store_settings = _section(config_data, "store")
    logging_settings = _section(config_data, "logging")

    poll_interval = validate_positive_float(
        monitor_settings.get("poll_interval", DEFAULT_POLL_INTERVAL),
        min_value=0.001,  # 1ms minimum
        max_value=10.0,
        field_name="monitor.poll_interval",
    )

    window_size = validate_positive_integer(
        monitor_settings.get("window_size", DEFAULT_WINDOW_SIZE),
        min_value=1,
        max_value=1024 * 1024,
        field_name="monitor.window_size",
    )

    replay_chunk_size = validate_positive_integer(
        replay_settings.get("chunk_size", DEFAULT_REPLAY_CHUNK_SIZE),
        min_value=1,
        max_value=16 * 1024 * 1024,
        field_name="replay.chunk_size",
    )

    cwd_name_template = validate_name_template(
        store_settings.get("cwd_name_template", DEFAULT_CWD_NAME_TEMPLATE),
        field_name="store.cwd_name_template",
    )

    tmp_name_template = validate_name_template(
        store_settings.get("tmp_name_template", DEFAULT_TMP_NAME_TEMPLATE),
        field_name="store.tmp_name_template",
    )

    tmp_dir = store_settings.get("tmp_dir")
    if tmp_dir is not None:
        if not isinstance(tmp_dir, str) or not tmp_dir.strip():
            raise ValidationError(
                "store.tmp_dir must be a non-empty string",
                field_name="store.tmp_dir",
                value=tmp_dir,
            )
        tmp_dir = Path(tmp_dir).expanduser()

    log_level = validate_enum_choice(
        log_level_override or logging_settings.get("level", DEFAULT_LOG_LEVEL),
        choices=LOG_LEVELS,
        field_name="logging.level",
        case_sensitive=False,
    )

    return TeaseConfig(
        poll_interval=poll_interval,
        window_size=window_size,
        replay_chunk_size=replay_chunk_size,
        cwd_name_template=cwd_name_template,
        tmp_name_template=tmp_name_template,
        tmp_dir=tmp_dir,
        log_level=log_level,
    )
