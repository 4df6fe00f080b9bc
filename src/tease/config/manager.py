"""
Configuration management and singleton pattern.

This module provides the main configuration loading interface, implementing
a singleton pattern so the configuration is loaded only once per process.
"""

import logging
from pathlib import Path
from typing import Optional

from ..models.config import TeaseConfig
from ..validation import handle_config_error, ErrorSeverity
from .loader import get_log_level_override, load_toml_file, resolve_config_path
from .validators import validate_tease_config

logger = logging.getLogger(__name__)

# --- Global Singleton for Configuration ---

_CONFIG: Optional[TeaseConfig] = None

# Explicit configuration file, overriding TEASE_CONFIG and the default location.
_CONFIG_FILE_PATH: Optional[Path] = None


def set_config_path(config_path: Optional[Path]) -> None:
    """
    Set a custom configuration file path.

    Passing None restores the normal lookup (TEASE_CONFIG, then the default
    location). Clears any cached configuration.
    """
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = Path(config_path) if config_path is not None else None
    _CONFIG = None
    logger.debug(f"Configuration path set to: {config_path}")


def clear_config_cache() -> None:
    """Clear the cached configuration, forcing a reload on next access."""
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def _load_config(config_path: Path, required: bool) -> TeaseConfig:
    """
    Load and validate the configuration.

    A missing optional file yields the built-in defaults.

    Raises:
        FileNotFoundError: If a required configuration file is missing
        ValidationError: If the file is malformed or a value is invalid
    """
    log_level_override = get_log_level_override()

    if not required and not config_path.exists():
        logger.debug(f"No configuration file at {config_path}; using defaults")
        return validate_tease_config({}, log_level_override=log_level_override)

    try:
        config_data = load_toml_file(config_path, "configuration file")
        config = validate_tease_config(config_data, log_level_override=log_level_override)
        logger.debug(f"Loaded configuration from {config_path}")
        return config
    except Exception as e:
        handle_config_error(
            error=e,
            context=f"loading {config_path}",
            severity=ErrorSeverity.ERROR,
            reraise=True,
            logger=logger
        )
        raise


def get_config() -> TeaseConfig:
    """
    Get the application configuration, loading it if necessary.

    Returns:
        The singleton TeaseConfig instance

    Raises:
        FileNotFoundError: If an explicitly named configuration file is missing
        ValidationError: If configuration validation fails
    """
    global _CONFIG
    if _CONFIG is None:
        config_path, required = resolve_config_path(_CONFIG_FILE_PATH)
        _CONFIG = _load_config(config_path, required)
    return _CONFIG

