"""
Configuration file loading utilities.

This module handles locating and parsing the optional config.toml.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from ..validation import handle_config_error, ErrorSeverity, ValidationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TEASE_CONFIG"
LOG_LEVEL_ENV_VAR = "TEASE_LOG_LEVEL"


def load_toml_file(file_path: Path, description: str = "configuration file") -> Dict[str, Any]:
    """
    Load and parse a TOML file with error handling.

    Args:
        file_path: Path to the TOML file to load
        description: Human-readable description for error messages

    Returns:
        Parsed TOML data as a dictionary

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If the file is unreadable, not UTF-8 or malformed
    """
    logger.debug(f"Loading {description} from: {file_path}")

    if not file_path.exists():
        logger.error(f"{description} not found: {file_path}")
        raise FileNotFoundError(f"{description} not found: {file_path}")

    try:
        with open(file_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        _raise_config_error(f"Malformed {description} {file_path}: {e}", file_path, description)
    except UnicodeDecodeError as e:
        _raise_config_error(f"{description} {file_path} is not valid UTF-8: {e}", file_path, description)
    except OSError as e:
        _raise_config_error(f"Cannot read {description} {file_path}: {e}", file_path, description)


def _raise_config_error(message: str, file_path: Path, description: str) -> None:
    handle_config_error(
        error=ValidationError(message, value=str(file_path)),
        context=f"parsing {description}",
        severity=ErrorSeverity.ERROR,
        reraise=True,
        logger=logger
    )


def get_default_config_path() -> Path:
    """Return $XDG_CONFIG_HOME/tease/config.toml (default ~/.config/tease/config.toml)."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        base = Path(config_home)
    else:
        base = Path.home() / ".config"
    return base / "tease" / "config.toml"


def resolve_config_path(explicit_path: Optional[Path] = None) -> Tuple[Path, bool]:
    """
    Decide which configuration file to load.

    Returns:
        Tuple of (path, required). An explicitly named file, either passed in
        or set through TEASE_CONFIG, is required to exist; the default
        location is optional.
    """
    if explicit_path is not None:
        return Path(explicit_path), True

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser(), True

    return get_default_config_path(), False


def get_log_level_override() -> Optional[str]:
    """Return the log level named in TEASE_LOG_LEVEL, if any."""
    value = os.environ.get(LOG_LEVEL_ENV_VAR)
    return value.strip() if value and value.strip() else None
