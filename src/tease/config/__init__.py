"""
Configuration management for the tease package.

This module provides a clean interface for loading, validating, and accessing
the optional TOML configuration with singleton pattern management.
"""

from .manager import (
    clear_config_cache,
    get_config,
    set_config_path,
)

from .loader import (
    CONFIG_ENV_VAR,
    LOG_LEVEL_ENV_VAR,
    get_default_config_path,
    load_toml_file,
    resolve_config_path,
)
from .validators import validate_tease_config

__all__ = [
    # Main interface
    "get_config",
    "set_config_path",
    "clear_config_cache",
    # Advanced interface
    "CONFIG_ENV_VAR",
    "LOG_LEVEL_ENV_VAR",
    "get_default_config_path",
    "load_toml_file",
    "resolve_config_path",
    "validate_tease_config",
]
