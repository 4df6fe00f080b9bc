"""
Validation and error handling for the tease package.

This module provides the exception hierarchy, exit codes, error handling
helpers and configuration value validators used across the application.
"""

from .exceptions import (
    CleanupWarning,
    CommandNotFound,
    ErrorSeverity,
    ExitCode,
    PollError,
    ReplayReadFailed,
    SpawnFailed,
    StoreUnavailable,
    TeaseError,
    TerminalWriteFailed,
    UsageError,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    handle_file_error,
)

from .validators import (
    TEMPLATE_PLACEHOLDER,
    split_name_template,
    validate_enum_choice,
    validate_name_template,
    validate_positive_float,
    validate_positive_integer,
)

__all__ = [
    # Errors
    "CleanupWarning",
    "CommandNotFound",
    "ErrorSeverity",
    "ExitCode",
    "PollError",
    "ReplayReadFailed",
    "SpawnFailed",
    "StoreUnavailable",
    "TeaseError",
    "TerminalWriteFailed",
    "UsageError",
    "ValidationError",
    "handle_cli_error",
    "handle_config_error",
    "handle_error",
    "handle_file_error",
    # Validators
    "TEMPLATE_PLACEHOLDER",
    "split_name_template",
    "validate_enum_choice",
    "validate_name_template",
    "validate_positive_float",
    "validate_positive_integer",
]
