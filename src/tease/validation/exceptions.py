"""
Exception hierarchy and error handling helpers.

Every error tease can raise derives from TeaseError. Fatal kinds carry the
exit code the process ends with when no child status was ever obtained;
non-fatal kinds are only ever logged through handle_error().
"""

import logging
import sys
from enum import Enum, IntEnum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ExitCode(IntEnum):
    """Exit codes tease uses for its own failures (sysexits-style)."""
    SUCCESS = 0
    USAGE = 64
    INTERNAL_ERROR = 70
    STORE_UNAVAILABLE = 73
    CONFIG = 78
    SPAWN_FAILED = 126
    COMMAND_NOT_FOUND = 127
    INTERRUPTED = 130


class TeaseError(Exception):
    """Base class for all tease errors."""

    exit_code: int = 1
    fatal: bool = True

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class UsageError(TeaseError):
    """No command was given."""
    exit_code = ExitCode.USAGE


class StoreUnavailable(TeaseError):
    """The scratch file could not be created in any location."""
    exit_code = ExitCode.STORE_UNAVAILABLE


class CommandNotFound(TeaseError):
    """The child executable could not be resolved."""
    exit_code = ExitCode.COMMAND_NOT_FOUND

    def __init__(self, command: str):
        super().__init__(f"Unknown command: {command}")
        self.command = command


class SpawnFailed(TeaseError):
    """The OS refused to start the child for a reason other than a missing executable."""
    exit_code = ExitCode.SPAWN_FAILED


class PollError(TeaseError):
    """A stat or read of the scratch file failed while monitoring."""
    fatal = False


class ReplayReadFailed(TeaseError):
    """A read of the scratch file failed while replaying it."""
    fatal = False


class TerminalWriteFailed(TeaseError):
    """Writing to the terminal failed, e.g. because stdout is a closed pipe."""
    fatal = False


class CleanupWarning(TeaseError):
    """Closing or unlinking the scratch file failed."""
    fatal = False


class ValidationError(TeaseError):
    """
    Exception raised when validation fails.

    Used for configuration values; a ValidationError that escapes config
    loading ends the run with ExitCode.CONFIG.
    """
    exit_code = ExitCode.CONFIG

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    error_msg = f"Error in {context}: {error}"

    if isinstance(severity, str):
        severity_str = severity.lower()
    else:
        severity_str = severity.value

    if severity_str == "debug":
        effective_logger.debug(error_msg, exc_info=True)
    elif severity_str == "info":
        effective_logger.info(error_msg)
    elif severity_str == "warning":
        effective_logger.warning(error_msg)
    elif severity_str == "error":
        effective_logger.error(error_msg)
    elif severity_str == "critical":
        effective_logger.critical(error_msg, exc_info=True)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_file_error(error: Exception, context: str, **kwargs) -> None:
    """Handle file-related errors."""
    handle_error(error, f"file {context}", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """Log a fatal CLI error and exit with its exit code."""
    exit_code = kwargs.pop('exit_code', None)
    if exit_code is None:
        exit_code = getattr(error, "exit_code", 1)

    severity = kwargs.pop('severity', ErrorSeverity.ERROR)
    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)

    sys.exit(int(exit_code))
