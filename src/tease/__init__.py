"""
Tease: run a command behind a single live progress line.

Tease captures the command's combined stdout and stderr in a scratch file,
shows the latest output line in place while it runs, and prints the full
captured output only if the command fails.

The package is organized into specialized modules:
- config: Optional TOML configuration, loading and validation
- models: Configuration and runtime data structures
- validation: Exceptions, exit codes, error handling and validators
- storage: The scratch file holding the child's output
- executor: Spawning and polling the child process
- monitoring: Tail fragment extraction and the polling monitor
- system: Terminal control protocol
- orchestration: The run lifecycle coordinator and failure replay
- cli: Command-line entry point

Usage:
    From command line:
        tease make -j8

    Programmatically:
        from tease import TeaseRunner, get_config
        exit_code = TeaseRunner(get_config()).run(["make", "-j8"])
"""

from .config import get_config, clear_config_cache, set_config_path
from .orchestration import FailureReplayer, TeaseRunner
from .cli import main_cli

from .models import ChildState, ChildStatus, RunPhase, StoreOrigin, TeaseConfig

from .validation import (
    CleanupWarning,
    CommandNotFound,
    ExitCode,
    PollError,
    ReplayReadFailed,
    SpawnFailed,
    StoreUnavailable,
    TeaseError,
    TerminalWriteFailed,
    UsageError,
    ValidationError,
)

from .storage import OutputStore
from .executor import ChildSupervisor
from .monitoring import TailMonitor, extract_tail_fragment

__version__ = "0.1.0"

__all__ = [
    # Main interfaces
    "get_config",
    "clear_config_cache",
    "set_config_path",
    "TeaseRunner",
    "FailureReplayer",
    "main_cli",
    # Models
    "ChildState",
    "ChildStatus",
    "RunPhase",
    "StoreOrigin",
    "TeaseConfig",
    # Errors
    "CleanupWarning",
    "CommandNotFound",
    "ExitCode",
    "PollError",
    "ReplayReadFailed",
    "SpawnFailed",
    "StoreUnavailable",
    "TeaseError",
    "TerminalWriteFailed",
    "UsageError",
    "ValidationError",
    # Components
    "OutputStore",
    "ChildSupervisor",
    "TailMonitor",
    "extract_tail_fragment",
]
