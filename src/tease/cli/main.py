"""
Command-line interface for tease.

Usage:
    tease <command> [args...]

Everything after the program name is the command to run; tease itself
accepts no flags. The process exits with the command's own exit status, or
with one of tease's codes (see ExitCode) when the command never ran.
"""

import logging
import sys
from typing import Optional, Sequence

from ..config import get_config
from ..orchestration import TeaseRunner
from ..validation import ExitCode, UsageError, ValidationError, handle_cli_error

USAGE = "usage: tease <command> [args...]"

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "WARNING") -> None:
    """
    Send diagnostics to stderr.

    stdout is reserved for the progress line and the failure replay.
    """
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run tease and return the exit code.

    Fatal errors before the run (bad configuration, no command) end the
    process through handle_cli_error() with tease's own exit code.
    """
    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)

    configure_logging()

    # Usage is reported before the configuration is looked at.
    if not argv:
        sys.stderr.write(USAGE + "\n")
        handle_cli_error(
            error=UsageError("No command given!"),
            context="argument parsing",
            logger=logger,
        )

    try:
        config = get_config()
    except (FileNotFoundError, ValidationError) as e:
        handle_cli_error(
            error=e,
            context="configuration loading",
            exit_code=ExitCode.CONFIG,
            logger=logger,
        )

    logging.getLogger().setLevel(config.log_level)
    logger.debug(f"Effective configuration: {config.to_dict()}")

    runner = TeaseRunner(config)
    try:
        return runner.run(argv)
    except KeyboardInterrupt:
        logger.warning("Interrupted; the command may still be running")
        return ExitCode.INTERRUPTED


def main_cli() -> None:
    """Console-script entry point."""
    sys.exit(int(main()))


if __name__ == "__main__":
    main_cli()
