"""
Lifecycle coordinator for a tease run.

TeaseRunner sequences scratch-store creation, child spawn, tail monitoring
and either the silent finish or the failure replay, then cleans up. Cleanup
runs on every path, and once the child's status is known it decides the exit
code no matter what happens afterwards.
"""

import logging
import time
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from ..executor import ChildSupervisor
from ..models.config import TeaseConfig
from ..models.runtime import ChildStatus, RunPhase
from ..monitoring import TailMonitor
from ..storage import OutputStore
from ..system.terminal import TerminalWriter
from ..validation import ErrorSeverity, ExitCode, TeaseError, UsageError, handle_error
from .replay import FailureReplayer
from .shared_state import RuntimeState

logger = logging.getLogger(__name__)


class TeaseRunner:
    """
    Runs one command under tease.

    The phases are ``INIT -> STORE_READY -> CHILD_RUNNING ->
    (CHILD_SUCCEEDED | CHILD_FAILED -> REPLAY) -> CLEANUP -> DONE``. Any
    fatal error before the child runs goes straight to CLEANUP.
    """

    def __init__(
        self,
        config: Optional[TeaseConfig] = None,
        terminal: Optional[TerminalWriter] = None,
        sleep: Callable[[float], None] = time.sleep,
        cwd: Optional[Union[str, Path]] = None,
    ):
        """
        Args:
            config: Tuning values; defaults are used when omitted
            terminal: Where the progress line and replay go (stdout by default)
            sleep: Sleep function used between polls
            cwd: Directory for the first scratch-file attempt (default: os.getcwd())
        """
        self.config = config or TeaseConfig()
        self.terminal = terminal or TerminalWriter()
        self.sleep = sleep
        self.cwd = cwd

        self.state = RuntimeState()
        self.supervisor = ChildSupervisor()

    def run(self, argv: Sequence[str]) -> int:
        """
        Execute the whole run and return the exit code for the process.

        Args:
            argv: The command to run and its arguments

        Returns:
            The child's exit code if it ran, otherwise tease's own code
        """
        self.state.argv = list(argv)
        self._enter_phase(RunPhase.INIT)

        try:
            if not argv:
                raise UsageError("No command given!")

            with OutputStore.from_config(self.config, cwd=self.cwd) as store:
                self.state.store_path = store.path
                self._enter_phase(RunPhase.STORE_READY)
                try:
                    self._execute(store)
                finally:
                    self._enter_phase(RunPhase.CLEANUP)
                    self.supervisor.release()

        except TeaseError as e:
            handle_error(e, context="tease run", severity=ErrorSeverity.ERROR,
                         reraise=False, logger=logger)
            if self.state.child_status is None:
                self.state.exit_code = e.exit_code
        except Exception as e:
            logger.error(f"An error occurred during the run: {e}", exc_info=True)
            if self.state.child_status is None:
                self.state.exit_code = ExitCode.INTERNAL_ERROR
        finally:
            if self.state.phase is not RunPhase.CLEANUP:
                self._enter_phase(RunPhase.CLEANUP)
            self._enter_phase(RunPhase.DONE)

        return int(self.state.exit_code)

    def _execute(self, store: OutputStore) -> None:
        """Spawn the child, monitor it, then finish silently or replay."""
        self.state.child_pid = self.supervisor.spawn(self.state.argv, store.handle)
        self._enter_phase(RunPhase.CHILD_RUNNING)

        monitor = TailMonitor.from_config(store, self.terminal, self.config, sleep=self.sleep)
        status = monitor.run(self.supervisor)
        self._record_child_status(status)
        self.state.printed_something = monitor.printed_something

        if status.succeeded:
            self._enter_phase(RunPhase.CHILD_SUCCEEDED)
            monitor.finish_line()
            return

        self._enter_phase(RunPhase.CHILD_FAILED)
        logger.info(f"Command {self.state.argv[0]!r} failed ({status}); replaying its output")
        self._enter_phase(RunPhase.REPLAY)
        replayer = FailureReplayer.from_config(store, self.terminal, self.config)
        self.state.replayed_bytes = replayer.replay()

    def _record_child_status(self, status: ChildStatus) -> None:
        self.state.child_status = status
        self.state.exit_code = status.exit_code

    def _enter_phase(self, phase: RunPhase) -> None:
        self.state.phase = phase
        self.state.phase_history.append(phase)
        logger.debug(f"Run phase: {phase.value}")
