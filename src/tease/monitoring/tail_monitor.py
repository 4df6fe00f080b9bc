"""
Polling tail monitor.

Watches the scratch file grow while the child runs and keeps a single,
in-place updated progress line on the terminal. The loop is driven purely by
a fixed sleep quantum; it never blocks on the child.
"""

import logging
import time
from typing import Callable

from ..models.config import DEFAULT_POLL_INTERVAL, DEFAULT_WINDOW_SIZE, TeaseConfig
from ..models.runtime import ChildStatus
from ..storage import OutputStore
from ..system.terminal import TerminalWriter
from ..validation import ErrorSeverity, PollError, TerminalWriteFailed, handle_error
from .tail import extract_tail_fragment

logger = logging.getLogger(__name__)


class TailMonitor:
    """
    Renders the latest output line of the store while the child runs.

    Attributes:
        last_size: Store size seen at the last poll that rendered
        printed_something: Whether any fragment was ever shown
        current_fragment: The fragment currently on screen
        terminal_failed: Whether a terminal write failed; rendering stops after that
    """

    def __init__(
        self,
        store: OutputStore,
        terminal: TerminalWriter,
        window_size: int = DEFAULT_WINDOW_SIZE,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.store = store
        self.terminal = terminal
        self.window_size = window_size
        self.poll_interval = poll_interval
        self.sleep = sleep

        self.last_size = 0
        self.printed_something = False
        self.current_fragment = b""
        self.poll_count = 0
        self.render_count = 0
        self.terminal_failed = False

    @classmethod
    def from_config(
        cls,
        store: OutputStore,
        terminal: TerminalWriter,
        config: TeaseConfig,
        sleep: Callable[[float], None] = time.sleep,
    ) -> "TailMonitor":
        return cls(
            store,
            terminal,
            window_size=config.window_size,
            poll_interval=config.poll_interval,
            sleep=sleep,
        )

    def poll_once(self) -> bool:
        """
        Check the store once and re-render if it grew.

        A failed stat or read is logged and the poll is skipped. After a
        failed terminal write nothing is rendered any more, but the child is
        still waited for.

        Returns:
            True if a new fragment was rendered
        """
        self.poll_count += 1
        if self.terminal_failed:
            return False
        try:
            size = self.store.size()
            # A shrinking store is not expected; treat it like no growth.
            if size <= self.last_size:
                return False
            window_length = min(self.window_size, size)
            window = self.store.read(size - window_length, window_length)
        except OSError as e:
            handle_error(
                PollError(f"Polling the scratch file failed: {e}", path=str(self.store.path)),
                context="tail monitor poll",
                severity=ErrorSeverity.WARNING,
                reraise=False,
                logger=logger,
            )
            return False

        fragment = extract_tail_fragment(window)
        try:
            self.terminal.overwrite_line(fragment)
        except OSError as e:
            self._report_terminal_failure(e)
            return False
        self.printed_something = True
        self.current_fragment = fragment
        self.last_size = size
        self.render_count += 1
        return True

    def run(self, supervisor) -> ChildStatus:
        """
        Poll until the child reaches a terminal state.

        The child status is sampled before the store in each iteration, so
        the last render covers everything the child wrote before it exited.

        Args:
            supervisor: Object with a non-blocking ``poll_nonblocking()`` method

        Returns:
            The child's terminal status
        """
        while True:
            self.sleep(self.poll_interval)
            status = supervisor.poll_nonblocking()
            self.poll_once()
            if not status.is_running:
                logger.debug(
                    f"Monitor finished after {self.poll_count} polls, "
                    f"{self.render_count} renders"
                )
                return status

    def finish_line(self) -> bool:
        """Emit the trailing newline owed after a rendered progress line."""
        if not self.printed_something or self.terminal_failed:
            return False
        try:
            self.terminal.newline()
        except OSError as e:
            self._report_terminal_failure(e)
            return False
        return True

    def _report_terminal_failure(self, error: OSError) -> None:
        self.terminal_failed = True
        handle_error(
            TerminalWriteFailed(f"Writing the progress line failed: {error}"),
            context="tail monitor render",
            severity=ErrorSeverity.WARNING,
            reraise=False,
            logger=logger,
        )
