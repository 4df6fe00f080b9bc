"""
Failure replay: stream the whole captured output back to the terminal.
"""

import logging

from ..models.config import DEFAULT_REPLAY_CHUNK_SIZE, TeaseConfig
from ..storage import OutputStore
from ..system.terminal import TerminalWriter
from ..validation import ErrorSeverity, ReplayReadFailed, TerminalWriteFailed, handle_error

logger = logging.getLogger(__name__)


class FailureReplayer:
    """Copies the store to the terminal byte for byte, in fixed-size chunks."""

    def __init__(
        self,
        store: OutputStore,
        terminal: TerminalWriter,
        chunk_size: int = DEFAULT_REPLAY_CHUNK_SIZE,
    ):
        self.store = store
        self.terminal = terminal
        self.chunk_size = chunk_size

    @classmethod
    def from_config(cls, store: OutputStore, terminal: TerminalWriter, config: TeaseConfig) -> "FailureReplayer":
        return cls(store, terminal, chunk_size=config.replay_chunk_size)

    def replay(self) -> int:
        """
        Clear the progress line, then write the store from offset 0 to its end.

        A read error or a failed terminal write stops the replay early; it
        is logged and not raised.

        Returns:
            Number of bytes replayed
        """
        offset = 0
        try:
            self.terminal.clear_line()
        except OSError as e:
            self._report_write_failure(e, offset)
            return offset

        while True:
            try:
                chunk = self.store.read(offset, self.chunk_size)
            except OSError as e:
                handle_error(
                    ReplayReadFailed(
                        f"Reading the captured output failed after {offset} bytes: {e}",
                        path=str(self.store.path),
                    ),
                    context="failure replay",
                    severity=ErrorSeverity.ERROR,
                    reraise=False,
                    logger=logger,
                )
                break
            if not chunk:
                break
            try:
                self.terminal.write(chunk)
            except OSError as e:
                self._report_write_failure(e, offset)
                return offset
            offset += len(chunk)

        try:
            self.terminal.flush()
        except OSError as e:
            self._report_write_failure(e, offset)
            return offset
        logger.debug(f"Replayed {offset} bytes from {self.store.path}")
        return offset

    def _report_write_failure(self, error: OSError, offset: int) -> None:
        handle_error(
            TerminalWriteFailed(f"Writing the captured output to the terminal failed after {offset} bytes: {error}"),
            context="failure replay",
            severity=ErrorSeverity.ERROR,
            reraise=False,
            logger=logger,
        )
