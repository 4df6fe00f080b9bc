"""
Terminal overwrite protocol.

Every progress update and the failure replay start with "erase line" followed
by "return to column 0". There is no fallback for terminals that don't
understand the erase sequence.
"""

import sys
from typing import BinaryIO, Optional

ERASE_LINE = b"\x1b[2K"
CARRIAGE_RETURN = b"\r"
CLEAR_LINE = ERASE_LINE + CARRIAGE_RETURN
NEWLINE = b"\n"


class TerminalWriter:
    """Writes raw bytes to the terminal and flushes after every operation."""

    def __init__(self, stream: Optional[BinaryIO] = None):
        if stream is None:
            stream = getattr(sys.stdout, "buffer", sys.stdout)
        self.stream = stream

    def overwrite_line(self, fragment: bytes) -> None:
        """Replace the current line with ``fragment``, leaving the cursor after it."""
        self.stream.write(CLEAR_LINE + fragment)
        self.stream.flush()

    def clear_line(self) -> None:
        self.stream.write(CLEAR_LINE)
        self.stream.flush()

    def newline(self) -> None:
        self.stream.write(NEWLINE)
        self.stream.flush()

    def write(self, data: bytes) -> None:
        self.stream.write(data)

    def flush(self) -> None:
        self.stream.flush()
