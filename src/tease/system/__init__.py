"""
System interaction utilities: the terminal control protocol.
"""

from .terminal import (
    CARRIAGE_RETURN,
    CLEAR_LINE,
    ERASE_LINE,
    NEWLINE,
    TerminalWriter,
)

__all__ = [
    "CARRIAGE_RETURN",
    "CLEAR_LINE",
    "ERASE_LINE",
    "NEWLINE",
    "TerminalWriter",
]
