"""
Live progress monitoring of the child's output.
"""

from .tail import extract_tail_fragment
from .tail_monitor import TailMonitor

__all__ = [
    "extract_tail_fragment",
    "TailMonitor",
]
