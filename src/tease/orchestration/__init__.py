"""
Orchestration of a tease run.

Components:
- TeaseRunner: lifecycle coordinator (store, child, monitor, replay, cleanup)
- FailureReplayer: byte-exact replay of the captured output
- RuntimeState: per-run bookkeeping shared by the components
"""

from .replay import FailureReplayer
from .runner import TeaseRunner
from .shared_state import RuntimeState

__all__ = [
    "FailureReplayer",
    "TeaseRunner",
    "RuntimeState",
]
