"""
Shared data structures for the orchestration module.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..models.runtime import ChildStatus, RunPhase
from ..validation import ExitCode


@dataclass
class RuntimeState:
    """
    Bookkeeping for one run of the coordinator.

    ``exit_code`` holds tease's own code until a child status is known; from
    then on it is the child's code and nothing later overwrites it.
    """
    phase: RunPhase = RunPhase.INIT
    phase_history: List[RunPhase] = field(default_factory=list)

    argv: List[str] = field(default_factory=list)
    store_path: Optional[Path] = None
    child_pid: Optional[int] = None
    child_status: Optional[ChildStatus] = None

    printed_something: bool = False
    replayed_bytes: Optional[int] = None
    exit_code: int = ExitCode.SUCCESS
