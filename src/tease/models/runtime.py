"""
Runtime data models.

This module contains data structures used while a run is in progress:
where the scratch file lives, what state the child is in, and which phase
the run has reached.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class StoreOrigin(Enum):
    """Directory the scratch file was created in."""
    CWD = "cwd"
    SYSTEMP = "systemp"


class ChildState(Enum):
    RUNNING = "running"
    EXITED = "exited"
    SIGNALED = "signaled"


@dataclass(frozen=True)
class ChildStatus:
    """
    Non-blocking snapshot of the child's status.

    ``code`` is set for EXITED, ``signal`` for SIGNALED.
    """

    state: ChildState
    code: Optional[int] = None
    signal: Optional[int] = None

    @classmethod
    def running(cls) -> "ChildStatus":
        return cls(ChildState.RUNNING)

    @classmethod
    def exited(cls, code: int) -> "ChildStatus":
        return cls(ChildState.EXITED, code=code)

    @classmethod
    def signaled(cls, signum: int) -> "ChildStatus":
        return cls(ChildState.SIGNALED, signal=signum)

    @property
    def is_running(self) -> bool:
        return self.state is ChildState.RUNNING

    @property
    def succeeded(self) -> bool:
        return self.state is ChildState.EXITED and self.code == 0

    @property
    def exit_code(self) -> int:
        """
        Exit status tease propagates for this child.

        A child killed by signal N maps to 128 + N, as a shell reports it.
        """
        if self.state is ChildState.EXITED:
            return self.code
        if self.state is ChildState.SIGNALED:
            return 128 + self.signal
        raise ValueError("Child is still running; no exit code yet")


class RunPhase(Enum):
    """Phases of a single run, in the order the coordinator visits them."""
    INIT = "init"
    STORE_READY = "store_ready"
    CHILD_RUNNING = "child_running"
    CHILD_SUCCEEDED = "child_succeeded"
    CHILD_FAILED = "child_failed"
    REPLAY = "replay"
    CLEANUP = "cleanup"
    DONE = "done"
