"""
Child process supervision.

This module starts the command tease wraps, with its stdout and stderr both
bound to the scratch file, and reports the child's status without blocking.
"""

import logging
from typing import List, Optional, Sequence

import psutil

from ..models.runtime import ChildStatus
from ..validation import CommandNotFound, SpawnFailed, UsageError

logger = logging.getLogger(__name__)


class ChildSupervisor:
    """
    Spawns one child and tracks it until it is reaped.

    Signals delivered to tease are not forwarded to the child.
    """

    def __init__(self):
        self.process: Optional[psutil.Popen] = None
        self.argv: List[str] = []
        self._status: Optional[ChildStatus] = None

    @property
    def pid(self) -> Optional[int]:
        return self.process.pid if self.process else None

    def spawn(self, argv: Sequence[str], output_handle: int) -> int:
        """
        Start the child with stdout and stderr both writing to ``output_handle``.

        Stdin and the environment are inherited; ``argv[0]`` is looked up on PATH.

        Args:
            argv: Command and arguments
            output_handle: File descriptor of the scratch file

        Returns:
            PID of the started child

        Raises:
            UsageError: If argv is empty
            CommandNotFound: If argv[0] cannot be resolved
            SpawnFailed: For any other OS-level spawn failure
        """
        if not argv:
            raise UsageError("No command given!")
        if self.process is not None:
            raise RuntimeError("ChildSupervisor.spawn() may only be called once")

        self.argv = list(argv)
        try:
            process = psutil.Popen(
                self.argv,
                stdout=output_handle,
                stderr=output_handle,
                close_fds=True,
            )
        except FileNotFoundError as e:
            raise CommandNotFound(self.argv[0]) from e
        except OSError as e:
            raise SpawnFailed(f"Couldn't start the process {self.argv[0]!r}: {e}") from e

        self.process = process
        logger.debug(f"Child process started with PID {process.pid}: {self.argv}")
        return process.pid

    def poll_nonblocking(self) -> ChildStatus:
        """
        Return the child's current status without blocking.

        The first terminal status observed reaps the child; later calls
        return that same status.
        """
        if self.process is None:
            raise RuntimeError("No child process to poll")
        if self._status is not None:
            return self._status

        return_code = self.process.poll()
        if return_code is None:
            return ChildStatus.running()

        if return_code >= 0:
            status = ChildStatus.exited(return_code)
        else:
            status = ChildStatus.signaled(-return_code)

        self._status = status
        logger.debug(f"Child process {self.process.pid} finished: {status}")
        return status

    def release(self) -> None:
        """
        Drop the process handle at cleanup.

        A child that is still alive here is only reported, never signalled.
        """
        if self.process is None:
            return
        if self._status is None and self._is_process_alive():
            logger.warning(
                f"Child process {self.process.pid} ({self.argv[0]}) is still running; "
                f"tease does not stop it"
            )
        self.process = None

    def _is_process_alive(self) -> bool:
        """Safely check if the child is still alive and not a zombie."""
        try:
            if not self.process.is_running():
                return False
            return self.process.status() not in (psutil.STATUS_ZOMBIE, psutil.STATUS_DEAD)
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            return False
