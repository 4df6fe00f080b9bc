"""
Scratch storage for the child's combined output.

The store is a uniquely named file created in the current working directory,
or in the system temp directory when that fails. The child writes to it
through an inherited descriptor; tease reads it back through a separate
read-only handle so the child's write offset is never disturbed.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import List, Optional, Tuple, Union

from ..models.config import (
    DEFAULT_CWD_NAME_TEMPLATE,
    DEFAULT_TMP_NAME_TEMPLATE,
    TeaseConfig,
)
from ..models.runtime import StoreOrigin
from ..validation import (
    CleanupWarning,
    ErrorSeverity,
    StoreUnavailable,
    handle_file_error,
    split_name_template,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class OutputStore:
    """
    Scratch byte sink backing the child's stdout and stderr.

    Use as a context manager: entering creates the file (if ``create()`` was
    not already called) and leaving deletes it.
    """

    def __init__(
        self,
        cwd_name_template: str = DEFAULT_CWD_NAME_TEMPLATE,
        tmp_name_template: str = DEFAULT_TMP_NAME_TEMPLATE,
        cwd: Optional[PathLike] = None,
        tmp_dir: Optional[PathLike] = None,
    ):
        """
        Args:
            cwd_name_template: Name template for the file in the working directory
            tmp_name_template: Name template for the file in the temp directory
            cwd: Directory used instead of os.getcwd() for the first attempt
            tmp_dir: Directory used instead of tempfile.gettempdir() for the fallback
        """
        self.cwd_name_template = cwd_name_template
        self.tmp_name_template = tmp_name_template
        self.cwd = Path(cwd) if cwd is not None else None
        self.tmp_dir = Path(tmp_dir) if tmp_dir is not None else None

        self.handle: Optional[int] = None
        self.path: Optional[Path] = None
        self.origin: Optional[StoreOrigin] = None
        self._reader = None
        self._deleted = False

    @classmethod
    def from_config(cls, config: TeaseConfig, cwd: Optional[PathLike] = None) -> "OutputStore":
        return cls(
            cwd_name_template=config.cwd_name_template,
            tmp_name_template=config.tmp_name_template,
            cwd=cwd,
            tmp_dir=config.tmp_dir,
        )

    @property
    def is_open(self) -> bool:
        return self.handle is not None and not self._deleted

    def create(self) -> "OutputStore":
        """
        Create the scratch file, falling back to the temp directory.

        Raises:
            StoreUnavailable: If neither location accepts a new file
        """
        if self.handle is not None or self._deleted:
            raise RuntimeError("OutputStore.create() may only be called once")

        attempts = [
            (StoreOrigin.CWD, self.cwd, self.cwd_name_template),
            (StoreOrigin.SYSTEMP, self.tmp_dir, self.tmp_name_template),
        ]
        failures: List[str] = []

        for origin, directory, template in attempts:
            try:
                if directory is None:
                    directory = Path(os.getcwd() if origin is StoreOrigin.CWD else tempfile.gettempdir())
                fd, path = self._make_unique_file(directory, template)
            except OSError as e:
                failures.append(f"{origin.value}: {e}")
                if origin is StoreOrigin.CWD:
                    logger.warning(
                        f"Creating a scratch file in the current directory failed ({e}). "
                        f"Trying the temp directory instead"
                    )
                continue

            try:
                reader = open(path, "rb", buffering=0)
            except OSError as e:
                failures.append(f"{origin.value}: {e}")
                os.close(fd)
                try:
                    os.unlink(path)
                except OSError as unlink_error:
                    logger.error(f"Please delete: {path} ({unlink_error})")
                continue

            self.handle = fd
            self.path = path
            self.origin = origin
            self._reader = reader
            logger.debug(f"Scratch file created at {path} ({origin.value})")
            return self

        raise StoreUnavailable(
            "Failed to create a scratch file in the current directory and in the temp directory: "
            + "; ".join(failures)
        )

    @staticmethod
    def _make_unique_file(directory: Path, template: str) -> Tuple[int, Path]:
        prefix, suffix = split_name_template(template)
        fd, name = tempfile.mkstemp(suffix=suffix, prefix=prefix, dir=str(directory))
        return fd, Path(name)

    def size(self) -> int:
        """Return the number of bytes committed to the file so far."""
        self._require_open()
        return os.fstat(self.handle).st_size

    def read(self, offset: int, length: int) -> bytes:
        """
        Read up to ``length`` bytes starting at ``offset``.

        The length is clamped to ``size() - offset``; reading at or past the
        end returns ``b""``.

        Raises:
            OSError: If the stat or the read fails
        """
        self._require_open()
        if offset < 0 or length < 0:
            raise ValueError(f"offset and length must be >= 0, got {offset}, {length}")

        available = self.size() - offset
        length = min(length, available)
        if length <= 0:
            return b""

        self._reader.seek(offset)
        return self._reader.read(length)

    def delete(self) -> bool:
        """
        Release both handles and unlink the file.

        Safe to call more than once; only the first call does anything.
        Failures are logged together with the path and never raised.

        Returns:
            True if the file is gone from disk afterwards
        """
        if self._deleted:
            return self.path is None or not self.path.exists()
        self._deleted = True

        if self._reader is not None:
            try:
                self._reader.close()
            except OSError as e:
                self._cleanup_warning(f"Couldn't close the scratch file reader: {e}")
            self._reader = None

        if self.handle is not None:
            try:
                os.close(self.handle)
            except OSError as e:
                self._cleanup_warning(f"Couldn't close the scratch file, but that should be fine: {e}")
            self.handle = None

        if self.path is None:
            return True

        try:
            os.unlink(self.path)
        except FileNotFoundError:
            logger.debug(f"Scratch file {self.path} was already removed")
        except OSError as e:
            self._cleanup_warning(f"Deleting the scratch file failed: {e}")
            logger.error(f"You can delete this file manually: {self.path}")
            return False

        logger.debug(f"Scratch file {self.path} deleted")
        return True

    def _cleanup_warning(self, message: str) -> None:
        handle_file_error(
            CleanupWarning(message, path=str(self.path)),
            context="cleanup",
            severity=ErrorSeverity.WARNING,
            reraise=False,
            logger=logger,
        )

    def _require_open(self) -> None:
        if not self.is_open:
            raise RuntimeError("OutputStore is not open")

    def __enter__(self) -> "OutputStore":
        if self.handle is None:
            self.create()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.delete()
        return False
