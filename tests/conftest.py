"""
Pytest configuration and shared fixtures for the tease test suite.
"""

import io
import shutil
import sys
import tempfile
from pathlib import Path
from typing import List

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tease.models import TeaseConfig  # noqa: E402
from tease.system import TerminalWriter  # noqa: E402


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "e2e: mark test as an end-to-end test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def terminal_buffer():
    """An in-memory binary stream standing in for stdout."""
    return io.BytesIO()


@pytest.fixture
def terminal(terminal_buffer):
    """A TerminalWriter that writes into terminal_buffer."""
    return TerminalWriter(terminal_buffer)


@pytest.fixture
def fast_config(temp_dir):
    """Defaults with a short poll quantum and the fallback pinned to temp_dir."""
    return TeaseConfig(poll_interval=0.005, tmp_dir=temp_dir / "systemp")


@pytest.fixture
def sample_config_data():
    """Sample config.toml content."""
    return {
        "monitor": {
            "poll_interval": 0.05,
            "window_size": 200,
        },
        "replay": {
            "chunk_size": 1024,
        },
        "store": {
            "cwd_name_template": "scratch.XXXXXX.log",
            "tmp_name_template": "tease-scratch.XXXXXX",
        },
        "logging": {
            "level": "INFO",
        },
    }


@pytest.fixture
def config_file(temp_dir, sample_config_data):
    """Write sample_config_data to a temporary config.toml."""
    import toml

    path = temp_dir / "config.toml"
    with open(path, "w") as f:
        toml.dump(sample_config_data, f)
    return path


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, temp_dir):
    """Keep the user's real configuration and environment out of every test."""
    monkeypatch.delenv("TEASE_CONFIG", raising=False)
    monkeypatch.delenv("TEASE_LOG_LEVEL", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(temp_dir / "xdg"))

    yield

    from tease.config import set_config_path

    set_config_path(None)


# ============================================================================
# Test Utilities
# ============================================================================


def python_command(code: str) -> List[str]:
    """Build argv that runs ``code`` with the current interpreter."""
    return [sys.executable, "-c", code]


def scratch_files(directory: Path, pattern: str = "tmp.tease.*") -> List[Path]:
    """List scratch files left in ``directory``."""
    return sorted(directory.glob(pattern))


class FakeStore:
    """In-memory stand-in for OutputStore with controllable contents and failures."""

    def __init__(self, data: bytes = b""):
        self.data = bytearray(data)
        self.path = Path("/tmp/tmp.tease.fake")
        self.fail_size = False
        self.fail_read_at = None
        self.reported_size = None

    def size(self) -> int:
        if self.fail_size:
            raise OSError("stat failed")
        if self.reported_size is not None:
            return self.reported_size
        return len(self.data)

    def read(self, offset: int, length: int) -> bytes:
        if self.fail_read_at is not None and offset >= self.fail_read_at:
            raise OSError("read failed")
        length = min(length, len(self.data) - offset)
        if length <= 0:
            return b""
        return bytes(self.data[offset:offset + length])

    def append(self, chunk: bytes) -> None:
        self.data.extend(chunk)


class FakeSupervisor:
    """Returns a scripted sequence of statuses, repeating the last one."""

    def __init__(self, statuses, on_poll=None):
        self.statuses = list(statuses)
        self.on_poll = on_poll
        self.polls = 0

    def poll_nonblocking(self):
        if self.on_poll:
            self.on_poll(self.polls)
        index = min(self.polls, len(self.statuses) - 1)
        self.polls += 1
        return self.statuses[index]


class BrokenPipeStream:
    """Binary stream that fails every write after the first ``ok_writes``, like a closed pipe."""

    def __init__(self, ok_writes: int = 0):
        self.ok_writes = ok_writes
        self.written = bytearray()
        self.failed_writes = 0

    def write(self, data: bytes) -> int:
        if self.ok_writes <= 0:
            self.failed_writes += 1
            raise BrokenPipeError(32, "Broken pipe")
        self.ok_writes -= 1
        self.written.extend(data)
        return len(data)

    def flush(self) -> None:
        pass


@pytest.fixture
def test_utils():
    """Provide test utility functions and fakes."""
    return {
        "python_command": python_command,
        "scratch_files": scratch_files,
        "FakeStore": FakeStore,
        "FakeSupervisor": FakeSupervisor,
        "BrokenPipeStream": BrokenPipeStream,
    }
