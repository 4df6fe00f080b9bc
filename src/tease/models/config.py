"""
Configuration data models.

This module contains the configuration structure for a tease run, loaded
from an optional `config.toml` and otherwise built from defaults.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_POLL_INTERVAL = 0.03
DEFAULT_WINDOW_SIZE = 500
DEFAULT_REPLAY_CHUNK_SIZE = 8192
DEFAULT_CWD_NAME_TEMPLATE = "tmp.tease.XXXXXX"
DEFAULT_TMP_NAME_TEMPLATE = "tease.XXXXXX"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass
class TeaseConfig:
    """
    Tuning values for a single tease run.
    """

    # [monitor]
    poll_interval: float = DEFAULT_POLL_INTERVAL  # seconds between store-size checks
    window_size: int = DEFAULT_WINDOW_SIZE  # trailing bytes scanned for the progress line

    # [replay]
    replay_chunk_size: int = DEFAULT_REPLAY_CHUNK_SIZE

    # [store]
    cwd_name_template: str = DEFAULT_CWD_NAME_TEMPLATE
    tmp_name_template: str = DEFAULT_TMP_NAME_TEMPLATE
    tmp_dir: Optional[Path] = None  # None means tempfile.gettempdir()

    # [logging]
    log_level: str = DEFAULT_LOG_LEVEL

    def to_dict(self) -> Dict[str, Any]:
        """Return the configuration in the layout of config.toml."""
        store: Dict[str, Any] = {
            "cwd_name_template": self.cwd_name_template,
            "tmp_name_template": self.tmp_name_template,
        }
        if self.tmp_dir is not None:
            store["tmp_dir"] = str(self.tmp_dir)
        return {
            "monitor": {
                "poll_interval": self.poll_interval,
                "window_size": self.window_size,
            },
            "replay": {"chunk_size": self.replay_chunk_size},
            "store": store,
            "logging": {"level": self.log_level},
        }
