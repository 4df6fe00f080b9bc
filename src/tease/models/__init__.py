"""
Data models for tease.

Configuration Models:
- TeaseConfig: tuning values and scratch-file name templates

Runtime Models:
- StoreOrigin: where the scratch file was created
- ChildState / ChildStatus: non-blocking child status snapshots
- RunPhase: coordinator state machine phases
"""

from .config import TeaseConfig
from .runtime import ChildState, ChildStatus, RunPhase, StoreOrigin

__all__ = [
    "TeaseConfig",
    "ChildState",
    "ChildStatus",
    "RunPhase",
    "StoreOrigin",
]
