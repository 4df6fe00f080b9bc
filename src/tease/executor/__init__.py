"""
Child process execution for tease.
"""

from .child_supervisor import ChildSupervisor

__all__ = [
    "ChildSupervisor",
]
