"""
Scratch storage for captured child output.
"""

from .output_store import OutputStore

__all__ = [
    "OutputStore",
]
