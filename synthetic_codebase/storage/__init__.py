"""
Storage layer components for result store backends.
"""

from .interface import ResultStore
from .memory import InMemoryResultStore
from .local import LocalResultStore

__all__ = [
    "ResultStore",
    "InMemoryResultStore",
    "LocalResultStore",
]
