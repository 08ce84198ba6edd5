"""
In-process result store.
"""

import threading
from typing import Dict, List, Optional

from .interface import ResultStore
from ..models.results import TransformationOutcome
from ..exceptions import StorageException


class InMemoryResultStore(ResultStore):
    """Lock-guarded dictionary of outcomes, lost when the process exits."""

    def __init__(self):
        self._outcomes: Dict[str, TransformationOutcome] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[TransformationOutcome]:
        with self._lock:
            return self._outcomes.get(key)

    def set(self, key: str, outcome: TransformationOutcome) -> bool:
        if not key:
            raise StorageException("Session key must not be empty")

        with self._lock:
            self._outcomes[key] = outcome
        return True

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._outcomes.pop(key, None) is not None

    def keys(self) -> List[str]:
        with self._lock:
            return sorted(self._outcomes)

    def clear(self) -> None:
        with self._lock:
            self._outcomes.clear()

    def health_check(self) -> bool:
        return True
