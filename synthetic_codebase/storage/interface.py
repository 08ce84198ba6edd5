"""
Abstract base class for result store backends.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.results import TransformationOutcome


class ResultStore(ABC):
    """Abstract key-value interface for persisting transformation outcomes."""

    @abstractmethod
    def get(self, key: str) -> Optional[TransformationOutcome]:
        """
        Retrieve the outcome stored under a session key.

        Args:
            key: Opaque session key

        Returns:
            Stored outcome if found, None otherwise
        """
        pass

    @abstractmethod
    def set(self, key: str, outcome: TransformationOutcome) -> bool:
        """
        Store an outcome under a session key, replacing any previous one.

        Args:
            key: Opaque session key
            outcome: Sanitized or Failed outcome

        Returns:
            True if the outcome was stored
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Delete the outcome stored under a session key.

        Returns:
            True if an outcome was deleted
        """
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        """List stored session keys."""
        pass

    @abstractmethod
    def health_check(self) -> bool:
        """
        Check if the store is healthy and accessible.

        Returns:
            True if the store is healthy
        """
        pass
