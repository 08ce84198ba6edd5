"""
Local result store writing one JSON document per session key.
"""

import hashlib
import json
from pathlib import Path
from typing import List, Optional

from .interface import ResultStore
from ..models.results import TransformationOutcome, outcome_from_dict
from ..models.observability import create_log_context
from ..exceptions import StorageException


class LocalResultStore(ResultStore):
    """Result store backed by a directory of JSON files."""

    def __init__(self, storage_path: str, observability_manager=None):
        """
        Initialize the local result store.

        Args:
            storage_path: Directory holding the stored outcomes
            observability_manager: Optional observability manager for logging
        """
        self.storage_path = Path(storage_path)
        self.observability_manager = observability_manager

        self.storage_path.mkdir(parents=True, exist_ok=True)

        if self.observability_manager:
            log_context = create_log_context(
                component="LocalResultStore",
                operation="initialization"
            )
            self.observability_manager.log_event(
                "INFO", f"Initializing LocalResultStore at {storage_path}", log_context
            )

    def _path_for(self, key: str) -> Path:
        # Session keys are opaque, so file names are derived from a digest
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return self.storage_path / f"{digest}.json"

    def get(self, key: str) -> Optional[TransformationOutcome]:
        path = self._path_for(key)
        if not path.exists():
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return outcome_from_dict(data["outcome"])
        except (OSError, json.JSONDecodeError, KeyError, TypeError) as e:
            raise StorageException(f"Failed to read outcome for key '{key}': {str(e)}")

    def set(self, key: str, outcome: TransformationOutcome) -> bool:
        if not key:
            raise StorageException("Session key must not be empty")

        path = self._path_for(key)
        temp_path = path.with_suffix(".tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump({"key": key, "outcome": outcome.to_dict()}, f, indent=2)
            temp_path.replace(path)
        except OSError as e:
            raise StorageException(f"Failed to store outcome for key '{key}': {str(e)}")

        return True

    def delete(self, key: str) -> bool:
        path = self._path_for(key)
        if not path.exists():
            return False

        try:
            path.unlink()
        except OSError as e:
            raise StorageException(f"Failed to delete outcome for key '{key}': {str(e)}")
        return True

    def keys(self) -> List[str]:
        """List stored session keys, skipping unreadable files."""
        keys = []
        for path in self.storage_path.glob("*.json"):
            try:
                with open(path, "r", encoding="utf-8") as f:
                    keys.append(json.load(f)["key"])
            except (OSError, json.JSONDecodeError, KeyError):
                continue
        return sorted(keys)

    def health_check(self) -> bool:
        """Check the storage directory is writable."""
        try:
            if not self.storage_path.exists():
                return False

            test_file = self.storage_path / ".health_check"
            test_file.write_text("test")
            test_file.unlink()
            return True
        except OSError:
            return False
