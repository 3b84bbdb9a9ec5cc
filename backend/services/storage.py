"""Key-value storage port for progress and history.

Values are JSON-compatible and addressed by ``(namespace, key)``. Scorers
never touch storage; callers inject a backend.
"""

import json
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from config import settings

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Stored data could not be read back."""


class StoragePort(ABC):
    """Namespaced get/set/delete storage.

    Subclasses must implement get, set, delete and keys.
    """

    @abstractmethod
    def get(self, namespace: str, key: str) -> Any | None:
        """Return the stored value, or None if absent."""

    @abstractmethod
    def set(self, namespace: str, key: str, value: Any) -> None:
        """Store a JSON-compatible value, replacing any previous one."""

    @abstractmethod
    def delete(self, namespace: str, key: str) -> None:
        """Remove a value. Deleting a missing key is a no-op."""

    @abstractmethod
    def keys(self, namespace: str) -> list[str]:
        """List keys stored under a namespace."""


class InMemoryStorage(StoragePort):
    def __init__(self) -> None:
        self._data: dict[str, dict[str, Any]] = {}

    def get(self, namespace: str, key: str) -> Any | None:
        return self._data.get(namespace, {}).get(key)

    def set(self, namespace: str, key: str, value: Any) -> None:
        self._data.setdefault(namespace, {})[key] = value

    def delete(self, namespace: str, key: str) -> None:
        self._data.get(namespace, {}).pop(key, None)

    def keys(self, namespace: str) -> list[str]:
        return list(self._data.get(namespace, {}))


class JsonFileStorage(StoragePort):
    """One JSON document per namespace under ``root``."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _path(self, namespace: str) -> Path:
        return self.root / f"{namespace}.json"

    def _load(self, namespace: str) -> dict[str, Any]:
        path = self._path(namespace)
        if not path.exists():
            return {}
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.error("Corrupt storage file %s: %s", path, e)
            raise StorageError(f"Corrupt storage file for namespace '{namespace}'") from e
        if not isinstance(data, dict):
            logger.error("Storage file %s holds %s, expected an object", path, type(data).__name__)
            raise StorageError(f"Corrupt storage file for namespace '{namespace}'")
        return data

    def _save(self, namespace: str, data: dict[str, Any]) -> None:
        path = self._path(namespace)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp.replace(path)

    def get(self, namespace: str, key: str) -> Any | None:
        with self._lock:
            return self._load(namespace).get(key)

    def set(self, namespace: str, key: str, value: Any) -> None:
        with self._lock:
            data = self._load(namespace)
            data[key] = value
            self._save(namespace, data)

    def delete(self, namespace: str, key: str) -> None:
        with self._lock:
            data = self._load(namespace)
            if key in data:
                del data[key]
                self._save(namespace, data)

    def keys(self, namespace: str) -> list[str]:
        with self._lock:
            return list(self._load(namespace))


_storage: StoragePort | None = None


def get_storage() -> StoragePort:
    """Process-wide storage backend selected by settings."""
    global _storage
    if _storage is None:
        if settings.storage_backend == "json":
            logger.info("Using JSON file storage at %s", settings.storage_path)
            _storage = JsonFileStorage(settings.storage_path)
        elif settings.storage_backend == "memory":
            _storage = InMemoryStorage()
        else:
            raise ValueError(f"Unknown storage backend: {settings.storage_backend}")
    return _storage


def reset_storage() -> None:
    """Drop the cached backend. Useful for testing."""
    global _storage
    _storage = None
