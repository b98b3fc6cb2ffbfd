"""
Static data storage for trigger subscriptions.

Each trigger subscription owns a small key-value scope (``webhookId`` and
friends) that must survive process restarts. Stores are keyed by the
host's subscription identity and handed to the lifecycle manager as a
scoped view.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)


class StaticDataStore:
    """Key-value storage scoped by subscription identity."""

    def get(self, scope: str, key: str, default: Any = None) -> Any:
        raise NotImplementedError

    def set(self, scope: str, key: str, value: Any) -> None:
        raise NotImplementedError

    def delete(self, scope: str, key: str) -> None:
        raise NotImplementedError

    def get_all(self, scope: str) -> Dict[str, Any]:
        raise NotImplementedError

    def scope(self, scope: str) -> "StaticData":
        """Get a view of one subscription's data."""
        return StaticData(self, scope)


class StaticData:
    """One subscription's view of a StaticDataStore."""

    def __init__(self, store: StaticDataStore, scope: str):
        self.store = store
        self.name = scope

    def get(self, key: str, default: Any = None) -> Any:
        return self.store.get(self.name, key, default)

    def set(self, key: str, value: Any) -> None:
        self.store.set(self.name, key, value)

    def delete(self, key: str) -> None:
        self.store.delete(self.name, key)

    def to_dict(self) -> Dict[str, Any]:
        return self.store.get_all(self.name)

    def __contains__(self, key: str) -> bool:
        return key in self.store.get_all(self.name)


class InMemoryStaticData(StaticDataStore):
    """Thread-safe in-process store. Data is lost when the process exits."""

    def __init__(self):
        self._lock = threading.RLock()
        self._scopes: Dict[str, Dict[str, Any]] = {}

    def get(self, scope: str, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._scopes.get(scope, {}).get(key, default)

    def set(self, scope: str, key: str, value: Any) -> None:
        with self._lock:
            self._scopes.setdefault(scope, {})[key] = value

    def delete(self, scope: str, key: str) -> None:
        with self._lock:
            data = self._scopes.get(scope)
            if data is None:
                return
            data.pop(key, None)
            if not data:
                del self._scopes[scope]

    def get_all(self, scope: str) -> Dict[str, Any]:
        with self._lock:
            return dict(self._scopes.get(scope, {}))

    def clear(self) -> int:
        """
        Clear all scopes.
        Useful for testing and cleanup.

        Returns:
            Number of scopes that were cleared
        """
        with self._lock:
            count = len(self._scopes)
            self._scopes.clear()
            logger.debug(f"Cleared {count} static data scopes")
            return count


class JsonFileStaticData(StaticDataStore):
    """
    Store backed by one JSON file.

    The whole file is rewritten on every change. Values must be
    JSON-serializable.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.RLock()

    def _load(self) -> Dict[str, Dict[str, Any]]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning(f"Static data file {self.path} is corrupt, starting empty: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, Dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, sort_keys=True)
        tmp_path.replace(self.path)

    def get(self, scope: str, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._load().get(scope, {}).get(key, default)

    def set(self, scope: str, key: str, value: Any) -> None:
        with self._lock:
            data = self._load()
            data.setdefault(scope, {})[key] = value
            self._save(data)

    def delete(self, scope: str, key: str) -> None:
        with self._lock:
            data = self._load()
            values = data.get(scope)
            if values is None or key not in values:
                return
            del values[key]
            if not values:
                del data[scope]
            self._save(data)

    def get_all(self, scope: str) -> Dict[str, Any]:
        with self._lock:
            return dict(self._load().get(scope, {}))


# Process-wide default store
_store: Optional[StaticDataStore] = None


def get_static_data_store() -> StaticDataStore:
    """Get the process-wide store, creating an in-memory one on first use."""
    global _store
    if _store is None:
        _store = InMemoryStaticData()
    return _store


def set_static_data_store(store: StaticDataStore) -> None:
    """Replace the process-wide store (e.g. with a JsonFileStaticData)."""
    global _store
    _store = store
    logger.debug(f"Static data store set to {type(store).__name__}")
