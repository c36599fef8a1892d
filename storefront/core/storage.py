"""
# `storefront/core/storage.py` — Local key-value storage

The stores persist a full JSON snapshot under a fixed key after every
mutation (`cart`, `wishlist`, `recentlyViewed`). This module is the only
place that touches the medium.

- `MemoryStorage`: dict backed; default for tests and throwaway sessions.
- `JsonFileStorage`: one `<key>.json` file per key inside a directory.

Reads and writes are synchronous. There is no locking between processes
sharing a directory: the last write wins.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

logger = logging.getLogger("storefront.storage")


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class JsonFileStorage:
    def __init__(self, directory: str):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self._path(key).write_text(value, encoding="utf-8")

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


def build_storage(backend: str, directory: str) -> KeyValueStorage:
    """Pick the storage backend named in settings."""
    backend = (backend or "memory").strip().lower()
    if backend == "file":
        logger.info("Using file storage in %s", directory)
        return JsonFileStorage(directory)
    if backend == "memory":
        return MemoryStorage()
    raise ValueError(f"Unknown storage backend: {backend}")


def read_json_list(storage: KeyValueStorage, key: str) -> Optional[list]:
    """
    Load the list snapshot under `key`.
    Returns None when the key is absent or the value is not a JSON array.
    """
    raw = storage.get_item(key)
    if raw is None:
        return None
    try:
        data: Any = json.loads(raw)
    except ValueError as exc:
        logger.warning("Discarding unparseable %r snapshot: %s", key, exc)
        return None
    if not isinstance(data, list):
        logger.warning("Discarding %r snapshot: expected a list, got %s", key, type(data).__name__)
        return None
    return data


def write_json_list(storage: KeyValueStorage, key: str, items: list) -> None:
    storage.set_item(key, json.dumps(items, ensure_ascii=False))
