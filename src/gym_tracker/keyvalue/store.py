from __future__ import annotations

import json
import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any, Callable, Optional, Protocol
from urllib.parse import quote

from ..core.exceptions import StoreUnavailable

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Local durable key-value primitive with JSON-serializable values."""

    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def update(self, key: str, mutate: Callable[[Optional[Any]], Any]) -> Any:
        """Read-modify-write ``key`` as one step; returns the stored value."""

        raise NotImplementedError


class JsonFileKeyValueStore(KeyValueStore):
    """One JSON file per key inside ``data_dir``.

    Writes go to a temp file that replaces the target, so a crash never leaves
    a half-written blob. ``update`` holds a per-key lock because callers run
    reads and writes on worker threads.
    """

    def __init__(self, data_dir: str | Path):
        self._data_dir = Path(data_dir).expanduser()
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _path(self, key: str) -> Path:
        return self._data_dir / f"{quote(key, safe='')}.json"

    def _lock(self, key: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    @contextmanager
    def _io(self, action: str, key: str):
        try:
            yield
        except (OSError, ValueError) as e:
            logger.error("Local store %s of %r failed: %s", action, key, e)
            raise StoreUnavailable(f"Local store {action} failed for {key!r}") from e

    def _read(self, key: str) -> Optional[Any]:
        path = self._path(key)
        if not path.exists():
            return None
        return json.loads(path.read_text(encoding="utf-8"))

    def _write(self, key: str, value: Any) -> None:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(value, ensure_ascii=False, indent=2, sort_keys=True) + "\n"
        with NamedTemporaryFile("w", dir=path.parent, delete=False, encoding="utf-8") as tmp:
            tmp.write(payload)
            temp_path = Path(tmp.name)
        temp_path.replace(path)

    def get(self, key: str) -> Optional[Any]:
        with self._io("read", key), self._lock(key):
            return self._read(key)

    def set(self, key: str, value: Any) -> None:
        with self._io("write", key), self._lock(key):
            self._write(key, value)

    def update(self, key: str, mutate: Callable[[Optional[Any]], Any]) -> Any:
        with self._io("update", key), self._lock(key):
            value = mutate(self._read(key))
            self._write(key, value)
            return value
