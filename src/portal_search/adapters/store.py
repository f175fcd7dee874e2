"""Key-value stores holding collections, search history and term counts.

Following Cosmic Python Chapter 2: the services depend on
:class:`AbstractKeyValueStore`; tests and short-lived processes use the
in-memory implementation, the CLI persists to a single JSON document.
"""

from __future__ import annotations

import abc
import json
import logging
from pathlib import Path
import threading
from typing import Any


logger = logging.getLogger(__name__)


class AbstractKeyValueStore(abc.ABC):
    """Named keys holding JSON-compatible values."""

    @abc.abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key`` or ``default``."""

    @abc.abstractmethod
    def set(self, key: str, value: Any) -> bool:
        """Store ``value`` under ``key``; returns False when the write failed."""

    @abc.abstractmethod
    def remove(self, key: str) -> bool:
        """Delete ``key``; returns False when the write failed."""

    def get_array(self, key: str) -> list[Any]:
        """Return the list stored under ``key``; anything else reads as empty."""
        value = self.get(key)
        return list(value) if isinstance(value, list) else []

    def set_array(self, key: str, values: list[Any]) -> bool:
        return self.set(key, list(values))

    def append_to_array(self, key: str, item: Any) -> bool:
        values = self.get_array(key)
        values.append(item)
        return self.set_array(key, values)


class InMemoryKeyValueStore(AbstractKeyValueStore):
    """Dictionary-backed store; contents vanish with the process."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> bool:
        self._data[key] = value
        return True

    def remove(self, key: str) -> bool:
        self._data.pop(key, None)
        return True


class JsonFileKeyValueStore(AbstractKeyValueStore):
    """Store persisted as one JSON object on disk.

    Reads tolerate a missing or corrupt file (treated as empty). Writes go
    to a temporary sibling and are moved into place.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> bool:
        with self._lock:
            data = self._read()
            data[key] = value
            return self._write(data)

    def remove(self, key: str) -> bool:
        with self._lock:
            data = self._read()
            if key not in data:
                return True
            del data[key]
            return self._write(data)

    def _read(self) -> dict[str, Any]:
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as err:
            logger.warning("Failed to read store file %s: %s", self.path, err)
            return {}
        try:
            data = json.loads(content)
        except json.JSONDecodeError as err:
            logger.warning("Store file %s is not valid JSON: %s", self.path, err)
            return {}
        if not isinstance(data, dict):
            logger.warning("Store file %s does not hold a JSON object", self.path)
            return {}
        return data

    def _write(self, data: dict[str, Any]) -> bool:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
            tmp_path.replace(self.path)
        except (OSError, TypeError, ValueError) as err:
            logger.error("Failed to write store file %s: %s", self.path, err)
            return False
        return True


def build_store(path: Path | None) -> AbstractKeyValueStore:
    """File-backed store when a path is configured, in-memory otherwise."""
    if path is None:
        return InMemoryKeyValueStore()
    return JsonFileKeyValueStore(path)
