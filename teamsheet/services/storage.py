"""
Key-value stores backing the Teamsheet persistence layer.

A store holds one raw text document per record key. JsonFileStore keeps each
key in its own ``<key>.json`` file under a data directory; InMemoryStore is
used by tests and by callers that do not want anything written to disk.
"""
import os
from abc import ABC, abstractmethod
from typing import Dict, Optional


class KeyValueStore(ABC):
    """Abstract synchronous store of named text records."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored text for ``key`` or None when absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Durably store ``value`` under ``key``."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete ``key``; absent keys are ignored."""
        pass


class InMemoryStore(KeyValueStore):
    """Dictionary-backed store."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """
    Store each record as ``<data_dir>/<key>.json``.

    Writes go to a temporary sibling file first and are moved into place,
    so a crash mid-write leaves the previous document intact.
    """

    def __init__(self, data_dir: str):
        self.data_dir = data_dir

    def _path(self, key: str) -> str:
        return os.path.join(self.data_dir, f"{key}.json")

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not os.path.exists(path):
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def set(self, key: str, value: str) -> None:
        # Ensure directory exists
        if self.data_dir and not os.path.exists(self.data_dir):
            os.makedirs(self.data_dir)

        path = self._path(key)
        tmp_path = path + ".tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(value)
        os.replace(tmp_path, path)

    def remove(self, key: str) -> None:
        try:
            os.remove(self._path(key))
        except FileNotFoundError:
            pass
