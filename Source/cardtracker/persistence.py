"""Durable key-value storage for client state (the persisted login)."""
from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Dict, Optional

from . import config

logger = logging.getLogger(__name__)


class KeyValueStore:
    """String-valued storage with get/set/remove, like browser local storage."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    """Process-local storage; nothing survives a restart."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class FileKeyValueStore(KeyValueStore):
    """Stores all keys in one JSON object on disk.

    Reads are served from a cache filled on first access. A missing or
    unreadable file behaves as empty storage, and failed writes are logged
    rather than raised, so callers see the same never-throws contract that
    local storage gives a browser app.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path or config.STORAGE_PATH
        self._cache: Optional[Dict[str, str]] = None

    def _load(self) -> Dict[str, str]:
        if self._cache is not None:
            return self._cache
        data: Dict[str, str] = {}
        if os.path.exists(self.path):
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    raw = json.load(f)
                if isinstance(raw, dict):
                    data = {str(k): v for k, v in raw.items() if isinstance(v, str)}
                else:
                    logger.warning("Ignoring storage file %s: top-level value is not an object", self.path)
            except (OSError, ValueError) as e:
                logger.warning("Could not read storage file %s: %s", self.path, e)
        self._cache = data
        return data

    def _save(self, data: Dict[str, str]) -> None:
        directory = os.path.dirname(self.path) or "."
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".storage_", suffix=".tmp", dir=directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as e:
            logger.warning("Could not write storage file %s: %s", self.path, e)

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)
