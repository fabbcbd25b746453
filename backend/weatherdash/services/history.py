from __future__ import annotations

import json
from typing import List, Optional, Protocol

HISTORY_KEY = "weatherHistory"
MAX_HISTORY_ITEMS = 10


class BlobStore(Protocol):
    """Key-value store holding opaque text blobs."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def put(self, key: str, value: str) -> None:
        raise NotImplementedError


class HistoryStore:
    """Most-recent-first list of looked-up place names.

    Names are unique under case-insensitive comparison; the stored casing is
    the one most recently added. Every mutation is a read-modify-write of a
    single JSON blob.
    """

    def __init__(self, store: BlobStore, *, key: str = HISTORY_KEY, max_items: int = MAX_HISTORY_ITEMS):
        if max_items <= 0:
            raise ValueError("max_items must be > 0")
        self.store = store
        self.key = key
        self.max_items = max_items

    def list(self) -> List[str]:
        return self._decode(self.store.get(self.key))

    def add(self, name: str) -> List[str]:
        if not name or not name.strip():
            raise ValueError("name is required")
        history = [entry for entry in self.list() if entry.lower() != name.lower()]
        history.insert(0, name)
        history = history[: self.max_items]
        self._save(history)
        return history

    def remove(self, name: str) -> List[str]:
        history = [entry for entry in self.list() if entry.lower() != name.lower()]
        self._save(history)
        return history

    def _save(self, history: List[str]) -> None:
        self.store.put(self.key, json.dumps(history))

    @staticmethod
    def _decode(raw: Optional[str]) -> List[str]:
        if not raw:
            return []
        # Corrupt state from another writer reads as an empty history.
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            return []
        if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
            return []
        return data
