"""Per-agent in-process cache for serialised search results."""

from __future__ import annotations

import threading
from typing import Dict, Optional

_SEPARATOR = ":"


class ResultCache:
    """Keyed string store shared by every call made through one adapter.

    Entries are never evicted; the cache lives as long as its adapter.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, str] = {}
        self._lock = threading.Lock()

    @staticmethod
    def build_key(agent_id: str, key: str) -> str:
        return f"{agent_id}{_SEPARATOR}{key}"

    def get(self, agent_id: str, key: str) -> Optional[str]:
        with self._lock:
            return self._entries.get(self.build_key(agent_id, key))

    def set(self, agent_id: str, key: str, value: str) -> bool:
        with self._lock:
            self._entries[self.build_key(agent_id, key)] = value
        return True

    def delete(self, agent_id: str, key: str) -> bool:
        with self._lock:
            return self._entries.pop(self.build_key(agent_id, key), None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["ResultCache"]
