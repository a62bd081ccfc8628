"""Bounded LRU cache for probability results."""

import threading
from collections import OrderedDict
from typing import Generic, TypeVar

V = TypeVar("V")


class LRUCache(Generic[V]):
    """String-keyed LRU cache owned by a single engine instance.

    The OrderedDict keeps keys in access order, least recently used first.
    All operations take the instance lock.
    """

    def __init__(self, max_size: int = 100) -> None:
        """Initialize cache.

        Args:
            max_size: Maximum number of entries (at least 1)
        """
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self._entries: OrderedDict[str, V] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> V | None:
        """Return the cached value and mark it most recently used.

        Args:
            key: Cache key

        Returns:
            Cached value, or None on a miss
        """
        with self._lock:
            if key not in self._entries:
                return None
            self._entries.move_to_end(key)
            return self._entries[key]

    def put(self, key: str, value: V) -> str | None:
        """Insert a value, evicting the least recently used entry when full.

        Args:
            key: Cache key
            value: Value to store

        Returns:
            The evicted key, if any
        """
        with self._lock:
            if key in self._entries:
                self._entries[key] = value
                self._entries.move_to_end(key)
                return None

            evicted = None
            if len(self._entries) >= self.max_size:
                evicted, _ = self._entries.popitem(last=False)
            self._entries[key] = value
            return evicted

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._entries.clear()

    def keys(self) -> list[str]:
        """Keys from least to most recently used."""
        with self._lock:
            return list(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
