"""Bounded FIFO cache for shared query results."""

from __future__ import annotations

import threading
from typing import Generic, Hashable, List, Optional, Tuple, TypeVar

from ..config import RESULT_CACHE_SIZE

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class ResultCache(Generic[K, V]):
    """Fixed-capacity cache that overwrites its oldest slot when full.

    Entries live in parallel slot lists. While filling, new entries are
    appended; once full, each insertion replaces the slot after the most
    recently written one, wrapping around, so the entry inserted first is
    the first to go. Lookups do not reorder anything.

    All access goes through one lock. Critical sections are a linear scan
    over at most ``capacity`` keys and never include query work.
    """

    def __init__(self, capacity: int = RESULT_CACHE_SIZE) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._keys: List[K] = []
        self._values: List[V] = []
        self._next_index = 0
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def size(self) -> int:
        with self._lock:
            return len(self._keys)

    def get(self, key: K) -> Optional[V]:
        with self._lock:
            for index, cached_key in enumerate(self._keys):
                if cached_key == key:
                    return self._values[index]
            return None

    def put(self, key: K, value: V) -> V:
        """Store *value* under *key* unless another thread got there first.

        Returns the value that ends up cached for *key*; callers should hand
        that one out so concurrent misses converge on a single result.
        """

        with self._lock:
            for index, cached_key in enumerate(self._keys):
                if cached_key == key:
                    return self._values[index]

            if len(self._keys) < self._capacity:
                self._keys.append(key)
                self._values.append(value)
            else:
                slot = self._next_index % self._capacity
                self._keys[slot] = key
                self._values[slot] = value
            self._next_index = (self._next_index + 1) % self._capacity
            return value

    def keys(self) -> Tuple[K, ...]:
        """Return cached keys in slot order."""
        with self._lock:
            return tuple(self._keys)

    def clear(self) -> None:
        with self._lock:
            self._keys.clear()
            self._values.clear()
            self._next_index = 0


__all__ = ["ResultCache"]
