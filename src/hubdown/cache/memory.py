"""In-process LRU store."""

from __future__ import annotations

import copy
from collections import OrderedDict
from typing import Any

from hubdown.cache.results import Found, Lookup, NotFound
from hubdown.cache.stats import CacheStats

_DEFAULT_MAX_SIZE_MB = 100


class MemoryStore:
    """In-memory LRU store with size-based eviction.

    Values are copied on the way in and out, so callers cannot mutate
    cached results.
    """

    def __init__(self, max_size_mb: float = _DEFAULT_MAX_SIZE_MB) -> None:
        self._store: OrderedDict[str, tuple[dict[str, Any], int]] = OrderedDict()
        self._max_size_bytes = int(max_size_mb * 1024 * 1024)
        self._current_size_bytes = 0
        self._stats = CacheStats()

    async def get(self, key: str) -> Lookup:
        item = self._store.get(key)
        if item is None:
            self._stats.misses += 1
            return NotFound()
        # Move to end (most recently used)
        self._store.move_to_end(key)
        self._stats.hits += 1
        return Found(value=copy.deepcopy(item[0]))

    async def put(self, key: str, value: dict[str, Any]) -> None:
        if key in self._store:
            self._remove(key)
        size = _size_of(value)
        # Evict until there's room
        while self._current_size_bytes + size > self._max_size_bytes and self._store:
            self._evict_oldest()
        self._store[key] = (copy.deepcopy(value), size)
        self._current_size_bytes += size

    def clear(self) -> None:
        self._store.clear()
        self._current_size_bytes = 0
        self._stats = CacheStats()

    def stats(self) -> CacheStats:
        return self._stats.model_copy(
            update={"entries": len(self._store), "size_mb": self.size_mb}
        )

    @property
    def size_mb(self) -> float:
        return self._current_size_bytes / (1024 * 1024)

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def _remove(self, key: str) -> None:
        item = self._store.pop(key, None)
        if item:
            self._current_size_bytes -= item[1]

    def _evict_oldest(self) -> None:
        _, (_, size) = self._store.popitem(last=False)
        self._current_size_bytes -= size


def _size_of(value: dict[str, Any]) -> int:
    return len(str(value).encode("utf-8"))
