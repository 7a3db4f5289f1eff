"""In-process LRU tier of the result cache."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional

from cachetools import LRUCache

from cardquery.domain.cache import CacheEntry, CacheStats, ResultCacheStore
from cardquery.domain.shared.time import utc_now

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 1000
DEFAULT_SWEEP_INTERVAL = 50


class _EvictionCountingLRU(LRUCache):
    """LRUCache reporting capacity evictions to a callback."""

    def __init__(self, maxsize: int, on_evict: Callable[[], None]):
        super().__init__(maxsize=maxsize)
        self._on_evict = on_evict

    def popitem(self) -> tuple[str, Any]:
        item = super().popitem()
        self._on_evict()
        return item


class InMemoryResultCache(ResultCacheStore):
    """
    Bounded LRU map of cache entries.

    A hit moves the entry to the most-recently-used end; inserting past
    ``max_entries`` evicts from the other end. Expired entries are swept
    every ``sweep_interval`` accesses rather than on every lookup.
    """

    tier = "memory"

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        sweep_interval: int = DEFAULT_SWEEP_INTERVAL,
    ):
        if max_entries < 1:
            msg = "max_entries must be positive"
            raise ValueError(msg)
        self._entries: LRUCache = _EvictionCountingLRU(max_entries, self._count_eviction)
        self._sweep_interval = max(1, sweep_interval)
        self._accesses = 0
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._lock = asyncio.Lock()

    async def get(self, query_hash: str) -> Optional[CacheEntry]:
        async with self._lock:
            self._tick()
            entry = self._entries.get(query_hash)
            if entry is None:
                self._misses += 1
                return None
            if entry.is_expired():
                del self._entries[query_hash]
                self._evictions += 1
                self._misses += 1
                return None

            entry = entry.touched()
            self._entries[query_hash] = entry
            self._hits += 1
            return entry

    async def set(self, entry: CacheEntry) -> None:
        async with self._lock:
            self._tick()
            self._entries[entry.query_hash] = entry

    async def cleanup_expired(self) -> int:
        async with self._lock:
            return self._sweep()

    async def stats(self) -> CacheStats:
        return CacheStats(
            tier=self.tier,
            entries=len(self._entries),
            hits=self._hits,
            misses=self._misses,
            evictions=self._evictions,
        )

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def _count_eviction(self) -> None:
        self._evictions += 1

    def _tick(self) -> None:
        self._accesses += 1
        if self._accesses % self._sweep_interval == 0:
            self._sweep()

    def _sweep(self) -> int:
        now = utc_now()
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        self._evictions += len(expired)
        if expired:
            logger.debug("Swept %d expired memory cache entries", len(expired))
        return len(expired)
