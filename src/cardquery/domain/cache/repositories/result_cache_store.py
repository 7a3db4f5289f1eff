"""Result cache store interface."""

from abc import ABC, abstractmethod
from typing import Optional

from cardquery.domain.cache.entities import CacheEntry, CacheStats


class ResultCacheStore(ABC):
    """
    Keyed store of compiled translations.

    The default implementation lives in process memory; a persistent
    implementation backs it with the database so entries survive restarts
    and are shared between instances.
    """

    @abstractmethod
    async def get(self, query_hash: str) -> Optional[CacheEntry]:
        """
        Look up an unexpired entry and record the hit.

        Returns
        -------
        The entry (with its hit count already bumped) or None
        """

    @abstractmethod
    async def set(self, entry: CacheEntry) -> None:
        """Insert or replace the entry stored under ``entry.query_hash``."""

    @abstractmethod
    async def cleanup_expired(self) -> int:
        """
        Remove expired entries.

        Returns
        -------
        Number of entries removed
        """

    @abstractmethod
    async def stats(self) -> CacheStats:
        """Return current statistics."""

    @abstractmethod
    async def clear(self) -> None:
        """Remove every entry."""
