"""Two-tier result cache: process memory in front of the database."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import timedelta
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError

from cardquery.domain.cache import CacheEntry, CacheStats, ResultCacheStore
from cardquery.domain.shared.time import utc_now

logger = logging.getLogger(__name__)


class TieredResultCache:
    """
    Read-through pair of cache tiers.

    A memory miss falls through to the persistent tier, and a persistent
    hit is copied back into memory. Persistent-tier failures are logged
    and treated as a miss; the cache never fails a request.
    """

    def __init__(
        self,
        memory: ResultCacheStore,
        persistent: Optional[ResultCacheStore] = None,
        memory_ttl: timedelta = timedelta(minutes=30),
        persistent_ttl: timedelta = timedelta(hours=48),
    ):
        self._memory = memory
        self._persistent = persistent
        self._memory_ttl = memory_ttl
        self._persistent_ttl = persistent_ttl

    async def get(self, query_hash: str) -> Optional[CacheEntry]:
        entry = await self._memory.get(query_hash)
        if entry is not None:
            return entry

        if self._persistent is None:
            return None

        try:
            entry = await self._persistent.get(query_hash)
        except SQLAlchemyError:
            logger.warning("Persistent cache read failed for %s", query_hash, exc_info=True)
            return None

        if entry is not None:
            await self._memory.set(
                replace(entry, expires_at=utc_now() + self._memory_ttl),
            )
        return entry

    async def put(  # noqa: PLR0913
        self,
        query_hash: str,
        normalized_query: str,
        compiled_query: str,
        confidence: float,
        explanation: Optional[dict[str, Any]] = None,
        persistent_ttl: Optional[timedelta] = None,
    ) -> CacheEntry:
        """
        Write a compiled translation to both tiers.

        Parameters
        ----------
        persistent_ttl
            Overrides the persistent-tier TTL (feedback-derived entries
            live longer than ordinary ones)

        Returns
        -------
        The entry written to the memory tier
        """
        now = utc_now()
        entry = CacheEntry(
            query_hash=query_hash,
            normalized_query=normalized_query,
            compiled_query=compiled_query,
            confidence=confidence,
            explanation=dict(explanation or {}),
            expires_at=now + self._memory_ttl,
            created_at=now,
        )
        await self._memory.set(entry)

        if self._persistent is not None:
            ttl = persistent_ttl or self._persistent_ttl
            try:
                await self._persistent.set(replace(entry, expires_at=now + ttl))
            except SQLAlchemyError:
                logger.warning(
                    "Persistent cache write failed for %s",
                    query_hash,
                    exc_info=True,
                )
        return entry

    async def cleanup_expired(self) -> int:
        removed = await self._memory.cleanup_expired()
        if self._persistent is not None:
            try:
                removed += await self._persistent.cleanup_expired()
            except SQLAlchemyError:
                logger.warning("Persistent cache cleanup failed", exc_info=True)
        return removed

    async def stats(self) -> list[CacheStats]:
        tiers = [await self._memory.stats()]
        if self._persistent is not None:
            try:
                tiers.append(await self._persistent.stats())
            except SQLAlchemyError:
                logger.warning("Persistent cache stats unavailable", exc_info=True)
        return tiers

    async def clear(self) -> None:
        await self._memory.clear()
        if self._persistent is not None:
            await self._persistent.clear()
