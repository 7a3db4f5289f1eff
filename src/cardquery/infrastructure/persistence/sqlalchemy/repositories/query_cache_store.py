"""SQLAlchemy-backed persistent tier of the result cache."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cardquery.domain.cache import CacheEntry, CacheStats, ResultCacheStore
from cardquery.domain.shared.time import ensure_tz_aware, utc_now
from cardquery.infrastructure.persistence.sqlalchemy.models import QueryCacheModel

logger = logging.getLogger(__name__)

DEFAULT_MIN_CONFIDENCE = 0.65


class PersistentResultCache(ResultCacheStore):
    """
    Result cache stored in the ``query_cache`` table.

    The cache outlives a single request, so it owns a session factory and
    opens a short session per operation instead of borrowing the request
    session. Entries below ``min_confidence`` are never written.
    """

    tier = "persistent"

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        min_confidence: float = DEFAULT_MIN_CONFIDENCE,
    ):
        self._session_maker = session_maker
        self._min_confidence = min_confidence
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    async def get(self, query_hash: str) -> Optional[CacheEntry]:
        now = utc_now()
        async with self._session_maker() as session:
            stmt = select(QueryCacheModel).where(
                QueryCacheModel.query_hash == query_hash,
                QueryCacheModel.expires_at > now,
            )
            result = await session.execute(stmt)
            model = result.scalar_one_or_none()

            if not model:
                self._misses += 1
                return None

            model.hit_count = (model.hit_count or 0) + 1
            model.last_hit_at = now
            entry = self._model_to_domain(model)
            await session.commit()

        self._hits += 1
        return entry

    async def set(self, entry: CacheEntry) -> None:
        if entry.confidence < self._min_confidence:
            logger.debug(
                "Not persisting %s: confidence %.2f below %.2f",
                entry.query_hash,
                entry.confidence,
                self._min_confidence,
            )
            return

        async with self._session_maker() as session:
            stmt = select(QueryCacheModel).where(
                QueryCacheModel.query_hash == entry.query_hash,
            )
            result = await session.execute(stmt)
            existing = result.scalar_one_or_none()

            if existing:
                existing.normalized_query = entry.normalized_query
                existing.compiled_query = entry.compiled_query
                existing.explanation = dict(entry.explanation)
                existing.confidence = entry.confidence
                existing.expires_at = entry.expires_at
            else:
                session.add(
                    QueryCacheModel(
                        query_hash=entry.query_hash,
                        normalized_query=entry.normalized_query,
                        compiled_query=entry.compiled_query,
                        explanation=dict(entry.explanation),
                        confidence=entry.confidence,
                        hit_count=entry.hit_count,
                        last_hit_at=entry.last_hit_at,
                        expires_at=entry.expires_at,
                        created_at=entry.created_at,
                    ),
                )
            await session.commit()

    async def cleanup_expired(self) -> int:
        async with self._session_maker() as session:
            stmt = delete(QueryCacheModel).where(
                QueryCacheModel.expires_at <= utc_now(),
            )
            result = await session.execute(stmt)
            await session.commit()

        removed = result.rowcount or 0
        self._evictions += removed
        if removed:
            logger.info("Removed %d expired persistent cache entries", removed)
        return removed

    async def stats(self) -> CacheStats:
        async with self._session_maker() as session:
            result = await session.execute(select(func.count(QueryCacheModel.query_hash)))
            entries = result.scalar_one()

        return CacheStats(
            tier=self.tier,
            entries=entries,
            hits=self._hits,
            misses=self._misses,
            evictions=self._evictions,
        )

    async def clear(self) -> None:
        async with self._session_maker() as session:
            await session.execute(delete(QueryCacheModel))
            await session.commit()

    def _model_to_domain(self, model: QueryCacheModel) -> CacheEntry:
        entry = CacheEntry(
            query_hash=model.query_hash,
            normalized_query=model.normalized_query,
            compiled_query=model.compiled_query,
            confidence=model.confidence,
            expires_at=ensure_tz_aware(model.expires_at),
            explanation=dict(model.explanation or {}),
            hit_count=model.hit_count or 0,
            created_at=ensure_tz_aware(model.created_at),
        )
        if model.last_hit_at is not None:
            entry = replace(entry, last_hit_at=ensure_tz_aware(model.last_hit_at))
        return entry
