"""SQLAlchemy implementation of TranslationLogRepository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cardquery.domain.mining import TranslationLogEntry, TranslationLogRepository
from cardquery.domain.shared.time import ensure_tz_aware
from cardquery.infrastructure.persistence.sqlalchemy.models import (
    TranslationLogModel,
)


class TranslationLogRepositorySQLAlchemy(TranslationLogRepository):
    """SQLAlchemy implementation of TranslationLogRepository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def record(self, entry: TranslationLogEntry) -> None:
        model = TranslationLogModel(
            id=entry.id,
            natural_query=entry.natural_query,
            compiled_query=entry.compiled_query,
            confidence=entry.confidence,
            source=entry.source,
            fallback_used=entry.fallback_used,
            created_at=entry.created_at,
        )
        self._session.add(model)
        await self._session.flush()

    async def find_recent_high_confidence(
        self,
        since: datetime,
        min_confidence: float,
        limit: int,
    ) -> list[TranslationLogEntry]:
        stmt = (
            select(TranslationLogModel)
            .where(
                TranslationLogModel.created_at >= since,
                TranslationLogModel.confidence >= min_confidence,
                TranslationLogModel.fallback_used == False,  # NOQA: E712
            )
            .order_by(TranslationLogModel.created_at.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._model_to_domain(model) for model in models]

    def _model_to_domain(self, model: TranslationLogModel) -> TranslationLogEntry:
        return TranslationLogEntry(
            id=model.id,
            natural_query=model.natural_query,
            compiled_query=model.compiled_query,
            confidence=model.confidence,
            source=model.source,
            fallback_used=model.fallback_used,
            created_at=ensure_tz_aware(model.created_at),
        )
