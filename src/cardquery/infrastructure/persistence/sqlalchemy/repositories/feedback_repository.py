"""SQLAlchemy implementation of FeedbackRepository."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cardquery.domain.feedback import (
    ATTEMPT_STATUSES,
    FeedbackItem,
    FeedbackRepository,
    FeedbackStatus,
)
from cardquery.domain.shared.time import ensure_tz_aware, utc_now
from cardquery.infrastructure.persistence.sqlalchemy.models import (
    SearchFeedbackModel,
)

logger = logging.getLogger(__name__)


class FeedbackRepositorySQLAlchemy(FeedbackRepository):
    """
    SQLAlchemy implementation of FeedbackRepository.

    ``claim``, ``finish`` and ``fail_stale`` are single conditional UPDATE
    statements and are committed immediately, so another worker sees the
    new status before this one starts talking to the generative backend.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, feedback: FeedbackItem) -> None:
        model = SearchFeedbackModel(
            id=feedback.id,
            original_query=feedback.original_query,
            translated_query=feedback.translated_query,
            issue_description=feedback.issue_description,
            processing_status=feedback.status,
            generated_rule_id=feedback.generated_rule_id,
            processing_message=feedback.processing_message,
            processed_at=feedback.processed_at,
            created_at=feedback.created_at,
            updated_at=feedback.updated_at,
        )
        self._session.add(model)
        await self._session.flush()

    async def find_by_id(self, feedback_id: UUID) -> Optional[FeedbackItem]:
        # Status changes bypass the identity map, so always reload the row
        stmt = (
            select(SearchFeedbackModel)
            .where(SearchFeedbackModel.id == feedback_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return None

        return self._model_to_domain(model)

    async def claim(self, feedback_id: UUID) -> Optional[FeedbackItem]:
        stmt = (
            update(SearchFeedbackModel)
            .where(
                SearchFeedbackModel.id == feedback_id,
                SearchFeedbackModel.processing_status == FeedbackStatus.PENDING,
            )
            .values(processing_status=FeedbackStatus.PROCESSING, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        await self._session.commit()

        if result.rowcount != 1:
            return None

        return await self.find_by_id(feedback_id)

    async def finish(
        self,
        feedback_id: UUID,
        status: FeedbackStatus,
        message: Optional[str] = None,
        rule_id: Optional[UUID] = None,
    ) -> bool:
        if not status.is_final():
            msg = f"{status.value} is not a final status"
            raise ValueError(msg)

        now = utc_now()
        values: dict = {
            "processing_status": status,
            "processing_message": message,
            "processed_at": now,
            "updated_at": now,
        }
        if rule_id is not None:
            values["generated_rule_id"] = rule_id

        stmt = (
            update(SearchFeedbackModel)
            .where(
                SearchFeedbackModel.id == feedback_id,
                SearchFeedbackModel.processing_status == FeedbackStatus.PROCESSING,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        await self._session.commit()

        if result.rowcount != 1:
            logger.warning(
                "Feedback %s was no longer processing; %s not recorded",
                feedback_id,
                status.value,
            )
            return False
        return True

    async def count_similar_attempts(self, feedback: FeedbackItem) -> int:
        stmt = select(func.count(SearchFeedbackModel.id)).where(
            SearchFeedbackModel.id != feedback.id,
            SearchFeedbackModel.processing_status.in_(ATTEMPT_STATUSES),
            SearchFeedbackModel.original_query.istartswith(
                feedback.similarity_key,
                autoescape=True,
            ),
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def fail_stale(self, older_than: datetime) -> int:
        now = utc_now()
        stmt = (
            update(SearchFeedbackModel)
            .where(
                SearchFeedbackModel.processing_status == FeedbackStatus.PROCESSING,
                SearchFeedbackModel.updated_at < older_than,
            )
            .values(
                processing_status=FeedbackStatus.FAILED,
                processing_message="Processing timed out",
                processed_at=now,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        await self._session.commit()
        return result.rowcount or 0

    def _model_to_domain(self, model: SearchFeedbackModel) -> FeedbackItem:
        return FeedbackItem(
            id=model.id,
            original_query=model.original_query,
            translated_query=model.translated_query,
            issue_description=model.issue_description or "",
            status=model.processing_status,
            generated_rule_id=model.generated_rule_id,
            processing_message=model.processing_message,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
            processed_at=(
                ensure_tz_aware(model.processed_at) if model.processed_at else None
            ),
        )
