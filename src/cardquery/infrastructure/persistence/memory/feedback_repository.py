"""In-process FeedbackRepository."""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Optional
from uuid import UUID

from cardquery.domain.feedback import FeedbackItem, FeedbackRepository, FeedbackStatus


class InMemoryFeedbackRepository(FeedbackRepository):
    """
    Feedback store held in a dict.

    Status transitions run under one ``asyncio.Lock`` so the check and the
    write form a single step, like the conditional UPDATE of the SQL store.
    """

    def __init__(self):
        self._items: dict[UUID, FeedbackItem] = {}
        self._lock = asyncio.Lock()

    async def save(self, feedback: FeedbackItem) -> None:
        async with self._lock:
            self._items[feedback.id] = feedback

    async def find_by_id(self, feedback_id: UUID) -> Optional[FeedbackItem]:
        return self._items.get(feedback_id)

    async def claim(self, feedback_id: UUID) -> Optional[FeedbackItem]:
        async with self._lock:
            item = self._items.get(feedback_id)
            if item is None or item.status != FeedbackStatus.PENDING:
                return None
            item.claim()
            return item

    async def finish(
        self,
        feedback_id: UUID,
        status: FeedbackStatus,
        message: Optional[str] = None,
        rule_id: Optional[UUID] = None,
    ) -> bool:
        async with self._lock:
            item = self._items.get(feedback_id)
            if item is None or item.status != FeedbackStatus.PROCESSING:
                return False
            item.finish(status, message, rule_id)
            return True

    async def count_similar_attempts(self, feedback: FeedbackItem) -> int:
        key = feedback.similarity_key
        return sum(
            1
            for item in self._items.values()
            if item.id != feedback.id
            and item.status.counts_as_attempt()
            and item.original_query.lower().startswith(key)
        )

    async def fail_stale(self, older_than: datetime) -> int:
        count = 0
        async with self._lock:
            for item in self._items.values():
                if item.status == FeedbackStatus.PROCESSING and item.updated_at < older_than:
                    item.finish(FeedbackStatus.FAILED, "Processing timed out")
                    count += 1
        return count

