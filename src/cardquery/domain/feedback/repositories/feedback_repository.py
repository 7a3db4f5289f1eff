"""Repository interface for feedback items."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from cardquery.domain.feedback.entities import FeedbackItem
from cardquery.domain.feedback.value_objects import FeedbackStatus


class FeedbackRepository(ABC):
    """Repository interface for persisting and retrieving feedback items."""

    @abstractmethod
    async def save(self, feedback: FeedbackItem) -> None:
        """
        Insert a new feedback item.

        Parameters
        ----------
        feedback
            Feedback item to save
        """

    @abstractmethod
    async def find_by_id(self, feedback_id: UUID) -> Optional[FeedbackItem]:
        """
        Find a feedback item by ID.

        Returns
        -------
        Feedback item if found, None otherwise
        """

    @abstractmethod
    async def claim(self, feedback_id: UUID) -> Optional[FeedbackItem]:
        """
        Atomically move an item from ``pending`` to ``processing``.

        This is a compare-and-swap guarded on ``status = pending``: of
        several concurrent callers, exactly one succeeds.

        Returns
        -------
        The claimed item, or None if it was not pending (or not found)
        """

    @abstractmethod
    async def finish(
        self,
        feedback_id: UUID,
        status: FeedbackStatus,
        message: Optional[str] = None,
        rule_id: Optional[UUID] = None,
    ) -> bool:
        """
        Move an item from ``processing`` to a final status.

        Guarded on ``status = processing`` so a timed-out or swept item
        cannot be finished twice.

        Returns
        -------
        True if the transition happened, False otherwise
        """

    @abstractmethod
    async def count_similar_attempts(self, feedback: FeedbackItem) -> int:
        """
        Count earlier feedback for a similar query that was already tried.

        Similar means the original query starts with the same first three
        words. Only completed, duplicate and failed items count, and the
        item itself is excluded.
        """

    @abstractmethod
    async def fail_stale(self, older_than: datetime) -> int:
        """
        Force items stuck in ``processing`` since before ``older_than``
        to ``failed``.

        Returns
        -------
        Number of items reclaimed
        """
