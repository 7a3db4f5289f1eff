"""Feedback processing status enumeration."""

from enum import Enum


class FeedbackStatus(Enum):
    """Lifecycle of one submitted correction.

    ``pending -> processing -> {completed | duplicate | skipped | failed |
    updated_existing}``. Only ``processing -> failed`` can be forced from
    outside the normal flow (timeouts and the stale sweep).
    """

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    DUPLICATE = "duplicate"
    SKIPPED = "skipped"
    FAILED = "failed"
    UPDATED_EXISTING = "updated_existing"

    def is_final(self) -> bool:
        return self not in [FeedbackStatus.PENDING, FeedbackStatus.PROCESSING]

    def counts_as_attempt(self) -> bool:
        """Statuses that mean an earlier fix for the same query was tried."""
        return self in [
            FeedbackStatus.COMPLETED,
            FeedbackStatus.DUPLICATE,
            FeedbackStatus.FAILED,
        ]


ATTEMPT_STATUSES = tuple(s for s in FeedbackStatus if s.counts_as_attempt())
