"""Feedback repository interfaces."""

from cardquery.domain.feedback.repositories.feedback_repository import (
    FeedbackRepository,
)

__all__ = ["FeedbackRepository"]
