"""Feedback entities."""

from cardquery.domain.feedback.entities.feedback_item import FeedbackItem

__all__ = ["FeedbackItem"]
