"""Feedback value objects."""

from cardquery.domain.feedback.value_objects.feedback_status import (
    ATTEMPT_STATUSES,
    FeedbackStatus,
)
from cardquery.domain.feedback.value_objects.rule_candidate import (
    FeedbackOutcome,
    RuleCandidate,
)

__all__ = [
    "ATTEMPT_STATUSES",
    "FeedbackOutcome",
    "FeedbackStatus",
    "RuleCandidate",
]
