"""Feedback domain: user corrections that become translation rules."""

from cardquery.domain.feedback.entities import FeedbackItem
from cardquery.domain.feedback.exceptions import (
    FeedbackAlreadyClaimedError,
    FeedbackNotFoundError,
    LiveValidationUnavailableError,
)
from cardquery.domain.feedback.ports import LiveValidator, RuleGenerator
from cardquery.domain.feedback.repositories import FeedbackRepository
from cardquery.domain.feedback.value_objects import (
    ATTEMPT_STATUSES,
    FeedbackOutcome,
    FeedbackStatus,
    RuleCandidate,
)

__all__ = [
    # Entities
    "FeedbackItem",
    # Exceptions
    "FeedbackAlreadyClaimedError",
    "FeedbackNotFoundError",
    "LiveValidationUnavailableError",
    # Ports & Repositories
    "FeedbackRepository",
    "LiveValidator",
    "RuleGenerator",
    # Value Objects
    "ATTEMPT_STATUSES",
    "FeedbackOutcome",
    "FeedbackStatus",
    "RuleCandidate",
]
