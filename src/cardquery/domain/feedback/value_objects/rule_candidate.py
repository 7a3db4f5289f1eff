"""Value objects exchanged with the generative backend."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from cardquery.domain.feedback.value_objects.feedback_status import FeedbackStatus


@dataclass(frozen=True)
class RuleCandidate:
    """A rule proposed by the generative backend, not yet trusted."""

    pattern: str
    compiled_query: str
    confidence: float  # 0.0 - 1.0
    description: str = ""

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            msg = f"Confidence must be between 0.0 and 1.0, got {self.confidence}"
            raise ValueError(msg)

    @property
    def is_complete(self) -> bool:
        return bool(self.pattern.strip() and self.compiled_query.strip())

    def is_confident(self, threshold: float) -> bool:
        return self.confidence >= threshold


@dataclass(frozen=True)
class FeedbackOutcome:
    """Result of processing one feedback item."""

    feedback_id: UUID
    status: FeedbackStatus
    message: str
    rule_id: Optional[UUID] = None
