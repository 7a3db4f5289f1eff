"""In-process repository implementations."""

from cardquery.infrastructure.persistence.memory.feedback_repository import (
    InMemoryFeedbackRepository,
)
from cardquery.infrastructure.persistence.memory.rule_repository import (
    InMemoryRuleRepository,
)
from cardquery.infrastructure.persistence.memory.translation_log_repository import (
    InMemoryTranslationLogRepository,
)

__all__ = [
    "InMemoryFeedbackRepository",
    "InMemoryRuleRepository",
    "InMemoryTranslationLogRepository",
]
