"""SQLAlchemy models for persistence layer."""

from cardquery.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)
from cardquery.infrastructure.persistence.sqlalchemy.models.feedback_model import (
    SearchFeedbackModel,
)
from cardquery.infrastructure.persistence.sqlalchemy.models.query_cache_model import (
    QueryCacheModel,
)
from cardquery.infrastructure.persistence.sqlalchemy.models.translation_log_model import (
    TranslationLogModel,
)
from cardquery.infrastructure.persistence.sqlalchemy.models.translation_rule_model import (
    TranslationRuleModel,
)

__all__ = [
    "Base",
    "QueryCacheModel",
    "SearchFeedbackModel",
    "TimestampMixin",
    "TranslationLogModel",
    "TranslationRuleModel",
]
