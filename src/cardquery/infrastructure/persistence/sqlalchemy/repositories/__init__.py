"""SQLAlchemy repository implementations."""

from cardquery.infrastructure.persistence.sqlalchemy.repositories.feedback_repository import (  # NOQA: E501
    FeedbackRepositorySQLAlchemy,
)
from cardquery.infrastructure.persistence.sqlalchemy.repositories.query_cache_store import (  # NOQA: E501
    PersistentResultCache,
)
from cardquery.infrastructure.persistence.sqlalchemy.repositories.rule_repository import (  # NOQA: E501
    RuleRepositorySQLAlchemy,
)
from cardquery.infrastructure.persistence.sqlalchemy.repositories.translation_log_repository import (  # NOQA: E501
    TranslationLogRepositorySQLAlchemy,
)

__all__ = [
    "FeedbackRepositorySQLAlchemy",
    "PersistentResultCache",
    "RuleRepositorySQLAlchemy",
    "TranslationLogRepositorySQLAlchemy",
]
