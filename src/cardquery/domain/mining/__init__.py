"""Mining domain: translation logs and pattern promotion."""

from cardquery.domain.mining.repositories import TranslationLogRepository
from cardquery.domain.mining.services import normalize_pattern
from cardquery.domain.mining.value_objects import (
    MiningReport,
    TranslationLogEntry,
    TranslationSource,
)

__all__ = [
    "MiningReport",
    "TranslationLogEntry",
    "TranslationLogRepository",
    "TranslationSource",
    "normalize_pattern",
]
