"""Mining value objects."""

from cardquery.domain.mining.value_objects.translation_log_entry import (
    MiningReport,
    TranslationLogEntry,
    TranslationSource,
)

__all__ = [
    "MiningReport",
    "TranslationLogEntry",
    "TranslationSource",
]
