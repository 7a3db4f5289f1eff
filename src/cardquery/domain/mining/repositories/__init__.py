"""Mining repository interfaces."""

from cardquery.domain.mining.repositories.translation_log_repository import (
    TranslationLogRepository,
)

__all__ = ["TranslationLogRepository"]
