"""Repository interface for translation logs."""

from abc import ABC, abstractmethod
from datetime import datetime

from cardquery.domain.mining.value_objects import TranslationLogEntry


class TranslationLogRepository(ABC):
    """Append-only store of served translations."""

    @abstractmethod
    async def record(self, entry: TranslationLogEntry) -> None:
        """Append one log entry."""

    @abstractmethod
    async def find_recent_high_confidence(
        self,
        since: datetime,
        min_confidence: float,
        limit: int,
    ) -> list[TranslationLogEntry]:
        """
        Return recent entries suitable for mining.

        Parameters
        ----------
        since
            Only entries created at or after this instant
        min_confidence
            Only entries at or above this confidence
        limit
            Maximum number of entries, newest first

        Returns
        -------
        Entries that did not come from the fallback compiler
        """
