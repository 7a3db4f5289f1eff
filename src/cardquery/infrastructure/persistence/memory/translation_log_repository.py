"""In-process TranslationLogRepository."""

from __future__ import annotations

import asyncio
from datetime import datetime

from cardquery.domain.mining import TranslationLogEntry, TranslationLogRepository


class InMemoryTranslationLogRepository(TranslationLogRepository):
    """Append-only list of log entries."""

    def __init__(self):
        self._entries: list[TranslationLogEntry] = []
        self._lock = asyncio.Lock()

    async def record(self, entry: TranslationLogEntry) -> None:
        async with self._lock:
            self._entries.append(entry)

    async def find_recent_high_confidence(
        self,
        since: datetime,
        min_confidence: float,
        limit: int,
    ) -> list[TranslationLogEntry]:
        matches = [
            e
            for e in self._entries
            if e.created_at >= since
            and e.confidence >= min_confidence
            and not e.fallback_used
        ]
        matches.sort(key=lambda e: e.created_at, reverse=True)
        return matches[:limit]
