"""Result cache entry."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Optional

from cardquery.domain.shared.time import utc_now


@dataclass(frozen=True)
class CacheEntry:
    """A compiled translation stored under its query hash.

    Entries are immutable values; a hit produces a new entry with the
    hit count bumped rather than mutating a shared instance.
    """

    query_hash: str
    normalized_query: str
    compiled_query: str
    confidence: float
    expires_at: datetime
    explanation: dict[str, Any] = field(default_factory=dict)
    hit_count: int = 0
    last_hit_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=utc_now)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or utc_now()) >= self.expires_at

    def touched(self, now: Optional[datetime] = None) -> "CacheEntry":
        """Return a copy recording one more hit."""
        return replace(self, hit_count=self.hit_count + 1, last_hit_at=now or utc_now())


@dataclass(frozen=True)
class CacheStats:
    """Point-in-time statistics of one cache tier."""

    tier: str
    entries: int
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0
