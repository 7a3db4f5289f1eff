"""Translation log value objects."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from cardquery.domain.shared.time import utc_now


class TranslationSource(Enum):
    """Where a served translation came from."""

    RULE = "rule"
    PIPELINE = "pipeline"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class TranslationLogEntry:
    """One served translation, recorded for later mining."""

    natural_query: str
    compiled_query: str
    confidence: float
    source: TranslationSource
    fallback_used: bool = False
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            msg = f"Confidence must be between 0.0 and 1.0, got {self.confidence}"
            raise ValueError(msg)


@dataclass(frozen=True)
class MiningReport:
    """Summary of one pattern-miner run."""

    analyzed: int
    candidates: int
    created: tuple[str, ...] = ()
    rejected: tuple[str, ...] = ()

    @property
    def created_count(self) -> int:
        return len(self.created)
