"""Translation request and result DTOs."""

from dataclasses import dataclass, field
from typing import Any, Optional

from cardquery.domain.mining import TranslationSource
from cardquery.domain.translation import SearchFilters


@dataclass(frozen=True)
class TranslationRequest:
    """One natural-language search to translate."""

    query: str
    session_id: Optional[str] = None
    filters: SearchFilters = field(default_factory=SearchFilters)


@dataclass(frozen=True)
class Explanation:
    """Human-facing account of how a translation was produced."""

    readable: str
    assumptions: tuple[str, ...] = ()
    confidence: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "readable": self.readable,
            "assumptions": list(self.assumptions),
            "confidence": self.confidence,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Explanation":
        return cls(
            readable=str(data.get("readable", "")),
            assumptions=tuple(data.get("assumptions", ())),
            confidence=float(data.get("confidence", 0.0)),
        )


@dataclass(frozen=True)
class TranslationResult:
    """A served translation."""

    query: str
    compiled_query: str
    explanation: Explanation
    source: TranslationSource
    cached: bool = False
    warnings: tuple[str, ...] = ()

    @property
    def confidence(self) -> float:
        return self.explanation.confidence
