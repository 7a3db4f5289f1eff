"""Translation rule entity."""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from cardquery.domain.shared.time import utc_now


class TranslationRule:
    """
    A learned mapping from a natural-language pattern to a compiled query.

    Rules are created by the feedback processor or the pattern miner and
    bypass the extractor pipeline when a request matches their pattern.
    They are never deleted: a rule that proved wrong is deactivated, and a
    retried correction may overwrite its compiled query in place.
    """

    def __init__(  # noqa: PLR0913
        self,
        pattern: str,
        compiled_query: str,
        confidence: float,
        description: Optional[str] = None,
        source_feedback_id: Optional[UUID] = None,
        is_active: bool = True,
        # For reconstitution from persistence:
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self._id = id or uuid4()
        self._pattern = pattern.strip().lower()
        self._compiled_query = compiled_query.strip()
        self._confidence = confidence
        self._description = description
        self._source_feedback_id = source_feedback_id
        self._is_active = is_active
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

        self._validate()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def pattern(self) -> str:
        return self._pattern

    @property
    def compiled_query(self) -> str:
        return self._compiled_query

    @property
    def confidence(self) -> float:
        return self._confidence

    @property
    def description(self) -> Optional[str]:
        return self._description

    @property
    def source_feedback_id(self) -> Optional[UUID]:
        return self._source_feedback_id

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def _validate(self) -> None:
        if not self._pattern:
            msg = "Rule pattern cannot be empty"
            raise ValueError(msg)
        if not self._compiled_query:
            msg = "Rule compiled query cannot be empty"
            raise ValueError(msg)
        if not 0.0 <= self._confidence <= 1.0:
            msg = f"Confidence must be between 0.0 and 1.0, got {self._confidence}"
            raise ValueError(msg)

    def replace_translation(
        self,
        compiled_query: str,
        confidence: float,
        description: Optional[str] = None,
        source_feedback_id: Optional[UUID] = None,
    ) -> None:
        """Overwrite the compiled query after a retried correction."""
        if not compiled_query.strip():
            msg = "Rule compiled query cannot be empty"
            raise ValueError(msg)
        if not 0.0 <= confidence <= 1.0:
            msg = f"Confidence must be between 0.0 and 1.0, got {confidence}"
            raise ValueError(msg)

        self._compiled_query = compiled_query.strip()
        self._confidence = confidence
        if description is not None:
            self._description = description
        if source_feedback_id is not None:
            self._source_feedback_id = source_feedback_id
        self._is_active = True
        self._updated_at = utc_now()

    def deactivate(self) -> None:
        self._is_active = False
        self._updated_at = utc_now()

    def is_trusted(self, min_confidence: float) -> bool:
        return self._is_active and self._confidence >= min_confidence

    def __eq__(self, other) -> bool:
        if not isinstance(other, TranslationRule):
            return False
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __str__(self) -> str:
        return f"TranslationRule[{self._pattern!r} -> {self._compiled_query!r}]"
