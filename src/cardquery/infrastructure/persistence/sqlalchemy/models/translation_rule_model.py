"""SQLAlchemy model for TranslationRule entity."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import Boolean, CheckConstraint, Float, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from cardquery.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)


class TranslationRuleModel(Base, TimestampMixin):
    """
    SQLAlchemy model for persisting TranslationRule entities.

    Rules are never deleted. Lookups only consider active rows, so the
    (pattern, is_active) index serves the hot path.
    """

    __tablename__ = "translation_rules"

    __table_args__ = (
        CheckConstraint(
            "confidence >= 0 AND confidence <= 1",
            name="check_rule_confidence_range",
        ),
        Index("ix_translation_rules_pattern_active", "pattern", "is_active"),
    )

    id: Mapped[UUID] = mapped_column(primary_key=True)
    pattern: Mapped[str] = mapped_column(String(500), nullable=False)
    compiled_query: Mapped[str] = mapped_column(Text, nullable=False)
    confidence: Mapped[float] = mapped_column(Float, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    source_feedback_id: Mapped[Optional[UUID]] = mapped_column(Uuid, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<TranslationRuleModel(id={self.id}, "
            f"pattern={self.pattern!r}, active={self.is_active})>"
        )
