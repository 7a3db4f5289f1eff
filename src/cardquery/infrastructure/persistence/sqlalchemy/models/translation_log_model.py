"""SQLAlchemy model for translation log entries."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, Float, Index, String, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from cardquery.domain.mining.value_objects import TranslationSource
from cardquery.domain.shared.time import utc_now
from cardquery.infrastructure.persistence.sqlalchemy.models.base import Base


class TranslationLogModel(Base):
    """Append-only log of served translations, read by the pattern miner."""

    __tablename__ = "translation_logs"

    __table_args__ = (
        Index("ix_translation_logs_created_confidence", "created_at", "confidence"),
    )

    id: Mapped[UUID] = mapped_column(primary_key=True)
    natural_query: Mapped[str] = mapped_column(String(500), nullable=False)
    compiled_query: Mapped[str] = mapped_column(Text, nullable=False)
    confidence: Mapped[float] = mapped_column(Float, nullable=False)
    source: Mapped[TranslationSource] = mapped_column(
        SQLEnum(
            TranslationSource,
            values_callable=lambda x: [e.value for e in x],
            native_enum=False,
        ),
        nullable=False,
    )
    fallback_used: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<TranslationLogModel(id={self.id}, "
            f"query={self.natural_query!r}, source={self.source.value})>"
        )
