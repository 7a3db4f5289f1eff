"""SQLAlchemy model for the persistent result cache."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, Float, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from cardquery.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)


class QueryCacheModel(Base, TimestampMixin):
    """One cached translation, keyed by the 16-character query hash."""

    __tablename__ = "query_cache"

    __table_args__ = (Index("ix_query_cache_expires_at", "expires_at"),)

    query_hash: Mapped[str] = mapped_column(String(16), primary_key=True)
    normalized_query: Mapped[str] = mapped_column(String(500), nullable=False)
    compiled_query: Mapped[str] = mapped_column(Text, nullable=False)
    explanation: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    confidence: Mapped[float] = mapped_column(Float, nullable=False)
    hit_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    last_hit_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<QueryCacheModel(hash={self.query_hash}, "
            f"hits={self.hit_count}, expires={self.expires_at})>"
        )
