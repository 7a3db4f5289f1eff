"""SQLAlchemy model for FeedbackItem entity."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import DateTime, Index, String, Text, Uuid
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from cardquery.domain.feedback.value_objects import FeedbackStatus
from cardquery.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)


class SearchFeedbackModel(Base, TimestampMixin):
    """
    SQLAlchemy model for persisting FeedbackItem entities.

    Status changes go through conditional UPDATE statements in the
    repository, never through a read-modify-write of this model.
    """

    __tablename__ = "search_feedback"

    __table_args__ = (
        Index("ix_search_feedback_status_updated", "processing_status", "updated_at"),
    )

    id: Mapped[UUID] = mapped_column(primary_key=True)
    original_query: Mapped[str] = mapped_column(String(500), nullable=False)
    translated_query: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    issue_description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    processing_status: Mapped[FeedbackStatus] = mapped_column(
        SQLEnum(
            FeedbackStatus,
            values_callable=lambda x: [e.value for e in x],
            native_enum=False,
        ),
        default=FeedbackStatus.PENDING,
        nullable=False,
    )

    generated_rule_id: Mapped[Optional[UUID]] = mapped_column(Uuid, nullable=True)
    processing_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    processed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return (
            f"<SearchFeedbackModel(id={self.id}, "
            f"status={self.processing_status.value})>"
        )
