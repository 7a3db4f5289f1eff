"""Declarative base for the cardquery tables."""

from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from cardquery.domain.shared.time import utc_now


class Base(DeclarativeBase):
    """Metadata root; `create_all` on it builds the whole schema."""


class TimestampMixin:
    """First-written and last-touched times for rows updated in place."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )
