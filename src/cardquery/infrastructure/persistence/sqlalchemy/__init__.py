"""SQLAlchemy persistence implementation."""

from cardquery.infrastructure.persistence.sqlalchemy.models import Base

__all__ = ["Base"]
