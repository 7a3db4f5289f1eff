"""Shared domain primitives."""

from cardquery.domain.shared.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    RateLimitExceededError,
    UnauthorizedError,
    UpstreamError,
    ValidationError,
)
from cardquery.domain.shared.time import ensure_tz_aware, utc_now

__all__ = [
    "ConflictError",
    "DomainException",
    "EntityNotFoundError",
    "ErrorCode",
    "RateLimitExceededError",
    "UnauthorizedError",
    "UpstreamError",
    "ValidationError",
    "ensure_tz_aware",
    "utc_now",
]
