"""Request screening and rate limiting."""

from cardquery.infrastructure.security.input_guard import (
    InputCheck,
    count_parameters,
    detect_injection,
    guard_query,
    json_depth,
    sanitize_error_message,
    sanitize_input_query,
    strip_invisible,
)
from cardquery.infrastructure.security.rate_limiter import (
    InMemoryRateLimitStore,
    RateLimitDecision,
    RateLimiter,
    RateLimitStore,
)

__all__ = [
    # Input screening
    "InputCheck",
    "count_parameters",
    "detect_injection",
    "guard_query",
    "json_depth",
    "sanitize_error_message",
    "sanitize_input_query",
    "strip_invisible",
    # Rate limiting
    "InMemoryRateLimitStore",
    "RateLimitDecision",
    "RateLimitStore",
    "RateLimiter",
]
