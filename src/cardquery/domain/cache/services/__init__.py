"""Cache domain services."""

from cardquery.domain.cache.services.cache_key import cache_key, query_hash

__all__ = [
    "cache_key",
    "query_hash",
]
