"""Result cache domain."""

from cardquery.domain.cache.entities import CacheEntry, CacheStats
from cardquery.domain.cache.repositories import ResultCacheStore
from cardquery.domain.cache.services import cache_key, query_hash

__all__ = [
    "CacheEntry",
    "CacheStats",
    "ResultCacheStore",
    "cache_key",
    "query_hash",
]
