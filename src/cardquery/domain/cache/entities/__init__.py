"""Cache entities."""

from cardquery.domain.cache.entities.cache_entry import CacheEntry, CacheStats

__all__ = [
    "CacheEntry",
    "CacheStats",
]
