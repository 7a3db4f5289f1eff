"""Result cache tiers and stampede protection."""

from cardquery.infrastructure.cache.memory_cache import InMemoryResultCache
from cardquery.infrastructure.cache.single_flight import SingleFlight
from cardquery.infrastructure.cache.tiered_cache import TieredResultCache

__all__ = [
    "InMemoryResultCache",
    "SingleFlight",
    "TieredResultCache",
]
