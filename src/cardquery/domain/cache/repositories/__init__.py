"""Cache store interfaces."""

from cardquery.domain.cache.repositories.result_cache_store import ResultCacheStore

__all__ = ["ResultCacheStore"]
