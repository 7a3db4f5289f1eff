"""Cache key derivation."""

import hashlib
import json
from typing import Any, Optional

QUERY_HASH_LENGTH = 16


def cache_key(
    normalized_query: str,
    filters: Optional[dict[str, Any]] = None,
    salt: str = "",
) -> str:
    """Build the raw cache key ``query|canonical-json(filters)|salt``."""
    canonical = json.dumps(filters or {}, sort_keys=True, separators=(",", ":"))
    return f"{normalized_query}|{canonical}|{salt}"


def query_hash(
    normalized_query: str,
    filters: Optional[dict[str, Any]] = None,
    salt: str = "",
) -> str:
    """First 16 hex characters of SHA-256 over the cache key."""
    key = cache_key(normalized_query, filters, salt)
    return hashlib.sha256(key.encode("utf-8")).hexdigest()[:QUERY_HASH_LENGTH]
