"""Mining domain services."""

from cardquery.domain.mining.services.pattern_normalizer import normalize_pattern

__all__ = ["normalize_pattern"]
