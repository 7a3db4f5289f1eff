"""Unit tests for cache key derivation, cache entries and mining values."""

from datetime import timedelta

import pytest

from cardquery.domain.cache import CacheEntry, CacheStats, query_hash
from cardquery.domain.mining import (
    TranslationLogEntry,
    TranslationSource,
    normalize_pattern,
)
from cardquery.domain.shared.time import utc_now


class TestQueryHash:
    """Tests for the cache key hash."""

    def test_hash_is_sixteen_hex_characters(self):
        key = query_hash("red creature")
        assert len(key) == 16
        int(key, 16)

    def test_filter_order_does_not_matter(self):
        first = query_hash("elves", {"format": "modern", "colorIdentity": ["G"]})
        second = query_hash("elves", {"colorIdentity": ["G"], "format": "modern"})
        assert first == second

    def test_filters_change_the_hash(self):
        assert query_hash("elves") != query_hash("elves", {"format": "modern"})

    def test_salt_changes_the_hash(self):
        assert query_hash("elves", salt="v1") != query_hash("elves", salt="v2")

    def test_empty_filters_equal_none(self):
        assert query_hash("elves", {}) == query_hash("elves", None)


class TestCacheEntry:
    """Tests for immutable cache entries."""

    def _entry(self, expires_in: timedelta) -> CacheEntry:
        return CacheEntry(
            query_hash="abc",
            normalized_query="elves",
            compiled_query="t:elf",
            confidence=0.9,
            expires_at=utc_now() + expires_in,
        )

    def test_touched_returns_new_entry(self):
        entry = self._entry(timedelta(minutes=5))
        touched = entry.touched()

        assert touched.hit_count == 1
        assert touched.last_hit_at is not None
        assert entry.hit_count == 0

    def test_expiry(self):
        assert self._entry(timedelta(seconds=-1)).is_expired()
        assert not self._entry(timedelta(minutes=5)).is_expired()

    def test_hit_rate(self):
        assert CacheStats(tier="memory", entries=0).hit_rate == 0.0
        assert CacheStats(tier="memory", entries=1, hits=3, misses=1).hit_rate == 0.75


class TestNormalizePattern:
    """Tests for the order-independent mining key."""

    def test_word_order_is_ignored(self):
        assert normalize_pattern("red creature") == normalize_pattern("Creature, red")

    def test_punctuation_and_case_are_dropped(self):
        assert normalize_pattern("Red  Creature!") == "creature red"

    def test_empty(self):
        assert normalize_pattern("  ") == ""


class TestTranslationLogEntry:
    """Tests for log entry validation."""

    def test_confidence_out_of_range_raises(self):
        with pytest.raises(ValueError):
            TranslationLogEntry(
                natural_query="elves",
                compiled_query="t:elf",
                confidence=1.2,
                source=TranslationSource.PIPELINE,
            )

    def test_defaults(self):
        entry = TranslationLogEntry(
            natural_query="elves",
            compiled_query="t:elf",
            confidence=0.9,
            source=TranslationSource.RULE,
        )
        assert entry.fallback_used is False
        assert entry.source.value == "rule"
