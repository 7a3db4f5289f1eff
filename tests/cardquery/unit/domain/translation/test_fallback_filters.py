"""Unit tests for the fallback compiler and structured search filters."""

from cardquery.domain.translation import SearchFilters, apply_filters, compile_fallback


class TestCompileFallback:
    """Tests for the dictionary-based fallback compiler."""

    def test_pretranslated_phrase(self):
        """Known phrases bypass parsing entirely."""
        assert compile_fallback("mono red creatures") == "id=r t:creature"

    def test_pretranslated_phrase_ignores_case(self):
        assert compile_fallback("Mono Red Creatures") == "id=r t:creature"

    def test_slang_and_color(self):
        """Slang and color words are mapped independently."""
        assert compile_fallback("counterspells in blue") == "otag:counter c:u"

    def test_unknown_text_passes_through(self):
        """Without any dictionary match the query is returned unchanged."""
        assert compile_fallback("lightning bolt") == "lightning bolt"

    def test_filters_are_appended(self):
        result = compile_fallback(
            "counterspells in blue",
            SearchFilters(format="commander"),
        )
        assert result == "otag:counter c:u f:commander"

    def test_is_deterministic(self):
        assert compile_fallback("counterspells in blue") == compile_fallback(
            "counterspells in blue",
        )


class TestSearchFilters:
    """Tests for filter rendering and cache canonicalization."""

    def test_apply_format_and_identity(self):
        filters = SearchFilters(format="commander", color_identity=("R", "G"))
        assert apply_filters("t:creature", filters) == "t:creature f:commander ci=rg"

    def test_apply_none(self):
        assert apply_filters(" t:creature ", None) == "t:creature"

    def test_empty_filters_leave_query_alone(self):
        assert apply_filters("t:creature", SearchFilters()) == "t:creature"

    def test_as_dict_omits_empty_fields(self):
        assert SearchFilters().as_dict() == {}
        assert SearchFilters(format="modern").as_dict() == {"format": "modern"}

    def test_as_dict_uses_wire_names(self):
        filters = SearchFilters(color_identity=("W", "U"))
        assert filters.as_dict() == {"colorIdentity": ["W", "U"]}
