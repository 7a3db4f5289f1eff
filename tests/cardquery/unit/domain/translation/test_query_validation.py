"""Unit tests for outbound query sanitization and auto-corrections."""

from cardquery.domain.translation import (
    apply_auto_corrections,
    normalize_or_groups,
    validate_query,
)


class TestValidateQuery:
    """Tests for validate_query repairs."""

    def test_clean_query_is_unchanged(self):
        """A well-formed query passes through with no issues."""
        result = validate_query("c=r id=r t:creature mv=5")

        assert result.sanitized == "c=r id=r t:creature mv=5"
        assert result.issues == []
        assert result.valid

    def test_or_group_is_parenthesized(self):
        result = validate_query("a OR b")

        assert result.sanitized == "(a OR b)"
        assert "Normalized OR groups with parentheses" in result.issues
        assert not result.valid

    def test_unbalanced_quote_is_closed(self):
        result = validate_query('o:"draw a card')

        assert result.sanitized == 'o:"draw a card"'
        assert "Added missing closing quote" in result.issues

    def test_year_as_set_is_rewritten(self):
        result = validate_query("e:2015")

        assert result.sanitized == "year=2015"
        assert any("year=YYYY" in issue for issue in result.issues)

    def test_unknown_oracle_tag_is_stripped(self):
        result = validate_query("otag:notarealtag t:creature")

        assert result.sanitized == "t:creature"
        assert any("notarealtag" in issue for issue in result.issues)

    def test_known_oracle_tag_is_kept(self):
        result = validate_query("otag:ramp t:creature")

        assert result.sanitized == "otag:ramp t:creature"
        assert result.valid

    def test_unknown_search_key_is_removed(self):
        result = validate_query("foo:bar t:creature")

        assert result.sanitized == "t:creature"
        assert "Unknown search key(s): foo" in result.issues

    def test_missing_brace_is_added(self):
        result = validate_query("m:{R")

        assert result.sanitized == "m:{R}"
        assert "Added missing closing brace(s)" in result.issues

    def test_unbalanced_parentheses_are_removed(self):
        result = validate_query("(t:creature")

        assert result.sanitized == "t:creature"
        assert "Removed unbalanced parentheses" in result.issues

    def test_stat_math_is_removed(self):
        result = validate_query("pow+tou>=5 t:creature")

        assert result.sanitized == "t:creature"
        assert "Removed unsupported power+toughness math" in result.issues

    def test_long_query_is_truncated(self):
        result = validate_query("t:creature " * 50, max_length=40)

        assert len(result.sanitized) <= 40
        assert any("truncated" in issue for issue in result.issues)

    def test_newlines_become_spaces(self):
        result = validate_query("t:creature\nc:r")
        assert result.sanitized == "t:creature c:r"

    def test_validation_is_stable(self):
        """Sanitizing an already sanitized query changes nothing."""
        first = validate_query('a OR b o:"draw').sanitized
        second = validate_query(first)

        assert second.sanitized == first
        assert second.valid


class TestNormalizeOrGroups:
    """Tests for top-level OR grouping."""

    def test_chain_of_ors(self):
        assert normalize_or_groups("t:creature a OR b OR c") == "t:creature (a OR b OR c)"

    def test_nested_or_is_left_alone(self):
        assert normalize_or_groups("(a OR b) t:elf") == "(a OR b) t:elf"

    def test_lowercase_or_is_not_grouped(self):
        assert normalize_or_groups("a or b") == "a or b"


class TestApplyAutoCorrections:
    """Tests for fixes applied to generated rule queries."""

    def test_tag_alias_is_normalized(self):
        corrected, corrections = apply_auto_corrections("function:ramp")

        assert corrected == "otag:ramp"
        assert corrections == ["Normalized tag syntax to otag: for consistency"]

    def test_game_paper_is_removed(self):
        corrected, corrections = apply_auto_corrections("otag:ramp game:paper")

        assert corrected == "otag:ramp"
        assert len(corrections) == 1

    def test_verbose_etb_is_shortened(self):
        corrected, corrections = apply_auto_corrections('t:creature o:"enters the battlefield"')

        assert corrected == 't:creature o:"enters"'
        assert corrections == ["Simplified ETB syntax for broader results"]

    def test_clean_query_has_no_corrections(self):
        corrected, corrections = apply_auto_corrections("otag:removal c:b")

        assert corrected == "otag:removal c:b"
        assert corrections == []
