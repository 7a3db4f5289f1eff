"""Unit tests for the extractor pipeline and the IR renderer."""

from cardquery.domain.translation import (
    EXTRACTOR_ORDER,
    ColorConstraint,
    ColorMode,
    ColorOperator,
    ComparisonOperator,
    NumericConstraint,
    SearchIR,
    build_ir,
    compile_query,
    render,
)


class TestCompileQuery:
    """Tests for the end-to-end compile of natural-language queries."""

    def test_mono_color_creature_with_mana_value(self):
        """A typical query renders color, type and mana value in order."""
        compiled, ir = compile_query("5 mana mono red creature")

        assert compiled == "c=r id=r t:creature mv=5"
        assert ir.mono_color == "r"
        assert ir.types == ["creature"]
        assert ir.remaining == ""

    def test_unrecognized_text_becomes_oracle_search(self):
        """Residual text is kept as oracle text with a warning."""
        compiled, ir = compile_query("xyzzy")

        assert compiled == 'o:"xyzzy"'
        assert ir.remaining == "xyzzy"
        assert any("Unrecognized text" in w for w in ir.warnings)

    def test_compile_is_deterministic(self):
        """The same query always compiles to the same string."""
        first, _ = compile_query("5 mana mono red creature")
        second, _ = compile_query("5 mana mono red creature")
        assert first == second

    def test_build_ir_returns_fresh_ir(self):
        """Each invocation starts from an empty IR."""
        first = build_ir("mono red creature")
        second = build_ir("xyzzy")
        assert first.types == ["creature"]
        assert second.types == []

    def test_filler_runs_last(self):
        """The filler step is the final extractor."""
        names = [name for name, _ in EXTRACTOR_ORDER]
        assert names[-1] == "filler"
        assert names.index("numeric") > names.index("types")

    def test_mana_value_before_mana_tag_phrase(self):
        """The number in '4 mana rock' is the mana value, not oracle text."""
        compiled, ir = compile_query("4 mana rock")

        assert compiled == "-t:land mv=4 otag:manarock"
        assert ir.remaining == ""
        assert not any("Unrecognized text" in w for w in ir.warnings)

    def test_mana_value_bound_before_mana_tag_phrase(self):
        compiled, _ = compile_query("mana rocks 3 mana or less")
        assert "mv<=3" in compiled

        compiled, _ = compile_query("3 mana rocks or less")
        assert "mv<=3" in compiled
        assert 'o:"' not in compiled

    def test_mana_tag_phrase_without_number(self):
        compiled, _ = compile_query("mana rocks")
        assert compiled == "-t:land otag:manarock"

    def test_negated_type_with_article(self):
        """'not an instant' excludes the type instead of requiring it."""
        compiled, ir = compile_query("not an instant")

        assert compiled == "-t:instant"
        assert ir.types == []
        assert ir.remaining == ""

    def test_negated_type_articles(self):
        assert compile_query("not a creature")[0] == "-t:creature"
        assert compile_query("not an artifact")[0] == "-t:artifact"


class TestSearchIR:
    """Tests for the accumulator's ordered-set behavior."""

    def test_include_type_deduplicates(self):
        ir = SearchIR()
        ir.include_type("Creature")
        ir.include_type("creature")
        assert ir.types == ["creature"]

    def test_exclusion_wins_over_earlier_inclusion(self):
        """Excluding a required type drops it and warns."""
        ir = SearchIR()
        ir.include_type("creature")
        ir.exclude_type("creature")

        assert ir.types == []
        assert ir.excluded_types == ["creature"]
        assert len(ir.warnings) == 1

    def test_exclusion_wins_over_later_inclusion(self):
        """Including an excluded type is refused."""
        ir = SearchIR()
        ir.exclude_type("land")
        ir.include_type("land")

        assert ir.types == []
        assert ir.excluded_types == ["land"]
        assert ir.warnings

    def test_copy_does_not_share_lists(self):
        ir = SearchIR()
        clone = ir.copy()
        clone.include_type("artifact")
        assert ir.types == []

    def test_warn_deduplicates(self):
        ir = SearchIR()
        ir.warn("same")
        ir.warn("same")
        assert ir.warnings == ["same"]

    def test_is_empty(self):
        ir = SearchIR()
        assert ir.is_empty
        ir.tags.append("otag:ramp")
        assert not ir.is_empty


class TestRender:
    """Tests for deterministic rendering order."""

    def test_render_order(self):
        """Color, types, subtypes, exclusions, numeric, tags, oracle."""
        ir = SearchIR(mono_color="g")
        ir.include_type("creature")
        ir.include_subtype("elf")
        ir.exclude_type("legendary")
        ir.add_numeric("mv", "<=", 3)
        ir.tags.append("otag:ramp")
        ir.oracle.append('o:"untap"')

        assert render(ir) == 'c=g id=g t:creature t:elf -t:legendary mv<=3 otag:ramp o:"untap"'

    def test_color_or_renders_as_group(self):
        ir = SearchIR(
            color_constraint=ColorConstraint(("w", "u"), ColorMode.COLOR, ColorOperator.OR),
        )
        assert render(ir) == "(c:w or c:u)"

    def test_color_within_renders_identity_subset(self):
        ir = SearchIR(
            color_constraint=ColorConstraint(("w", "u"), ColorMode.IDENTITY, ColorOperator.WITHIN),
        )
        assert render(ir) == "id<=wu"

    def test_color_and_renders_inclusive_color(self):
        ir = SearchIR(
            color_constraint=ColorConstraint(("b", "r"), ColorMode.COLOR, ColorOperator.AND),
        )
        assert render(ir) == "c:br"

    def test_exact_identity(self):
        ir = SearchIR(
            color_constraint=ColorConstraint(("b", "g"), ColorMode.IDENTITY, ColorOperator.EXACT),
        )
        assert render(ir) == "id=bg"

    def test_mono_color_beats_constraint(self):
        ir = SearchIR(
            mono_color="r",
            color_constraint=ColorConstraint(("w", "u"), ColorMode.COLOR, ColorOperator.OR),
        )
        assert render(ir) == "c=r id=r"

    def test_type_in_special_is_not_repeated(self):
        """A type already inside a special fragment is not emitted bare."""
        ir = SearchIR()
        ir.include_type("creature")
        ir.specials.append('t:creature o:"dies"')

        assert render(ir) == 't:creature o:"dies"'

    def test_excluded_type_is_never_required(self):
        """Even a hand-built IR never renders t:X alongside -t:X."""
        ir = SearchIR(types=["land"], excluded_types=["land"])
        assert render(ir) == "-t:land"

    def test_duplicate_tokens_are_removed(self):
        ir = SearchIR(tags=["otag:ramp", "OTAG:RAMP"])
        assert render(ir) == "otag:ramp"

    def test_color_count_follows_numeric(self):
        ir = SearchIR(color_count=NumericConstraint("c", ComparisonOperator.GE, 2))
        ir.add_numeric("pow", ">", 3)
        assert render(ir) == "pow>3 c>=2"

    def test_empty_ir_renders_empty(self):
        assert render(SearchIR()) == ""


class TestNumericConstraint:
    """Tests for numeric comparison rendering."""

    def test_integer_value(self):
        assert NumericConstraint("mv", ComparisonOperator.EQ, 3.0).render() == "mv=3"

    def test_fractional_value(self):
        assert NumericConstraint("usd", ComparisonOperator.LT, 2.5).render() == "usd<2.5"
