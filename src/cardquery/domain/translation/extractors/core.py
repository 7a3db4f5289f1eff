"""Exclusion, color and type extractors."""

import re

from cardquery.domain.translation.extractors.base import cut, cut_all, word
from cardquery.domain.translation.ir import (
    ColorConstraint,
    ColorMode,
    ColorOperator,
    ComparisonOperator,
    NumericConstraint,
    SearchIR,
)
from cardquery.domain.translation.vocabulary import (
    CARD_TYPES,
    COLOR_MAP,
    DISJUNCTIVE_TYPES,
    EXCLUDABLE_TYPES,
    MULTICOLOR_MAP,
)

# ---------------------------------------------------------------------------
# Exclusions
# ---------------------------------------------------------------------------

_EXCLUDABLE = "|".join(EXCLUDABLE_TYPES)
_NEGATED_TYPE = word(
    rf"\b(?:not|non|no|isn't|aren't|without|excluding)[\s-]+(?:an?\s+)?({_EXCLUDABLE})s?\b",
)
_TYPE_LESS = word(rf"\b({_EXCLUDABLE})s?\s*-?\s*(?:less|free)\b")


def extract_exclusions(text: str, ir: SearchIR) -> tuple[str, SearchIR]:
    """'non-creature', 'not a land', 'landless' -> excluded types."""
    for pattern in (_NEGATED_TYPE, _TYPE_LESS):
        while match := pattern.search(text):
            ir.exclude_type(match.group(1))
            text = cut(text, match)
    return text, ir


# ---------------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------------

_COLOR_WORD = "white|blue|black|red|green"
_IDENTITY_CUE = word(
    r"\b(?:ci|color identity|commander deck|fits into|goes into|can go in|usable in|identity)\b",
)
_EXACT_CUE = word(r"\b(?:exactly|only|just|strictly)\b")
_MONO = word(rf"\bmono[-\s]?({_COLOR_WORD}|w|u|b|r|g|colou?r(?:ed)?)\b")
_SHORTHAND = word(r"\b([wubrg]{2,5})\b")
_COLOR_OR = word(rf"\b({_COLOR_WORD})\s+or\s+({_COLOR_WORD})\b")
_COLOR_AND = word(rf"\b({_COLOR_WORD})(?:\s+and\s+|\s*[-/]\s*|\s+)({_COLOR_WORD})\b")
_ANY_COLOR = word(rf"\b(?:{_COLOR_WORD})\b")
_OR_WORD = word(r"\bor\b")
_MULTICOLOR = tuple(
    (word(rf"\b{re.escape(name)}\b"), code) for name, code in MULTICOLOR_MAP.items()
)


def _identity_operator(exact: bool) -> ColorOperator:
    return ColorOperator.EXACT if exact else ColorOperator.WITHIN


def _consume_cues(text: str) -> str:
    text = cut_all(text, _IDENTITY_CUE)
    return cut_all(text, _EXACT_CUE)


def extract_colors(text: str, ir: SearchIR) -> tuple[str, SearchIR]:
    """Color and color-identity expressions.

    Tried in order, the first form that matches wins: mono color,
    shorthand codes (only with an identity cue), named color combinations,
    "X or Y", "X and Y" / "X-Y", then any remaining color words.
    """
    identity = (
        ir.has_special("f:commander")
        or ir.has_special("is:commander")
        or bool(_IDENTITY_CUE.search(text))
    )
    exact = bool(_EXACT_CUE.search(text))
    mode = ColorMode.IDENTITY if identity else ColorMode.COLOR

    if match := _MONO.search(text):
        value = match.group(1).lower()
        if value.startswith("colo"):
            ir.color_count = NumericConstraint("c", ComparisonOperator.EQ, 1)
        else:
            ir.mono_color = COLOR_MAP[value]
        return _consume_cues(cut(text, match)), ir

    if identity and (match := _SHORTHAND.search(text)):
        ir.color_constraint = ColorConstraint(
            tuple(match.group(1).lower()),
            ColorMode.IDENTITY,
            _identity_operator(exact),
        )
        return _consume_cues(cut(text, match)), ir

    for pattern, code in _MULTICOLOR:
        if match := pattern.search(text):
            operator = _identity_operator(exact) if identity else ColorOperator.EXACT
            ir.color_constraint = ColorConstraint(tuple(code), mode, operator)
            return _consume_cues(cut(text, match)), ir

    if match := _COLOR_OR.search(text):
        values = (COLOR_MAP[match.group(1).lower()], COLOR_MAP[match.group(2).lower()])
        ir.color_constraint = ColorConstraint(values, mode, ColorOperator.OR)
        return _consume_cues(cut(text, match)), ir

    if match := _COLOR_AND.search(text):
        values = (COLOR_MAP[match.group(1).lower()], COLOR_MAP[match.group(2).lower()])
        operator = _identity_operator(exact) if identity else ColorOperator.AND
        ir.color_constraint = ColorConstraint(values, mode, operator)
        return _consume_cues(cut(text, match)), ir

    words = [m.group(0).lower() for m in _ANY_COLOR.finditer(text)]
    if not words:
        return text, ir

    values = tuple(dict.fromkeys(COLOR_MAP[w] for w in words))
    if len(values) > 1 and _OR_WORD.search(text):
        operator = ColorOperator.OR
    elif identity:
        operator = _identity_operator(exact)
    elif exact:
        operator = ColorOperator.EXACT
    else:
        operator = ColorOperator.AND
    ir.color_constraint = ColorConstraint(values, mode, operator)

    text = cut_all(text, _ANY_COLOR)
    if operator is ColorOperator.OR:
        text = cut_all(text, _OR_WORD)
    return _consume_cues(text), ir


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------

_DISJUNCTIVE = "|".join(DISJUNCTIVE_TYPES)
_TYPE_OR_PATTERNS = (
    word(rf"\b({_DISJUNCTIVE})s?\s+or\s+({_DISJUNCTIVE})s?\b"),
    word(rf"\beither\s+(?:an?\s+)?({_DISJUNCTIVE})\s+or\s+(?:an?\s+)?({_DISJUNCTIVE})\b"),
)
_UTILITY_LANDS = word(r"\butility lands?\b")
_SPELLS = word(r"\bspells?\b")
_INSTANT_OR_SORCERY = "(t:instant or t:sorcery)"
_TYPE_WORDS = tuple(
    (type_name, word(rf"\b{type_name}s?\b")) for type_name in CARD_TYPES
)


def extract_types(text: str, ir: SearchIR) -> tuple[str, SearchIR]:
    """Card types.

    "X or Y" becomes a disjunctive group in ``specials``; every other type
    word is a conjunctive requirement (a card can be an artifact creature).
    """
    handled: set[str] = set()

    if match := _UTILITY_LANDS.search(text):
        ir.include_type("land")
        ir.exclude_type("basic")
        handled.add("land")
        text = cut(text, match)

    for pattern in _TYPE_OR_PATTERNS:
        while match := pattern.search(text):
            first, second = match.group(1).lower(), match.group(2).lower()
            ir.specials.append(f"(t:{first} or t:{second})")
            handled.update((first, second))
            text = cut(text, match)

    if _SPELLS.search(text) and not handled.intersection(("instant", "sorcery")):
        ir.specials.append(_INSTANT_OR_SORCERY)
        handled.update(("instant", "sorcery"))
        text = cut_all(text, _SPELLS)

    for type_name, pattern in _TYPE_WORDS:
        if not pattern.search(text):
            continue
        text = cut_all(text, pattern)
        if type_name in handled or type_name in ir.excluded_types:
            continue
        ir.include_type(type_name)
    return text, ir
