"""Numeric comparators, price and cost phrases, release years.

These run last among the extractors so digits that belong to earlier
phrases ("equip 2", "produces 2 mana") are already consumed.
"""

import re

from cardquery.domain.translation.extractors.base import cut, cut_all, word
from cardquery.domain.translation.ir import ComparisonOperator, SearchIR

_GE = ComparisonOperator.GE
_LE = ComparisonOperator.LE

_PRICE_CONTEXT = re.compile(r"\$\d+")
_BUDGET_WORDS = tuple(word(rf"\b{w}\b") for w in ("cheap", "budget", "inexpensive"))
_STAT_WORD = r"(?:mana|mv|power|toughness|colou?rs?)"
_PRICE = word(rf"\b(?:under|below|less than)\s*\$?(\d+(?:\.\d+)?)\b(?!\s*{_STAT_WORD}\b)")
_COST = word(r"\bcosts?\s*(\d+)\s*(?:mana|mv)?\s*(or\s+less|or\s+more)?\b")
_YEAR_BOUND = word(r"\b(after|since)\s+(\d{4})\b")

# field -> aliases the user may write next to the number
NUMERIC_FIELDS: dict[str, tuple[str, ...]] = {
    "mv": ("mv", "mana", "mana value", "costs"),
    "pow": ("power",),
    "tou": ("toughness",),
    "year": ("year", "released", "printed"),
}


def _comparator_patterns(aliases: tuple[str, ...]) -> tuple[tuple[re.Pattern[str], str], ...]:
    alias = "(?:" + "|".join(
        re.escape(a) for a in sorted(aliases, key=len, reverse=True)
    ) + ")"
    n = r"(\d+(?:\.\d+)?)"
    # First match wins
    return (
        (word(rf"(?:\b(?:at least|min(?:imum)?)|>=?)\s*{n}\s*{alias}\b"), ">="),
        (word(rf"\b{n}\s*{alias}\s*\+"), ">="),
        (word(rf"\b{n}\s*{alias}\s+or\s+more\b"), ">="),
        (word(rf"\b{alias}\s*{n}\s+or\s+more\b"), ">="),
        (word(rf"(?:\b(?:at most|max(?:imum)?)|<=?)\s*{n}\s*{alias}\b"), "<="),
        (word(rf"\b{n}\s*{alias}\s+or\s+less\b"), "<="),
        (word(rf"\b{alias}\s*{n}\s+or\s+less\b"), "<="),
        (word(rf"\b(?:under|less than|below)\s*{n}\s*{alias}\b"), "<"),
        (word(rf"\b(?:over|more than|above)\s*{n}\s*{alias}\b"), ">"),
        (word(rf"\b(?:exactly|equals?)\s*{n}\s*{alias}\b"), "="),
        (word(rf"\b{n}\s*{alias}\b"), "="),
        (word(rf"\b{alias}\s*{n}\b"), "="),
    )


_COMPARATORS = {
    field_name: _comparator_patterns(aliases)
    for field_name, aliases in NUMERIC_FIELDS.items()
}


def exclude_lands_for_mana_rocks(text: str, ir: SearchIR) -> tuple[str, SearchIR]:
    """Mana rocks are never lands."""
    if "otag:manarock" in ir.tags or "otag:mana-rock" in ir.tags:
        ir.exclude_type("land")
    return text, ir


def extract_budget(text: str, ir: SearchIR) -> tuple[str, SearchIR]:
    """'cheap' means low mana value unless a dollar amount is given."""
    if _PRICE_CONTEXT.search(text):
        return text, ir
    for pattern in _BUDGET_WORDS:
        if pattern.search(text):
            ir.add_numeric("mv", _LE, 3)
            return cut_all(text, pattern), ir
    return text, ir


def extract_price(text: str, ir: SearchIR) -> tuple[str, SearchIR]:
    """'under $5' -> usd<5."""
    if match := _PRICE.search(text):
        ir.add_numeric("usd", ComparisonOperator.LT, float(match.group(1)))
        text = cut(text, match)
    return text, ir


def extract_cost(text: str, ir: SearchIR) -> tuple[str, SearchIR]:
    """'costs 3 or less' -> mv<=3."""
    if match := _COST.search(text):
        modifier = (match.group(2) or "").lower()
        if "less" in modifier:
            operator = _LE
        elif "more" in modifier:
            operator = _GE
        else:
            operator = ComparisonOperator.EQ
        ir.add_numeric("mv", operator, int(match.group(1)))
        text = cut(text, match)
    return text, ir


def extract_numeric(text: str, ir: SearchIR) -> tuple[str, SearchIR]:
    """At most one comparison per field: mana value, power, toughness, year."""
    for field_name, patterns in _COMPARATORS.items():
        for pattern, operator in patterns:
            if match := pattern.search(text):
                ir.add_numeric(field_name, operator, float(match.group(1)))
                text = cut(text, match)
                break
    return text, ir


def extract_year_bounds(text: str, ir: SearchIR) -> tuple[str, SearchIR]:
    """'after 2015' -> year>2015, 'since 2015' -> year>=2015."""
    if match := _YEAR_BOUND.search(text):
        operator = _GE if match.group(1).lower() == "since" else ComparisonOperator.GT
        ir.add_numeric("year", operator, int(match.group(2)))
        text = cut(text, match)
    return text, ir
