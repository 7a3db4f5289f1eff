"""The deterministic extraction pipeline.

``EXTRACTOR_ORDER`` is the complete, ordered list of steps. Named
concepts (card lookups, slang, tags) run first so the generic color,
type and numeric parsers never re-consume their text; numeric parsing
runs last so digits inside earlier phrases are already claimed.
"""

import logging
import re

from cardquery.domain.translation.extractors import (
    Extractor,
    exclude_lands_for_mana_rocks,
    extract_archetypes,
    extract_budget,
    extract_cards_like,
    extract_colors,
    extract_companions,
    extract_cost,
    extract_enablers,
    extract_equipment,
    extract_exclusions,
    extract_keywords,
    extract_mana_production,
    extract_numeric,
    extract_oracle_patterns,
    extract_price,
    extract_slang_terms,
    extract_special_patterns,
    extract_tags,
    extract_targeting,
    extract_token_creation,
    extract_types,
    extract_year_bounds,
)
from cardquery.domain.translation.ir import SearchIR
from cardquery.domain.translation.normalizer import collapse_whitespace, normalize
from cardquery.domain.translation.renderer import render

logger = logging.getLogger(__name__)

_FILLER = re.compile(
    r"\b(?:that|which|with|the|a|an|cards?|released|printed)\b",
    re.IGNORECASE,
)
_EDGE_PUNCTUATION = re.compile(r"^[\s,]+|[\s,]+$")


def strip_filler(text: str, ir: SearchIR) -> tuple[str, SearchIR]:
    """Drop connective words and keep whatever is left as the residual."""
    text = _EDGE_PUNCTUATION.sub("", collapse_whitespace(text))
    text = collapse_whitespace(_FILLER.sub(" ", text))
    ir.remaining = text
    return text, ir


EXTRACTOR_ORDER: tuple[tuple[str, Extractor], ...] = (
    ("cards_like", extract_cards_like),
    ("slang", extract_slang_terms),
    ("tags", extract_tags),
    ("token_creation", extract_token_creation),
    ("enablers", extract_enablers),
    ("keywords", extract_keywords),
    ("archetypes", extract_archetypes),
    ("exclusions", extract_exclusions),
    ("companions", extract_companions),
    ("special_patterns", extract_special_patterns),
    ("oracle_patterns", extract_oracle_patterns),
    ("targeting", extract_targeting),
    ("colors", extract_colors),
    ("types", extract_types),
    ("mana_rocks", exclude_lands_for_mana_rocks),
    ("mana_production", extract_mana_production),
    ("equipment", extract_equipment),
    ("budget", extract_budget),
    ("price", extract_price),
    ("cost", extract_cost),
    ("numeric", extract_numeric),
    ("year_bounds", extract_year_bounds),
    ("filler", strip_filler),
)


def build_ir(
    query: str,
    steps: tuple[tuple[str, Extractor], ...] = EXTRACTOR_ORDER,
) -> SearchIR:
    """Normalize ``query`` and run it through every extractor in order.

    Each step receives its own copy of the IR, so a step can only
    influence later ones through what it returns.
    """
    text = normalize(query)
    ir = SearchIR()
    for name, step in steps:
        before = text
        text, ir = step(text, ir.copy())
        if text != before:
            logger.debug("Extractor %s consumed %r -> %r", name, before, text)
    return ir


def compile_query(query: str) -> tuple[str, SearchIR]:
    """Compile a natural-language query into search syntax.

    Residual text that no extractor understood is kept as an oracle
    free-text fragment plus a warning rather than being dropped.

    Returns
    -------
    Tuple of (compiled query, the IR it was rendered from)
    """
    ir = build_ir(query)
    if ir.remaining:
        residual = ir.remaining.replace('"', "")
        ir.oracle.append(f'o:"{residual}"')
        ir.warn(f'Unrecognized text searched as oracle text: "{ir.remaining}"')
    return render(ir), ir
