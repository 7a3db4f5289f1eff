"""Extractor functions, each ``(text, ir) -> (text, ir)``."""

from cardquery.domain.translation.extractors.base import Extractor
from cardquery.domain.translation.extractors.core import (
    extract_colors,
    extract_exclusions,
    extract_types,
)
from cardquery.domain.translation.extractors.mappings import (
    extract_archetypes,
    extract_cards_like,
    extract_enablers,
    extract_keywords,
    extract_slang_terms,
    extract_tags,
    extract_token_creation,
)
from cardquery.domain.translation.extractors.numeric import (
    exclude_lands_for_mana_rocks,
    extract_budget,
    extract_cost,
    extract_numeric,
    extract_price,
    extract_year_bounds,
)
from cardquery.domain.translation.extractors.patterns import (
    extract_companions,
    extract_equipment,
    extract_mana_production,
    extract_oracle_patterns,
    extract_special_patterns,
    extract_targeting,
)

__all__ = [
    "Extractor",
    "exclude_lands_for_mana_rocks",
    "extract_archetypes",
    "extract_budget",
    "extract_cards_like",
    "extract_colors",
    "extract_companions",
    "extract_cost",
    "extract_enablers",
    "extract_equipment",
    "extract_exclusions",
    "extract_keywords",
    "extract_mana_production",
    "extract_numeric",
    "extract_oracle_patterns",
    "extract_price",
    "extract_slang_terms",
    "extract_special_patterns",
    "extract_tags",
    "extract_targeting",
    "extract_token_creation",
    "extract_types",
    "extract_year_bounds",
]
