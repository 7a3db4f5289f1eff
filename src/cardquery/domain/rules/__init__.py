"""Rule store domain: learned pattern -> compiled query mappings."""

from cardquery.domain.rules.entities import TranslationRule
from cardquery.domain.rules.repositories import RuleRepository

__all__ = [
    "RuleRepository",
    "TranslationRule",
]
