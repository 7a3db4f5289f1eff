"""Rule entities."""

from cardquery.domain.rules.entities.translation_rule import TranslationRule

__all__ = ["TranslationRule"]
