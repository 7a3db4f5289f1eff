"""Data Transfer Objects for the presentation layer."""

from cardquery.application.dtos.translation import (
    Explanation,
    TranslationRequest,
    TranslationResult,
)

__all__ = [
    "Explanation",
    "TranslationRequest",
    "TranslationResult",
]
