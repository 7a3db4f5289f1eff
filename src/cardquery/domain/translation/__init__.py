"""Natural-language to search-syntax compiler."""

from cardquery.domain.translation.fallback import compile_fallback
from cardquery.domain.translation.filters import SearchFilters, apply_filters
from cardquery.domain.translation.ir import (
    ColorConstraint,
    ColorMode,
    ColorOperator,
    ComparisonOperator,
    NumericConstraint,
    SearchIR,
)
from cardquery.domain.translation.normalizer import normalize
from cardquery.domain.translation.pipeline import (
    EXTRACTOR_ORDER,
    build_ir,
    compile_query,
)
from cardquery.domain.translation.query_validation import (
    QueryValidationResult,
    apply_auto_corrections,
    normalize_or_groups,
    validate_query,
)
from cardquery.domain.translation.renderer import render

__all__ = [
    # Compiler
    "EXTRACTOR_ORDER",
    "build_ir",
    "compile_query",
    "normalize",
    "render",
    # Intermediate representation
    "ColorConstraint",
    "ColorMode",
    "ColorOperator",
    "ComparisonOperator",
    "NumericConstraint",
    "SearchIR",
    # Fallback & filters
    "SearchFilters",
    "apply_filters",
    "compile_fallback",
    # Outbound validation
    "QueryValidationResult",
    "apply_auto_corrections",
    "normalize_or_groups",
    "validate_query",
]
