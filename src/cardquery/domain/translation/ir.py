"""Intermediate representation accumulated by the extractor pipeline.

A ``SearchIR`` is created fresh for every translation, filled by the
extractors and handed to the renderer. It never outlives one request.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum


class ColorMode(str, Enum):
    """Whether a color clause constrains card color or color identity."""

    COLOR = "color"
    IDENTITY = "identity"


class ColorOperator(str, Enum):
    """How the colors of a constraint combine."""

    OR = "or"
    AND = "and"
    EXACT = "exact"
    WITHIN = "within"


class ComparisonOperator(str, Enum):
    """Comparison operators understood by the search syntax."""

    EQ = "="
    LT = "<"
    GT = ">"
    LE = "<="
    GE = ">="


@dataclass(frozen=True)
class NumericConstraint:
    """A single ``field<op>value`` comparison, e.g. ``mv<=3``."""

    field: str
    operator: ComparisonOperator
    value: float

    def render(self) -> str:
        value = self.value
        if float(value).is_integer():
            text = str(int(value))
        else:
            text = f"{value:g}"
        return f"{self.field}{self.operator.value}{text}"


@dataclass(frozen=True)
class ColorConstraint:
    """Colors requested by the user and how they combine."""

    values: tuple[str, ...]
    mode: ColorMode
    operator: ColorOperator


@dataclass
class SearchIR:
    """Mutable accumulator for one pipeline invocation.

    ``types``, ``subtypes`` and ``excluded_types`` behave as ordered sets.
    Inclusion and exclusion of the same type are mutually exclusive and
    exclusion always wins.
    """

    mono_color: str | None = None
    color_constraint: ColorConstraint | None = None
    color_count: NumericConstraint | None = None
    types: list[str] = field(default_factory=list)
    subtypes: list[str] = field(default_factory=list)
    excluded_types: list[str] = field(default_factory=list)
    numeric: list[NumericConstraint] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    art_tags: list[str] = field(default_factory=list)
    oracle: list[str] = field(default_factory=list)
    specials: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    remaining: str = ""

    def copy(self) -> SearchIR:
        """Return an independent copy (lists are not shared)."""
        return replace(
            self,
            types=list(self.types),
            subtypes=list(self.subtypes),
            excluded_types=list(self.excluded_types),
            numeric=list(self.numeric),
            tags=list(self.tags),
            art_tags=list(self.art_tags),
            oracle=list(self.oracle),
            specials=list(self.specials),
            warnings=list(self.warnings),
        )

    def include_type(self, type_name: str) -> None:
        type_name = type_name.lower()
        if type_name in self.excluded_types:
            self.warn(
                f"Type '{type_name}' is both required and excluded; "
                "keeping the exclusion.",
            )
            return
        if type_name not in self.types:
            self.types.append(type_name)

    def include_subtype(self, subtype: str) -> None:
        subtype = subtype.lower()
        if subtype not in self.subtypes:
            self.subtypes.append(subtype)

    def exclude_type(self, type_name: str) -> None:
        type_name = type_name.lower()
        if type_name in self.types:
            self.types.remove(type_name)
            self.warn(
                f"Type '{type_name}' is both required and excluded; "
                "keeping the exclusion.",
            )
        if type_name not in self.excluded_types:
            self.excluded_types.append(type_name)

    def add_numeric(
        self,
        field_name: str,
        operator: ComparisonOperator | str,
        value: float,
    ) -> None:
        self.numeric.append(
            NumericConstraint(field_name, ComparisonOperator(operator), value),
        )

    def has_special(self, fragment: str) -> bool:
        return fragment in self.specials

    def warn(self, message: str) -> None:
        if message not in self.warnings:
            self.warnings.append(message)

    @property
    def is_empty(self) -> bool:
        """True when no extractor produced any constraint."""
        return not (
            self.mono_color
            or self.color_constraint
            or self.color_count
            or self.types
            or self.subtypes
            or self.excluded_types
            or self.numeric
            or self.tags
            or self.art_tags
            or self.oracle
            or self.specials
        )
