"""Render a completed ``SearchIR`` into a single search-syntax string."""

import logging
import re

from cardquery.domain.translation.ir import ColorMode, ColorOperator, SearchIR

logger = logging.getLogger(__name__)

_TYPE_REFERENCE = re.compile(r"\bt:(\w+)", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")


def render_color_clause(ir: SearchIR) -> str | None:
    """Mono color takes priority over an explicit constraint."""
    if ir.mono_color:
        return f"c={ir.mono_color} id={ir.mono_color}"

    constraint = ir.color_constraint
    if constraint is None or not constraint.values:
        return None

    prefix = "id" if constraint.mode is ColorMode.IDENTITY else "c"
    colors = "".join(constraint.values)

    if constraint.operator is ColorOperator.OR and len(constraint.values) > 1:
        return "(" + " or ".join(f"{prefix}:{v}" for v in constraint.values) + ")"
    if constraint.operator is ColorOperator.WITHIN:
        return f"id<={colors}"
    if constraint.operator is ColorOperator.AND and constraint.mode is ColorMode.COLOR:
        return f"c:{colors}"
    return f"{prefix}={colors}"


def _types_in_specials(ir: SearchIR) -> set[str]:
    seen: set[str] = set()
    for fragment in ir.specials:
        seen.update(m.group(1).lower() for m in _TYPE_REFERENCE.finditer(fragment))
    return seen


def render(ir: SearchIR) -> str:
    """Render the IR deterministically.

    Order: color clause, bare types, subtypes, type exclusions, numeric
    comparisons, color count, tags, art tags, specials, oracle text.
    Types already referenced inside a ``specials`` fragment are not
    emitted again, and an excluded type is never emitted as required.
    Tokens are deduplicated case-insensitively keeping the first.
    """
    parts: list[str] = []

    color_clause = render_color_clause(ir)
    if color_clause:
        parts.append(color_clause)

    seen = _types_in_specials(ir)
    excluded = set(ir.excluded_types)

    for type_name in ir.types:
        if type_name in seen:
            continue
        if type_name in excluded:
            logger.warning("Dropping t:%s, the type is also excluded", type_name)
            continue
        parts.append(f"t:{type_name}")

    parts.extend(f"t:{subtype}" for subtype in ir.subtypes)

    parts.extend(
        f"-t:{type_name}" for type_name in ir.excluded_types if type_name not in seen
    )

    parts.extend(constraint.render() for constraint in ir.numeric)

    if ir.color_count is not None:
        parts.append(ir.color_count.render())

    parts.extend(ir.tags)
    parts.extend(ir.art_tags)
    parts.extend(ir.specials)
    parts.extend(ir.oracle)

    unique: dict[str, str] = {}
    for part in parts:
        part = part.strip()
        if part and part.lower() not in unique:
            unique[part.lower()] = part

    return _WHITESPACE.sub(" ", " ".join(unique.values())).strip()
