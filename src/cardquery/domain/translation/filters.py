"""Structured filters a caller can attach to a translation request."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SearchFilters:
    """Filters appended verbatim to the compiled query.

    Attributes
    ----------
    format
        Format legality, e.g. ``commander`` -> ``f:commander``
    color_identity
        Color codes, e.g. ``("R", "G")`` -> ``ci=rg``
    """

    format: str | None = None
    color_identity: tuple[str, ...] = ()

    def as_dict(self) -> dict[str, object]:
        """Canonical form used for cache keys (empty fields omitted)."""
        data: dict[str, object] = {}
        if self.format:
            data["format"] = self.format
        if self.color_identity:
            data["colorIdentity"] = list(self.color_identity)
        return data


def apply_filters(query: str, filters: SearchFilters | None) -> str:
    """Append ``f:`` and ``ci=`` fragments for the given filters."""
    query = query.strip()
    if filters is None:
        return query
    if filters.format:
        query += f" f:{filters.format}"
    if filters.color_identity:
        query += f" ci={''.join(filters.color_identity).lower()}"
    return query.strip()
