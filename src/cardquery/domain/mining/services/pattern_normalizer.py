"""Order-independent normalization of natural-language queries."""

import re

_NON_WORD = re.compile(r"[^\w\s]")


def normalize_pattern(query: str) -> str:
    """Reduce a query to a bucket key for frequency counting.

    "red creature" and "Creature, red" both become "creature red".
    """
    text = _NON_WORD.sub("", " ".join(query.lower().split()))
    return " ".join(sorted(text.split()))
