"""Query normalization.

Lowercases, unifies quote characters, expands card nicknames, rewrites
field synonyms to their short codes, converts spelled-out numbers and
collapses whitespace. ``normalize(normalize(s)) == normalize(s)``.
"""

import re

from cardquery.domain.translation.vocabulary import (
    FIELD_SYNONYMS,
    NICKNAME_MAP,
    WORD_NUMBER_MAP,
)

_WHITESPACE = re.compile(r"\s+")
_DOUBLE_QUOTES = re.compile(r"[“”„‟″]")
_SINGLE_QUOTES = re.compile(r"[‘’‚‛′]")


def _build_lookup(mapping: dict[str, str]) -> tuple[re.Pattern[str], dict[str, str]]:
    # Expansions map to themselves so a second pass leaves them untouched
    lookup = {value: value for value in mapping.values()}
    lookup.update(mapping)
    alternatives = sorted(lookup, key=len, reverse=True)
    pattern = re.compile(
        r"\b(?:" + "|".join(re.escape(key) for key in alternatives) + r")\b",
    )
    return pattern, lookup


_NICKNAMES, _NICKNAME_LOOKUP = _build_lookup(NICKNAME_MAP)
_FIELDS, _FIELD_LOOKUP = _build_lookup(FIELD_SYNONYMS)
_NUMBERS = re.compile(r"\b(?:" + "|".join(WORD_NUMBER_MAP) + r")\b")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def normalize(query: str) -> str:
    """Normalize a raw user query.

    Parameters
    ----------
    query
        Free-form natural-language search text

    Returns
    -------
    The normalized text. Each rewrite is a single left-to-right pass so
    replacements are never rewritten again.
    """
    text = query.lower()
    text = _DOUBLE_QUOTES.sub('"', text)
    text = _SINGLE_QUOTES.sub("'", text)
    text = collapse_whitespace(text)

    text = _NICKNAMES.sub(lambda m: _NICKNAME_LOOKUP[m.group(0)], text)
    text = _FIELDS.sub(lambda m: _FIELD_LOOKUP[m.group(0)], text)
    text = _NUMBERS.sub(lambda m: str(WORD_NUMBER_MAP[m.group(0)]), text)

    return collapse_whitespace(text)
