"""Shared helpers for extractor functions.

Every extractor has the signature ``(text, ir) -> (text, ir)``: it
removes what it understood from ``text`` and records it on ``ir``. An
extractor that finds nothing returns both unchanged and never raises.
"""

import re
from typing import Callable

from cardquery.domain.translation.ir import SearchIR
from cardquery.domain.translation.normalizer import collapse_whitespace

Extractor = Callable[[str, SearchIR], tuple[str, SearchIR]]


def cut(text: str, match: re.Match[str]) -> str:
    """Remove one regex match from the text it was found in."""
    return collapse_whitespace(text[: match.start()] + " " + text[match.end() :])


def cut_all(text: str, pattern: re.Pattern[str]) -> str:
    """Remove every occurrence of ``pattern``."""
    return collapse_whitespace(pattern.sub(" ", text))


def word(pattern: str) -> re.Pattern[str]:
    """Compile a case-insensitive pattern."""
    return re.compile(pattern, re.IGNORECASE)
