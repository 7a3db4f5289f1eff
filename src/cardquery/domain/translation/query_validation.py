"""Outbound query sanitization.

Everything sent to the external search API passes through
``validate_query`` first. It repairs what it can (quotes, braces,
parentheses, legacy syntax) and strips what it cannot (unknown keys,
unknown oracle tags), recording each change as a human-readable issue.
"""

import re
from dataclasses import dataclass, field

from cardquery.domain.translation.vocabulary import KNOWN_OTAGS, VALID_SEARCH_KEYS

MAX_COMPILED_LENGTH = 400

_NEWLINES = re.compile(r"[\r\n]+")
_WHITESPACE = re.compile(r"\s+")
_UNSAFE = re.compile(r"""[^\w\s:="'()<>!=+\-/*\\{}.,^$|?\[\]]""")
_YEAR_AS_SET = re.compile(r"\be:(\d{4})\b", re.IGNORECASE)
_STAT_MATH = re.compile(r"\b(?:pow|power)\s*\+\s*(?:tou|toughness)\b", re.IGNORECASE)
_STAT_MATH_CLAUSE = re.compile(
    r"\b(?:pow|power)\s*\+\s*(?:tou|toughness)\s*[<>=]+?\s*\d+\b",
    re.IGNORECASE,
)
_ORPHAN_CLOSING_BRACE = re.compile(r"^[^{]*}")
_SEARCH_KEY = re.compile(r"\b([a-zA-Z]+)[:=<>]")
_OTAG = re.compile(r"\botag:([a-z0-9-]+)\b", re.IGNORECASE)
_APOSTROPHES = (re.compile(r"\w'\w"), re.compile(r"\w'(?=\s|$)"))

_ORPHAN_OPERATORS = (
    (re.compile(r"\bor(?:\s+or)+\b", re.IGNORECASE), "or"),
    (re.compile(r"\(\s*or\b"), "("),
    (re.compile(r"\bor\s*\)"), ")"),
    (re.compile(r"\(\s*\)"), ""),
)

_TAG_ALIASES = re.compile(r"\b(?:function|oracletag):", re.IGNORECASE)
_VERBOSE_PHRASES = (
    ('o:"enters the battlefield"', 'o:"enters"', "Simplified ETB syntax for broader results"),
    ('o:"leaves the battlefield"', 'o:"leaves"', "Simplified LTB syntax for broader results"),
    ('o:"when this creature dies"', 'o:"dies"', 'Simplified "dies" syntax for broader results'),
)
_GAME_FILTER = re.compile(r"game:paper\s*", re.IGNORECASE)


@dataclass
class QueryValidationResult:
    """Outcome of ``validate_query``. ``valid`` means nothing was changed."""

    sanitized: str
    issues: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.issues


def _tidy(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def _tokenize(query: str) -> list[str]:
    # Split on spaces outside double quotes
    tokens: list[str] = []
    current = ""
    in_quote = False
    for char in query:
        if char == '"':
            in_quote = not in_quote
        if char == " " and not in_quote:
            if current:
                tokens.append(current)
                current = ""
            continue
        current += char
    if current:
        tokens.append(current)
    return tokens


def normalize_or_groups(query: str) -> str:
    """Wrap top-level ``a OR b`` runs in parentheses.

    Only uppercase ``OR`` at parenthesis depth zero starts a group; the
    group extends through each following ``OR <operand>`` pair.
    """
    tokens = _tokenize(query)
    output: list[str] = []
    group: list[str] = []
    depth = 0

    for index, token in enumerate(tokens):
        depth_before = depth
        depth += token.count("(") - token.count(")")

        if depth_before == 0 and token == "OR":
            if not group and output:
                group.append(output.pop())
            group.append(token)
            continue

        if group and depth_before == 0:
            group.append(token)
            next_token = tokens[index + 1] if index + 1 < len(tokens) else None
            if next_token != "OR":
                output.append(f"({' '.join(group)})")
                group = []
            continue

        output.append(token)

    if group:
        output.append(f"({' '.join(group)})")
    return " ".join(output)


def _parentheses_balanced(query: str) -> bool:
    depth = 0
    for char in query:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        if depth < 0:
            return False
    return depth == 0


def validate_query(query: str, max_length: int = MAX_COMPILED_LENGTH) -> QueryValidationResult:
    """Sanitize a compiled query before it is sent upstream.

    Parameters
    ----------
    query
        Query in the external search syntax
    max_length
        Hard length cap; longer queries are truncated

    Returns
    -------
    QueryValidationResult with the sanitized query and one issue string
    per repair that was applied.
    """
    issues: list[str] = []
    sanitized = _tidy(_NEWLINES.sub(" ", query))

    grouped = normalize_or_groups(sanitized)
    if grouped != sanitized:
        sanitized = grouped
        issues.append("Normalized OR groups with parentheses")

    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length]
        issues.append(f"Query truncated to {max_length} characters")

    sanitized = _UNSAFE.sub("", sanitized)

    if _YEAR_AS_SET.search(sanitized):
        sanitized = _YEAR_AS_SET.sub(r"year=\1", sanitized)
        issues.append("Replaced invalid year set syntax with year=YYYY")

    if _STAT_MATH.search(sanitized):
        sanitized = _STAT_MATH_CLAUSE.sub("", sanitized).strip()
        issues.append("Removed unsupported power+toughness math")

    opening, closing = sanitized.count("{"), sanitized.count("}")
    if opening > closing:
        sanitized += "}" * (opening - closing)
        issues.append("Added missing closing brace(s)")
    elif closing > opening:
        sanitized = _ORPHAN_CLOSING_BRACE.sub("", sanitized, count=1)
        issues.append("Removed orphan closing brace(s)")

    unknown_keys = list(
        dict.fromkeys(
            key
            for key in (m.group(1).lower() for m in _SEARCH_KEY.finditer(sanitized))
            if key not in VALID_SEARCH_KEYS
        ),
    )
    if unknown_keys:
        issues.append(f"Unknown search key(s): {', '.join(unknown_keys)}")
        for key in unknown_keys:
            pattern = re.compile(rf"\b{re.escape(key)}[:=<>]\S*", re.IGNORECASE)
            sanitized = pattern.sub("", sanitized).strip()

    unknown_tags = list(
        dict.fromkeys(
            tag
            for tag in (m.group(1).lower() for m in _OTAG.finditer(sanitized))
            if tag not in KNOWN_OTAGS
        ),
    )
    if unknown_tags:
        issues.append(f"Unknown oracle tag(s): {', '.join(unknown_tags)}")
        for tag in unknown_tags:
            pattern = re.compile(rf"\botag:{re.escape(tag)}\b", re.IGNORECASE)
            sanitized = pattern.sub("", sanitized).strip()
        for pattern, replacement in _ORPHAN_OPERATORS:
            sanitized = pattern.sub(replacement, sanitized)
        sanitized = _tidy(sanitized)

    if not _parentheses_balanced(sanitized):
        sanitized = sanitized.replace("(", "").replace(")", "")
        issues.append("Removed unbalanced parentheses")

    if sanitized.count('"') % 2:
        sanitized += '"'
        issues.append("Added missing closing quote")

    without_apostrophes = sanitized
    for pattern in _APOSTROPHES:
        without_apostrophes = pattern.sub("", without_apostrophes)
    if without_apostrophes.count("'") % 2:
        sanitized += "'"
        issues.append("Added missing closing quote")

    return QueryValidationResult(_tidy(sanitized), issues)


def apply_auto_corrections(query: str) -> tuple[str, list[str]]:
    """Fix known mistakes in generated queries.

    Rewrites tag aliases to ``otag:``, drops ``game:paper`` and shortens
    verbose oracle phrases that needlessly narrow results.

    Returns
    -------
    Tuple of (corrected query, list of corrections applied)
    """
    corrections: list[str] = []

    corrected = _TAG_ALIASES.sub("otag:", query)
    if corrected != query:
        corrections.append("Normalized tag syntax to otag: for consistency")

    without_game = _GAME_FILTER.sub("", corrected).strip()
    if without_game != corrected:
        corrected = without_game
        corrections.append('Removed unnecessary "game:paper" filter')

    for verbose, short, message in _VERBOSE_PHRASES:
        if verbose in corrected:
            corrected = corrected.replace(verbose, short)
            corrections.append(message)

    corrected = _tidy(re.sub(r"\(\s*\)", "", _tidy(corrected)))
    return corrected, corrections
