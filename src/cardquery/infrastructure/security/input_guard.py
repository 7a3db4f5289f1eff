"""Inbound request screening.

Rejects junk and hostile input before any translation work runs, and
scrubs internal details out of error messages bound for clients.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Optional

from cardquery.domain.shared.exceptions import ErrorCode, ValidationError

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 3
MAX_PARAMETERS = 15
MAX_EMPTY_OPERATORS = 2
ALNUM_RATIO = 0.5
ALNUM_CHECK_MIN_LENGTH = 10
REPEAT_THRESHOLD = 6
MAX_JSON_DEPTH = 10
MAX_ERROR_LENGTH = 500

_NULL_BYTES = re.compile(r"\x00")
_CONTROL_CHARS = re.compile(r"[\x01-\x08\x0B\x0C\x0E-\x1F\x7F]")
_ZERO_WIDTH = re.compile(r"[\u200B-\u200D\uFEFF]")
_WHITESPACE = re.compile(r"\s+")

_REPEATED_EMPTY_OPERATORS = re.compile(r"(?:[toc]:\s*){3,}", re.IGNORECASE)
_OPERATOR_SPAM = re.compile(r"(?:[toc]:){3,}", re.IGNORECASE)
_PARAMETER = re.compile(r"\b[a-zA-Z]+[:=<>]")
_TRAILING_EMPTY_OPERATOR = re.compile(r"\s+[toc]:\s*(?=[toc]:|$)", re.IGNORECASE)
_INLINE_EMPTY_OPERATOR = re.compile(r"\s+[toc]:\s+", re.IGNORECASE)
_EMPTY_OPERATOR = re.compile(r"\b[toc]:\s*(?=\s|$)", re.IGNORECASE)
_REPEATED_CHAR = re.compile(r"(.)\1{%d,}" % (REPEAT_THRESHOLD - 1))

_XSS_PATTERNS = (
    re.compile(r"<script[^>]*>", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"\bon\w+\s*=", re.IGNORECASE),
    re.compile(r"<iframe", re.IGNORECASE),
    re.compile(r"<object", re.IGNORECASE),
    re.compile(r"<embed", re.IGNORECASE),
    re.compile(r"<svg[^>]*onload", re.IGNORECASE),
)
_SQL_PATTERNS = (
    re.compile(r"""['";]\s*(?:OR|AND)\s+['"]?\d+['"]?\s*=\s*['"]?\d+""", re.IGNORECASE),
    re.compile(r"""['";]\s*--"""),
    re.compile(r"UNION\s+(?:ALL\s+)?SELECT", re.IGNORECASE),
    re.compile(r"DROP\s+TABLE", re.IGNORECASE),
    re.compile(r"TRUNCATE\s+TABLE", re.IGNORECASE),
    re.compile(r"DELETE\s+FROM", re.IGNORECASE),
    re.compile(r"INSERT\s+INTO", re.IGNORECASE),
    re.compile(r"UPDATE\s+\w+\s+SET", re.IGNORECASE),
)
_TEMPLATE_PATTERNS = (
    re.compile(r"\{\{.*?\}\}", re.DOTALL),
    re.compile(r"\$\{.*?\}", re.DOTALL),
    re.compile(r"<%.*?%>", re.DOTALL),
)
_PROTOTYPE_POLLUTION = ("__proto__", "constructor.", "constructor[", "prototype.", "prototype[")

_ERROR_SCRUBBERS = (
    (re.compile(r"(?:postgres(?:ql)?|mysql|mongodb|redis|sqlite)(?:\+\w+)?://\S+", re.IGNORECASE), "[CONNECTION]"),  # NOQA: E501
    (re.compile(r"Bearer\s+\S+", re.IGNORECASE), "[TOKEN]"),
    (re.compile(r"(?:sk_live_|sk_test_|api_key[=:]?\s*)\S+", re.IGNORECASE), "[REDACTED]"),  # NOQA: E501
    (re.compile(r"[A-Z]:\\[^\s:]+", re.IGNORECASE), "[PATH]"),
    (re.compile(r"(?<![\w\]])/[^\s:]+"), "[PATH]"),
    (re.compile(r":\d+:\d+"), ""),
    (re.compile(r"\b[A-Z][A-Z_]+=\S+"), "[ENV]"),
)


@dataclass(frozen=True)
class InputCheck:
    """Outcome of ``sanitize_input_query``."""

    valid: bool
    sanitized: str = ""
    reason: Optional[str] = None
    code: ErrorCode = ErrorCode.INVALID_QUERY


def strip_invisible(text: str) -> str:
    """Remove null bytes, control and zero-width characters; collapse whitespace."""
    text = _NULL_BYTES.sub("", text)
    text = _CONTROL_CHARS.sub("", text)
    text = _ZERO_WIDTH.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def count_parameters(query: str) -> int:
    return len(_PARAMETER.findall(query))


def _dedupe_tokens(query: str) -> str:
    seen: set[str] = set()
    kept = []
    for part in query.split():
        key = part.lower()
        if key not in seen:
            seen.add(key)
            kept.append(part)
    return " ".join(kept)


def _reject(reason: str, code: ErrorCode = ErrorCode.INVALID_QUERY) -> InputCheck:
    return InputCheck(valid=False, reason=reason, code=code)


def sanitize_input_query(  # noqa: PLR0911
    query: str,
    max_parameters: int = MAX_PARAMETERS,
) -> InputCheck:
    """
    Screen a raw search request for spam and malformed operator syntax.

    Parameters
    ----------
    query
        Raw user input
    max_parameters
        Maximum number of ``key:`` style parameters allowed

    Returns
    -------
    InputCheck with the cleaned query, or the rejection reason
    """
    trimmed = strip_invisible(query)

    if len(trimmed) < MIN_QUERY_LENGTH:
        return _reject(f"Query too short (minimum {MIN_QUERY_LENGTH} characters)")

    if _REPEATED_EMPTY_OPERATORS.search(trimmed):
        return _reject("Invalid query format - repeated empty operators detected")

    if _OPERATOR_SPAM.search(trimmed):
        return _reject("Invalid query format - malformed operator syntax")

    if count_parameters(trimmed) > max_parameters:
        return _reject(
            f"Too many search parameters (maximum {max_parameters})",
            ErrorCode.TOO_MANY_PARAMETERS,
        )

    sanitized = _TRAILING_EMPTY_OPERATOR.sub(" ", trimmed).strip()
    sanitized = _INLINE_EMPTY_OPERATOR.sub(" ", sanitized).strip()
    sanitized = _dedupe_tokens(sanitized)

    if len(_EMPTY_OPERATOR.findall(sanitized)) > MAX_EMPTY_OPERATORS:
        return _reject("Too many empty search operators")

    if len(sanitized) > ALNUM_CHECK_MIN_LENGTH:
        word_chars = sum(1 for ch in sanitized if ch.isalnum())
        if word_chars < len(sanitized) * ALNUM_RATIO:
            return _reject("Query contains too many special characters")

    if _REPEATED_CHAR.search(sanitized):
        return _reject("Invalid query format - repetitive character spam detected")

    return InputCheck(valid=True, sanitized=sanitized)


def contains_xss(text: str) -> bool:
    return any(p.search(text) for p in _XSS_PATTERNS)


def contains_sql_injection(text: str) -> bool:
    return any(p.search(text) for p in _SQL_PATTERNS)


def contains_template_injection(text: str) -> bool:
    return any(p.search(text) for p in _TEMPLATE_PATTERNS)


def contains_prototype_pollution(text: str) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in _PROTOTYPE_POLLUTION)


def detect_injection(text: str) -> Optional[str]:
    """Return the kind of injection found in ``text``, or None."""
    if contains_xss(text):
        return "xss"
    if contains_sql_injection(text):
        return "sql"
    if contains_template_injection(text):
        return "template"
    if contains_prototype_pollution(text):
        return "prototype"
    return None


def json_depth(value: Any) -> int:
    """Nesting depth of a decoded JSON value (scalars are depth 0)."""
    if isinstance(value, dict):
        return 1 + max((json_depth(v) for v in value.values()), default=0)
    if isinstance(value, list):
        return 1 + max((json_depth(v) for v in value), default=0)
    return 0


def guard_query(
    query: str,
    max_length: int = 500,
    max_parameters: int = MAX_PARAMETERS,
) -> str:
    """
    Run every inbound check on a search query.

    Returns
    -------
    The cleaned query

    Raises
    ------
    ValidationError
        With a short human-readable reason when the query is rejected
    """
    if len(query) > max_length:
        raise ValidationError(
            f"Query exceeds maximum length of {max_length} characters",
            code=ErrorCode.PAYLOAD_TOO_LARGE,
        )

    kind = detect_injection(query)
    if kind is not None:
        logger.warning("Rejected query containing %s injection pattern", kind)
        raise ValidationError(
            "Query contains disallowed content",
            code=ErrorCode.INJECTION_DETECTED,
            details={"kind": kind},
        )

    check = sanitize_input_query(query, max_parameters=max_parameters)
    if not check.valid:
        raise ValidationError(check.reason or "Invalid query", code=check.code)
    return check.sanitized


def sanitize_error_message(message: str) -> str:
    """Scrub connection strings, tokens, secrets and paths from a message."""
    for pattern, replacement in _ERROR_SCRUBBERS:
        message = pattern.sub(replacement, message)
    if len(message) > MAX_ERROR_LENGTH:
        message = message[: MAX_ERROR_LENGTH - 3] + "..."
    return message
