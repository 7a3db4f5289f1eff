"""Tests for inbound query screening and error scrubbing."""

import pytest

from cardquery.domain.shared.exceptions import ErrorCode, ValidationError
from cardquery.infrastructure.security import (
    count_parameters,
    detect_injection,
    guard_query,
    json_depth,
    sanitize_error_message,
    sanitize_input_query,
    strip_invisible,
)


class TestDetectInjection:
    """Tests for hostile payload detection."""

    @pytest.mark.parametrize(
        ("text", "kind"),
        [
            ("<script>alert(1)</script>", "xss"),
            ("<img src=x onerror=alert(1)>", "xss"),
            ("javascript:alert(1)", "xss"),
            ("' OR 1=1", "sql"),
            ("elves'; DROP TABLE rules", "sql"),
            ("UNION SELECT password", "sql"),
            ("{{7*7}}", "template"),
            ("${env.SECRET}", "template"),
            ("__proto__.admin", "prototype"),
            ("constructor.prototype", "prototype"),
        ],
    )
    def test_detects(self, text, kind):
        assert detect_injection(text) == kind

    @pytest.mark.parametrize(
        "text",
        ["green elves with flying", "m:{R}{R} creatures", "onslaught cards", "c>=2 t:dragon"],
    )
    def test_ordinary_queries_pass(self, text):
        assert detect_injection(text) is None


class TestSanitizeInputQuery:
    """Tests for spam and malformed-syntax screening."""

    def test_clean_query(self):
        check = sanitize_input_query("  green   elves ")
        assert check.valid
        assert check.sanitized == "green elves"

    def test_too_short(self):
        check = sanitize_input_query(" ab ")
        assert not check.valid
        assert "too short" in check.reason

    def test_repeated_empty_operators(self):
        check = sanitize_input_query("t:t:t: elves")
        assert not check.valid
        assert "repeated empty operators" in check.reason

    def test_too_many_parameters(self):
        query = " ".join(f"t:x{i}" for i in range(16))
        check = sanitize_input_query(query)

        assert not check.valid
        assert check.code == ErrorCode.TOO_MANY_PARAMETERS

    def test_parameter_limit_is_configurable(self):
        assert not sanitize_input_query("t:elf c:g", max_parameters=1).valid

    def test_duplicate_tokens_are_dropped(self):
        check = sanitize_input_query("red red Red dragon")
        assert check.valid
        assert check.sanitized == "red dragon"

    def test_trailing_empty_operator_is_dropped(self):
        check = sanitize_input_query("elves t:")
        assert check.valid
        assert check.sanitized == "elves"

    def test_too_many_special_characters(self):
        check = sanitize_input_query("elf #$%^&*()!@#")
        assert not check.valid
        assert "special characters" in check.reason

    def test_repeated_character_spam(self):
        check = sanitize_input_query("elfffffff lords")
        assert not check.valid
        assert "repetitive" in check.reason


class TestGuardQuery:
    """Tests for the combined inbound check."""

    def test_returns_cleaned_query(self):
        assert guard_query("goblin\u200b  lords") == "goblin lords"

    def test_too_long(self):
        with pytest.raises(ValidationError) as exc_info:
            guard_query("x" * 501)
        assert exc_info.value.code == ErrorCode.PAYLOAD_TOO_LARGE

    def test_injection(self):
        with pytest.raises(ValidationError) as exc_info:
            guard_query("<script>alert(1)</script>")
        assert exc_info.value.code == ErrorCode.INJECTION_DETECTED
        assert exc_info.value.details == {"kind": "xss"}

    def test_spam_is_invalid_query(self):
        with pytest.raises(ValidationError) as exc_info:
            guard_query("ab")
        assert exc_info.value.code == ErrorCode.INVALID_QUERY


class TestHelpers:
    """Tests for the small screening helpers."""

    def test_strip_invisible(self):
        assert strip_invisible("a\x00b\u200bc\x07   d\n") == "abc d"

    def test_count_parameters(self):
        assert count_parameters("t:elf c=r mv<3 flying") == 3

    @pytest.mark.parametrize(
        ("value", "depth"),
        [(5, 0), ("x", 0), ({}, 1), ({"a": [1]}, 2), ([[[]]], 3)],
    )
    def test_json_depth(self, value, depth):
        assert json_depth(value) == depth


class TestSanitizeErrorMessage:
    """Tests for scrubbing internals out of client-facing errors."""

    def test_connection_string(self):
        message = sanitize_error_message(
            "could not connect to postgresql://user:pw@db:5432/cards",
        )
        assert "[CONNECTION]" in message
        assert "pw@db" not in message

    def test_bearer_token(self):
        message = sanitize_error_message("rejected Bearer abc.def.ghi")
        assert message == "rejected [TOKEN]"

    def test_path(self):
        message = sanitize_error_message("failed in /srv/app/main.py")
        assert message == "failed in [PATH]"

    def test_environment_assignment(self):
        message = sanitize_error_message("missing JWT_SECRET_KEY=abc")
        assert message == "missing [ENV]"

    def test_length_cap(self):
        message = sanitize_error_message("x" * 600)
        assert len(message) == 500
        assert message.endswith("...")
