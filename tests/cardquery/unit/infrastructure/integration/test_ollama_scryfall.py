"""Tests for the Ollama rule generator and the Scryfall live validator.

Both adapters accept an httpx transport, so the tests answer requests
with ``httpx.MockTransport`` instead of reaching the network.
"""

import json

import httpx
import pytest

from cardquery.domain.feedback import FeedbackItem, LiveValidationUnavailableError
from cardquery.domain.shared.exceptions import ErrorCode, UpstreamError
from cardquery.infrastructure.integration.ai import OllamaRuleGenerator
from cardquery.infrastructure.integration.scryfall import ScryfallLiveValidator


def _feedback() -> FeedbackItem:
    return FeedbackItem(
        original_query="mana rocks",
        translated_query='o:"mana rocks"',
        issue_description="should find artifacts that tap for mana",
    )


def _ollama_answer(text: str):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"response": text})

    return httpx.MockTransport(handler)


class TestOllamaRuleGenerator:
    """Tests for prompting and answer parsing."""

    @pytest.mark.asyncio
    async def test_posts_prompt_to_generate_endpoint(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"response": "{}"})

        generator = OllamaRuleGenerator(
            model="test-model",
            base_url="http://ollama.test/",
            transport=httpx.MockTransport(handler),
        )
        await generator.generate(_feedback())

        assert seen["path"] == "/api/generate"
        assert seen["body"]["model"] == "test-model"
        assert seen["body"]["stream"] is False
        assert '"mana rocks"' in seen["body"]["prompt"]
        assert "attempt #" not in seen["body"]["prompt"]

    @pytest.mark.asyncio
    async def test_retry_notice(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["prompt"] = json.loads(request.content)["prompt"]
            return httpx.Response(200, json={"response": ""})

        generator = OllamaRuleGenerator(transport=httpx.MockTransport(handler))

        assert await generator.generate(_feedback(), attempt_number=3) is None
        assert "attempt #3" in seen["prompt"]

    @pytest.mark.asyncio
    async def test_parses_fenced_json(self):
        answer = (
            "Here is the rule:\n```json\n"
            '{"pattern": "Mana Rocks", "compiled_query": "otag:mana-rock", '
            '"description": "artifact mana", "confidence": 0.85}\n```'
        )
        generator = OllamaRuleGenerator(transport=_ollama_answer(answer))

        candidate = await generator.generate(_feedback())

        assert candidate.pattern == "mana rocks"
        assert candidate.compiled_query == "otag:mana-rock"
        assert candidate.description == "artifact mana"
        assert candidate.confidence == 0.85

    @pytest.mark.asyncio
    async def test_corrects_and_clamps_raw_json(self):
        answer = (
            '{"pattern": "mana rocks", "compiled_query": "function:mana-rock game:paper", '
            '"confidence": 1.7}'
        )
        generator = OllamaRuleGenerator(transport=_ollama_answer(answer))

        candidate = await generator.generate(_feedback())

        assert candidate.compiled_query == "otag:mana-rock"
        assert candidate.confidence == 1.0

    @pytest.mark.asyncio
    async def test_non_numeric_confidence_is_zero(self):
        answer = '{"pattern": "mana rocks", "compiled_query": "otag:mana-rock", "confidence": "high"}'
        generator = OllamaRuleGenerator(transport=_ollama_answer(answer))

        candidate = await generator.generate(_feedback())

        assert candidate.confidence == 0.0

    @pytest.mark.asyncio
    async def test_unparseable_answer_is_none(self):
        generator = OllamaRuleGenerator(transport=_ollama_answer("I cannot help with that."))
        assert await generator.generate(_feedback()) is None

    @pytest.mark.parametrize(
        ("status", "code"),
        [
            (429, ErrorCode.UPSTREAM_QUOTA_EXHAUSTED),
            (402, ErrorCode.UPSTREAM_QUOTA_EXHAUSTED),
            (500, ErrorCode.UPSTREAM_UNAVAILABLE),
        ],
    )
    @pytest.mark.asyncio
    async def test_http_errors(self, status, code):
        transport = httpx.MockTransport(lambda request: httpx.Response(status))
        generator = OllamaRuleGenerator(transport=transport)

        with pytest.raises(UpstreamError) as exc_info:
            await generator.generate(_feedback())

        assert exc_info.value.code == code

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        generator = OllamaRuleGenerator(transport=httpx.MockTransport(handler))

        with pytest.raises(UpstreamError) as exc_info:
            await generator.generate(_feedback())

        assert exc_info.value.code == ErrorCode.UPSTREAM_TIMEOUT

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>"))
        generator = OllamaRuleGenerator(transport=transport)

        with pytest.raises(UpstreamError, match="invalid response"):
            await generator.generate(_feedback())


class TestScryfallLiveValidator:
    """Tests for result counting against the search API."""

    @pytest.mark.asyncio
    async def test_counts_results(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["q"] = request.url.params["q"]
            seen["agent"] = request.headers["user-agent"]
            return httpx.Response(200, json={"object": "list", "total_cards": 42})

        validator = ScryfallLiveValidator(
            base_url="https://scryfall.test",
            transport=httpx.MockTransport(handler),
        )

        assert await validator.count_results("otag:mana-rock") == 42
        assert seen["path"] == "/cards/search"
        assert seen["q"] == "otag:mana-rock"
        assert seen["agent"].startswith("cardquery/")

    @pytest.mark.asyncio
    async def test_not_found_is_zero_results(self):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(404, json={"object": "error"}),
        )
        validator = ScryfallLiveValidator(transport=transport)

        assert await validator.count_results("t:nonexistent") == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 422])
    async def test_rejected_query_is_zero_results(self, status):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(
                status,
                json={"object": "error", "code": "bad_request"},
            ),
        )
        validator = ScryfallLiveValidator(transport=transport)

        assert await validator.count_results('o:"bad thing') == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [429, 500, 503])
    async def test_throttled_or_failing_api_is_unavailable(self, status):
        transport = httpx.MockTransport(lambda request: httpx.Response(status))
        validator = ScryfallLiveValidator(transport=transport)

        with pytest.raises(LiveValidationUnavailableError):
            await validator.count_results("t:elf")

    @pytest.mark.asyncio
    async def test_server_error_is_unavailable(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(503))
        validator = ScryfallLiveValidator(transport=transport)

        with pytest.raises(LiveValidationUnavailableError) as exc_info:
            await validator.count_results("t:elf")

        assert exc_info.value.code == ErrorCode.UPSTREAM_UNAVAILABLE

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        validator = ScryfallLiveValidator(transport=httpx.MockTransport(handler))

        with pytest.raises(LiveValidationUnavailableError) as exc_info:
            await validator.count_results("t:elf")

        assert exc_info.value.code == ErrorCode.UPSTREAM_TIMEOUT

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        validator = ScryfallLiveValidator(transport=httpx.MockTransport(handler))

        with pytest.raises(LiveValidationUnavailableError):
            await validator.count_results("t:elf")
