"""Ollama-based generator of translation-rule candidates.

Sends one user correction to a local Ollama instance and parses the
model's JSON answer into a ``RuleCandidate``. Small instruction-tuned
models work well here; the prompt is deliberately rigid about output
shape.
"""

import json
import logging
import re
from typing import Optional

import httpx

from cardquery.domain.feedback import FeedbackItem, RuleCandidate, RuleGenerator
from cardquery.domain.shared.exceptions import ErrorCode, UpstreamError
from cardquery.domain.translation import apply_auto_corrections
from cardquery.domain.translation.vocabulary import KNOWN_OTAGS

logger = logging.getLogger(__name__)

HTTP_TOO_MANY_REQUESTS = 429
HTTP_PAYMENT_REQUIRED = 402


class OllamaRuleGenerator(RuleGenerator):
    """
    Rule generator backed by Ollama's ``/api/generate`` endpoint.

    Transport failures are raised as ``UpstreamError`` with a code that
    distinguishes timeouts and quota exhaustion from plain unavailability.
    An answer that cannot be parsed yields ``None``.
    """

    DEFAULT_PROMPT_TEMPLATE = """You are a Scryfall query expert. Analyze this search feedback and generate a translation rule.
{retry_notice}
FEEDBACK:
- User searched for: "{original_query}"
- It was translated to: "{translated_query}"
- User's issue: "{issue_description}"

AVAILABLE SCRYFALL ORACLE TAGS (otag:):
These are MORE RELIABLE than oracle text searches. ALWAYS prefer them when applicable:
{otags}

Examples of GOOD translations:
- "ramp spells" -> "otag:ramp (t:instant or t:sorcery)"
- "removal in black" -> "otag:removal c:b"
- "board wipes" -> "otag:board-wipe"
- "mana rocks" -> "otag:mana-rock"

Only fall back to oracle text (o:"...") if no otag exists.

Respond with ONLY this JSON format, no additional text:
{{"pattern": "lowercase natural language pattern", "compiled_query": "valid Scryfall syntax", "description": "brief explanation", "confidence": 0.8}}

- confidence: 0.5-1.0 based on how certain you are; 0 if no useful rule exists
"""  # NOQA: E501

    RETRY_NOTICE = (
        "\nIMPORTANT: This is attempt #{attempt} for a similar query. "
        "Previous fixes DID NOT WORK. You must try a DIFFERENT approach this time!\n"
    )

    def __init__(  # noqa: PLR0913
        self,
        model: str = "qwen2.5:3b",
        base_url: str = "http://localhost:11434",
        timeout: float = 30.0,
        prompt_template: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._prompt_template = prompt_template or self.DEFAULT_PROMPT_TEMPLATE
        self._transport = transport

    @property
    def model_name(self) -> str:
        return self._model

    async def generate(
        self,
        feedback: FeedbackItem,
        attempt_number: int = 1,
    ) -> Optional[RuleCandidate]:
        prompt = self._build_prompt(feedback, attempt_number)
        logger.debug("Rule prompt:\n%s", prompt)

        response_text = await self._call_ollama(prompt)
        if not response_text:
            return None

        logger.debug("Rule response: %s", response_text)
        return self._parse_response(response_text)

    def _build_prompt(self, feedback: FeedbackItem, attempt_number: int) -> str:
        retry_notice = (
            self.RETRY_NOTICE.format(attempt=attempt_number)
            if attempt_number > 1
            else ""
        )
        return self._prompt_template.format(
            retry_notice=retry_notice,
            original_query=feedback.original_query,
            translated_query=feedback.translated_query or "unknown",
            issue_description=feedback.issue_description or "(not provided)",
            otags=", ".join(f"otag:{tag}" for tag in sorted(KNOWN_OTAGS)),
        )

    async def _call_ollama(self, prompt: str) -> str:
        url = f"{self._base_url}/api/generate"
        payload = {
            "model": self._model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": 0.1,
                "num_predict": 300,
            },
        }

        # Allow extra time for model loading (cold start)
        timeout = httpx.Timeout(connect=5.0, read=self._timeout, write=10.0, pool=5.0)
        try:
            async with httpx.AsyncClient(
                timeout=timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(url, json=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException as e:
            logger.warning("Ollama request timed out after %.1fs", self._timeout)
            raise UpstreamError(
                "Generative backend timed out",
                code=ErrorCode.UPSTREAM_TIMEOUT,
            ) from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("Ollama returned HTTP %s", status)
            if status in (HTTP_TOO_MANY_REQUESTS, HTTP_PAYMENT_REQUIRED):
                raise UpstreamError(
                    "Generative backend quota exhausted",
                    code=ErrorCode.UPSTREAM_QUOTA_EXHAUSTED,
                    details={"status": status},
                ) from e
            raise UpstreamError(
                "Generative backend unavailable",
                details={"status": status},
            ) from e
        except httpx.HTTPError as e:
            logger.warning(
                "Could not reach Ollama at %s: %s",
                self._base_url,
                type(e).__name__,
            )
            raise UpstreamError("Generative backend unavailable") from e
        except ValueError as e:
            logger.warning("Ollama answered with a non-JSON body")
            raise UpstreamError("Generative backend returned an invalid response") from e

        return data.get("response", "") if isinstance(data, dict) else ""

    def _parse_response(self, response_text: str) -> Optional[RuleCandidate]:
        json_data = self._extract_json(response_text)
        if not json_data:
            logger.debug("Could not parse rule response: %s", response_text[:100])
            return None

        pattern = str(json_data.get("pattern") or "").strip().lower()
        compiled = str(
            json_data.get("compiled_query") or json_data.get("scryfall_syntax") or "",
        )
        compiled, corrections = apply_auto_corrections(compiled)
        for correction in corrections:
            logger.debug("Auto-corrected candidate: %s", correction)

        try:
            confidence = float(json_data.get("confidence", 0.0))
        except (TypeError, ValueError):
            confidence = 0.0

        # Clamp confidence to valid range
        confidence = max(0.0, min(1.0, confidence))

        return RuleCandidate(
            pattern=pattern,
            compiled_query=compiled,
            confidence=confidence,
            description=str(json_data.get("description") or "").strip(),
        )

    def _extract_json(self, text: str) -> Optional[dict]:
        # Try to find JSON in code blocks first
        json_match = re.search(r"```(?:json)?\s*(\{.*?\})\s*```", text, re.DOTALL)
        if json_match:
            try:
                return json.loads(json_match.group(1))
            except json.JSONDecodeError:
                pass

        # Try to find raw JSON object
        json_match = re.search(r"\{.*\}", text, re.DOTALL)
        if json_match:
            try:
                return json.loads(json_match.group(0))
            except json.JSONDecodeError:
                pass

        return None
