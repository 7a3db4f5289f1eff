"""Application service serving natural-language translations.

Request path:
1. Cache lookup (memory, then database), deduplicated per query hash
2. Learned rule lookup by exact normalized pattern
3. Extractor pipeline and renderer
4. Filters, outbound sanitization and limit checks
5. Cache write
6. Translation log entry for every served request
"""

from __future__ import annotations

import logging
from typing import Optional

from cardquery.application.dtos import (
    Explanation,
    TranslationRequest,
    TranslationResult,
)
from cardquery.domain.cache import query_hash
from cardquery.domain.mining import (
    TranslationLogEntry,
    TranslationLogRepository,
    TranslationSource,
)
from cardquery.domain.rules import RuleRepository
from cardquery.domain.shared.exceptions import ErrorCode, ValidationError
from cardquery.domain.translation import (
    apply_filters,
    compile_query,
    normalize,
    validate_query,
)
from cardquery.infrastructure.cache import SingleFlight, TieredResultCache
from cardquery.infrastructure.security import count_parameters

logger = logging.getLogger(__name__)

PIPELINE_CONFIDENCE = 0.9
RESIDUAL_CONFIDENCE = 0.7


class TranslationService:
    """Translates one request, reusing cached and learned translations."""

    def __init__(  # NOQA: PLR0913
        self,
        rule_repository: RuleRepository,
        log_repository: TranslationLogRepository,
        cache: TieredResultCache,
        single_flight: SingleFlight[TranslationResult],
        rule_min_confidence: float = 0.6,
        max_params: int = 15,
        max_compiled_length: int = 400,
        cache_salt: str = "",
    ):
        self._rule_repo = rule_repository
        self._log_repo = log_repository
        self._cache = cache
        self._single_flight = single_flight
        self._rule_min_confidence = rule_min_confidence
        self._max_params = max_params
        self._max_compiled_length = max_compiled_length
        self._cache_salt = cache_salt

    async def translate(self, request: TranslationRequest) -> TranslationResult:
        """
        Translate a request into search syntax.

        Concurrent calls for the same query and filters share one lookup
        and at most one compile. Every call is recorded in the translation
        log, including those served from the cache.

        Raises
        ------
        ValidationError
            If the compiled query is empty or has too many parameters
        """
        normalized = normalize(request.query)
        key = query_hash(normalized, request.filters.as_dict(), self._cache_salt)
        result = await self._single_flight.do(
            key,
            lambda: self._resolve(request, normalized, key),
        )

        # One row per served request, cached or not; the miner counts them
        await self._log_repo.record(
            TranslationLogEntry(
                natural_query=normalized,
                compiled_query=result.compiled_query,
                confidence=result.confidence,
                source=result.source,
            ),
        )
        return result

    async def _resolve(
        self,
        request: TranslationRequest,
        normalized: str,
        key: str,
    ) -> TranslationResult:
        entry = await self._cache.get(key)
        if entry is not None:
            logger.debug("Cache hit for %s (hits=%d)", key, entry.hit_count)
            return self._from_cache(request.query, entry.compiled_query, entry.explanation)

        result = await self._compile(request, normalized)

        stored = {
            **result.explanation.to_dict(),
            "source": result.source.value,
            "warnings": list(result.warnings),
        }
        await self._cache.put(
            query_hash=key,
            normalized_query=normalized,
            compiled_query=result.compiled_query,
            confidence=result.confidence,
            explanation=stored,
        )
        return result

    async def _compile(
        self,
        request: TranslationRequest,
        normalized: str,
    ) -> TranslationResult:
        warnings: list[str] = []
        rule = await self._rule_repo.find_active_by_pattern(normalized)

        if rule is not None and rule.is_trusted(self._rule_min_confidence):
            logger.info("Serving %r from rule %s", normalized, rule.id)
            compiled = rule.compiled_query
            source = TranslationSource.RULE
            confidence = rule.confidence
            readable = f'Matched learned rule "{rule.pattern}"'
        else:
            compiled, ir = compile_query(request.query)
            warnings.extend(ir.warnings)
            source = TranslationSource.PIPELINE
            confidence = RESIDUAL_CONFIDENCE if ir.remaining else PIPELINE_CONFIDENCE
            readable = self._describe(ir.remaining, compiled)

        compiled = apply_filters(compiled, request.filters)
        validation = validate_query(compiled, max_length=self._max_compiled_length)
        compiled = validation.sanitized
        warnings.extend(validation.issues)

        self._enforce_limits(compiled)

        return TranslationResult(
            query=request.query,
            compiled_query=compiled,
            explanation=Explanation(
                readable=readable,
                assumptions=tuple(warnings),
                confidence=confidence,
            ),
            source=source,
            cached=False,
            warnings=tuple(warnings),
        )

    def _enforce_limits(self, compiled: str) -> None:
        if not compiled:
            raise ValidationError(
                "Could not build a search from this query",
                code=ErrorCode.INVALID_QUERY,
            )
        params = count_parameters(compiled)
        if params > self._max_params:
            raise ValidationError(
                f"Too many search parameters (maximum {self._max_params})",
                code=ErrorCode.TOO_MANY_PARAMETERS,
                details={"parameters": params},
            )
        if len(compiled) > self._max_compiled_length:
            raise ValidationError(
                f"Compiled query exceeds {self._max_compiled_length} characters",
                code=ErrorCode.PAYLOAD_TOO_LARGE,
            )

    def _describe(self, residual: Optional[str], compiled: str) -> str:
        if residual:
            return f"Searching for {compiled} (some words matched as oracle text)"
        return f"Searching for {compiled}"

    def _from_cache(
        self,
        query: str,
        compiled: str,
        stored: dict,
    ) -> TranslationResult:
        try:
            source = TranslationSource(stored.get("source", TranslationSource.PIPELINE.value))
        except ValueError:
            source = TranslationSource.PIPELINE
        return TranslationResult(
            query=query,
            compiled_query=compiled,
            explanation=Explanation.from_dict(stored),
            source=source,
            cached=True,
            warnings=tuple(stored.get("warnings", ())),
        )
