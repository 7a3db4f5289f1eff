"""Application service turning user corrections into translation rules.

One feedback item is processed per call. The item is claimed with a
compare-and-swap on its status, a candidate rule is requested from the
generative backend, the candidate is executed against the live card
database, and only then is it committed to the rule store.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID

from cardquery.domain.cache import query_hash
from cardquery.domain.feedback import (
    FeedbackAlreadyClaimedError,
    FeedbackItem,
    FeedbackNotFoundError,
    FeedbackOutcome,
    FeedbackRepository,
    FeedbackStatus,
    LiveValidationUnavailableError,
    LiveValidator,
    RuleCandidate,
    RuleGenerator,
)
from cardquery.domain.rules import RuleRepository, TranslationRule
from cardquery.domain.shared.exceptions import UpstreamError
from cardquery.domain.shared.time import utc_now
from cardquery.domain.translation import normalize, validate_query
from cardquery.infrastructure.cache import TieredResultCache

logger = logging.getLogger(__name__)

RETRY_SUFFIX = " (updated after retry)"


class FeedbackProcessor:
    """
    Drives one feedback item through
    ``pending -> processing -> {completed | duplicate | skipped | failed |
    updated_existing}``.
    """

    def __init__(  # NOQA: PLR0913
        self,
        feedback_repository: FeedbackRepository,
        rule_repository: RuleRepository,
        rule_generator: RuleGenerator,
        live_validator: LiveValidator,
        cache: Optional[TieredResultCache] = None,
        min_confidence: float = 0.5,
        timeout_seconds: float = 60.0,
        stale_after: timedelta = timedelta(minutes=10),
        fail_open: bool = True,
        cache_ttl: timedelta = timedelta(days=7),
        cache_salt: str = "",
    ):
        self._feedback_repo = feedback_repository
        self._rule_repo = rule_repository
        self._generator = rule_generator
        self._validator = live_validator
        self._cache = cache
        self._min_confidence = min_confidence
        self._timeout_seconds = timeout_seconds
        self._stale_after = stale_after
        self._fail_open = fail_open
        self._cache_ttl = cache_ttl
        self._cache_salt = cache_salt

    async def submit(
        self,
        original_query: str,
        translated_query: Optional[str] = None,
        issue_description: str = "",
    ) -> FeedbackItem:
        """
        Record a new correction in ``pending`` state.

        Raises
        ------
        ValueError
            If the query is empty or a field exceeds its length limit
        """
        feedback = FeedbackItem(
            original_query=original_query,
            translated_query=translated_query,
            issue_description=issue_description,
        )
        await self._feedback_repo.save(feedback)
        logger.info("Feedback %s submitted for %r", feedback.id, feedback.original_query)
        return feedback

    async def process(self, feedback_id: UUID) -> FeedbackOutcome:
        """
        Process exactly one feedback item.

        Parameters
        ----------
        feedback_id
            Item to process; never a batch

        Returns
        -------
        FeedbackOutcome with the final status and a short message

        Raises
        ------
        FeedbackNotFoundError
            If no item has this ID
        FeedbackAlreadyClaimedError
            If the item is not pending (another worker has it, or it is done)
        """
        existing = await self._feedback_repo.find_by_id(feedback_id)
        if existing is None:
            raise FeedbackNotFoundError(feedback_id)

        feedback = await self._feedback_repo.claim(feedback_id)
        if feedback is None:
            current = await self._feedback_repo.find_by_id(feedback_id)
            status = current.status.value if current else existing.status.value
            raise FeedbackAlreadyClaimedError(feedback_id, status)

        logger.info("Processing feedback %s", feedback_id)
        try:
            return await asyncio.wait_for(
                self._process_claimed(feedback),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Feedback %s timed out after %.0fs",
                feedback_id,
                self._timeout_seconds,
            )
            return await self._finish(
                feedback,
                FeedbackStatus.FAILED,
                f"Processing timed out after {self._timeout_seconds:.0f}s",
            )
        except UpstreamError as e:
            logger.warning("Feedback %s failed: %s (%s)", feedback_id, e.message, e.code.value)
            return await self._finish(feedback, FeedbackStatus.FAILED, e.message)

    async def sweep_stale(self) -> int:
        """
        Force items stuck in ``processing`` past the stale age to ``failed``.

        Returns
        -------
        Number of items reclaimed
        """
        cutoff = utc_now() - self._stale_after
        count = await self._feedback_repo.fail_stale(cutoff)
        if count:
            logger.warning("Reclaimed %d stale feedback item(s)", count)
        return count

    async def _process_claimed(self, feedback: FeedbackItem) -> FeedbackOutcome:
        previous_attempts = await self._feedback_repo.count_similar_attempts(feedback)
        is_retry = previous_attempts > 0
        if is_retry:
            logger.info(
                "Feedback %s is attempt #%d for a similar query",
                feedback.id,
                previous_attempts + 1,
            )

        candidate = await self._generator.generate(
            feedback,
            attempt_number=previous_attempts + 1,
        )
        if candidate is None:
            return await self._finish(
                feedback,
                FeedbackStatus.FAILED,
                "Could not parse the generated rule",
            )

        if not candidate.is_complete or not candidate.is_confident(self._min_confidence):
            return await self._finish(
                feedback,
                FeedbackStatus.SKIPPED,
                f"Low confidence ({candidate.confidence:.2f})",
            )

        compiled = validate_query(candidate.compiled_query).sanitized
        if not compiled:
            return await self._finish(
                feedback,
                FeedbackStatus.FAILED,
                "Generated query was not valid search syntax",
            )

        rejection = await self._live_validate(compiled)
        if rejection is not None:
            return await self._finish(feedback, FeedbackStatus.FAILED, rejection)

        return await self._commit(feedback, candidate, compiled, is_retry)

    async def _live_validate(self, compiled: str) -> Optional[str]:
        """Return a rejection message, or None if the candidate may proceed."""
        try:
            count = await self._validator.count_results(compiled)
        except LiveValidationUnavailableError as e:
            if self._fail_open:
                logger.warning(
                    "Live validation unavailable (%s); admitting %r unvalidated",
                    e.details.get("reason"),
                    compiled,
                )
                return None
            return "Live validation unavailable"

        if count <= 0:
            logger.info("Candidate %r returned no live results", compiled)
            return "Generated query returned no results"

        logger.debug("Candidate %r returned %d live results", compiled, count)
        return None

    async def _commit(
        self,
        feedback: FeedbackItem,
        candidate: RuleCandidate,
        compiled: str,
        is_retry: bool,
    ) -> FeedbackOutcome:
        pattern = normalize(candidate.pattern)
        existing = await self._rule_repo.find_active_by_pattern(pattern)

        if existing is not None and not is_retry:
            return await self._finish(
                feedback,
                FeedbackStatus.DUPLICATE,
                f'A rule for "{existing.pattern}" already exists',
                rule_id=existing.id,
            )

        if existing is not None:
            existing.replace_translation(
                compiled_query=compiled,
                confidence=candidate.confidence,
                description=f"{candidate.description}{RETRY_SUFFIX}",
                source_feedback_id=feedback.id,
            )
            rule = existing
            status = FeedbackStatus.UPDATED_EXISTING
            message = f'Updated rule "{rule.pattern}" after retry'
        else:
            rule = TranslationRule(
                pattern=pattern,
                compiled_query=compiled,
                confidence=candidate.confidence,
                description=candidate.description or None,
                source_feedback_id=feedback.id,
            )
            status = FeedbackStatus.COMPLETED
            message = f'Created rule "{rule.pattern}"'

        await self._rule_repo.save(rule)
        outcome = await self._finish(feedback, status, message, rule_id=rule.id)
        if outcome.status == status:
            logger.info("%s -> %s", rule.pattern, rule.compiled_query)
            await self._cache_rule(rule)
        return outcome

    async def _cache_rule(self, rule: TranslationRule) -> None:
        if self._cache is None:
            return
        await self._cache.put(
            query_hash=query_hash(rule.pattern, {}, self._cache_salt),
            normalized_query=rule.pattern,
            compiled_query=rule.compiled_query,
            confidence=rule.confidence,
            explanation={
                "readable": f'Matched learned rule "{rule.pattern}"',
                "assumptions": [],
                "confidence": rule.confidence,
                "source": "rule",
                "warnings": [],
            },
            persistent_ttl=self._cache_ttl,
        )

    async def _finish(
        self,
        feedback: FeedbackItem,
        status: FeedbackStatus,
        message: str,
        rule_id: Optional[UUID] = None,
    ) -> FeedbackOutcome:
        recorded = await self._feedback_repo.finish(feedback.id, status, message, rule_id)
        if not recorded:
            current = await self._feedback_repo.find_by_id(feedback.id)
            if current is not None:
                return FeedbackOutcome(
                    feedback_id=feedback.id,
                    status=current.status,
                    message=current.processing_message or message,
                    rule_id=current.generated_rule_id,
                )
        logger.info("Feedback %s -> %s: %s", feedback.id, status.value, message)
        return FeedbackOutcome(
            feedback_id=feedback.id,
            status=status,
            message=message,
            rule_id=rule_id,
        )
