"""Batch promotion of frequently served translations into rules."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from cardquery.domain.feedback import LiveValidationUnavailableError, LiveValidator
from cardquery.domain.mining import (
    MiningReport,
    TranslationLogEntry,
    TranslationLogRepository,
    normalize_pattern,
)
from cardquery.domain.rules import RuleRepository, TranslationRule
from cardquery.domain.shared.time import utc_now

logger = logging.getLogger(__name__)


@dataclass
class _Bucket:
    count: int
    best_query: str
    best_confidence: float
    representative: str

    def add(self, entry: TranslationLogEntry) -> None:
        self.count += 1
        if entry.confidence > self.best_confidence:
            self.best_query = entry.compiled_query
            self.best_confidence = entry.confidence


class PatternMiner:
    """
    Groups recent high-confidence translations by an order-independent
    form of their query and turns the most frequent ones into rules.

    With a live validator configured, each candidate must return at least
    one card from the external database before it is activated, the same
    gate the feedback processor applies.
    """

    def __init__(  # NOQA: PLR0913
        self,
        log_repository: TranslationLogRepository,
        rule_repository: RuleRepository,
        live_validator: Optional[LiveValidator] = None,
        window: timedelta = timedelta(days=30),
        log_limit: int = 5000,
        min_occurrences: int = 3,
        min_confidence: float = 0.8,
        max_new_rules: int = 50,
        fail_open: bool = True,
    ):
        self._log_repo = log_repository
        self._rule_repo = rule_repository
        self._validator = live_validator
        self._window = window
        self._log_limit = log_limit
        self._min_occurrences = min_occurrences
        self._min_confidence = min_confidence
        self._max_new_rules = max_new_rules
        self._fail_open = fail_open

    async def run(self) -> MiningReport:
        """
        Mine the recent log window once.

        Returns
        -------
        MiningReport with the analyzed log count, the candidate count and
        the created and rejected patterns
        """
        logs = await self._log_repo.find_recent_high_confidence(
            since=utc_now() - self._window,
            min_confidence=self._min_confidence,
            limit=self._log_limit,
        )
        if not logs:
            logger.info("No translation logs to mine")
            return MiningReport(analyzed=0, candidates=0)

        known = {normalize_pattern(p) for p in await self._rule_repo.find_all_patterns()}
        buckets = self._group(logs)

        candidates = sorted(
            (
                (key, bucket)
                for key, bucket in buckets.items()
                if bucket.count >= self._min_occurrences and key not in known
            ),
            key=lambda item: item[1].count,
            reverse=True,
        )[: self._max_new_rules]

        logger.info(
            "Analyzed %d logs: %d buckets, %d candidates",
            len(logs),
            len(buckets),
            len(candidates),
        )

        rules: list[TranslationRule] = []
        rejected: list[str] = []
        for _, bucket in candidates:
            if not await self._passes_live_validation(bucket.best_query):
                rejected.append(bucket.representative)
                continue
            rules.append(
                TranslationRule(
                    pattern=bucket.representative,
                    compiled_query=bucket.best_query,
                    confidence=bucket.best_confidence,
                    description=f"Auto-generated from {bucket.count} occurrences",
                ),
            )

        created = await self._rule_repo.add_many(rules) if rules else 0
        if created:
            logger.info("Promoted %d pattern(s) to rules", created)
        if rejected:
            logger.info("Rejected %d pattern(s) with no live results", len(rejected))

        return MiningReport(
            analyzed=len(logs),
            candidates=len(candidates),
            created=tuple(rule.pattern for rule in rules),
            rejected=tuple(rejected),
        )

    def _group(self, logs: list[TranslationLogEntry]) -> dict[str, _Bucket]:
        buckets: dict[str, _Bucket] = {}
        for entry in logs:
            key = normalize_pattern(entry.natural_query)
            if not key:
                continue
            bucket = buckets.get(key)
            if bucket is None:
                buckets[key] = _Bucket(
                    count=1,
                    best_query=entry.compiled_query,
                    best_confidence=entry.confidence,
                    representative=entry.natural_query.strip().lower(),
                )
            else:
                bucket.add(entry)
        return buckets

    async def _passes_live_validation(self, compiled: str) -> bool:
        if self._validator is None:
            return True
        try:
            return await self._validator.count_results(compiled) > 0
        except LiveValidationUnavailableError:
            logger.warning("Live validation unavailable while mining %r", compiled)
            return self._fail_open
