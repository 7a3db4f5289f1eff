"""In-process RuleRepository."""

from __future__ import annotations

import asyncio
from typing import Iterable, Optional
from uuid import UUID

from cardquery.domain.rules import RuleRepository, TranslationRule


class InMemoryRuleRepository(RuleRepository):
    """Rule store held in a dict, for tests and single-process deployments."""

    def __init__(self, rules: Iterable[TranslationRule] = ()):
        self._rules: dict[UUID, TranslationRule] = {rule.id: rule for rule in rules}
        self._lock = asyncio.Lock()

    async def find_active_by_pattern(self, pattern: str) -> Optional[TranslationRule]:
        key = pattern.strip().lower()
        matches = [r for r in self._rules.values() if r.is_active and r.pattern == key]
        if not matches:
            return None
        return max(matches, key=lambda r: (r.confidence, r.updated_at))

    async def find_active(
        self,
        min_confidence: float = 0.0,
        limit: int = 50,
    ) -> list[TranslationRule]:
        active = [r for r in self._rules.values() if r.is_trusted(min_confidence)]
        active.sort(key=lambda r: r.confidence, reverse=True)
        return active[:limit]

    async def find_all_patterns(self) -> set[str]:
        return {rule.pattern for rule in self._rules.values()}

    async def find_by_id(self, rule_id: UUID) -> Optional[TranslationRule]:
        return self._rules.get(rule_id)

    async def save(self, rule: TranslationRule) -> None:
        async with self._lock:
            self._rules[rule.id] = rule

    async def add_many(self, rules: Iterable[TranslationRule]) -> int:
        count = 0
        async with self._lock:
            for rule in rules:
                self._rules[rule.id] = rule
                count += 1
        return count

    async def deactivate(self, rule_id: UUID) -> bool:
        async with self._lock:
            rule = self._rules.get(rule_id)
            if rule is None:
                return False
            rule.deactivate()
            return True
