"""SQLAlchemy implementation of RuleRepository."""

from __future__ import annotations

from typing import Iterable, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cardquery.domain.rules import RuleRepository, TranslationRule
from cardquery.domain.shared.time import ensure_tz_aware
from cardquery.infrastructure.persistence.sqlalchemy.models import (
    TranslationRuleModel,
)


class RuleRepositorySQLAlchemy(RuleRepository):
    """SQLAlchemy implementation of RuleRepository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def find_active_by_pattern(self, pattern: str) -> Optional[TranslationRule]:
        stmt = (
            select(TranslationRuleModel)
            .where(
                TranslationRuleModel.pattern == pattern.strip().lower(),
                TranslationRuleModel.is_active == True,  # NOQA: E712
            )
            .order_by(
                TranslationRuleModel.confidence.desc(),
                TranslationRuleModel.updated_at.desc(),
            )
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return None

        return self._model_to_domain(model)

    async def find_active(
        self,
        min_confidence: float = 0.0,
        limit: int = 50,
    ) -> list[TranslationRule]:
        stmt = (
            select(TranslationRuleModel)
            .where(
                TranslationRuleModel.is_active == True,  # NOQA: E712
                TranslationRuleModel.confidence >= min_confidence,
            )
            .order_by(TranslationRuleModel.confidence.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._model_to_domain(model) for model in models]

    async def find_all_patterns(self) -> set[str]:
        stmt = select(TranslationRuleModel.pattern)
        result = await self._session.execute(stmt)
        return set(result.scalars().all())

    async def find_by_id(self, rule_id: UUID) -> Optional[TranslationRule]:
        stmt = select(TranslationRuleModel).where(TranslationRuleModel.id == rule_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return None

        return self._model_to_domain(model)

    async def save(self, rule: TranslationRule) -> None:
        stmt = select(TranslationRuleModel).where(TranslationRuleModel.id == rule.id)
        result = await self._session.execute(stmt)
        existing = result.scalar_one_or_none()

        if existing:
            existing.pattern = rule.pattern
            existing.compiled_query = rule.compiled_query
            existing.confidence = rule.confidence
            existing.description = rule.description
            existing.source_feedback_id = rule.source_feedback_id
            existing.is_active = rule.is_active
            existing.updated_at = rule.updated_at
        else:
            self._session.add(self._domain_to_model(rule))

        await self._session.flush()

    async def add_many(self, rules: Iterable[TranslationRule]) -> int:
        models = [self._domain_to_model(rule) for rule in rules]
        if not models:
            return 0

        self._session.add_all(models)
        await self._session.flush()
        return len(models)

    async def deactivate(self, rule_id: UUID) -> bool:
        stmt = select(TranslationRuleModel).where(TranslationRuleModel.id == rule_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        rule = self._model_to_domain(model)
        rule.deactivate()
        model.is_active = False
        model.updated_at = rule.updated_at
        await self._session.flush()
        return True

    def _domain_to_model(self, rule: TranslationRule) -> TranslationRuleModel:
        return TranslationRuleModel(
            id=rule.id,
            pattern=rule.pattern,
            compiled_query=rule.compiled_query,
            confidence=rule.confidence,
            description=rule.description,
            source_feedback_id=rule.source_feedback_id,
            is_active=rule.is_active,
            created_at=rule.created_at,
            updated_at=rule.updated_at,
        )

    def _model_to_domain(self, model: TranslationRuleModel) -> TranslationRule:
        return TranslationRule(
            id=model.id,
            pattern=model.pattern,
            compiled_query=model.compiled_query,
            confidence=model.confidence,
            description=model.description,
            source_feedback_id=model.source_feedback_id,
            is_active=model.is_active,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )
