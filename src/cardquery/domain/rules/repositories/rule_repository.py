"""Repository interface for translation rules."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional
from uuid import UUID

from cardquery.domain.rules.entities import TranslationRule


class RuleRepository(ABC):
    """Repository interface for persisting and retrieving translation rules."""

    @abstractmethod
    async def find_active_by_pattern(self, pattern: str) -> Optional[TranslationRule]:
        """
        Find the active rule whose pattern equals ``pattern``.

        Parameters
        ----------
        pattern
            Normalized, lowercased natural-language pattern

        Returns
        -------
        Active rule if found, None otherwise
        """

    @abstractmethod
    async def find_active(
        self,
        min_confidence: float = 0.0,
        limit: int = 50,
    ) -> list[TranslationRule]:
        """
        Find active rules, highest confidence first.

        Parameters
        ----------
        min_confidence
            Rules below this confidence are skipped
        limit
            Maximum number of rules returned

        Returns
        -------
        List of active rules (may be empty)
        """

    @abstractmethod
    async def find_all_patterns(self) -> set[str]:
        """
        Return the patterns of every stored rule, active or not.

        Used by the pattern miner to avoid re-promoting known patterns.
        """

    @abstractmethod
    async def find_by_id(self, rule_id: UUID) -> Optional[TranslationRule]:
        """Find a rule by ID."""

    @abstractmethod
    async def save(self, rule: TranslationRule) -> None:
        """
        Insert or update a rule.

        Parameters
        ----------
        rule
            Rule to save
        """

    @abstractmethod
    async def add_many(self, rules: Iterable[TranslationRule]) -> int:
        """
        Bulk-insert new rules.

        Returns
        -------
        Number of rules inserted
        """

    @abstractmethod
    async def deactivate(self, rule_id: UUID) -> bool:
        """
        Deactivate a rule.

        Returns
        -------
        True if the rule existed, False otherwise
        """
