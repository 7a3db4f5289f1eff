"""Rule repository interfaces."""

from cardquery.domain.rules.repositories.rule_repository import RuleRepository

__all__ = ["RuleRepository"]
