"""Generative backend adapters."""

from cardquery.infrastructure.integration.ai.ollama_rule_generator import (
    OllamaRuleGenerator,
)

__all__ = ["OllamaRuleGenerator"]
