"""Ports to external collaborators of the feedback loop."""

from cardquery.domain.feedback.ports.live_validator import LiveValidator
from cardquery.domain.feedback.ports.rule_generator import RuleGenerator

__all__ = [
    "LiveValidator",
    "RuleGenerator",
]
