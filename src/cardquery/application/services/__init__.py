"""Application services."""

from cardquery.application.services.feedback_processor import FeedbackProcessor
from cardquery.application.services.pattern_miner import PatternMiner
from cardquery.application.services.translation_service import TranslationService

__all__ = [
    "FeedbackProcessor",
    "PatternMiner",
    "TranslationService",
]
