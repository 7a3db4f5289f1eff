"""Pydantic schemas for API request/response models."""

from cardquery.presentation.api.schemas.admin import (
    CacheStatsResponse,
    CacheTierStatsResponse,
    MiningReportResponse,
    SweepResponse,
)
from cardquery.presentation.api.schemas.feedback import (
    FeedbackOutcomeResponse,
    FeedbackResponse,
    FeedbackSubmitRequest,
    ProcessFeedbackRequest,
)
from cardquery.presentation.api.schemas.search import (
    ExplanationResponse,
    FallbackRequest,
    FallbackResponse,
    SearchFiltersSchema,
    SearchRequest,
    TranslationResponse,
)

__all__ = [
    # Admin
    "CacheStatsResponse",
    "CacheTierStatsResponse",
    "MiningReportResponse",
    "SweepResponse",
    # Feedback
    "FeedbackOutcomeResponse",
    "FeedbackResponse",
    "FeedbackSubmitRequest",
    "ProcessFeedbackRequest",
    # Search
    "ExplanationResponse",
    "FallbackRequest",
    "FallbackResponse",
    "SearchFiltersSchema",
    "SearchRequest",
    "TranslationResponse",
]
