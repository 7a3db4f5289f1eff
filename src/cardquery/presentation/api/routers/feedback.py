"""Feedback router: user corrections and single-item processing."""

import logging
import re
from uuid import UUID

from fastapi import APIRouter, Depends, status

from cardquery.domain.feedback import FeedbackItem
from cardquery.domain.shared.exceptions import ErrorCode, ValidationError
from cardquery.infrastructure.security import detect_injection, guard_query
from cardquery.presentation.api.config import get_api_settings
from cardquery.presentation.api.dependencies import DBSession, FeedbackProcessorDep
from cardquery.presentation.api.schemas.feedback import (
    FeedbackOutcomeResponse,
    FeedbackResponse,
    FeedbackSubmitRequest,
    ProcessFeedbackRequest,
)
from cardquery_config.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter()

_UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def _parse_feedback_id(raw: str) -> UUID:
    if not _UUID_PATTERN.match(raw.strip()):
        raise ValidationError(
            "feedbackId must be a UUID",
            code=ErrorCode.INVALID_FEEDBACK_ID,
        )
    return UUID(raw.strip())


def _to_response(feedback: FeedbackItem) -> FeedbackResponse:
    return FeedbackResponse(
        id=feedback.id,
        original_query=feedback.original_query,
        translated_query=feedback.translated_query,
        issue_description=feedback.issue_description,
        status=feedback.status.value,
        generated_rule_id=feedback.generated_rule_id,
        processing_message=feedback.processing_message,
        created_at=feedback.created_at,
        updated_at=feedback.updated_at,
        processed_at=feedback.processed_at,
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Submit translation feedback",
    responses={
        201: {"description": "Feedback recorded as pending"},
        400: {"description": "Invalid feedback"},
    },
)
async def submit_feedback(
    request: FeedbackSubmitRequest,
    processor: FeedbackProcessorDep,
    session: DBSession,
    settings: Settings = Depends(get_api_settings),
) -> FeedbackResponse:
    """
    Record a correction for a translation that returned the wrong cards.

    The item starts in ``pending`` and is turned into a rule by a later
    call to ``/feedback/process``.
    """
    original_query = guard_query(
        request.original_query,
        max_length=settings.max_query_length,
        max_parameters=settings.max_params,
    )
    for text in (request.translated_query or "", request.issue_description):
        if detect_injection(text) is not None:
            raise ValidationError(
                "Feedback contains disallowed content",
                code=ErrorCode.INJECTION_DETECTED,
            )

    try:
        feedback = await processor.submit(
            original_query=original_query,
            translated_query=request.translated_query,
            issue_description=request.issue_description,
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e

    await session.commit()
    return _to_response(feedback)


@router.post(
    "/process",
    summary="Process one feedback item",
    responses={
        200: {"description": "Final status of the item"},
        400: {"description": "Malformed feedback ID"},
        404: {"description": "Feedback not found"},
        409: {"description": "Feedback already claimed or finished"},
    },
)
async def process_feedback(
    request: ProcessFeedbackRequest,
    processor: FeedbackProcessorDep,
    session: DBSession,
) -> FeedbackOutcomeResponse:
    """
    Generate, live-validate and commit a rule for a single feedback item.

    Exactly one item is processed per call. Concurrent calls for the same
    item are rejected with 409 once the first has claimed it.
    """
    feedback_id = _parse_feedback_id(request.feedback_id)
    outcome = await processor.process(feedback_id)
    await session.commit()

    return FeedbackOutcomeResponse(
        feedback_id=outcome.feedback_id,
        status=outcome.status.value,
        message=outcome.message,
        rule_id=outcome.rule_id,
    )
