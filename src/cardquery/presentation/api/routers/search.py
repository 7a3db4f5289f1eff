"""Search router: natural-language query translation."""

import logging

from fastapi import APIRouter, Depends

from cardquery.application.dtos import TranslationRequest
from cardquery.domain.mining import TranslationLogEntry, TranslationSource
from cardquery.domain.translation import compile_fallback
from cardquery.infrastructure.persistence.sqlalchemy.repositories import (
    TranslationLogRepositorySQLAlchemy,
)
from cardquery.infrastructure.security import guard_query
from cardquery.presentation.api.config import get_api_settings
from cardquery.presentation.api.dependencies import DBSession, TranslationServiceDep
from cardquery.presentation.api.schemas.search import (
    ExplanationResponse,
    FallbackRequest,
    FallbackResponse,
    SearchRequest,
    TranslationResponse,
)
from cardquery_config.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter()

FALLBACK_CONFIDENCE = 0.5


@router.post(
    "/translate",
    summary="Translate a natural-language search",
    responses={
        200: {"description": "Compiled search query"},
        400: {"description": "Query rejected by input checks"},
        401: {"description": "Missing or invalid credential"},
        413: {"description": "Query or compiled query too long"},
        429: {"description": "Rate limit exceeded"},
    },
)
async def translate(
    request: SearchRequest,
    service: TranslationServiceDep,
    session: DBSession,
    settings: Settings = Depends(get_api_settings),
) -> TranslationResponse:
    """
    Translate a natural-language card search into search syntax.

    The query is checked for injection patterns and malformed operators,
    then served from the result cache, a learned rule, or the extractor
    pipeline, in that order.
    """
    query = guard_query(
        request.query,
        max_length=settings.max_query_length,
        max_parameters=settings.max_params,
    )
    result = await service.translate(
        TranslationRequest(
            query=query,
            session_id=request.session_id,
            filters=request.filters.to_domain(),
        ),
    )
    await session.commit()

    return TranslationResponse(
        query=request.query,
        compiled_query=result.compiled_query,
        explanation=ExplanationResponse(**result.explanation.to_dict()),
        source=result.source.value,
        cached=result.cached,
        warnings=list(result.warnings),
    )


@router.post(
    "/fallback",
    summary="Translate with the static fallback compiler",
    responses={
        200: {"description": "Compiled search query"},
        400: {"description": "Query rejected by input checks"},
    },
)
async def fallback(
    request: FallbackRequest,
    session: DBSession,
    settings: Settings = Depends(get_api_settings),
) -> FallbackResponse:
    """
    Translate using only the keyword dictionaries.

    Intended for clients that cannot reach the primary path. Fallback
    translations are logged but never mined into rules.
    """
    query = guard_query(
        request.query,
        max_length=settings.max_query_length,
        max_parameters=settings.max_params,
    )
    compiled = compile_fallback(query, request.filters.to_domain())

    await TranslationLogRepositorySQLAlchemy(session).record(
        TranslationLogEntry(
            natural_query=query,
            compiled_query=compiled,
            confidence=FALLBACK_CONFIDENCE,
            source=TranslationSource.FALLBACK,
            fallback_used=True,
        ),
    )
    await session.commit()

    return FallbackResponse(query=request.query, compiled_query=compiled)
