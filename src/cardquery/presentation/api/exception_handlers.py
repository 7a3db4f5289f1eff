"""Centralized exception handlers for the FastAPI application.

Domain exceptions are mapped to HTTP responses with a consistent error
format. Messages are scrubbed of connection strings, tokens and paths
before they leave the process.

Error Response Format:
    {
        "detail": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE"
    }

Rate-limited responses also carry ``retry_after`` in the body and a
``Retry-After`` header. Request validation failures carry ``issues``.

Usage:
    from cardquery.presentation.api.exception_handlers import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cardquery.domain.shared.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    RateLimitExceededError,
    UnauthorizedError,
    UpstreamError,
    ValidationError,
)
from cardquery.infrastructure.security import sanitize_error_message

logger = logging.getLogger(__name__)


# =============================================================================
# Error Code to HTTP Status Mapping
# =============================================================================

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    # 400 Bad Request - validation errors
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_QUERY: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_FEEDBACK_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INJECTION_DETECTED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.TOO_MANY_PARAMETERS: status.HTTP_400_BAD_REQUEST,
    # 413 Payload Too Large
    ErrorCode.PAYLOAD_TOO_LARGE: status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
    # 401 Unauthorized
    ErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    # 404 Not Found
    ErrorCode.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.FEEDBACK_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.RULE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # 409 Conflict
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.FEEDBACK_ALREADY_CLAIMED: status.HTTP_409_CONFLICT,
    # 429 Too Many Requests
    ErrorCode.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorCode.UPSTREAM_QUOTA_EXHAUSTED: status.HTTP_429_TOO_MANY_REQUESTS,
    # 503 / 504 - external service errors
    ErrorCode.UPSTREAM_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.UPSTREAM_TIMEOUT: status.HTTP_504_GATEWAY_TIMEOUT,
    # 500 Internal Server Error
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _get_status_for_exception(exc: DomainException) -> int:  # NOQA: PLR0911
    """Determine HTTP status code for a domain exception.

    Uses the error code mapping, with fallback based on exception type.
    """
    if exc.code in ERROR_CODE_TO_STATUS:
        return ERROR_CODE_TO_STATUS[exc.code]

    # Fallback based on exception type hierarchy
    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, UnauthorizedError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, RateLimitExceededError):
        return status.HTTP_429_TOO_MANY_REQUESTS
    if isinstance(exc, UpstreamError):
        return status.HTTP_503_SERVICE_UNAVAILABLE

    # Default to 400 for domain exceptions
    return status.HTTP_400_BAD_REQUEST


def _create_error_response(
    status_code: int,
    message: str,
    code: str,
    extra: Optional[dict[str, Any]] = None,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    """Create a standardized error response."""
    content: dict[str, Any] = {
        "detail": sanitize_error_message(message),
        "code": code,
    }
    if extra:
        content.update(extra)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _validation_issues(exc: RequestValidationError) -> list[dict[str, str]]:
    issues = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        issues.append(
            {
                "field": ".".join(location) or "body",
                "type": str(error.get("type", "value_error")),
                "message": sanitize_error_message(str(error.get("msg", "Invalid value"))),
            },
        )
    return issues


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(RateLimitExceededError)
    async def rate_limit_exception_handler(
        request: Request,
        exc: RateLimitExceededError,
    ) -> JSONResponse:
        """Handle rate limit rejections with a retry hint."""
        logger.info(
            "Rate limited on %s %s (scope=%s, retry_after=%ss)",
            request.method,
            request.url.path,
            exc.scope,
            exc.retry_after,
        )
        return _create_error_response(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            message=exc.message,
            code=exc.code.value,
            extra={"retry_after": exc.retry_after},
            headers={"Retry-After": str(exc.retry_after)},
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle all domain exceptions with structured response.

        Logs the full exception details for debugging while returning
        a safe, user-friendly message to the client.
        """
        status_code = _get_status_for_exception(exc)

        logger.warning(
            "Domain exception on %s %s: %s (code=%s, details=%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.code.value,
            exc.details,
        )

        headers = None
        if status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}

        return _create_error_response(
            status_code=status_code,
            message=exc.message,
            code=exc.code.value,
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle malformed request bodies with typed per-field issues."""
        issues = _validation_issues(exc)
        logger.info(
            "Request validation failed on %s %s: %d issue(s)",
            request.method,
            request.url.path,
            len(issues),
        )
        return _create_error_response(
            status_code=status.HTTP_400_BAD_REQUEST,
            message="Invalid request",
            code=ErrorCode.VALIDATION_ERROR.value,
            extra={"issues": issues},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions with consistent error format.

        This is the catch-all handler for any exceptions not handled by
        the domain-specific handlers above.
        """
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="An internal error occurred",
            code=ErrorCode.INTERNAL_ERROR.value,
        )
