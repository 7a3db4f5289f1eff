"""Feedback domain exceptions."""

from uuid import UUID

from cardquery.domain.shared.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    UpstreamError,
)


class FeedbackNotFoundError(EntityNotFoundError):
    """Raised when a feedback item cannot be found."""

    def __init__(self, feedback_id: str | UUID) -> None:
        super().__init__(
            message="Feedback not found",
            code=ErrorCode.FEEDBACK_NOT_FOUND,
            details={"feedback_id": str(feedback_id)},
        )


class FeedbackAlreadyClaimedError(ConflictError):
    """Raised when another worker already claimed or finished the item."""

    def __init__(self, feedback_id: str | UUID, status: str) -> None:
        super().__init__(
            message=f"Feedback is already {status}",
            code=ErrorCode.FEEDBACK_ALREADY_CLAIMED,
            details={"feedback_id": str(feedback_id), "status": status},
        )


class LiveValidationUnavailableError(UpstreamError):
    """Raised when the external search API cannot be reached."""

    def __init__(self, reason: str, timed_out: bool = False) -> None:
        super().__init__(
            message="Live validation unavailable",
            code=ErrorCode.UPSTREAM_TIMEOUT if timed_out else ErrorCode.UPSTREAM_UNAVAILABLE,
            details={"reason": reason},
        )
