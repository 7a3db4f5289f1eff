"""Feedback item entity."""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from cardquery.domain.feedback.value_objects import FeedbackStatus
from cardquery.domain.shared.time import utc_now

MAX_QUERY_LENGTH = 500
MAX_ISSUE_LENGTH = 2000


class FeedbackItem:
    """
    A user-submitted correction for a translation that went wrong.

    The processor handles one item per invocation. Status transitions are
    one-directional; the persistence layer enforces them with conditional
    updates so two workers can never finish the same item.
    """

    def __init__(  # noqa: PLR0913
        self,
        original_query: str,
        translated_query: Optional[str] = None,
        issue_description: str = "",
        status: FeedbackStatus = FeedbackStatus.PENDING,
        generated_rule_id: Optional[UUID] = None,
        processing_message: Optional[str] = None,
        # For reconstitution from persistence:
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        processed_at: Optional[datetime] = None,
    ):
        self._id = id or uuid4()
        self._original_query = original_query.strip()
        self._translated_query = translated_query
        self._issue_description = issue_description.strip()
        self._status = status
        self._generated_rule_id = generated_rule_id
        self._processing_message = processing_message
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()
        self._processed_at = processed_at

        self._validate()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def original_query(self) -> str:
        return self._original_query

    @property
    def translated_query(self) -> Optional[str]:
        return self._translated_query

    @property
    def issue_description(self) -> str:
        return self._issue_description

    @property
    def status(self) -> FeedbackStatus:
        return self._status

    @property
    def generated_rule_id(self) -> Optional[UUID]:
        return self._generated_rule_id

    @property
    def processing_message(self) -> Optional[str]:
        return self._processing_message

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def processed_at(self) -> Optional[datetime]:
        return self._processed_at

    @property
    def similarity_key(self) -> str:
        """First three words of the original query, used to spot retries."""
        return " ".join(self._original_query.lower().split()[:3])

    def _validate(self) -> None:
        if not self._original_query:
            msg = "Original query cannot be empty"
            raise ValueError(msg)
        if len(self._original_query) > MAX_QUERY_LENGTH:
            msg = f"Original query exceeds {MAX_QUERY_LENGTH} characters"
            raise ValueError(msg)
        if len(self._issue_description) > MAX_ISSUE_LENGTH:
            msg = f"Issue description exceeds {MAX_ISSUE_LENGTH} characters"
            raise ValueError(msg)

    def claim(self) -> None:
        if self._status != FeedbackStatus.PENDING:
            msg = f"Cannot claim feedback in status {self._status.value}"
            raise ValueError(msg)
        self._status = FeedbackStatus.PROCESSING
        self._updated_at = utc_now()

    def finish(
        self,
        status: FeedbackStatus,
        message: Optional[str] = None,
        rule_id: Optional[UUID] = None,
    ) -> None:
        if self._status != FeedbackStatus.PROCESSING:
            msg = f"Cannot finish feedback in status {self._status.value}"
            raise ValueError(msg)
        if not status.is_final():
            msg = f"{status.value} is not a final status"
            raise ValueError(msg)

        self._status = status
        self._processing_message = message
        if rule_id is not None:
            self._generated_rule_id = rule_id
        self._processed_at = utc_now()
        self._updated_at = self._processed_at

    def __eq__(self, other) -> bool:
        if not isinstance(other, FeedbackItem):
            return False
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __str__(self) -> str:
        return f"FeedbackItem[{self._status.value}]: {self._original_query!r}"
