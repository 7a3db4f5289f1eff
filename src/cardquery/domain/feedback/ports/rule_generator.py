"""Rule generator port (interface)."""

from abc import ABC, abstractmethod
from typing import Optional

from cardquery.domain.feedback.entities import FeedbackItem
from cardquery.domain.feedback.value_objects import RuleCandidate


class RuleGenerator(ABC):
    """
    Abstract interface for the generative backend that proposes rules.

    Implementations are instructed to prefer the known oracle-tag
    taxonomy over free-text oracle search wherever a tag exists.
    """

    @abstractmethod
    async def generate(
        self,
        feedback: FeedbackItem,
        attempt_number: int = 1,
    ) -> Optional[RuleCandidate]:
        """
        Propose a translation rule that fixes the reported problem.

        Parameters
        ----------
        feedback
            The correction submitted by the user
        attempt_number
            1 for a first attempt; higher values mean earlier fixes for a
            similar query apparently did not work

        Returns
        -------
        RuleCandidate, or None if the backend answered with something that
        could not be parsed into a candidate.

        Raises
        ------
        UpstreamError
            If the backend is unreachable or times out
        """

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Model identifier, used for logging."""
