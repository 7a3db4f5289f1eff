"""Live validation port (interface)."""

from abc import ABC, abstractmethod


class LiveValidator(ABC):
    """Executes a compiled query against the real external search API."""

    @abstractmethod
    async def count_results(self, compiled_query: str) -> int:
        """
        Count the cards the external database returns for a query.

        A not-found answer from the API means zero results, not an error.

        Parameters
        ----------
        compiled_query
            Query in the external search syntax

        Returns
        -------
        Number of matching cards (0 if none)

        Raises
        ------
        LiveValidationUnavailableError
            On network errors, timeouts or unexpected server errors
        """
