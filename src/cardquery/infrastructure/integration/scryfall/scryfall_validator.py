"""Live validation of compiled queries against the Scryfall search API."""

import logging
from typing import Optional

import httpx

from cardquery.domain.feedback import LiveValidationUnavailableError, LiveValidator

logger = logging.getLogger(__name__)

HTTP_OK = 200
HTTP_NOT_FOUND = 404

# Scryfall answers a query it cannot parse with 400; it matches no cards
REJECTED_QUERY_STATUSES = frozenset({400, 422})


class ScryfallLiveValidator(LiveValidator):
    """
    Counts the cards Scryfall returns for a query.

    Scryfall answers a search without matches with 404 and a malformed
    query with 400; both are reported as zero results. Transport errors,
    rate limiting and server errors count as the API being unavailable.
    """

    USER_AGENT = "cardquery/1.0"

    def __init__(
        self,
        base_url: str = "https://api.scryfall.com",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def count_results(self, compiled_query: str) -> int:
        url = f"{self._base_url}/cards/search"
        headers = {"User-Agent": self.USER_AGENT, "Accept": "application/json"}

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                headers=headers,
            ) as client:
                response = await client.get(url, params={"q": compiled_query})
        except httpx.TimeoutException as e:
            logger.warning("Scryfall validation timed out after %.1fs", self._timeout)
            raise LiveValidationUnavailableError("timeout", timed_out=True) from e
        except httpx.HTTPError as e:
            logger.warning("Scryfall validation failed: %s", type(e).__name__)
            raise LiveValidationUnavailableError(type(e).__name__) from e

        if response.status_code == HTTP_NOT_FOUND:
            return 0

        if response.status_code in REJECTED_QUERY_STATUSES:
            logger.info(
                "Scryfall rejected %r with HTTP %s", compiled_query, response.status_code
            )
            return 0

        if response.status_code != HTTP_OK:
            logger.warning("Scryfall returned HTTP %s", response.status_code)
            raise LiveValidationUnavailableError(f"HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise LiveValidationUnavailableError("invalid JSON body") from e

        total = data.get("total_cards", 0) if isinstance(data, dict) else 0
        logger.debug("Scryfall returned %s cards for %r", total, compiled_query)
        return int(total or 0)
