"""External card database adapters."""

from cardquery.infrastructure.integration.scryfall.scryfall_validator import (
    ScryfallLiveValidator,
)

__all__ = ["ScryfallLiveValidator"]
