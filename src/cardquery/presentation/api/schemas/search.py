"""Search schemas for API request/response models.

Field names follow the public wire format (camelCase) through aliases.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cardquery.domain.translation import SearchFilters

COLOR_CODES = frozenset("WUBRGC")


class SearchFiltersSchema(BaseModel):
    """Optional structured filters; unknown keys are ignored."""

    format: Optional[str] = Field(
        None,
        max_length=32,
        pattern=r"^[A-Za-z]+$",
        description="Format legality, e.g. commander",
    )
    color_identity: list[str] = Field(
        default_factory=list,
        alias="colorIdentity",
        max_length=6,
        description="Color identity codes (W, U, B, R, G, C)",
    )

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("color_identity")
    @classmethod
    def _validate_colors(cls, v: list[str]) -> list[str]:
        colors = [c.strip().upper() for c in v]
        invalid = [c for c in colors if c not in COLOR_CODES]
        if invalid:
            msg = f"Unknown color code(s): {', '.join(invalid)}"
            raise ValueError(msg)
        return colors

    def to_domain(self) -> SearchFilters:
        return SearchFilters(
            format=self.format.lower() if self.format else None,
            color_identity=tuple(self.color_identity),
        )


class SearchRequest(BaseModel):
    """Request schema for translating a natural-language search."""

    query: str = Field(description="Natural-language card search")
    session_id: Optional[str] = Field(
        None,
        alias="sessionId",
        max_length=128,
        description="Client session, counted by the per-session rate limit",
    )
    filters: SearchFiltersSchema = Field(
        default_factory=SearchFiltersSchema,
        description="Optional structured filters",
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "query": "5 mana mono red creatures",
                "sessionId": "b5a1c0de",
                "filters": {"format": "commander", "colorIdentity": ["R"]},
            }
        },
    )


class ExplanationResponse(BaseModel):
    """How a translation was produced."""

    readable: str = Field(description="Human-readable summary of the compiled query")
    assumptions: list[str] = Field(description="Assumptions made while translating")
    confidence: float = Field(description="Confidence in the translation (0-1)")


class TranslationResponse(BaseModel):
    """Response schema for a translated search."""

    query: str = Field(description="The natural-language query as received")
    compiled_query: str = Field(
        alias="compiledQuery",
        description="Search syntax ready for the card database",
    )
    explanation: ExplanationResponse
    source: str = Field(description="rule, pipeline or fallback")
    cached: bool = Field(description="Whether the result came from the cache")
    warnings: list[str] = Field(description="Non-fatal issues found while translating")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "query": "5 mana mono red creatures",
                "compiledQuery": "t:creature mv=5 c=r id=r",
                "explanation": {
                    "readable": "Creatures with mana value 5 that are mono red",
                    "assumptions": [],
                    "confidence": 0.9,
                },
                "source": "pipeline",
                "cached": False,
                "warnings": [],
            }
        },
    )


class FallbackRequest(BaseModel):
    """Request schema for the rule-based fallback compiler."""

    query: str = Field(description="Natural-language card search")
    filters: SearchFiltersSchema = Field(default_factory=SearchFiltersSchema)

    model_config = ConfigDict(
        json_schema_extra={"example": {"query": "counterspells in blue"}},
    )


class FallbackResponse(BaseModel):
    """Response schema for a fallback translation."""

    query: str = Field(description="The natural-language query as received")
    compiled_query: str = Field(alias="compiledQuery", description="Compiled search")
    source: str = Field("fallback", description="Always fallback")

    model_config = ConfigDict(populate_by_name=True)
