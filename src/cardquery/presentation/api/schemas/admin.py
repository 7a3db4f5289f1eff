"""Admin schemas for maintenance endpoints."""

from pydantic import BaseModel, Field


class MiningReportResponse(BaseModel):
    """Result of one pattern mining run."""

    analyzed: int = Field(description="Translation log entries examined")
    candidates: int = Field(description="Frequent unseen patterns found")
    created: list[str] = Field(description="Patterns promoted to rules")
    rejected: list[str] = Field(description="Patterns rejected by live validation")


class SweepResponse(BaseModel):
    """Result of reclaiming stale feedback items."""

    reclaimed: int = Field(description="Items moved from processing to failed")


class CacheTierStatsResponse(BaseModel):
    """Counters for one cache tier."""

    tier: str
    entries: int
    hits: int
    misses: int
    evictions: int
    hit_rate: float = Field(description="Hits over lookups (0 when unused)")


class CacheStatsResponse(BaseModel):
    """Result cache statistics across tiers."""

    tiers: list[CacheTierStatsResponse]
    collapsed: int = Field(description="Requests that joined an in-flight translation")
