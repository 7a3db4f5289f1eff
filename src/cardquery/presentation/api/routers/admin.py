"""Admin router for maintenance tasks."""

import logging

from fastapi import APIRouter, Depends

from cardquery.infrastructure.cache import SingleFlight, TieredResultCache
from cardquery.presentation.api.dependencies import (
    DBSession,
    FeedbackProcessorDep,
    PatternMinerDep,
    get_result_cache,
    get_single_flight,
)
from cardquery.presentation.api.schemas.admin import (
    CacheStatsResponse,
    CacheTierStatsResponse,
    MiningReportResponse,
    SweepResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/patterns/mine",
    summary="Mine frequent translations into rules",
    responses={200: {"description": "Mining report"}},
)
async def mine_patterns(
    miner: PatternMinerDep,
    session: DBSession,
) -> MiningReportResponse:
    """
    Promote frequently served high-confidence translations to rules.

    Patterns already covered by a rule are skipped. Each candidate is
    live-validated when validation is enabled.
    """
    report = await miner.run()
    await session.commit()
    logger.info(
        "Pattern mining: %d analyzed, %d created",
        report.analyzed,
        report.created_count,
    )
    return MiningReportResponse(
        analyzed=report.analyzed,
        candidates=report.candidates,
        created=list(report.created),
        rejected=list(report.rejected),
    )


@router.post(
    "/feedback/sweep",
    summary="Reclaim stale feedback items",
    responses={200: {"description": "Number of items reclaimed"}},
)
async def sweep_feedback(
    processor: FeedbackProcessorDep,
    session: DBSession,
) -> SweepResponse:
    """Move items stuck in ``processing`` past the stale age to ``failed``."""
    reclaimed = await processor.sweep_stale()
    await session.commit()
    return SweepResponse(reclaimed=reclaimed)


@router.get(
    "/cache/stats",
    summary="Result cache statistics",
    responses={200: {"description": "Per-tier cache counters"}},
)
async def cache_stats(
    cache: TieredResultCache = Depends(get_result_cache),
    single_flight: SingleFlight = Depends(get_single_flight),
) -> CacheStatsResponse:
    """Entry counts, hits, misses and evictions for each cache tier."""
    tiers = [
        CacheTierStatsResponse(
            tier=stats.tier,
            entries=stats.entries,
            hits=stats.hits,
            misses=stats.misses,
            evictions=stats.evictions,
            hit_rate=stats.hit_rate,
        )
        for stats in await cache.stats()
    ]
    return CacheStatsResponse(tiers=tiers, collapsed=single_flight.collapsed)
