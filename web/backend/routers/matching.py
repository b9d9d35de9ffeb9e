#!/usr/bin/env python3
"""
Matching endpoints - rank providers for a job and score single providers.
"""

import asyncio
import logging
from typing import Awaitable, Optional, TypeVar

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from servicematch.app_context import AppContext
from servicematch.directory import ProviderDirectory
from servicematch.scorer.models import MatchResult
from ..dependencies import get_app_context, get_provider_directory
from ..models.requests import FindMatchesRequest, ScoreProviderRequest
from ..models.responses import (
    FindMatchesResponse,
    MarketInsightsResponse,
    MatchResultModel,
    ProviderSummary,
    ScoreProviderResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/matching", tags=["matching"])

# Status used by proxies for "client closed request"
CLIENT_CLOSED_REQUEST = 499
DISCONNECT_POLL_SECONDS = 0.25

T = TypeVar("T")


async def _wait_for_disconnect(request: Request) -> None:
    while not await request.is_disconnected():
        await asyncio.sleep(DISCONNECT_POLL_SECONDS)


async def run_until_disconnect(request: Request, work: Awaitable[T]) -> Optional[T]:
    """
    Await work, cancelling it if the client goes away first.

    Returns:
        The result of work, or None when the client disconnected.
    """
    work_task = asyncio.ensure_future(work)
    watch_task = asyncio.ensure_future(_wait_for_disconnect(request))
    try:
        done, _ = await asyncio.wait({work_task, watch_task}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        work_task.cancel()
        raise
    finally:
        watch_task.cancel()

    if work_task in done:
        return work_task.result()

    work_task.cancel()
    logger.info(f"Client disconnected from {request.url.path}; matching cancelled")
    return None


def _match_model(result: MatchResult, directory: ProviderDirectory) -> MatchResultModel:
    model = MatchResultModel.model_validate(result.to_dict())
    provider = directory.get(result.provider_id)
    if provider is not None:
        model.provider = ProviderSummary.from_record(provider)
    return model


@router.post("/find-matches", response_model=FindMatchesResponse)
async def find_matches(
    body: FindMatchesRequest,
    request: Request,
    ctx: AppContext = Depends(get_app_context),
    directory: ProviderDirectory = Depends(get_provider_directory)
):
    """
    Rank directory providers for a job.

    Providers are filtered by category and distance, scored (AI when
    configured, deterministic otherwise), and the qualified ones are
    returned best first with summary insights.
    """
    job = body.job.to_domain(ctx.catalog, ctx.config.matching.default_search_radius_km)
    filters = body.filters.to_domain() if body.filters else None
    preferences = body.preferences.to_domain() if body.preferences else None

    match_set = await run_until_disconnect(
        request,
        ctx.orchestrator.find_matches(job, directory.all(), filters, preferences)
    )
    if match_set is None:
        return JSONResponse(status_code=CLIENT_CLOSED_REQUEST, content=None)

    data = match_set.to_dict()
    data["matches"] = [_match_model(m, directory) for m in match_set.matches]
    return FindMatchesResponse.model_validate(data)


@router.post("/score-provider", response_model=ScoreProviderResponse)
async def score_provider(
    body: ScoreProviderRequest,
    ctx: AppContext = Depends(get_app_context),
    directory: ProviderDirectory = Depends(get_provider_directory)
):
    """
    Score a single provider for a job, bypassing candidate filtering.

    Returns 404 when the provider id is unknown.
    """
    job = body.job.to_domain(ctx.catalog, ctx.config.matching.default_search_radius_km)
    result = await ctx.orchestrator.score_single_provider(body.provider_id, job)
    return ScoreProviderResponse(match=_match_model(result, directory))


@router.get("/insights", response_model=MarketInsightsResponse)
def get_market_insights(
    ctx: AppContext = Depends(get_app_context),
    directory: ProviderDirectory = Depends(get_provider_directory)
):
    """Market overview of the provider directory."""
    overview = ctx.orchestrator.market_overview(directory.all())
    return MarketInsightsResponse.model_validate({"overview": overview})
