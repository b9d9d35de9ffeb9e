#!/usr/bin/env python3
"""
Advisor endpoints - project analysis, success prediction and pricing.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from servicematch.app_context import AppContext
from servicematch.directory import ProviderDirectory
from .matching import CLIENT_CLOSED_REQUEST, run_until_disconnect
from ..dependencies import get_app_context, get_provider_directory
from ..models.requests import AnalyzePricingRequest, AnalyzeProjectRequest, PredictSuccessRequest
from ..models.responses import (
    PricingAnalysisResponse,
    ProjectAnalysisResponse,
    ProviderSummary,
    SuccessPredictionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/matching", tags=["advisor"])

MIN_DESCRIPTION_CHARS = 10


@router.post("/analyze-project", response_model=ProjectAnalysisResponse)
async def analyze_project(
    body: AnalyzeProjectRequest,
    request: Request,
    ctx: AppContext = Depends(get_app_context)
):
    """
    Analyze a job description: category, services, complexity, cost and
    timeframe.

    Returns 400 when the description is shorter than 10 characters.
    """
    if len(body.job.description.strip()) < MIN_DESCRIPTION_CHARS:
        raise HTTPException(
            status_code=400,
            detail=f"Project description must be at least {MIN_DESCRIPTION_CHARS} characters"
        )

    job = body.job.to_domain(ctx.catalog, ctx.config.matching.default_search_radius_km)
    analysis = await run_until_disconnect(request, ctx.advisor.analyze_project(job))
    if analysis is None:
        return JSONResponse(status_code=CLIENT_CLOSED_REQUEST, content=None)
    return ProjectAnalysisResponse.model_validate({"analysis": analysis.to_dict()})


@router.post("/predict-success", response_model=SuccessPredictionResponse)
async def predict_success(
    body: PredictSuccessRequest,
    ctx: AppContext = Depends(get_app_context),
    directory: ProviderDirectory = Depends(get_provider_directory)
):
    """
    Predict how one provider will do on a job.

    Returns 404 when the provider id is unknown.
    """
    job = body.job.to_domain(ctx.catalog, ctx.config.matching.default_search_radius_km)
    prediction = await ctx.advisor.predict_success(body.provider_id, job)
    provider = directory.get(body.provider_id)
    return SuccessPredictionResponse(
        prediction=prediction.to_dict(),
        provider=ProviderSummary.from_record(provider) if provider else None,
    )


@router.post("/analyze-pricing", response_model=PricingAnalysisResponse)
async def analyze_pricing(
    body: AnalyzePricingRequest,
    ctx: AppContext = Depends(get_app_context),
    directory: ProviderDirectory = Depends(get_provider_directory)
):
    """
    Fair price range for a job against directory providers, optionally
    narrowed to one municipality or category.
    """
    job = body.job.to_domain(ctx.catalog, ctx.config.matching.default_search_radius_km)
    market_filters = body.market_filters
    pricing = await ctx.advisor.analyze_pricing(
        job,
        directory.all(),
        municipality=market_filters.municipality if market_filters else None,
        category=market_filters.category if market_filters else None,
    )
    return PricingAnalysisResponse.model_validate({"pricing": pricing.to_dict()})
