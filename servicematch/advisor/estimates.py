#!/usr/bin/env python3
"""
Advisor Estimates - Catalog-backed project analysis, success prediction and
pricing.

These are the deterministic answers the advisor returns when no LLM is
configured or the LLM call fails. They are also the base the AI answers are
merged onto, so a partial LLM reply still yields a complete result.
"""
import logging
from typing import List, Optional, Sequence, Tuple

from servicematch.advisor.models import (
    BudgetAssessment,
    CostEstimate,
    PricingAnalysis,
    ProjectAnalysis,
    RiskLevel,
    SuccessPrediction,
)
from servicematch.catalog import FALLBACK_CATEGORY, ServiceCatalog
from servicematch.matcher.models import BudgetRange, JobSpecification, ProviderRecord
from servicematch.scorer.models import MatchResult

logger = logging.getLogger(__name__)

DEFAULT_COST_RANGE = (50000.0, 150000.0)
DEFAULT_PRICE_RANGE = (50000.0, 200000.0)
DEFAULT_BUDGET_BREAKDOWN = {"materials": 60, "labor": 30, "permits": 5, "contingency": 5}

HIGH_COMPLEXITY = 7
DETAILED_DESCRIPTION_CHARS = 50
EXPERIENCED_YEARS = 5
ESTABLISHED_REVIEW_COUNT = 10

ALL_MUNICIPALITIES = "Bataan Province"
ALL_CATEGORIES = "All Categories"

NEGOTIATION_TIPS = (
    "Compare at least three quotes",
    "Agree on scope and materials in writing",
    "Tie payments to completed milestones",
)
RED_FLAGS = (
    "Quotes far below the fair price range",
    "Full payment requested before work starts",
    "No written scope or receipt",
)


def resolve_category(job: JobSpecification, catalog: ServiceCatalog) -> str:
    if job.category:
        return job.category
    return catalog.detect_categories(job.description)[0]


def timeframe_for(complexity: int) -> str:
    if complexity <= 3:
        return "1-3 days"
    if complexity <= 6:
        return "1-2 weeks"
    return "2-4 weeks"


def risk_level(success_probability: int) -> RiskLevel:
    if success_probability >= 75:
        return "low"
    if success_probability >= 50:
        return "medium"
    return "high"


def analysis_confidence(job: JobSpecification) -> float:
    """More detail in the request means more confidence in the analysis."""
    confidence = 0.5
    if len(job.description or "") > DETAILED_DESCRIPTION_CHARS:
        confidence += 0.2
    if job.budget_range is not None:
        confidence += 0.1
    if job.category:
        confidence += 0.1
    if job.location is not None:
        confidence += 0.1
    return round(min(confidence, 1.0), 2)


def prediction_confidence(provider: ProviderRecord, job: JobSpecification) -> float:
    confidence = 0.6
    if provider.rating.count > ESTABLISHED_REVIEW_COUNT:
        confidence += 0.1
    if provider.is_verified:
        confidence += 0.1
    if provider.years_experience > EXPERIENCED_YEARS:
        confidence += 0.1
    if job.complexity_score < HIGH_COMPLEXITY:
        confidence += 0.1
    return round(min(confidence, 1.0), 2)


def budget_assessment(budget: Optional[BudgetRange], fair: CostEstimate) -> Optional[BudgetAssessment]:
    """Where the client's budget midpoint sits against the fair range."""
    if budget is None:
        return None
    if budget.midpoint < fair.min:
        return "below_market"
    if budget.midpoint > fair.max:
        return "above_market"
    return "within_market"


def project_risks(job: JobSpecification, cost: CostEstimate) -> Tuple[str, ...]:
    risks: List[str] = []
    if job.complexity_score >= HIGH_COMPLEXITY:
        risks.append("High complexity work")
    if job.urgency in ("high", "emergency"):
        risks.append("Tight timeline")
    if job.budget_range is None:
        risks.append("Budget not specified")
    elif job.budget_range.max < cost.min:
        risks.append("Budget below typical cost range")
    return tuple(risks)


def analyze_project(job: JobSpecification, catalog: ServiceCatalog) -> ProjectAnalysis:
    """
    Deterministic project analysis.

    The category is the job's own, or the first one detected from the
    description. Cost comes from the category's catalog range.
    """
    category = resolve_category(job, catalog)
    cost_range = catalog.cost_range_for(category)
    if not cost_range or cost_range[1] <= 0:
        cost_range = DEFAULT_COST_RANGE
    cost = CostEstimate(*cost_range)

    return ProjectAnalysis(
        category=category,
        detected_services=catalog.infer_services(job),
        complexity_score=job.complexity_score,
        estimated_cost=cost,
        timeframe=timeframe_for(job.complexity_score),
        risk_factors=project_risks(job, cost),
        confidence=analysis_confidence(job),
    )


def predict_success(provider: ProviderRecord, job: JobSpecification, score: MatchResult) -> SuccessPrediction:
    """Success prediction derived from a deterministic match score."""
    level = risk_level(score.success_probability)
    recommendations: List[str] = []
    if level == "high":
        recommendations.append("Agree on milestones and inspect work at each stage")
    if not provider.is_verified:
        recommendations.append("Ask for proof of completed similar work")
    if job.budget_range is None:
        recommendations.append("Get a written quote before work starts")
    recommendations.append("Monitor progress regularly")

    return SuccessPrediction(
        provider_id=provider.provider_id,
        success_probability=score.success_probability,
        risk_level=level,
        key_success_factors=score.reasons,
        potential_challenges=score.concerns,
        recommendations=tuple(recommendations),
        timeline_reliability=score.component_scores.urgency_fit,
        quality_expectation=score.component_scores.reliability,
        budget_accuracy=score.component_scores.value,
        confidence=prediction_confidence(provider, job),
    )


def _same(a: Optional[str], b: Optional[str]) -> bool:
    return bool(a) and bool(b) and a.strip().lower() == b.strip().lower()


def market_providers(
    providers: Sequence[ProviderRecord],
    municipality: Optional[str] = None,
    category: Optional[str] = None
) -> List[ProviderRecord]:
    """Providers in the given municipality and category; None matches all."""
    return [
        p for p in providers
        if (not municipality or _same(p.municipality, municipality))
        and (not category or _same(p.category, category))
    ]


def pricing_market(
    job: JobSpecification,
    providers: Sequence[ProviderRecord],
    catalog: ServiceCatalog,
    municipality: Optional[str] = None,
    category: Optional[str] = None
) -> Tuple[Optional[str], List[ProviderRecord]]:
    """The market category (None for all) and the providers in that market."""
    category = category or resolve_category(job, catalog)
    if category == FALLBACK_CATEGORY:
        category = None
    return category, market_providers(providers, municipality, category)


def analyze_pricing(
    job: JobSpecification,
    providers: Sequence[ProviderRecord],
    catalog: ServiceCatalog,
    municipality: Optional[str] = None,
    category: Optional[str] = None
) -> PricingAnalysis:
    """
    Deterministic pricing analysis for a job.

    Args:
        job: The job being priced
        providers: Whole provider pool; narrowed to the market here
        catalog: Source of typical category cost ranges
        municipality: Market municipality; all of Bataan when None
        category: Market category; the job's category when None
    """
    category, market = pricing_market(job, providers, catalog, municipality, category)
    priced = [p.price_range for p in market if p.price_range is not None]

    typical = catalog.cost_range_for(category)
    if typical and typical[1] > 0:
        fair = CostEstimate(*typical)
    elif priced:
        fair = CostEstimate(min(r.min for r in priced), max(r.max for r in priced))
    else:
        fair = CostEstimate(*DEFAULT_PRICE_RANGE)

    if priced:
        average = sum(r.midpoint for r in priced) / len(priced)
    else:
        average = fair.midpoint
    logger.debug(f"Pricing {category or ALL_CATEGORIES}: {len(market)} market providers, {len(priced)} with prices")

    factors = [f"Complexity {job.complexity_score}/10"]
    if job.urgency in ("high", "emergency"):
        factors.append("Urgent scheduling")
    factors.append(f"{len(priced)} local providers with published prices")

    return PricingAnalysis(
        fair_price_range=fair,
        market_average=round(average, 2),
        budget_breakdown=dict(DEFAULT_BUDGET_BREAKDOWN),
        budget_assessment=budget_assessment(job.budget_range, fair),
        pricing_factors=tuple(factors),
        negotiation_tips=NEGOTIATION_TIPS,
        red_flags=RED_FLAGS,
        best_value="Verified providers quoting near the middle of the fair range",
        market_context={
            "analyzedProviders": len(market),
            "location": municipality or ALL_MUNICIPALITIES,
            "category": category or ALL_CATEGORIES,
        },
    )
