#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional

from servicematch.matcher.models import ProviderRecord


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProviderSummary(ApiModel):
    """Public view of the provider behind a match."""
    provider_id: str
    business_name: Optional[str] = None
    category: str
    municipality: Optional[str] = None
    rating: float = 0.0
    review_count: int = 0
    years_experience: int = 0
    verified: bool = False
    badges: List[str] = Field(default_factory=list)

    @classmethod
    def from_record(cls, provider: ProviderRecord) -> "ProviderSummary":
        return cls(
            provider_id=provider.provider_id,
            business_name=provider.business_name,
            category=provider.category,
            municipality=provider.municipality,
            rating=provider.rating.average,
            review_count=provider.rating.count,
            years_experience=provider.years_experience,
            verified=provider.is_verified,
            badges=sorted(provider.badges),
        )


class ComponentScoresModel(ApiModel):
    skill_match: int = Field(ge=0, le=100)
    experience: int = Field(ge=0, le=100)
    reliability: int = Field(ge=0, le=100)
    value: int = Field(ge=0, le=100)
    location_advantage: int = Field(ge=0, le=100)
    urgency_fit: int = Field(ge=0, le=100)


class MatchResultModel(ApiModel):
    """Score of one provider for the job."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "providerId": "prov-001",
                "overallScore": 91,
                "componentScores": {
                    "skillMatch": 100, "experience": 100, "reliability": 96,
                    "value": 50, "locationAdvantage": 97, "urgencyFit": 70
                },
                "reasons": ["Strong service match", "Experienced provider", "High rating", "Local provider"],
                "concerns": [],
                "recommendation": "highly_recommended",
                "source": "deterministic_fallback",
                "matchReason": "Dela Cruz Plumbing is a Plumbing provider whose strongest factor is service match.",
                "successProbability": 91
            }
        }
    )

    provider_id: str
    overall_score: int = Field(ge=0, le=100)
    component_scores: ComponentScoresModel
    reasons: List[str] = Field(default_factory=list)
    concerns: List[str] = Field(default_factory=list)
    recommendation: str
    source: str
    match_reason: str = ""
    success_probability: int = Field(ge=0, le=100)
    details: Dict[str, Any] = Field(default_factory=dict)
    provider: Optional[ProviderSummary] = None


class InsightsModel(ApiModel):
    average_score: int
    market_health: str
    summary: str
    top_recommendation: Optional[str] = None
    insights: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)


class FindMatchesResponse(ApiModel):
    """Ranked matches for a job."""
    success: bool = True
    job_id: Optional[str] = None
    matches: List[MatchResultModel] = Field(default_factory=list)
    insights: InsightsModel
    total_analyzed: int = 0
    total_candidates: int = 0
    qualified_count: int = 0


class ScoreProviderResponse(ApiModel):
    success: bool = True
    match: MatchResultModel


class MarketOverviewModel(ApiModel):
    total_providers: int
    verified_providers: int
    average_rating: float
    categories: int
    municipalities: int
    competition_level: str


class MarketInsightsResponse(ApiModel):
    success: bool = True
    overview: MarketOverviewModel


class CostEstimateModel(ApiModel):
    min: float = Field(ge=0)
    max: float = Field(ge=0)
    currency: str = "PHP"


class ProjectAnalysisModel(ApiModel):
    category: str
    detected_services: List[str] = Field(default_factory=list)
    complexity_score: int = Field(ge=1, le=10)
    estimated_cost: Optional[CostEstimateModel] = None
    timeframe: str = ""
    required_skills: List[str] = Field(default_factory=list)
    risk_factors: List[str] = Field(default_factory=list)
    material_requirements: List[str] = Field(default_factory=list)
    permit_requirements: List[str] = Field(default_factory=list)
    confidence: float = Field(ge=0, le=1)
    source: str


class ProjectAnalysisResponse(ApiModel):
    success: bool = True
    analysis: ProjectAnalysisModel


class SuccessPredictionModel(ApiModel):
    provider_id: str
    success_probability: int = Field(ge=0, le=100)
    risk_level: str
    key_success_factors: List[str] = Field(default_factory=list)
    potential_challenges: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    timeline_reliability: Optional[int] = Field(None, ge=0, le=100)
    quality_expectation: Optional[int] = Field(None, ge=0, le=100)
    budget_accuracy: Optional[int] = Field(None, ge=0, le=100)
    confidence: float = Field(ge=0, le=1)
    source: str


class SuccessPredictionResponse(ApiModel):
    success: bool = True
    prediction: SuccessPredictionModel
    provider: Optional[ProviderSummary] = None


class MarketContextModel(ApiModel):
    analyzed_providers: int
    location: str
    category: str


class PricingAnalysisModel(ApiModel):
    fair_price_range: CostEstimateModel
    market_average: float
    budget_breakdown: Dict[str, int] = Field(default_factory=dict)
    budget_assessment: Optional[str] = None
    pricing_factors: List[str] = Field(default_factory=list)
    negotiation_tips: List[str] = Field(default_factory=list)
    red_flags: List[str] = Field(default_factory=list)
    best_value: str = ""
    market_context: MarketContextModel
    source: str


class PricingAnalysisResponse(ApiModel):
    success: bool = True
    pricing: PricingAnalysisModel
