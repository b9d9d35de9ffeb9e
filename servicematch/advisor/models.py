#!/usr/bin/env python3
"""
Advisor Models - Project analysis, success prediction and pricing results.

Every result carries its source, like MatchResult: "ai" when the LLM
answered, "deterministic_fallback" when the catalog-backed estimate was
used instead.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Tuple

from servicematch.scorer.models import SOURCE_FALLBACK, ScoreSource

RiskLevel = Literal["low", "medium", "high"]
BudgetAssessment = Literal["below_market", "within_market", "above_market"]

RISK_LEVELS = ("low", "medium", "high")


@dataclass(frozen=True)
class CostEstimate:
    min: float
    max: float
    currency: str = "PHP"

    @property
    def midpoint(self) -> float:
        return (self.min + self.max) / 2.0

    def to_dict(self) -> Dict[str, Any]:
        return {"min": self.min, "max": self.max, "currency": self.currency}


@dataclass(frozen=True)
class ProjectAnalysis:
    """What a job description asks for, and roughly what it costs."""
    category: str
    detected_services: Tuple[str, ...] = ()
    complexity_score: int = 5
    estimated_cost: Optional[CostEstimate] = None
    timeframe: str = ""
    required_skills: Tuple[str, ...] = ()
    risk_factors: Tuple[str, ...] = ()
    material_requirements: Tuple[str, ...] = ()
    permit_requirements: Tuple[str, ...] = ()
    confidence: float = 0.5
    source: ScoreSource = SOURCE_FALLBACK

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "detectedServices": list(self.detected_services),
            "complexityScore": self.complexity_score,
            "estimatedCost": self.estimated_cost.to_dict() if self.estimated_cost else None,
            "timeframe": self.timeframe,
            "requiredSkills": list(self.required_skills),
            "riskFactors": list(self.risk_factors),
            "materialRequirements": list(self.material_requirements),
            "permitRequirements": list(self.permit_requirements),
            "confidence": self.confidence,
            "source": self.source,
        }


@dataclass(frozen=True)
class SuccessPrediction:
    """Likelihood that one provider completes one job well."""
    provider_id: str
    success_probability: int
    risk_level: RiskLevel
    key_success_factors: Tuple[str, ...] = ()
    potential_challenges: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()
    timeline_reliability: Optional[int] = None
    quality_expectation: Optional[int] = None
    budget_accuracy: Optional[int] = None
    confidence: float = 0.6
    source: ScoreSource = SOURCE_FALLBACK

    def to_dict(self) -> Dict[str, Any]:
        return {
            "providerId": self.provider_id,
            "successProbability": self.success_probability,
            "riskLevel": self.risk_level,
            "keySuccessFactors": list(self.key_success_factors),
            "potentialChallenges": list(self.potential_challenges),
            "recommendations": list(self.recommendations),
            "timelineReliability": self.timeline_reliability,
            "qualityExpectation": self.quality_expectation,
            "budgetAccuracy": self.budget_accuracy,
            "confidence": self.confidence,
            "source": self.source,
        }


@dataclass(frozen=True)
class PricingAnalysis:
    """Fair price range for a job against the local provider market."""
    fair_price_range: CostEstimate
    market_average: float
    budget_breakdown: Dict[str, int] = field(default_factory=dict)
    budget_assessment: Optional[BudgetAssessment] = None
    pricing_factors: Tuple[str, ...] = ()
    negotiation_tips: Tuple[str, ...] = ()
    red_flags: Tuple[str, ...] = ()
    best_value: str = ""
    market_context: Dict[str, Any] = field(default_factory=dict)
    source: ScoreSource = SOURCE_FALLBACK

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fairPriceRange": self.fair_price_range.to_dict(),
            "marketAverage": self.market_average,
            "budgetBreakdown": dict(self.budget_breakdown),
            "budgetAssessment": self.budget_assessment,
            "pricingFactors": list(self.pricing_factors),
            "negotiationTips": list(self.negotiation_tips),
            "redFlags": list(self.red_flags),
            "bestValue": self.best_value,
            "marketContext": dict(self.market_context),
            "source": self.source,
        }
