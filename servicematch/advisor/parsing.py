#!/usr/bin/env python3
"""
Advisor Response Parsing - Merge LLM answers onto deterministic estimates.

Each parser takes the deterministic estimate for the same request and
replaces the fields the model answered. A reply missing its core numbers
raises AIParseError; optional lists and labels fall back to the estimate.
"""
import math
import re
from dataclasses import replace
from typing import Any, Dict, Optional

from servicematch.advisor.estimates import budget_assessment, risk_level
from servicematch.advisor.models import (
    RISK_LEVELS,
    CostEstimate,
    PricingAnalysis,
    ProjectAnalysis,
    SuccessPrediction,
)
from servicematch.exceptions import AIParseError
from servicematch.matcher.models import BudgetRange
from servicematch.scorer.models import SOURCE_AI
from servicematch.scorer.parsing import clamped_int, extract_json_object, number_field, string_list

PERCENT_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*%?\s*$")


def _cost_estimate(data: Dict[str, Any], key: str) -> CostEstimate:
    value = data.get(key)
    if not isinstance(value, dict):
        raise AIParseError(f"Missing {key} object")
    low = number_field(value, "min")
    high = number_field(value, "max")
    if low < 0 or high < low:
        raise AIParseError(f"Invalid {key}: min={low}, max={high}")
    return CostEstimate(low, high, str(value.get("currency") or "PHP"))


def _optional_score(data: Dict[str, Any], key: str, default: Optional[int]) -> Optional[int]:
    if data.get(key) is None:
        return default
    return clamped_int(number_field(data, key))


def _text(data: Dict[str, Any], key: str, default: str) -> str:
    value = data.get(key)
    return str(value).strip() if value else default


def _percentages(value: Any) -> Dict[str, int]:
    """{"materials": "60%", ...} -> {"materials": 60, ...}; unusable entries dropped."""
    if not isinstance(value, dict):
        return {}
    breakdown = {}
    for name, raw in value.items():
        if isinstance(raw, dict):
            raw = raw.get("percentage")
        if isinstance(raw, bool):
            continue
        if isinstance(raw, (int, float)) and math.isfinite(raw):
            breakdown[str(name)] = clamped_int(raw)
            continue
        match = PERCENT_PATTERN.match(str(raw or ""))
        if match:
            breakdown[str(name)] = clamped_int(float(match.group(1)))
    return breakdown


def parse_project_analysis(text: str, estimate: ProjectAnalysis) -> ProjectAnalysis:
    """
    complexityScore (clamped to 1..10) and estimatedCost are required.

    Raises:
        AIParseError: Missing/malformed JSON or unusable core fields
    """
    data = extract_json_object(text)
    complexity = int(round(max(1.0, min(10.0, number_field(data, "complexityScore")))))
    cost = _cost_estimate(data, "estimatedCost")

    services = string_list(data.get("detectedServices"))
    return replace(
        estimate,
        category=_text(data, "category", estimate.category),
        detected_services=tuple(s.lower() for s in services) or estimate.detected_services,
        complexity_score=complexity,
        estimated_cost=cost,
        timeframe=_text(data, "timeframe", estimate.timeframe),
        required_skills=string_list(data.get("requiredSkills")),
        risk_factors=string_list(data.get("riskFactors")) or estimate.risk_factors,
        material_requirements=string_list(data.get("materialRequirements")),
        permit_requirements=string_list(data.get("permitRequirements")),
        source=SOURCE_AI,
    )


def parse_success_prediction(text: str, estimate: SuccessPrediction) -> SuccessPrediction:
    """
    successProbability is required and clamped; riskLevel is derived from
    it unless the model gave a valid one.

    Raises:
        AIParseError: Missing/malformed JSON or no successProbability
    """
    data = extract_json_object(text)
    probability = clamped_int(number_field(data, "successProbability"))

    level = str(data.get("riskLevel") or "").strip().lower()
    if level not in RISK_LEVELS:
        level = risk_level(probability)

    return replace(
        estimate,
        success_probability=probability,
        risk_level=level,
        key_success_factors=string_list(data.get("keySuccessFactors")) or estimate.key_success_factors,
        potential_challenges=string_list(data.get("potentialChallenges")) or estimate.potential_challenges,
        recommendations=string_list(data.get("recommendations")) or estimate.recommendations,
        timeline_reliability=_optional_score(data, "timelineReliability", estimate.timeline_reliability),
        quality_expectation=_optional_score(data, "qualityExpectation", estimate.quality_expectation),
        budget_accuracy=_optional_score(data, "budgetAccuracy", estimate.budget_accuracy),
        source=SOURCE_AI,
    )


def parse_pricing_analysis(
    text: str,
    estimate: PricingAnalysis,
    budget: Optional[BudgetRange] = None
) -> PricingAnalysis:
    """
    fairPriceRange is required. The budget assessment is recomputed against
    the model's range; market context always comes from the estimate.

    Raises:
        AIParseError: Missing/malformed JSON or unusable fairPriceRange
    """
    data = extract_json_object(text)
    fair = _cost_estimate(data, "fairPriceRange")

    if data.get("marketAverage") is None:
        average = fair.midpoint
    else:
        average = number_field(data, "marketAverage")

    return replace(
        estimate,
        fair_price_range=fair,
        market_average=round(max(average, 0.0), 2),
        budget_breakdown=_percentages(data.get("budgetBreakdown")) or dict(estimate.budget_breakdown),
        budget_assessment=budget_assessment(budget, fair),
        pricing_factors=string_list(data.get("pricingFactors")) or estimate.pricing_factors,
        negotiation_tips=string_list(data.get("negotiationTips")) or estimate.negotiation_tips,
        red_flags=string_list(data.get("redFlags")) or estimate.red_flags,
        best_value=_text(data, "bestValue", estimate.best_value),
        source=SOURCE_AI,
    )
