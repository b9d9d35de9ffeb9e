#!/usr/bin/env python3
"""
Scoring Models - Data structures for scoring results.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Tuple

Recommendation = Literal["highly_recommended", "recommended", "consider", "not_recommended"]
ScoreSource = Literal["ai", "deterministic_fallback"]

HIGHLY_RECOMMENDED = "highly_recommended"
RECOMMENDED = "recommended"
CONSIDER = "consider"
NOT_RECOMMENDED = "not_recommended"

SOURCE_AI = "ai"
SOURCE_FALLBACK = "deterministic_fallback"

# (minimum overall score, recommendation), checked in order
RECOMMENDATION_THRESHOLDS = (
    (80, HIGHLY_RECOMMENDED),
    (60, RECOMMENDED),
    (40, CONSIDER),
)


def recommendation_for_score(overall_score: float) -> Recommendation:
    """Map an overall score to its recommendation label."""
    for threshold, label in RECOMMENDATION_THRESHOLDS:
        if overall_score >= threshold:
            return label
    return NOT_RECOMMENDED


@dataclass(frozen=True)
class ComponentScores:
    """Per-factor scores, each an int in 0..100."""
    skill_match: int = 0
    experience: int = 0
    reliability: int = 0
    value: int = 0
    location_advantage: int = 0
    urgency_fit: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "skillMatch": self.skill_match,
            "experience": self.experience,
            "reliability": self.reliability,
            "value": self.value,
            "locationAdvantage": self.location_advantage,
            "urgencyFit": self.urgency_fit,
        }


@dataclass(frozen=True)
class MatchResult:
    """Score of one (job, provider) pair."""
    provider_id: str
    overall_score: int
    component_scores: ComponentScores
    reasons: Tuple[str, ...] = ()
    concerns: Tuple[str, ...] = ()
    recommendation: Recommendation = NOT_RECOMMENDED
    source: ScoreSource = SOURCE_FALLBACK
    match_reason: str = ""
    success_probability: int = 0
    details: Dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        expected = recommendation_for_score(self.overall_score)
        if self.recommendation != expected:
            # frozen dataclass: the label is derived, never trusted from input
            object.__setattr__(self, "recommendation", expected)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "providerId": self.provider_id,
            "overallScore": self.overall_score,
            "componentScores": self.component_scores.to_dict(),
            "reasons": list(self.reasons),
            "concerns": list(self.concerns),
            "recommendation": self.recommendation,
            "source": self.source,
            "matchReason": self.match_reason,
            "successProbability": self.success_probability,
        }
        if self.details:
            data["details"] = dict(self.details)
        return data
