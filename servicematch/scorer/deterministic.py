#!/usr/bin/env python3
"""
Deterministic Scorer - Formula-based provider scoring.

Used on its own when no LLM is configured, and as the per-provider
fallback whenever AI scoring fails. Identical inputs always give
identical results.

Overall = weighted sum of:
- skill_match (default 40%)
- experience/reliability blend (default 20%)
- value for budget (default 10%)
- location advantage (default 20%)
- urgency fit (default 10%)
"""

from typing import List, Optional, Tuple
import logging

from servicematch.catalog import ServiceCatalog
from servicematch.config_loader import ScoringWeights
from servicematch.matcher.models import JobSpecification, ProviderRecord
from servicematch.scorer import components
from servicematch.scorer.interfaces import Scorer
from servicematch.scorer.models import SOURCE_FALLBACK, ComponentScores, MatchResult

logger = logging.getLogger(__name__)

STRONG_COMPONENT = 75
WEAK_COMPONENT = 40
LOW_COMPLETION_RATE = 70.0

COMPONENT_REASONS = {
    "skill_match": "Strong service match",
    "experience": "Experienced provider",
    "reliability": "High rating",
    "value": "Good value for budget",
    "location_advantage": "Local provider",
    "urgency_fit": "Available for urgent work",
}

COMPONENT_CONCERNS = {
    "skill_match": "Limited service match",
    "experience": "Limited experience",
    "reliability": "Low or unproven rating",
    "value": "Likely above budget",
    "location_advantage": "Far from job location",
    "urgency_fit": "May not meet urgency",
}

COMPONENT_LABELS = {
    "skill_match": "service match",
    "experience": "experience",
    "reliability": "track record",
    "value": "value for budget",
    "location_advantage": "proximity",
    "urgency_fit": "availability",
}


def _success_probability(overall: int, completion_rate: Optional[float]) -> int:
    if completion_rate is None:
        return overall
    completion = components.clamp_score(completion_rate)
    return int(round(0.7 * overall + 0.3 * completion))


def _reasons_and_concerns(
    provider: ProviderRecord,
    scores: ComponentScores
) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    reasons: List[str] = []
    concerns: List[str] = []
    for name in COMPONENT_REASONS:
        value = getattr(scores, name)
        if value > STRONG_COMPONENT:
            reasons.append(COMPONENT_REASONS[name])
        elif value < WEAK_COMPONENT:
            concerns.append(COMPONENT_CONCERNS[name])

    if provider.is_verified:
        reasons.append("Verified")
    if provider.completion_rate is not None and provider.completion_rate < LOW_COMPLETION_RATE:
        concerns.append("Low completion rate")
    return tuple(reasons), tuple(concerns)


def _match_reason(provider: ProviderRecord, scores: ComponentScores) -> str:
    # Ties resolve to the first component in declaration order
    best = max(COMPONENT_LABELS, key=lambda name: getattr(scores, name))
    name = provider.business_name or provider.provider_id
    return f"{name} is a {provider.category} provider whose strongest factor is {COMPONENT_LABELS[best]}."


class DeterministicScorer(Scorer):
    """
    Pure formula scorer.

    Args:
        weights: Component weights in percent (validated to sum to 100)
        catalog: Service catalog used to infer a job's service keywords
    """

    def __init__(self, weights: Optional[ScoringWeights] = None, catalog: Optional[ServiceCatalog] = None):
        self.weights = weights or ScoringWeights()
        self.catalog = catalog or ServiceCatalog.load()

    def component_scores(self, provider: ProviderRecord, job: JobSpecification) -> ComponentScores:
        job_services = self.catalog.infer_services(job)
        return ComponentScores(
            skill_match=int(round(components.skill_match(provider, job, job_services))),
            experience=int(round(components.experience(provider))),
            reliability=int(round(components.reliability(provider))),
            value=int(round(components.value(provider, job))),
            location_advantage=int(round(components.location_advantage(provider, job))),
            urgency_fit=int(round(components.urgency_fit(provider, job))),
        )

    def weighted_total(self, scores: ComponentScores) -> int:
        w = self.weights
        blended = (scores.experience + scores.reliability) / 2.0
        total = (
            w.skill_match * scores.skill_match
            + w.experience_reliability * blended
            + w.value * scores.value
            + w.location_advantage * scores.location_advantage
            + w.urgency_fit * scores.urgency_fit
        ) / 100.0
        return int(round(components.clamp_score(total)))

    def score(self, provider: ProviderRecord, job: JobSpecification) -> MatchResult:
        """Score one provider for a job using only the formulas."""
        scores = self.component_scores(provider, job)
        overall = self.weighted_total(scores)
        reasons, concerns = _reasons_and_concerns(provider, scores)

        return MatchResult(
            provider_id=provider.provider_id,
            overall_score=overall,
            component_scores=scores,
            reasons=reasons,
            concerns=concerns,
            source=SOURCE_FALLBACK,
            match_reason=_match_reason(provider, scores),
            success_probability=_success_probability(overall, provider.completion_rate),
            details=components.distance_details(provider, job),
        )

    async def evaluate(self, provider: ProviderRecord, job: JobSpecification) -> MatchResult:
        return self.score(provider, job)
