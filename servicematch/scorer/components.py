#!/usr/bin/env python3
"""
Score Components - Pure per-factor formulas for deterministic scoring.

Every function returns a float in [0, 100] and depends only on its
arguments, so the deterministic scorer stays side-effect free.
"""

from typing import Any, Dict, Iterable, Optional
import logging

from servicematch.exceptions import InvalidCoordinate
from servicematch.geo.distance import distance_km, estimate_travel_time, format_distance
from servicematch.matcher.models import (
    BADGE_EMERGENCY_SERVICE,
    BADGE_QUICK_RESPONSE,
    JobSpecification,
    ProviderRecord,
)

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 50.0
EXPERIENCE_SATURATION_YEARS = 10.0
VERIFIED_BONUS = 10.0

URGENT_LEVELS = ("high", "emergency")
URGENT_READY_SCORE = 100.0
URGENT_AVAILABLE_SCORE = 70.0
URGENT_BUSY_SCORE = 40.0


def clamp_score(x: float) -> float:
    return max(0.0, min(100.0, float(x)))


def _keyword_hit(keyword: str, terms: Iterable[str]) -> bool:
    # Substring either way: "pipe" hits "pipe repair", "water heater" hits "water"
    return any(keyword in term or term in keyword for term in terms)


def skill_match(provider: ProviderRecord, job: JobSpecification, job_services: Iterable[str]) -> float:
    """
    100 on category match, else the share of job service keywords the
    provider's services/specialties cover.
    """
    if job.category and provider.category and provider.category.strip().lower() == job.category.strip().lower():
        return 100.0

    keywords = [k for k in job_services if k]
    if not keywords:
        return 0.0

    terms = provider.terms | {provider.category.strip().lower()} if provider.category else provider.terms
    overlap = sum(1 for k in keywords if _keyword_hit(k, terms))
    return clamp_score(100.0 * overlap / len(keywords))


def services_overlap(provider: ProviderRecord, job_services: Iterable[str]) -> bool:
    """True when any job service keyword is covered by the provider."""
    terms = provider.terms
    return any(_keyword_hit(k, terms) for k in job_services if k)


def experience(provider: ProviderRecord) -> float:
    return clamp_score(min(provider.years_experience / EXPERIENCE_SATURATION_YEARS, 1.0) * 100.0)


def reliability(provider: ProviderRecord) -> float:
    """Rating as a percentage, with a flat bonus for verified providers."""
    score = provider.rating.average / 5.0 * 100.0
    if provider.is_verified:
        score += VERIFIED_BONUS
    return clamp_score(score)


def value(provider: ProviderRecord, job: JobSpecification) -> float:
    """Full marks at or under the budget midpoint, falling off as price rises above it."""
    if job.budget_range is None or provider.price_range is None:
        return NEUTRAL_SCORE

    budget_mid = job.budget_range.midpoint
    price_mid = provider.price_range.midpoint
    if budget_mid <= 0 or price_mid <= 0:
        return NEUTRAL_SCORE
    return clamp_score(100.0 * min(1.0, budget_mid / price_mid))


def effective_radius_km(provider: ProviderRecord, job: JobSpecification) -> float:
    return max(job.search_radius_km, provider.service_radius_km)


def provider_distance_km(provider: ProviderRecord, job: JobSpecification) -> Optional[float]:
    """Distance between job and provider, or None when either location is unknown."""
    if job.location is None or provider.location is None:
        return None
    return distance_km(job.location, provider.location)


def location_advantage(provider: ProviderRecord, job: JobSpecification) -> float:
    try:
        distance = provider_distance_km(provider, job)
    except InvalidCoordinate as e:
        logger.warning(f"Provider {provider.provider_id}: invalid coordinates ({e}); neutral location score")
        return NEUTRAL_SCORE
    if distance is None:
        return NEUTRAL_SCORE

    max_radius = effective_radius_km(provider, job)
    if max_radius <= 0:
        return 0.0
    return clamp_score(100.0 * (1.0 - distance / max_radius))


def urgency_fit(provider: ProviderRecord, job: JobSpecification) -> float:
    if provider.availability == "unavailable":
        return 0.0

    if job.urgency not in URGENT_LEVELS:
        return 100.0

    if provider.badges & {BADGE_EMERGENCY_SERVICE, BADGE_QUICK_RESPONSE}:
        return URGENT_READY_SCORE
    if provider.availability == "busy":
        return URGENT_BUSY_SCORE
    return URGENT_AVAILABLE_SCORE


def distance_details(provider: ProviderRecord, job: JobSpecification) -> Dict[str, Any]:
    """Display fields for the job-provider distance (empty when unknown)."""
    try:
        distance = provider_distance_km(provider, job)
    except InvalidCoordinate:
        return {}
    if distance is None:
        return {}
    return {
        "distanceKm": round(distance, 2),
        "distanceText": format_distance(distance),
        "travelTime": estimate_travel_time(job.location, provider.location),
    }
