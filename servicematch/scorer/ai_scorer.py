#!/usr/bin/env python3
"""
AI Scoring Adapter - LLM provider scoring with deterministic fallback.

Each provider is scored independently. Whatever goes wrong with the LLM
(no credentials, timeout, transport error, unusable JSON) only affects that
provider, which gets the deterministic result instead. A match request
never fails because of AI.
"""

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from servicematch.catalog import ServiceCatalog
from servicematch.exceptions import AIParseError, AITransportError, AIUnavailable
from servicematch.llm.interfaces import LLMProvider
from servicematch.llm.policy import LLMCallPolicy
from servicematch.llm.system_prompts import (
    PROVIDER_SCORING_RESPONSE_SCHEMA,
    PROVIDER_SCORING_SYSTEM_PROMPT,
)
from servicematch.matcher.models import JobSpecification, ProviderRecord
from servicematch.scorer.components import distance_details
from servicematch.scorer.deterministic import DeterministicScorer
from servicematch.scorer.interfaces import Scorer
from servicematch.scorer.models import MatchResult
from servicematch.scorer.parsing import parse_ai_scores

logger = logging.getLogger(__name__)


def provider_payload(provider: ProviderRecord) -> Dict[str, Any]:
    return {
        "businessName": provider.business_name,
        "category": provider.category,
        "services": sorted(provider.services),
        "specialties": sorted(provider.specialties),
        "municipality": provider.municipality,
        "serviceRadiusKm": provider.service_radius_km,
        "rating": {"average": provider.rating.average, "count": provider.rating.count},
        "yearsExperience": provider.years_experience,
        "verified": provider.is_verified,
        "badges": sorted(provider.badges),
        "completionRate": provider.completion_rate,
        "priceRange": (
            {"min": provider.price_range.min, "max": provider.price_range.max}
            if provider.price_range else None
        ),
        "availability": provider.availability,
    }


def job_payload(job: JobSpecification, catalog: ServiceCatalog) -> Dict[str, Any]:
    payload = {
        "title": job.title,
        "description": job.description,
        "category": job.category,
        "services": list(catalog.infer_services(job)),
        "urgency": job.urgency,
        "complexityScore": job.complexity_score,
        "budgetRange": (
            {"min": job.budget_range.min, "max": job.budget_range.max, "currency": job.budget_range.currency}
            if job.budget_range else None
        ),
        "searchRadiusKm": job.search_radius_km,
    }
    typical = catalog.cost_range_for(job.category)
    if typical:
        payload["typicalCostRange"] = {"min": typical[0], "max": typical[1], "currency": "PHP"}
    return payload


def build_scoring_prompt(
    provider: ProviderRecord,
    job: JobSpecification,
    catalog: ServiceCatalog
) -> str:
    """User prompt for one (provider, job) scoring request."""
    distance = distance_details(provider, job)
    return f"""Score this provider for this job.

Job:
{json.dumps(job_payload(job, catalog), indent=2)}

Provider:
{json.dumps(provider_payload(provider), indent=2)}

Distance from job site: {distance.get("distanceText", "unknown")}

Respond with this JSON structure:
{PROVIDER_SCORING_RESPONSE_SCHEMA}"""


class AIScoringAdapter(Scorer):
    """
    Scorer that asks the LLM first and falls back per provider.

    The LLM provider is resolved once per call (once per batch for
    evaluate_all), so rotated credentials apply to the next request without
    rebuilding the adapter. Timeout and retry come from the injected call
    policy; the adapter itself issues one completion per provider.

    Args:
        llm: Call policy that resolves the LLM provider and runs completions
        fallback: Deterministic scorer used when AI is unavailable or fails
        catalog: Service catalog used for prompt enrichment
    """

    def __init__(
        self,
        llm: LLMCallPolicy,
        fallback: DeterministicScorer,
        catalog: Optional[ServiceCatalog] = None,
    ):
        self.llm = llm
        self.fallback = fallback
        self.catalog = catalog or fallback.catalog

    async def score_with_ai(self, provider: ProviderRecord, job: JobSpecification) -> MatchResult:
        try:
            llm = self.llm.provider()
        except AIUnavailable:
            logger.debug(f"LLM not configured; deterministic scoring for provider {provider.provider_id}")
            return self.fallback.score(provider, job)
        return await self._score_one(llm, provider, job)

    async def score_all_with_ai(
        self,
        providers: Sequence[ProviderRecord],
        job: JobSpecification
    ) -> List[MatchResult]:
        """Score providers concurrently; result i belongs to providers[i]."""
        try:
            llm = self.llm.provider()
        except AIUnavailable:
            logger.debug(f"LLM not configured; deterministic scoring for {len(providers)} providers")
            return [self.fallback.score(p, job) for p in providers]

        return list(await asyncio.gather(*(self._score_one(llm, p, job) for p in providers)))

    async def evaluate(self, provider: ProviderRecord, job: JobSpecification) -> MatchResult:
        return await self.score_with_ai(provider, job)

    async def evaluate_all(
        self,
        providers: Sequence[ProviderRecord],
        job: JobSpecification
    ) -> List[MatchResult]:
        return await self.score_all_with_ai(providers, job)

    async def _score_one(self, llm: LLMProvider, provider: ProviderRecord, job: JobSpecification) -> MatchResult:
        user_prompt = build_scoring_prompt(provider, job, self.catalog)
        try:
            text = await self.llm.complete(llm, PROVIDER_SCORING_SYSTEM_PROMPT, user_prompt)
            return parse_ai_scores(provider.provider_id, text, details=distance_details(provider, job))
        except AITransportError as e:
            logger.warning(f"AI scoring transport failure for provider {provider.provider_id}: {e}; using fallback")
        except AIParseError as e:
            logger.warning(f"AI scoring returned unusable output for provider {provider.provider_id}: {e}; using fallback")
        except Exception as e:
            # CancelledError is a BaseException and is not caught here
            logger.warning(f"AI scoring failed for provider {provider.provider_id}: {e}; using fallback", exc_info=True)
        return self.fallback.score(provider, job)
