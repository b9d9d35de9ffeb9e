#!/usr/bin/env python3
"""
Project Advisor - AI project analysis, success prediction and pricing with
deterministic fallback.

Works like the AI scoring adapter: the LLM is asked first through the
shared call policy, and any failure (no credentials, timeout, transport
error, unusable JSON) returns the catalog-backed estimate instead. Only
cancellation propagates.
"""
import json
import logging
from typing import Callable, Optional, Sequence, TypeVar

from servicematch.advisor import estimates
from servicematch.advisor.models import PricingAnalysis, ProjectAnalysis, SuccessPrediction
from servicematch.advisor.parsing import (
    parse_pricing_analysis,
    parse_project_analysis,
    parse_success_prediction,
)
from servicematch.catalog import ServiceCatalog
from servicematch.exceptions import AIParseError, AITransportError, AIUnavailable, ProviderNotFound
from servicematch.llm.policy import LLMCallPolicy
from servicematch.llm.system_prompts import (
    PRICING_ANALYSIS_RESPONSE_SCHEMA,
    PRICING_ANALYSIS_SYSTEM_PROMPT,
    PROJECT_ANALYSIS_RESPONSE_SCHEMA,
    PROJECT_ANALYSIS_SYSTEM_PROMPT,
    SUCCESS_PREDICTION_RESPONSE_SCHEMA,
    SUCCESS_PREDICTION_SYSTEM_PROMPT,
)
from servicematch.matcher.models import JobSpecification, ProviderRecord
from servicematch.scorer.ai_scorer import job_payload, provider_payload
from servicematch.scorer.deterministic import DeterministicScorer

logger = logging.getLogger(__name__)

T = TypeVar("T")

ProviderLookup = Callable[[str], Optional[ProviderRecord]]


class ProjectAdvisor:
    """
    Project-level advice for clients.

    Args:
        llm: Call policy that resolves the LLM provider and runs completions
        scorer: Deterministic scorer behind the fallback success prediction
        catalog: Service catalog for categories and typical costs
        provider_lookup: Resolves a provider id for predict_success
    """

    def __init__(
        self,
        llm: LLMCallPolicy,
        scorer: DeterministicScorer,
        catalog: Optional[ServiceCatalog] = None,
        provider_lookup: Optional[ProviderLookup] = None
    ):
        self.llm = llm
        self.scorer = scorer
        self.catalog = catalog or scorer.catalog
        self.provider_lookup = provider_lookup

    async def analyze_project(self, job: JobSpecification) -> ProjectAnalysis:
        """Category, services, complexity, cost and timeframe of a job."""
        estimate = estimates.analyze_project(job, self.catalog)
        user_prompt = f"""Analyze this service request.

Request:
{json.dumps(job_payload(job, self.catalog), indent=2)}

Catalog estimate:
{json.dumps(estimate.to_dict(), indent=2)}

Respond with this JSON structure:
{PROJECT_ANALYSIS_RESPONSE_SCHEMA}"""
        return await self._ask(
            "project analysis",
            PROJECT_ANALYSIS_SYSTEM_PROMPT,
            user_prompt,
            estimate,
            lambda text: parse_project_analysis(text, estimate),
        )

    async def predict_success(self, provider_id: str, job: JobSpecification) -> SuccessPrediction:
        """
        Likelihood that a provider completes the job well.

        Raises:
            ProviderNotFound: provider_id is unknown
        """
        provider = self.provider_lookup(provider_id) if self.provider_lookup else None
        if provider is None:
            raise ProviderNotFound(f"Provider not found: {provider_id}")

        estimate = estimates.predict_success(provider, job, self.scorer.score(provider, job))
        user_prompt = f"""Predict how this provider will do on this job.

Job:
{json.dumps(job_payload(job, self.catalog), indent=2)}

Provider:
{json.dumps(provider_payload(provider), indent=2)}

Respond with this JSON structure:
{SUCCESS_PREDICTION_RESPONSE_SCHEMA}"""
        return await self._ask(
            f"success prediction for provider {provider_id}",
            SUCCESS_PREDICTION_SYSTEM_PROMPT,
            user_prompt,
            estimate,
            lambda text: parse_success_prediction(text, estimate),
        )

    async def analyze_pricing(
        self,
        job: JobSpecification,
        providers: Sequence[ProviderRecord],
        municipality: Optional[str] = None,
        category: Optional[str] = None
    ) -> PricingAnalysis:
        """Fair price range for the job against the local market."""
        estimate = estimates.analyze_pricing(job, providers, self.catalog, municipality, category)
        _, market = estimates.pricing_market(job, providers, self.catalog, municipality, category)
        market_prices = [
            {"min": p.price_range.min, "max": p.price_range.max}
            for p in market if p.price_range is not None
        ]
        user_prompt = f"""Analyze fair pricing for this job.

Job:
{json.dumps(job_payload(job, self.catalog), indent=2)}

Market: {json.dumps(estimate.market_context)}
Provider price ranges: {json.dumps(market_prices)}

Respond with this JSON structure:
{PRICING_ANALYSIS_RESPONSE_SCHEMA}"""
        return await self._ask(
            "pricing analysis",
            PRICING_ANALYSIS_SYSTEM_PROMPT,
            user_prompt,
            estimate,
            lambda text: parse_pricing_analysis(text, estimate, job.budget_range),
        )

    async def _ask(
        self,
        label: str,
        system_prompt: str,
        user_prompt: str,
        estimate: T,
        parse: Callable[[str], T]
    ) -> T:
        try:
            llm = self.llm.provider()
        except AIUnavailable:
            logger.debug(f"LLM not configured; deterministic {label}")
            return estimate

        try:
            return parse(await self.llm.complete(llm, system_prompt, user_prompt))
        except AITransportError as e:
            logger.warning(f"AI {label} transport failure: {e}; using estimate")
        except AIParseError as e:
            logger.warning(f"AI {label} returned unusable output: {e}; using estimate")
        except Exception as e:
            logger.warning(f"AI {label} failed: {e}; using estimate", exc_info=True)
        return estimate
