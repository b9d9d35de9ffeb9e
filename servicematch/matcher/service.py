#!/usr/bin/env python3
"""
Match Orchestrator - Candidate filter, scoring, ranking and insights.

Pipeline per request:
1. CandidateFilter narrows the provider pool
2. The scorer evaluates every candidate concurrently
3. Results below the qualification threshold are dropped
4. Remaining matches are ranked and truncated
5. Insights are synthesized from the qualified set

The orchestrator holds no state between calls; providers arrive with the
request and are never fetched from storage here.
"""
from typing import Any, Callable, Dict, Optional, Sequence, Tuple
import logging

from servicematch.config_loader import MatchingConfig
from servicematch.exceptions import ProviderNotFound
from servicematch.matcher.candidate_filter import CandidateFilter
from servicematch.matcher.insights import MatchSet, build_insights, empty_insights, market_overview
from servicematch.matcher.models import (
    FilterOverrides,
    JobSpecification,
    MatchPreferences,
    ProviderRecord,
)
from servicematch.scorer.interfaces import Scorer
from servicematch.scorer.models import SOURCE_AI, MatchResult

logger = logging.getLogger(__name__)

ProviderLookup = Callable[[str], Optional[ProviderRecord]]


def _rank_key(pair: Tuple[MatchResult, ProviderRecord]):
    result, provider = pair
    return (-result.overall_score, -provider.rating.average, -provider.years_experience)


class MatchOrchestrator:
    """
    Composes the matching pipeline.

    Args:
        scorer: Scorer used for every candidate (AI adapter or deterministic)
        candidate_filter: Provider pre-filter
        config: Threshold and result-size settings
        provider_lookup: Resolves a provider id for single-provider scoring
    """

    def __init__(
        self,
        scorer: Scorer,
        candidate_filter: CandidateFilter,
        config: Optional[MatchingConfig] = None,
        provider_lookup: Optional[ProviderLookup] = None,
    ):
        self.scorer = scorer
        self.candidate_filter = candidate_filter
        self.config = config or MatchingConfig()
        self.provider_lookup = provider_lookup

    async def find_matches(
        self,
        job: JobSpecification,
        providers: Sequence[ProviderRecord],
        filters: Optional[FilterOverrides] = None,
        preferences: Optional[MatchPreferences] = None,
    ) -> MatchSet:
        """
        Rank providers for a job.

        Returns:
            MatchSet with matches best first. An empty match list is a valid
            outcome, explained in the insights.
        """
        candidates = self.candidate_filter.filter(job, providers, filters)
        if not candidates:
            logger.info(f"Job {job.job_id}: no candidates among {len(providers)} providers")
            return MatchSet(
                job_id=job.job_id,
                insights=empty_insights(),
                total_analyzed=len(providers),
            )

        results = await self.scorer.evaluate_all(candidates, job)

        threshold = self.config.qualification_threshold
        qualified = [
            (result, provider)
            for result, provider in zip(results, candidates)
            if result.overall_score >= threshold
        ]
        # sorted() is stable, so full ties keep candidate order
        ranked = sorted(qualified, key=_rank_key)

        max_results = self.config.max_results
        if preferences is not None and preferences.max_results:
            max_results = preferences.max_results
        matches = tuple(result for result, _ in ranked[:max_results])

        qualified_scores = [result.overall_score for result, _ in qualified]
        insights = build_insights(matches, qualified_scores) if matches else empty_insights()
        ai_count = sum(1 for r in results if r.source == SOURCE_AI)
        logger.info(
            f"Job {job.job_id}: {len(providers)} providers, {len(candidates)} candidates, "
            f"{len(qualified)} qualified, {len(matches)} returned ({ai_count} AI-scored)"
        )

        return MatchSet(
            job_id=job.job_id,
            matches=matches,
            insights=insights,
            total_analyzed=len(providers),
            total_candidates=len(candidates),
            qualified_count=len(qualified),
        )

    async def score_single_provider(self, provider_id: str, job: JobSpecification) -> MatchResult:
        """
        Score one provider by id, bypassing the candidate filter.

        Raises:
            ProviderNotFound: The id does not resolve to a provider
        """
        provider = self.provider_lookup(provider_id) if self.provider_lookup else None
        if provider is None:
            raise ProviderNotFound(f"Provider not found: {provider_id}")
        return await self.scorer.evaluate(provider, job)

    def market_overview(self, providers: Sequence[ProviderRecord]) -> Dict[str, Any]:
        return market_overview(providers)

