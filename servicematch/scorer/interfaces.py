"""
Scorer Interface - The capability the match orchestrator depends on.

Two implementations exist: DeterministicScorer (pure formulas) and
AIScoringAdapter (LLM with per-provider deterministic fallback).
"""
import asyncio
from abc import ABC, abstractmethod
from typing import List, Sequence

from servicematch.matcher.models import JobSpecification, ProviderRecord
from servicematch.scorer.models import MatchResult


class Scorer(ABC):

    @abstractmethod
    async def evaluate(self, provider: ProviderRecord, job: JobSpecification) -> MatchResult:
        """Score one provider for a job. Must always return a well-formed result."""
        pass

    async def evaluate_all(
        self,
        providers: Sequence[ProviderRecord],
        job: JobSpecification
    ) -> List[MatchResult]:
        """Score providers concurrently; results follow input order."""
        return list(await asyncio.gather(*(self.evaluate(p, job) for p in providers)))
