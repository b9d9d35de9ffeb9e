#!/usr/bin/env python3
"""
Scoring Module - Provider scoring for a job.

Public API:
- Scorer: Interface the match orchestrator depends on
- DeterministicScorer: Pure weighted-formula scorer
- AIScoringAdapter: LLM scorer with per-provider deterministic fallback
- MatchResult, ComponentScores: Scoring result structures

- models.py: Result data structures and recommendation thresholds
- components.py: Per-factor score formulas
- deterministic.py: DeterministicScorer
- parsing.py: JSON extraction and validation of LLM responses
- ai_scorer.py: AIScoringAdapter
"""

from servicematch.scorer.models import ComponentScores, MatchResult, recommendation_for_score
from servicematch.scorer.interfaces import Scorer
from servicematch.scorer.deterministic import DeterministicScorer
from servicematch.scorer.ai_scorer import AIScoringAdapter

__all__ = [
    'Scorer', 'DeterministicScorer', 'AIScoringAdapter',
    'MatchResult', 'ComponentScores', 'recommendation_for_score',
]
