"""
Advisor Module - Project analysis, success prediction and pricing advice.

- models.py: Result data structures
- estimates.py: Catalog-backed deterministic answers
- parsing.py: Merging LLM answers onto those estimates
- service.py: ProjectAdvisor
"""
from servicematch.advisor.models import (
    CostEstimate, PricingAnalysis, ProjectAnalysis, SuccessPrediction,
)
from servicematch.advisor.service import ProjectAdvisor

__all__ = [
    'ProjectAdvisor',
    'CostEstimate', 'PricingAnalysis', 'ProjectAnalysis', 'SuccessPrediction',
]
