"""
Matcher Module - Job/provider models, candidate filtering and orchestration.

Only the models are re-exported here; the scoring package imports them, so
the orchestrator is imported from servicematch.matcher.service directly.
"""
from servicematch.matcher.models import (
    GeoPoint, BudgetRange, PriceRange, RatingSummary,
    JobSpecification, ProviderRecord, FilterOverrides, MatchPreferences,
)

__all__ = [
    'GeoPoint', 'BudgetRange', 'PriceRange', 'RatingSummary',
    'JobSpecification', 'ProviderRecord', 'FilterOverrides', 'MatchPreferences',
]
