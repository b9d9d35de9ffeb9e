"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

import pytest

from servicematch.catalog import ServiceCatalog
from servicematch.config_loader import ScoringWeights
from servicematch.scorer.deterministic import DeterministicScorer
from tests import make_job, make_provider


@pytest.fixture(scope="session")
def catalog():
    """Packaged service catalog, loaded once."""
    return ServiceCatalog.load()


@pytest.fixture
def deterministic_scorer(catalog):
    return DeterministicScorer(ScoringWeights(), catalog)


@pytest.fixture
def plumbing_job():
    """High-urgency plumbing job in Balanga."""
    return make_job(
        description="Leaking pipe under the kitchen sink",
        category="Plumbing",
        latitude=14.68,
        longitude=120.54,
        urgency="high",
        job_id="job-plumbing",
    )


@pytest.fixture
def plumber():
    """Experienced plumber about 0.5 km from the plumbing job."""
    return make_provider(
        "plumber-1",
        category="Plumbing",
        latitude=14.6845,
        longitude=120.54,
        rating=4.8,
        years_experience=15,
        services=("pipe repair", "leak detection"),
    )


@pytest.fixture
def distant_electrician():
    """Electrician roughly 50 km away."""
    return make_provider(
        "electrician-1",
        category="Electrical",
        latitude=14.23,
        longitude=120.54,
        rating=4.9,
        years_experience=12,
        services=("wiring",),
    )
