#!/usr/bin/env python3
"""
Unit tests for the catalog-backed advisor estimates.
"""
from dataclasses import replace

import pytest

from servicematch.advisor import estimates
from servicematch.advisor.models import CostEstimate
from servicematch.catalog import ServiceCatalog
from servicematch.scorer.models import SOURCE_FALLBACK
from tests import make_job, make_provider


class TestAnalyzeProject:

    def test_category_job_uses_catalog_range(self, catalog):
        job = make_job(category="Plumbing", budget=(1500, 4000))

        analysis = estimates.analyze_project(job, catalog)

        assert analysis.category == "Plumbing"
        assert analysis.estimated_cost == CostEstimate(1500, 12000)
        assert analysis.complexity_score == 5
        assert analysis.timeframe == "1-2 weeks"
        assert "pipe" in analysis.detected_services
        assert analysis.risk_factors == ()
        assert analysis.source == SOURCE_FALLBACK

    def test_category_detected_from_description(self, catalog):
        job = make_job(description="Install solar panel and inverter at home", category=None)

        analysis = estimates.analyze_project(job, catalog)

        assert analysis.category == "Solar Installation"
        assert analysis.estimated_cost == CostEstimate(80000, 300000)

    def test_default_range_without_catalog_entry(self):
        job = make_job(description="Help needed", category=None)

        analysis = estimates.analyze_project(job, ServiceCatalog())

        assert analysis.category == "Other"
        assert analysis.estimated_cost == CostEstimate(50000, 150000)

    def test_risk_factors(self, catalog):
        job = replace(make_job(urgency="emergency", budget=(500, 1000)), complexity_score=8)

        analysis = estimates.analyze_project(job, catalog)

        assert analysis.risk_factors == ("High complexity work", "Tight timeline", "Budget below typical cost range")
        assert analysis.timeframe == "2-4 weeks"

    def test_missing_budget_is_a_risk(self, catalog):
        assert "Budget not specified" in estimates.analyze_project(make_job(), catalog).risk_factors

    def test_confidence_grows_with_detail(self, catalog):
        sparse = make_job(description="Fix it", category=None, latitude=None, longitude=None)
        detailed = make_job(
            description="Leaking pipe under the kitchen sink, water pooling on the floor since last night",
            budget=(1500, 4000),
        )

        assert estimates.analyze_project(sparse, catalog).confidence == 0.5
        assert estimates.analyze_project(detailed, catalog).confidence == 1.0


@pytest.mark.parametrize("complexity,expected", [
    (1, "1-3 days"),
    (3, "1-3 days"),
    (4, "1-2 weeks"),
    (6, "1-2 weeks"),
    (7, "2-4 weeks"),
    (10, "2-4 weeks"),
])
def test_timeframe_for(complexity, expected):
    assert estimates.timeframe_for(complexity) == expected


@pytest.mark.parametrize("probability,expected", [
    (100, "low"),
    (75, "low"),
    (74, "medium"),
    (50, "medium"),
    (49, "high"),
    (0, "high"),
])
def test_risk_level(probability, expected):
    assert estimates.risk_level(probability) == expected


class TestPredictSuccess:

    def test_derived_from_deterministic_score(self, deterministic_scorer, plumber, plumbing_job):
        score = deterministic_scorer.score(plumber, plumbing_job)

        prediction = estimates.predict_success(plumber, plumbing_job, score)

        assert prediction.provider_id == "plumber-1"
        assert prediction.success_probability == score.success_probability
        assert prediction.risk_level == "low"
        assert prediction.key_success_factors == score.reasons
        assert prediction.timeline_reliability == score.component_scores.urgency_fit
        assert prediction.quality_expectation == score.component_scores.reliability
        assert prediction.budget_accuracy == score.component_scores.value
        assert prediction.recommendations[-1] == "Monitor progress regularly"

    def test_weak_unverified_provider(self, deterministic_scorer, plumbing_job):
        electrician = make_provider("e", category="Electrical", services=("wiring",), rating=2.0,
                                    years_experience=0, availability="unavailable")
        score = deterministic_scorer.score(electrician, plumbing_job)

        prediction = estimates.predict_success(electrician, plumbing_job, score)

        assert prediction.risk_level == "high"
        assert "Agree on milestones and inspect work at each stage" in prediction.recommendations
        assert "Ask for proof of completed similar work" in prediction.recommendations
        assert "Limited service match" in prediction.potential_challenges

    def test_confidence(self):
        job = make_job()
        established = make_provider("a", review_count=20, verified=True, years_experience=12)
        newcomer = make_provider("b")

        assert estimates.prediction_confidence(established, job) == 1.0
        assert estimates.prediction_confidence(newcomer, job) == 0.7
        assert estimates.prediction_confidence(newcomer, replace(job, complexity_score=9)) == 0.6


@pytest.fixture
def market():
    return [
        make_provider("p1", municipality="Balanga", price_range=(2000, 6000)),
        make_provider("p2", municipality="Orion", price_range=(1000, 3000)),
        make_provider("p3", municipality="Balanga"),
        make_provider("e1", category="Electrical", municipality="Balanga", price_range=(5000, 9000)),
    ]


class TestAnalyzePricing:

    def test_catalog_range_and_market_average(self, catalog, market):
        job = make_job(budget=(1500, 4000))

        pricing = estimates.analyze_pricing(job, market, catalog)

        assert pricing.fair_price_range == CostEstimate(1500, 12000)
        # midpoints 4000 and 2000
        assert pricing.market_average == 3000.0
        assert pricing.budget_assessment == "within_market"
        assert pricing.budget_breakdown == {"materials": 60, "labor": 30, "permits": 5, "contingency": 5}
        assert pricing.market_context == {
            "analyzedProviders": 3,
            "location": "Bataan Province",
            "category": "Plumbing",
        }

    def test_municipality_and_category_filters(self, catalog, market):
        pricing = estimates.analyze_pricing(make_job(), market, catalog, municipality="balanga", category="Electrical")

        assert pricing.market_context == {"analyzedProviders": 1, "location": "balanga", "category": "Electrical"}
        assert pricing.fair_price_range == CostEstimate(2000, 15000)
        assert pricing.market_average == 7000.0
        assert pricing.budget_assessment is None

    @pytest.mark.parametrize("budget,expected", [
        ((100, 200), "below_market"),
        ((20000, 40000), "above_market"),
    ])
    def test_budget_assessment(self, catalog, market, budget, expected):
        assert estimates.analyze_pricing(make_job(budget=budget), market, catalog).budget_assessment == expected

    def test_market_range_without_catalog_entry(self, market):
        pricing = estimates.analyze_pricing(make_job(), market, ServiceCatalog())
        assert pricing.fair_price_range == CostEstimate(1000, 6000)

    def test_default_range_without_prices(self):
        pricing = estimates.analyze_pricing(make_job(), [make_provider("p")], ServiceCatalog())

        assert pricing.fair_price_range == CostEstimate(50000, 200000)
        assert pricing.market_average == 125000.0

    def test_undetected_category_covers_whole_market(self, catalog, market):
        job = make_job(description="Help needed", category=None)

        pricing = estimates.analyze_pricing(job, market, catalog)

        assert pricing.market_context["analyzedProviders"] == 4
        assert pricing.market_context["category"] == "All Categories"
