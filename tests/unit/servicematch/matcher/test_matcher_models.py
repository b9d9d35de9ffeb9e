#!/usr/bin/env python3
"""
Unit tests for job/provider domain models.
"""
import pytest

from servicematch.exceptions import InvalidCoordinate
from servicematch.matcher.models import (
    BudgetRange,
    GeoPoint,
    JobSpecification,
    PriceRange,
)
from tests import make_provider


class TestGeoPoint:

    def test_valid_point(self):
        p = GeoPoint(14.68, 120.54)
        assert (p.latitude, p.longitude) == (14.68, 120.54)

    @pytest.mark.parametrize("lat,lng", [
        (90.1, 0.0),
        (-90.1, 0.0),
        (0.0, 180.1),
        (float("nan"), 0.0),
        (0.0, float("-inf")),
    ])
    def test_invalid_point(self, lat, lng):
        with pytest.raises(InvalidCoordinate):
            GeoPoint(lat, lng)

    def test_extremes_are_valid(self):
        GeoPoint(90.0, 180.0)
        GeoPoint(-90.0, -180.0)


class TestJobSpecification:

    def test_defaults(self):
        job = JobSpecification(description="Fix sink")
        assert job.urgency == "medium"
        assert job.complexity_score == 5
        assert job.search_radius_km == 15

    def test_invalid_urgency(self):
        with pytest.raises(ValueError):
            JobSpecification(description="Fix sink", urgency="yesterday")

    @pytest.mark.parametrize("complexity", [0, 11])
    def test_complexity_out_of_range(self, complexity):
        with pytest.raises(ValueError):
            JobSpecification(description="Fix sink", complexity_score=complexity)

    def test_budget_midpoint(self):
        assert BudgetRange(1000, 3000).midpoint == 2000
        assert PriceRange(500, 1500).midpoint == 1000


class TestProviderRecord:

    def test_verified_by_flag_or_badge(self):
        assert make_provider("a", verified=True).is_verified
        assert make_provider("b", badges=("verified",)).is_verified
        assert not make_provider("c", badges=("top_rated",)).is_verified

    def test_terms_are_lowercased_union(self):
        provider = make_provider("a", services=("Pipe Repair",), specialties=(" Water Heater ", ""))
        assert provider.terms == frozenset({"pipe repair", "water heater"})
