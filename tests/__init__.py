#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests run offline; AI scoring is exercised through the mock providers
in tests/mocks.

    # Run all tests
    python -m pytest tests/ -v

    # Run only the scoring tests
    python -m pytest tests/unit/servicematch/scorer -v
"""

from typing import Iterable, Optional

from servicematch.matcher.models import (
    BudgetRange,
    GeoPoint,
    JobSpecification,
    PriceRange,
    ProviderRecord,
    RatingSummary,
)


def make_provider(
    provider_id: str,
    category: str = "Plumbing",
    latitude: Optional[float] = 14.68,
    longitude: Optional[float] = 120.54,
    rating: float = 4.5,
    review_count: int = 10,
    years_experience: int = 5,
    services: Iterable[str] = (),
    specialties: Iterable[str] = (),
    service_radius_km: float = 15.0,
    verified: bool = False,
    badges: Iterable[str] = (),
    completion_rate: Optional[float] = None,
    price_range: Optional[tuple] = None,
    availability: str = "available",
    municipality: Optional[str] = None,
    business_name: Optional[str] = None,
) -> ProviderRecord:
    """Build a ProviderRecord with sensible defaults."""
    location = GeoPoint(latitude, longitude) if latitude is not None and longitude is not None else None
    return ProviderRecord(
        provider_id=provider_id,
        category=category,
        services=frozenset(services),
        specialties=frozenset(specialties),
        location=location,
        service_radius_km=service_radius_km,
        rating=RatingSummary(average=rating, count=review_count),
        years_experience=years_experience,
        verified=verified,
        badges=frozenset(badges),
        completion_rate=completion_rate,
        business_name=business_name or provider_id,
        municipality=municipality,
        price_range=PriceRange(*price_range) if price_range else None,
        availability=availability,
    )


def make_job(
    description: str = "Leaking pipe under the kitchen sink",
    category: Optional[str] = "Plumbing",
    latitude: Optional[float] = 14.68,
    longitude: Optional[float] = 120.54,
    urgency: str = "medium",
    budget: Optional[tuple] = None,
    search_radius_km: float = 15.0,
    detected_services: Iterable[str] = (),
    job_id: Optional[str] = "job-1",
) -> JobSpecification:
    """Build a JobSpecification with sensible defaults."""
    location = GeoPoint(latitude, longitude) if latitude is not None and longitude is not None else None
    return JobSpecification(
        description=description,
        category=category,
        location=location,
        budget_range=BudgetRange(*budget) if budget else None,
        urgency=urgency,
        search_radius_km=search_radius_km,
        detected_services=tuple(detected_services),
        job_id=job_id,
    )
