#!/usr/bin/env python3
"""
Request models for API endpoints.

Bodies use camelCase keys; snake_case is accepted too.
"""

import logging

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional

from servicematch.catalog import ServiceCatalog
from servicematch.geo.bataan import barangay_coordinates, is_within_bataan, municipality_coordinates
from servicematch.matcher.models import (
    BudgetRange,
    FilterOverrides,
    GeoPoint,
    JobSpecification,
    MatchPreferences,
)

logger = logging.getLogger(__name__)


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LocationPayload(ApiModel):
    # Range checks happen in GeoPoint so bad coordinates map to 400, not 422
    latitude: float
    longitude: float


class BudgetPayload(ApiModel):
    min: float = Field(ge=0)
    max: float = Field(ge=0)
    currency: str = "PHP"


class JobPayload(ApiModel):
    """A job request to match providers against."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "job-1001",
                "title": "Kitchen sink leak",
                "description": "Leaking pipe under the kitchen sink, water on the floor",
                "category": "Plumbing",
                "municipality": "Balanga",
                "budgetRange": {"min": 1500, "max": 4000, "currency": "PHP"},
                "urgency": "high"
            }
        }
    )

    id: Optional[str] = None
    title: Optional[str] = None
    description: str = Field(min_length=1)
    category: Optional[str] = None
    location: Optional[LocationPayload] = None
    municipality: Optional[str] = None
    barangay: Optional[str] = None
    budget_range: Optional[BudgetPayload] = None
    urgency: Literal["low", "medium", "high", "emergency"] = "medium"
    complexity_score: Optional[int] = Field(None, ge=1, le=10)
    search_radius_km: Optional[float] = Field(None, gt=0)
    detected_services: List[str] = Field(default_factory=list)

    def resolve_location(self) -> Optional[GeoPoint]:
        """
        Explicit coordinates first, then the barangay/municipality gazetteer.

        Coordinates outside Bataan are accepted with a warning.
        """
        if self.location is not None:
            point = GeoPoint(self.location.latitude, self.location.longitude)
            if not is_within_bataan(point):
                logger.warning(
                    f"Job {self.id or '(unsaved)'} location "
                    f"({point.latitude}, {point.longitude}) is outside Bataan"
                )
            return point
        if self.barangay:
            return barangay_coordinates(self.barangay, self.municipality)
        if self.municipality:
            return municipality_coordinates(self.municipality)
        return None

    def to_domain(self, catalog: ServiceCatalog, default_search_radius_km: float) -> JobSpecification:
        complexity = self.complexity_score
        if complexity is None:
            complexity = catalog.default_complexity_for(self.category)

        budget = None
        if self.budget_range is not None:
            budget = BudgetRange(self.budget_range.min, self.budget_range.max, self.budget_range.currency)

        return JobSpecification(
            description=self.description,
            category=self.category,
            location=self.resolve_location(),
            budget_range=budget,
            urgency=self.urgency,
            complexity_score=complexity,
            search_radius_km=self.search_radius_km or default_search_radius_km,
            detected_services=tuple(self.detected_services),
            job_id=self.id,
            title=self.title,
        )


class FiltersPayload(ApiModel):
    municipality: Optional[str] = None
    category: Optional[str] = None
    verified: bool = False
    min_rating: Optional[float] = Field(None, ge=0, le=5)

    def to_domain(self) -> FilterOverrides:
        return FilterOverrides(
            municipality=self.municipality,
            category=self.category,
            verified_only=self.verified,
            min_rating=self.min_rating,
        )


class PreferencesPayload(ApiModel):
    max_results: Optional[int] = Field(None, ge=1, le=50)

    def to_domain(self) -> MatchPreferences:
        return MatchPreferences(max_results=self.max_results)


class FindMatchesRequest(ApiModel):
    """Request to rank directory providers for a job."""
    job: JobPayload
    filters: Optional[FiltersPayload] = None
    preferences: Optional[PreferencesPayload] = None


class ScoreProviderRequest(ApiModel):
    """Request to score one provider for a job."""
    provider_id: str = Field(min_length=1)
    job: JobPayload


class AnalyzeProjectRequest(ApiModel):
    """Request to analyze a job description."""
    job: JobPayload


class PredictSuccessRequest(ApiModel):
    """Request to predict how one provider will do on a job."""
    provider_id: str = Field(min_length=1)
    job: JobPayload


class MarketFiltersPayload(ApiModel):
    municipality: Optional[str] = None
    category: Optional[str] = None


class AnalyzePricingRequest(ApiModel):
    """Request to price a job against the local provider market."""
    job: JobPayload
    market_filters: Optional[MarketFiltersPayload] = None
