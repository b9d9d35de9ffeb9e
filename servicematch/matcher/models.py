#!/usr/bin/env python3
"""
Matcher Models - Job and provider snapshots consumed by the matching engine.

These are read-only views. Persistence and request validation belong to the
caller; the engine only reads them.
"""

import math
from dataclasses import dataclass, field
from typing import FrozenSet, Literal, Optional, Tuple

from servicematch.exceptions import InvalidCoordinate

Urgency = Literal["low", "medium", "high", "emergency"]
Availability = Literal["available", "busy", "unavailable"]

URGENCY_LEVELS = ("low", "medium", "high", "emergency")
AVAILABILITY_STATES = ("available", "busy", "unavailable")

DEFAULT_SEARCH_RADIUS_KM = 15.0
DEFAULT_SERVICE_RADIUS_KM = 15.0

BADGE_VERIFIED = "verified"
BADGE_EMERGENCY_SERVICE = "emergency_service"
BADGE_QUICK_RESPONSE = "quick_response"

PROVIDER_BADGES = (
    "verified",
    "top_rated",
    "experienced",
    "quick_response",
    "budget_friendly",
    "premium_service",
    "eco_friendly",
    "emergency_service",
)


@dataclass(frozen=True)
class GeoPoint:
    """A validated latitude/longitude pair."""
    latitude: float
    longitude: float

    def __post_init__(self):
        lat, lng = self.latitude, self.longitude
        if lat is None or lng is None:
            raise InvalidCoordinate(f"Missing coordinate: ({lat}, {lng})")
        if not (math.isfinite(lat) and math.isfinite(lng)):
            raise InvalidCoordinate(f"Non-finite coordinate: ({lat}, {lng})")
        if not -90.0 <= lat <= 90.0:
            raise InvalidCoordinate(f"Latitude out of range: {lat}")
        if not -180.0 <= lng <= 180.0:
            raise InvalidCoordinate(f"Longitude out of range: {lng}")


@dataclass(frozen=True)
class BudgetRange:
    """Client budget for a job."""
    min: float
    max: float
    currency: str = "PHP"

    @property
    def midpoint(self) -> float:
        return (self.min + self.max) / 2.0


@dataclass(frozen=True)
class PriceRange:
    """Typical project price a provider charges."""
    min: float
    max: float

    @property
    def midpoint(self) -> float:
        return (self.min + self.max) / 2.0


@dataclass(frozen=True)
class RatingSummary:
    average: float = 0.0
    count: int = 0


@dataclass(frozen=True)
class JobSpecification:
    """A job request as seen by the matcher. Immutable once matching starts."""
    description: str
    category: Optional[str] = None
    location: Optional[GeoPoint] = None
    budget_range: Optional[BudgetRange] = None
    urgency: Urgency = "medium"
    complexity_score: int = 5
    search_radius_km: float = DEFAULT_SEARCH_RADIUS_KM
    detected_services: Tuple[str, ...] = ()
    job_id: Optional[str] = None
    title: Optional[str] = None

    def __post_init__(self):
        if self.urgency not in URGENCY_LEVELS:
            raise ValueError(f"Invalid urgency {self.urgency!r}; expected one of {URGENCY_LEVELS}")
        if not 1 <= self.complexity_score <= 10:
            raise ValueError(f"complexity_score must be within 1..10, got {self.complexity_score}")


@dataclass(frozen=True)
class ProviderRecord:
    """Snapshot of a provider profile, owned by the persistence layer."""
    provider_id: str
    category: str
    services: FrozenSet[str] = field(default_factory=frozenset)
    specialties: FrozenSet[str] = field(default_factory=frozenset)
    location: Optional[GeoPoint] = None
    service_radius_km: float = DEFAULT_SERVICE_RADIUS_KM
    rating: RatingSummary = field(default_factory=RatingSummary)
    years_experience: int = 0
    verified: bool = False
    badges: FrozenSet[str] = field(default_factory=frozenset)
    completion_rate: Optional[float] = None
    business_name: Optional[str] = None
    municipality: Optional[str] = None
    price_range: Optional[PriceRange] = None
    availability: Availability = "available"

    @property
    def is_verified(self) -> bool:
        return self.verified or BADGE_VERIFIED in self.badges

    @property
    def terms(self) -> FrozenSet[str]:
        """Lowercased services and specialties, used for keyword overlap."""
        return frozenset(t.strip().lower() for t in self.services | self.specialties if t and t.strip())


@dataclass(frozen=True)
class FilterOverrides:
    """Caller-supplied narrowing of the candidate set."""
    municipality: Optional[str] = None
    category: Optional[str] = None
    verified_only: bool = False
    min_rating: Optional[float] = None


@dataclass(frozen=True)
class MatchPreferences:
    max_results: Optional[int] = None
