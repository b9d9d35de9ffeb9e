#!/usr/bin/env python3
"""
Provider Directory - Read-only in-memory provider pool.

Loaded from a YAML seed file. It stands in for the document store that
owns provider profiles; the matching engine itself never reads storage.

Seed format:
    providers:
      - id: prov-001
        business_name: Dela Cruz Plumbing
        category: Plumbing
        services: [pipe repair, leak detection]
        municipality: Balanga
        barangay: Poblacion         # optional, used when no coordinates
        location: {latitude: 14.68, longitude: 120.54}   # optional
        rating: {average: 4.8, count: 52}
        years_experience: 15
        ...
"""
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml

from servicematch.geo.bataan import barangay_coordinates, municipality_coordinates
from servicematch.matcher.models import (
    DEFAULT_SERVICE_RADIUS_KM,
    GeoPoint,
    PriceRange,
    ProviderRecord,
    RatingSummary,
)

logger = logging.getLogger(__name__)


def _location(data: Dict[str, Any]) -> Optional[GeoPoint]:
    loc = data.get("location")
    if isinstance(loc, dict) and loc.get("latitude") is not None and loc.get("longitude") is not None:
        return GeoPoint(float(loc["latitude"]), float(loc["longitude"]))

    municipality = data.get("municipality")
    if data.get("barangay"):
        return barangay_coordinates(data["barangay"], municipality)
    if municipality:
        return municipality_coordinates(municipality)
    return None


def _rating(value: Any) -> RatingSummary:
    if isinstance(value, dict):
        return RatingSummary(average=float(value.get("average", 0.0)), count=int(value.get("count", 0)))
    if value is None:
        return RatingSummary()
    return RatingSummary(average=float(value))


def provider_from_dict(data: Dict[str, Any]) -> ProviderRecord:
    """Build a ProviderRecord from one seed entry."""
    price = data.get("price_range")
    completion = data.get("completion_rate")
    return ProviderRecord(
        provider_id=str(data["id"]),
        category=data.get("category") or "Other",
        services=frozenset(data.get("services") or ()),
        specialties=frozenset(data.get("specialties") or ()),
        location=_location(data),
        service_radius_km=float(data.get("service_radius_km", DEFAULT_SERVICE_RADIUS_KM)),
        rating=_rating(data.get("rating")),
        years_experience=int(data.get("years_experience", 0)),
        verified=bool(data.get("verified", False)),
        badges=frozenset(data.get("badges") or ()),
        completion_rate=float(completion) if completion is not None else None,
        business_name=data.get("business_name"),
        municipality=data.get("municipality"),
        price_range=PriceRange(float(price["min"]), float(price["max"])) if price else None,
        availability=data.get("availability", "available"),
    )


class ProviderDirectory:
    """Providers keyed by id, in seed order."""

    def __init__(self, providers: Iterable[ProviderRecord] = ()):
        self._providers: Dict[str, ProviderRecord] = {}
        for provider in providers:
            if provider.provider_id in self._providers:
                logger.warning(f"Duplicate provider id {provider.provider_id}; keeping the last entry")
            self._providers[provider.provider_id] = provider

    @classmethod
    def load(cls, path: str) -> "ProviderDirectory":
        with open(Path(path), "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        entries = data.get("providers") or []
        directory = cls(provider_from_dict(entry) for entry in entries)
        logger.info(f"Loaded {len(directory)} providers from {path}")
        return directory

    def get(self, provider_id: str) -> Optional[ProviderRecord]:
        return self._providers.get(provider_id)

    def all(self) -> List[ProviderRecord]:
        return list(self._providers.values())

    def __len__(self) -> int:
        return len(self._providers)
