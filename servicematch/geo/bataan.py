#!/usr/bin/env python3
"""
Bataan Gazetteer - Approximate coordinates for municipalities and barangays.

Used to place jobs that arrive with a municipality or barangay name but no
coordinates. Balanga, the provincial capital, is the default.
"""
import logging
from typing import Dict, Optional, Tuple

from servicematch.matcher.models import GeoPoint

logger = logging.getLogger(__name__)

DEFAULT_MUNICIPALITY = "Balanga"

MUNICIPALITIES: Dict[str, Tuple[float, float]] = {
    "Abucay": (14.7278, 120.5333),
    "Bagac": (14.6000, 120.4000),
    "Balanga": (14.6757, 120.5360),
    "Dinalupihan": (14.8667, 120.4667),
    "Hermosa": (14.8333, 120.5000),
    "Limay": (14.5667, 120.6000),
    "Mariveles": (14.4333, 120.4833),
    "Morong": (14.5333, 120.2333),
    "Orani": (14.8000, 120.5333),
    "Orion": (14.6167, 120.5833),
    "Pilar": (14.6667, 120.5667),
    "Samal": (14.7667, 120.5333),
}

# barangay -> (lat, lng, municipality)
BARANGAYS: Dict[str, Tuple[float, float, str]] = {
    "Central": (14.6757, 120.5360, "Balanga"),
    "Poblacion": (14.6800, 120.5400, "Balanga"),
    "Bagong Nayon": (14.6650, 120.5250, "Balanga"),
    "Sibacan": (14.6900, 120.5500, "Balanga"),
    "Tuyo": (14.6600, 120.5200, "Balanga"),
    "Townsite": (14.4400, 120.4900, "Mariveles"),
    "San Carlos": (14.4200, 120.4700, "Mariveles"),
    "Reformista": (14.5700, 120.6100, "Limay"),
    "Kitang 2": (14.5600, 120.5900, "Limay"),
    "Sibul": (14.8100, 120.5400, "Orani"),
    "Wawa": (14.7900, 120.5200, "Orani"),
}

# Rough bounding box of the province
BOUNDS = {"north": 14.9, "south": 14.3, "east": 120.7, "west": 120.1}


def _lookup(table: Dict[str, tuple], name: Optional[str]) -> Optional[tuple]:
    if not name:
        return None
    key = name.strip().lower()
    for entry_name, value in table.items():
        if entry_name.lower() == key:
            return value
    return None


def municipality_coordinates(name: Optional[str]) -> Optional[GeoPoint]:
    """Centre of a Bataan municipality, or None when unknown."""
    entry = _lookup(MUNICIPALITIES, name)
    if entry is None:
        return None
    return GeoPoint(latitude=entry[0], longitude=entry[1])


def barangay_coordinates(barangay: Optional[str], municipality: Optional[str] = None) -> GeoPoint:
    """
    Resolve a barangay to coordinates.

    Falls back to the municipality centre, then to Balanga.
    """
    entry = _lookup(BARANGAYS, barangay)
    if entry is not None:
        lat, lng, owner = entry
        if not municipality or owner.lower() == municipality.strip().lower():
            return GeoPoint(latitude=lat, longitude=lng)

    centre = municipality_coordinates(municipality)
    if centre is not None:
        return centre

    logger.debug(f"No coordinates for barangay={barangay!r} municipality={municipality!r}; using {DEFAULT_MUNICIPALITY}")
    return municipality_coordinates(DEFAULT_MUNICIPALITY)


def is_within_bataan(point: GeoPoint) -> bool:
    return (
        BOUNDS["south"] <= point.latitude <= BOUNDS["north"]
        and BOUNDS["west"] <= point.longitude <= BOUNDS["east"]
    )
