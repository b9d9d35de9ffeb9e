#!/usr/bin/env python3
"""
Geo Distance - Haversine great-circle distance and radius checks.
"""
import math
from typing import Any, Tuple

from servicematch.exceptions import InvalidCoordinate

EARTH_RADIUS_KM = 6371.0

# Average road speed used for travel time estimates inside the province
DEFAULT_TRAVEL_SPEED_KMH = 30.0


def _coordinates(point: Any) -> Tuple[float, float]:
    """Return (latitude, longitude) from any object exposing both attributes."""
    try:
        lat = float(point.latitude)
        lng = float(point.longitude)
    except (AttributeError, TypeError, ValueError) as e:
        raise InvalidCoordinate(f"Not a coordinate: {point!r}") from e

    if not (math.isfinite(lat) and math.isfinite(lng)):
        raise InvalidCoordinate(f"Non-finite coordinate: ({lat}, {lng})")
    if not -90.0 <= lat <= 90.0:
        raise InvalidCoordinate(f"Latitude out of range: {lat}")
    if not -180.0 <= lng <= 180.0:
        raise InvalidCoordinate(f"Longitude out of range: {lng}")
    return lat, lng


def distance_km(a: Any, b: Any) -> float:
    """
    Great-circle distance between two points using the Haversine formula.

    Args:
        a: Point with latitude/longitude attributes
        b: Point with latitude/longitude attributes

    Returns:
        Distance in kilometers (unrounded)

    Raises:
        InvalidCoordinate: If either point is malformed
    """
    lat1, lng1 = _coordinates(a)
    lat2, lng2 = _coordinates(b)

    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)

    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c


def within_radius(origin: Any, point: Any, radius_km: float) -> bool:
    """True when point lies within radius_km of origin (boundary inclusive)."""
    return distance_km(origin, point) <= radius_km


def format_distance(km: float) -> str:
    """Format a distance for display, e.g. '450m away' or '2.3km away'."""
    if km < 1:
        return f"{round(km * 1000)}m away"
    if km < 10:
        return f"{km:.1f}km away"
    return f"{round(km)}km away"


def estimate_travel_time(a: Any, b: Any, speed_kmh: float = DEFAULT_TRAVEL_SPEED_KMH) -> str:
    """Rough drive time between two points, e.g. '12 min drive' or '1h 5m drive'."""
    minutes = round(distance_km(a, b) / speed_kmh * 60)
    if minutes < 60:
        return f"{minutes} min drive"
    return f"{minutes // 60}h {minutes % 60}m drive"
