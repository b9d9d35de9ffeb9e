"""Geo Module - Distance calculations and Bataan place lookups."""
from servicematch.geo.distance import (
    EARTH_RADIUS_KM,
    distance_km,
    within_radius,
    format_distance,
    estimate_travel_time,
)

__all__ = [
    'EARTH_RADIUS_KM', 'distance_km', 'within_radius',
    'format_distance', 'estimate_travel_time',
]
