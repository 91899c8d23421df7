"""
Core building blocks: proximity queries, the tour state machine and domain errors.
Infrastructure modules (db, cache_client, error_handlers) are imported directly.
"""

from .geo import (
    GeoPoint,
    PointOfInterest,
    RadiusSetting,
    distance_km,
    filter_within_radius,
    nearest_unvisited,
)
from .tour import TourController, TourSession, TourState

__all__ = [
    "GeoPoint",
    "PointOfInterest",
    "RadiusSetting",
    "distance_km",
    "filter_within_radius",
    "nearest_unvisited",
    "TourController",
    "TourSession",
    "TourState",
]
