"""
Great-circle distance and proximity queries over points of interest.

Everything here is a pure function over records already loaded from the
catalog: the radius filter used for "hotels / shops near the active place"
and the greedy nearest-unvisited pick that drives tour mode.

Candidates with a missing or invalid coordinate are skipped by both queries
(logged at DEBUG). An invalid *origin* raises ``InvalidGeoPointError``.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence

from heritage_map.core.exceptions import InvalidGeoPointError, InvalidRadiusError

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self):
        if not _valid_coordinate(self.latitude, 90.0) or not _valid_coordinate(self.longitude, 180.0):
            raise InvalidGeoPointError(
                "Latitude must be within [-90, 90] and longitude within [-180, 180]",
                details={"latitude": self.latitude, "longitude": self.longitude},
            )

    @classmethod
    def from_optional(cls, latitude: Optional[float], longitude: Optional[float]) -> "GeoPoint":
        """Build an origin point, rejecting missing values."""
        if latitude is None or longitude is None:
            raise InvalidGeoPointError(
                "latitude and longitude are required",
                details={"latitude": latitude, "longitude": longitude},
            )
        return cls(latitude, longitude)


@dataclass(frozen=True)
class PointOfInterest:
    """A place, hotel or artisan shop with a fixed coordinate.

    Coordinates are optional because catalog rows are not validated on entry;
    such records never match a proximity query.
    """

    id: str
    name: str
    latitude: Optional[float]
    longitude: Optional[float]
    category: Optional[str] = None
    attributes: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def location(self) -> Optional[GeoPoint]:
        if not _valid_coordinate(self.latitude, 90.0) or not _valid_coordinate(self.longitude, 180.0):
            return None
        return GeoPoint(self.latitude, self.longitude)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }
        data.update(self.attributes)
        return data


class RadiusSetting(float, Enum):
    """Selectable search radii, in kilometres."""

    M300 = 0.3
    KM1 = 1.0
    KM2 = 2.0
    KM3 = 3.0
    KM5 = 5.0

    @classmethod
    def options(cls) -> List[float]:
        return [member.value for member in cls]

    @classmethod
    def parse(cls, value: Any) -> "RadiusSetting":
        try:
            radius = float(value)
        except (TypeError, ValueError):
            raise InvalidRadiusError(value, cls.options())
        for member in cls:
            if math.isclose(member.value, radius, abs_tol=1e-9):
                return member
        raise InvalidRadiusError(value, cls.options())


def _valid_coordinate(value: Any, limit: float) -> bool:
    if value is None or isinstance(value, bool):
        return False
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(number) and -limit <= number <= limit


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """Haversine distance between two points on a spherical Earth."""
    lat1, lat2 = math.radians(a.latitude), math.radians(b.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(b.longitude - a.longitude)
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    # rounding can push h a hair past 1 for antipodal points
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(min(1.0, h)))


def _located(candidates: Iterable[PointOfInterest]):
    for candidate in candidates:
        location = candidate.location
        if location is None:
            logger.debug(
                "Skipping point of interest without usable coordinates",
                extra={"poi_id": candidate.id},
            )
            continue
        yield candidate, location


def filter_within_radius(
    origin: GeoPoint,
    radius_km: float,
    candidates: Sequence[PointOfInterest],
) -> List[PointOfInterest]:
    """Every candidate within ``radius_km`` of ``origin``, in input order."""
    return [
        candidate
        for candidate, location in _located(candidates)
        if distance_km(origin, location) <= radius_km
    ]


def nearest_unvisited(
    origin: GeoPoint,
    candidates: Sequence[PointOfInterest],
    visited: Iterable[str],
) -> Optional[PointOfInterest]:
    """Closest candidate whose id is not in ``visited``.

    Ties go to the earliest candidate in input order. Returns None when there
    is nothing left to visit.
    """
    visited = visited if isinstance(visited, (set, frozenset)) else set(visited)
    best: Optional[PointOfInterest] = None
    best_distance = math.inf
    for candidate, location in _located(candidates):
        if candidate.id in visited:
            continue
        d = distance_km(origin, location)
        if d < best_distance:
            best, best_distance = candidate, d
    return best
