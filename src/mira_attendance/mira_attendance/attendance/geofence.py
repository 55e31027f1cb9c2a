"""Campus geofence: haversine distance from the campus centre."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.constants import EARTH_RADIUS_KM
from ..core.exceptions import ValidationError


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in kilometres."""

    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0 or not -180.0 <= self.longitude <= 180.0:
            raise ValidationError("Coordinates are out of range")

    @property
    def label(self) -> str:
        return f"{self.latitude:.4f}, {self.longitude:.4f}"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Optional["Coordinates"]:
        """Read latitude/longitude from a request payload; None when absent."""

        lat = data.get("latitude")
        lon = data.get("longitude")
        if lat is None and lon is None:
            coords = data.get("coordinates")
            if isinstance(coords, Mapping):
                lat, lon = coords.get("latitude"), coords.get("longitude")
        if lat is None or lon is None:
            return None
        try:
            return cls(latitude=float(lat), longitude=float(lon))
        except (TypeError, ValueError):
            raise ValidationError("Coordinates must be numbers")


@dataclass(frozen=True)
class Geofence:
    latitude: float
    longitude: float
    radius_km: float

    def distance_from(self, coordinates: Coordinates) -> float:
        return distance_km(coordinates.latitude, coordinates.longitude, self.latitude, self.longitude)

    def contains(self, coordinates: Coordinates) -> bool:
        return self.distance_from(coordinates) <= self.radius_km
