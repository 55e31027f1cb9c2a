from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import LocationStatus
from ..geofence import Coordinates, Geofence


@dataclass(frozen=True)
class CheckinDecision:
    location_status: LocationStatus
    coordinates: Optional[str] = None
    distance_km: Optional[float] = None
    allowed: bool = True
    reason: Optional[str] = None


class LocationStrategy(ABC):
    """Strategy Pattern: encapsulate how a check-in location is judged."""

    @abstractmethod
    def decide(self, *, coordinates: Optional[Coordinates], geofence: Geofence) -> CheckinDecision:
        raise NotImplementedError
