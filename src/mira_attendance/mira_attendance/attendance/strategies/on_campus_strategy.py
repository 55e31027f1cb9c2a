from __future__ import annotations

from typing import Optional

from ...core.enums import LocationStatus
from ..geofence import Coordinates, Geofence
from .base import CheckinDecision, LocationStrategy


class OnCampusStrategy(LocationStrategy):
    """Inside the campus radius."""

    def decide(self, *, coordinates: Optional[Coordinates], geofence: Geofence) -> CheckinDecision:
        return CheckinDecision(
            location_status=LocationStatus.ON_CAMPUS,
            coordinates=coordinates.label,
            distance_km=geofence.distance_from(coordinates),
        )
