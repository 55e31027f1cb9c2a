from __future__ import annotations

from typing import Optional

from ...core.enums import LocationStatus
from ..geofence import Coordinates, Geofence
from .base import CheckinDecision, LocationStrategy


class OffCampusStrategy(LocationStrategy):
    """Outside the campus radius; rejected when the geofence is enforced."""

    def __init__(self, *, enforce: bool):
        self._enforce = enforce

    def decide(self, *, coordinates: Optional[Coordinates], geofence: Geofence) -> CheckinDecision:
        distance = geofence.distance_from(coordinates)
        return CheckinDecision(
            location_status=LocationStatus.OFF_CAMPUS,
            coordinates=coordinates.label,
            distance_km=distance,
            allowed=not self._enforce,
            reason=(
                f"You are {distance:.2f} km from campus. "
                f"Attendance can only be marked within {geofence.radius_km:g} km."
            ),
        )
