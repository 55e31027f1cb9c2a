from __future__ import annotations

from typing import Optional

from ...core.enums import LocationStatus
from ..geofence import Coordinates, Geofence
from .base import CheckinDecision, LocationStrategy


class UnknownLocationStrategy(LocationStrategy):
    """No coordinates were sent (location permission denied, desktop browser...)."""

    def __init__(self, *, enforce: bool):
        self._enforce = enforce

    def decide(self, *, coordinates: Optional[Coordinates], geofence: Geofence) -> CheckinDecision:
        return CheckinDecision(
            location_status=LocationStatus.OFF_CAMPUS,
            allowed=not self._enforce,
            reason="Location access is required to mark attendance.",
        )
