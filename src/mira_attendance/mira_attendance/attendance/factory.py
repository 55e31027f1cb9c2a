from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .geofence import Coordinates, Geofence
from .strategies.base import LocationStrategy
from .strategies.off_campus_strategy import OffCampusStrategy
from .strategies.on_campus_strategy import OnCampusStrategy
from .strategies.unknown_location_strategy import UnknownLocationStrategy


@dataclass
class CheckinStrategyFactory:
    """Factory Pattern: choose the location strategy for a check-in."""

    geofence: Geofence
    require_on_campus: bool = True

    def for_location(self, coordinates: Optional[Coordinates]) -> LocationStrategy:
        if coordinates is None:
            return UnknownLocationStrategy(enforce=self.require_on_campus)
        if self.geofence.contains(coordinates):
            return OnCampusStrategy()
        return OffCampusStrategy(enforce=self.require_on_campus)
