import pytest

from src.mira_attendance.mira_attendance.attendance.factory import CheckinStrategyFactory
from src.mira_attendance.mira_attendance.attendance.geofence import Coordinates, Geofence, distance_km
from src.mira_attendance.mira_attendance.attendance.strategies.off_campus_strategy import OffCampusStrategy
from src.mira_attendance.mira_attendance.attendance.strategies.on_campus_strategy import OnCampusStrategy
from src.mira_attendance.mira_attendance.attendance.strategies.unknown_location_strategy import UnknownLocationStrategy
from src.mira_attendance.mira_attendance.core.enums import LocationStatus
from src.mira_attendance.mira_attendance.core.exceptions import ValidationError

CAMPUS = Geofence(latitude=18.4550, longitude=79.5217, radius_km=0.5)


def test_distance_is_zero_at_the_same_point():
    assert distance_km(18.4550, 79.5217, 18.4550, 79.5217) == 0


def test_one_hundredth_of_a_degree_latitude_is_about_1_1_km():
    assert distance_km(18.4550, 79.5217, 18.4650, 79.5217) == pytest.approx(1.112, abs=0.01)


def test_geofence_contains_nearby_points_but_not_distant_ones():
    assert CAMPUS.contains(Coordinates(18.4551, 79.5218))
    assert not CAMPUS.contains(Coordinates(18.4650, 79.5217))


def test_geofence_boundary_is_inclusive():
    gate = Coordinates(18.4580, 79.5240)
    radius = CAMPUS.distance_from(gate)
    exact = Geofence(latitude=CAMPUS.latitude, longitude=CAMPUS.longitude, radius_km=radius)
    tighter = Geofence(latitude=CAMPUS.latitude, longitude=CAMPUS.longitude, radius_km=radius - 1e-6)

    assert exact.contains(gate)
    assert not tighter.contains(gate)


def test_coordinates_label_uses_four_decimals():
    assert Coordinates(18.455012, 79.52171).label == "18.4550, 79.5217"


def test_coordinates_out_of_range_are_rejected():
    with pytest.raises(ValidationError):
        Coordinates(95.0, 10.0)


def test_coordinates_from_mapping():
    assert Coordinates.from_mapping({"latitude": "18.4", "longitude": 79.5}) == Coordinates(18.4, 79.5)
    assert Coordinates.from_mapping({"coordinates": {"latitude": 1, "longitude": 2}}) == Coordinates(1.0, 2.0)
    assert Coordinates.from_mapping({}) is None
    with pytest.raises(ValidationError):
        Coordinates.from_mapping({"latitude": "north", "longitude": 1})


def test_factory_picks_on_campus_strategy_inside_radius():
    factory = CheckinStrategyFactory(CAMPUS)
    strategy = factory.for_location(Coordinates(18.4551, 79.5218))

    assert isinstance(strategy, OnCampusStrategy)
    decision = strategy.decide(coordinates=Coordinates(18.4551, 79.5218), geofence=CAMPUS)
    assert decision.allowed
    assert decision.location_status == LocationStatus.ON_CAMPUS
    assert decision.coordinates == "18.4551, 79.5218"


def test_factory_rejects_off_campus_when_enforced():
    factory = CheckinStrategyFactory(CAMPUS, require_on_campus=True)
    far = Coordinates(18.4650, 79.5217)
    strategy = factory.for_location(far)

    assert isinstance(strategy, OffCampusStrategy)
    decision = strategy.decide(coordinates=far, geofence=CAMPUS)
    assert not decision.allowed
    assert "1.11 km from campus" in decision.reason


def test_factory_allows_off_campus_when_not_enforced():
    factory = CheckinStrategyFactory(CAMPUS, require_on_campus=False)
    far = Coordinates(18.4650, 79.5217)
    decision = factory.for_location(far).decide(coordinates=far, geofence=CAMPUS)

    assert decision.allowed
    assert decision.location_status == LocationStatus.OFF_CAMPUS
    assert decision.distance_km == pytest.approx(1.112, abs=0.01)


def test_missing_location_is_off_campus():
    factory = CheckinStrategyFactory(CAMPUS, require_on_campus=False)
    strategy = factory.for_location(None)

    assert isinstance(strategy, UnknownLocationStrategy)
    decision = strategy.decide(coordinates=None, geofence=CAMPUS)
    assert decision.allowed
    assert decision.location_status == LocationStatus.OFF_CAMPUS
    assert decision.coordinates is None
