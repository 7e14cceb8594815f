"""Tests du moteur de proximite / Proximity engine tests."""

import math

import pytest

from guard_patrol.utils.geo import Coordinate, distance_m, haversine_m, is_within_radius
from tests.conftest import CHECKPOINT_COORD, offset_north

POINTS = [
    Coordinate(0.0, 0.0),
    Coordinate(40.7128, -74.0060),
    Coordinate(48.8566, 2.3522),
    Coordinate(-33.8688, 151.2093),
    Coordinate(89.9999, 179.9999),
]


@pytest.mark.parametrize("point", POINTS)
def test_coincident_points(point):
    assert distance_m(point, point) == 0


@pytest.mark.parametrize("a", POINTS)
@pytest.mark.parametrize("b", POINTS)
def test_symmetry(a, b):
    assert distance_m(a, b) == pytest.approx(distance_m(b, a), rel=1e-6)


def test_equator_fixture_near_fifty_meters():
    dist = haversine_m(0.0, 0.0, 0.00045, 0.0)
    assert dist == pytest.approx(50.0, rel=1e-2)


def test_radius_boundary_is_inclusive():
    assert is_within_radius(50.0, 50.0)
    assert not is_within_radius(50.000001, 50.0)


def test_forty_nine_and_fifty_one_meters():
    origin = Coordinate(0.0, 0.0)
    inside = distance_m(origin, Coordinate(math.degrees(49 / 6371000), 0.0))
    outside = distance_m(origin, Coordinate(math.degrees(51 / 6371000), 0.0))
    assert inside == pytest.approx(49.0)
    assert outside == pytest.approx(51.0)
    assert is_within_radius(inside, 50.0)
    assert not is_within_radius(outside, 50.0)


def test_two_hundred_meters():
    reported = offset_north(CHECKPOINT_COORD, 200)
    assert distance_m(CHECKPOINT_COORD, reported) == pytest.approx(200, rel=1e-6)


def test_haversine_long_distance():
    # Paris -> Lyon ~ 392 km
    dist = haversine_m(48.8566, 2.3522, 45.7640, 4.8357)
    assert 380_000 < dist < 400_000


def test_antipodes_stay_finite():
    dist = haversine_m(0.0, 0.0, 0.0, 180.0)
    assert dist == pytest.approx(math.pi * 6371000)
