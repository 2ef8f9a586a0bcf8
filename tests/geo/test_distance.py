import pytest

from conftest import point_east
from geo_attendance.geo.distance import format_distance, haversine_distance
from geo_attendance.geo.model import Coordinate

PAIRS = [
    (Coordinate(0.0, 0.0), Coordinate(0.0, 1.0)),
    (Coordinate(-6.7799869, 39.2023453), Coordinate(-6.7712, 39.2401)),
    (Coordinate(51.5007, -0.1246), Coordinate(40.6892, -74.0445)),
    (Coordinate(89.9, 179.9), Coordinate(-89.9, -179.9)),
]


@pytest.mark.parametrize("a,b", PAIRS)
def test_distance_is_symmetric(a, b):
    assert haversine_distance(a, b) == pytest.approx(haversine_distance(b, a))


@pytest.mark.parametrize("a,_", PAIRS)
def test_distance_to_self_is_zero(a, _):
    assert haversine_distance(a, a) == 0


def test_one_kilometre_reference_pair():
    origin = Coordinate(0.0, 0.0)
    assert abs(haversine_distance(origin, point_east(1000)) - 1000) < 1


def test_one_degree_of_latitude():
    # 2 * pi * 6371 km / 360
    d = haversine_distance(Coordinate(0.0, 10.0), Coordinate(1.0, 10.0))
    assert d == pytest.approx(111_194.93, abs=1)


def test_nan_propagates():
    d = haversine_distance(Coordinate(float("nan"), 0.0), Coordinate(0.0, 0.0))
    assert d != d


@pytest.mark.parametrize(
    "meters,expected",
    [
        (0, "0m"),
        (42.4, "42m"),
        (999, "999m"),
        (1000, "1.00km"),
        (1240.2, "1.24km"),
        (2500, "2.50km"),
    ],
)
def test_format_distance(meters, expected):
    assert format_distance(meters) == expected
