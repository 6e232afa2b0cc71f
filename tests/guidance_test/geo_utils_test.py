"""Unit tests for the geodesic primitives."""

import pytest

from cyclenav.guidance.geo_utils import (
    bearing,
    calculate_bearing,
    closest_point_on_segment,
    distance,
    haversine_distance,
    normalize_bearing_delta,
)
from cyclenav.guidance.models import Coord

from route_factory import STEP_M


PAIRS = [
    (Coord(0.0, 0.0), Coord(0.0, 0.001)),
    (Coord(39.9200, 32.8500), Coord(39.9236, 32.8592)),
    (Coord(-33.86, 151.21), Coord(51.50, -0.12)),
    (Coord(60.0, 10.0), Coord(60.0005, 10.002)),
]


@pytest.mark.parametrize("a, b", PAIRS)
def test_distance_is_symmetric(a, b):
    assert distance(a, b) == pytest.approx(distance(b, a), rel=1e-12)


def test_distance_of_identical_points_is_zero():
    p = Coord(48.8566, 2.3522)
    assert distance(p, p) == 0.0


def test_thousandth_degree_at_equator():
    assert haversine_distance(0.0, 0.0, 0.0, 0.001) == pytest.approx(111.19, abs=0.01)
    assert haversine_distance(0.0, 0.0, 0.001, 0.0) == pytest.approx(STEP_M, rel=1e-9)


@pytest.mark.parametrize(
    "target, expected",
    [
        (Coord(0.001, 0.0), 0.0),
        (Coord(0.0, 0.001), 90.0),
        (Coord(-0.001, 0.0), 180.0),
        (Coord(0.0, -0.001), 270.0),
    ],
)
def test_cardinal_bearings(target, expected):
    assert bearing(Coord(0.0, 0.0), target) == pytest.approx(expected, abs=1e-6)


def test_bearing_is_in_range_and_zero_for_same_point():
    assert calculate_bearing(10.0, 10.0, 10.0, 10.0) == 0.0
    for a, b in PAIRS:
        assert 0.0 <= bearing(a, b) < 360.0


@pytest.mark.parametrize(
    "delta, expected",
    [(0.0, 0.0), (190.0, -170.0), (-190.0, 170.0), (350.0, -10.0), (180.0, 180.0), (-180.0, 180.0)],
)
def test_normalize_bearing_delta(delta, expected):
    assert normalize_bearing_delta(delta) == pytest.approx(expected)


def test_projection_onto_segment_interior():
    point, dist = closest_point_on_segment(Coord(0.0005, 0.0005), Coord(0.0, 0.0), Coord(0.0, 0.001))
    assert point.lat == pytest.approx(0.0)
    assert point.lon == pytest.approx(0.0005)
    assert dist == pytest.approx(STEP_M / 2, rel=1e-6)


def test_projection_is_clamped_to_segment_ends():
    start, end = Coord(0.0, 0.0), Coord(0.0, 0.001)

    before, _ = closest_point_on_segment(Coord(0.0, -0.005), start, end)
    beyond, dist = closest_point_on_segment(Coord(0.0, 0.004), start, end)

    assert before == start
    assert beyond == end
    assert dist == pytest.approx(3 * STEP_M, rel=1e-6)


def test_degenerate_segment_returns_start():
    p = Coord(0.001, 0.001)
    seg = Coord(0.0, 0.0)
    point, dist = closest_point_on_segment(p, seg, Coord(0.0, 0.0))
    assert point == seg
    assert dist == pytest.approx(distance(p, seg))


def test_projection_never_leaves_segment_bounds():
    start, end = Coord(45.0, 7.0), Coord(45.002, 7.003)
    for dlat in (-0.01, -0.001, 0.0, 0.0015, 0.01):
        for dlon in (-0.01, 0.0, 0.002, 0.005, 0.02):
            p = Coord(45.0 + dlat, 7.0 + dlon)
            point, dist = closest_point_on_segment(p, start, end)
            assert start.lat - 1e-12 <= point.lat <= end.lat + 1e-12
            assert start.lon - 1e-12 <= point.lon <= end.lon + 1e-12
            assert dist == pytest.approx(distance(p, point))
