"""Tests for route matching and the cumulative-distance cache."""

import numpy as np
import pytest

from cyclenav.guidance.models import Coord, Route
from cyclenav.guidance.route_matcher import (
    cumulative_distances,
    distance_between_indices,
    distance_to_route,
    find_closest_point_index,
    find_closest_segment_index,
    match_position,
    remaining_distance,
    route_length,
)

from route_factory import STEP_M, equator_route


def test_cumulative_distances_shape_and_values(corner_route):
    prefix = cumulative_distances(corner_route)

    assert prefix.shape == (len(corner_route),)
    assert prefix[0] == 0.0
    assert np.all(np.diff(prefix) >= 0)
    assert prefix[3] == pytest.approx(3 * STEP_M, rel=1e-9)
    assert route_length(corner_route) == pytest.approx(6 * STEP_M, rel=1e-6)


def test_cumulative_distances_are_cached_and_read_only(straight_route):
    first = cumulative_distances(straight_route)
    second = cumulative_distances(equator_route(3))

    assert first is second
    with pytest.raises(ValueError):
        first[0] = 1.0


def test_route_length_of_degenerate_routes():
    assert route_length(Route(points=())) == 0.0
    assert route_length(Route(points=(Coord(1.0, 1.0),))) == 0.0


def test_distance_between_indices_is_clamped(straight_route):
    assert distance_between_indices(straight_route, 0, 2) == pytest.approx(2 * STEP_M)
    assert distance_between_indices(straight_route, 1, 99) == pytest.approx(STEP_M)
    assert distance_between_indices(straight_route, 2, 1) == 0.0


def test_match_on_vertex(straight_route):
    match = match_position(Coord(0.0, 0.001), straight_route)

    assert match.distance_from_route_m == pytest.approx(0.0, abs=1e-9)
    assert match.distance_along_route_m == pytest.approx(STEP_M, rel=1e-9)
    # vertex 1 ends segment 0 and starts segment 1; the lower index wins
    assert match.segment_index == 0


def test_match_perpendicular_offset(straight_route):
    match = match_position(Coord(0.0005, 0.0015), straight_route)

    assert match.segment_index == 1
    assert match.closest_point.lon == pytest.approx(0.0015)
    assert match.distance_from_route_m == pytest.approx(STEP_M / 2, rel=1e-6)
    assert match.distance_along_route_m == pytest.approx(1.5 * STEP_M, rel=1e-6)


def test_distance_along_route_is_monotonic(corner_route):
    along = []
    for point in corner_route.points:
        along.append(match_position(point, corner_route).distance_along_route_m)
    # and a few between the vertices
    for lat, lon in [(0.0, 0.0005), (0.0, 0.0025), (0.0015, 0.003)]:
        along.append(match_position(Coord(lat, lon), corner_route).distance_along_route_m)

    ordered = sorted(along[:len(corner_route)])
    assert along[:len(corner_route)] == ordered
    assert along[-3] < along[3] < along[-1]


def test_match_degenerate_routes():
    assert match_position(Coord(0.0, 0.0), Route(points=())) is None

    single = Route(points=(Coord(0.0, 0.0),))
    match = match_position(Coord(0.001, 0.0), single)
    assert match.closest_point == Coord(0.0, 0.0)
    assert match.distance_along_route_m == 0.0
    assert match.distance_from_route_m == pytest.approx(STEP_M)


def test_duplicate_points_do_not_break_matching():
    route = Route.from_latlon([(0.0, 0.0), (0.0, 0.001), (0.0, 0.001), (0.0, 0.002)])
    match = match_position(Coord(0.0001, 0.0015), route)

    assert match.segment_index == 2
    assert match.distance_along_route_m == pytest.approx(1.5 * STEP_M, rel=1e-6)


def test_closest_indices(corner_route):
    pos = Coord(0.0002, 0.0021)
    assert find_closest_segment_index(pos, corner_route) == 2
    assert find_closest_point_index(pos, corner_route) == 2
    assert find_closest_segment_index(pos, Route(points=(pos,))) == 0
    assert find_closest_point_index(pos, Route(points=())) == 0


def test_distance_to_route(straight_route):
    assert distance_to_route(Coord(0.001, 0.001), straight_route) == pytest.approx(STEP_M)
    assert distance_to_route(Coord(0.001, 0.001), Route(points=())) == 0.0


def test_remaining_distance(straight_route):
    start = Coord(0.0, 0.0)
    assert remaining_distance(start, straight_route, 0) == pytest.approx(2 * STEP_M, rel=1e-9)

    mid = Coord(0.0, 0.0015)
    assert remaining_distance(mid, straight_route, 1) == pytest.approx(0.5 * STEP_M, rel=1e-6)
    # out-of-range segment index is clamped to the last point
    assert remaining_distance(mid, straight_route, 42) == pytest.approx(0.5 * STEP_M, rel=1e-6)
    assert remaining_distance(mid, Route(points=()), 0) == 0.0
