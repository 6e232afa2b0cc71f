"""Tests for the hazard corridor detector."""

import pytest

from cyclenav.guidance.hazards import detect_hazards_on_route, get_upcoming_hazards, route_bounds
from cyclenav.guidance.models import Coord, Route

from route_factory import STEP_M, equator_route, make_hazard


def test_hazard_near_route_end_is_included():
    route = equator_route(2)
    # ~56 m north of the last point, beyond the end of the only segment
    hazard = make_hazard("h1", 0.0005, 0.001)

    detected = detect_hazards_on_route(route, [hazard], buffer_m=75.0)

    assert len(detected) == 1
    rh = detected[0]
    assert rh.hazard is hazard
    assert rh.distance_from_route_m == pytest.approx(STEP_M / 2, rel=1e-6)
    assert rh.distance_along_route_m == pytest.approx(STEP_M, rel=1e-9)
    assert rh.closest_point == Coord(0.0, 0.001)


def test_hazard_outside_buffer_is_excluded():
    route = equator_route(3)
    near = make_hazard("near", 0.0006, 0.001)   # ~67 m
    far = make_hazard("far", 0.0009, 0.001)     # ~100 m

    ids = [rh.hazard.id for rh in detect_hazards_on_route(route, [near, far])]
    assert ids == ["near"]


def test_hazard_outside_bounds_is_never_returned():
    route = equator_route(3)
    outside = make_hazard("outside", 0.05, 0.001)   # well past the 0.01 deg margin

    assert detect_hazards_on_route(route, [outside], buffer_m=1e7) == []


def test_result_is_sorted_and_within_buffer(long_route):
    hazards = [
        make_hazard("c", 0.0003, 0.008),
        make_hazard("a", -0.0002, 0.001),
        make_hazard("x", 0.002, 0.005),     # ~222 m off
        make_hazard("b", 0.0001, 0.004),
    ]
    detected = detect_hazards_on_route(long_route, hazards, buffer_m=75.0)

    assert [rh.hazard.id for rh in detected] == ["a", "b", "c"]
    along = [rh.distance_along_route_m for rh in detected]
    assert along == sorted(along)
    assert all(rh.distance_from_route_m <= 75.0 for rh in detected)


def test_hazards_without_id_are_still_detected(long_route):
    detected = detect_hazards_on_route(long_route, [make_hazard(None, 0.0001, 0.002)])
    assert len(detected) == 1
    assert detected[0].hazard.id is None


def test_empty_inputs():
    assert detect_hazards_on_route(equator_route(3), []) == []
    assert detect_hazards_on_route(Route(points=()), [make_hazard("h", 0.0, 0.0)]) == []


def test_negative_buffer_is_rejected():
    with pytest.raises(ValueError):
        detect_hazards_on_route(equator_route(3), [make_hazard("h", 0.0, 0.0)], buffer_m=-1.0)


def test_route_bounds_margin():
    min_lon, min_lat, max_lon, max_lat = route_bounds(equator_route(3)).bounds

    assert (min_lon, min_lat) == pytest.approx((-0.01, -0.01))
    assert (max_lon, max_lat) == pytest.approx((0.012, 0.01))


def test_upcoming_hazards_are_ahead_and_truncated():
    route = equator_route(5)
    all_hazards = detect_hazards_on_route(route, [
        make_hazard("h1", 0.0001, 0.001),
        make_hazard("h2", 0.0001, 0.002),
        make_hazard("h3", 0.0001, 0.003),
    ])
    pos = Coord(0.0, 0.0015)

    ahead = get_upcoming_hazards(all_hazards, pos, route)
    assert [rh.hazard.id for rh in ahead] == ["h2", "h3"]

    assert [rh.hazard.id for rh in get_upcoming_hazards(all_hazards, pos, route, max_count=1)] == ["h2"]
    assert get_upcoming_hazards(all_hazards, Coord(0.0, 0.0035), route) == []
    assert get_upcoming_hazards([], pos, route) == []


def test_hazard_at_rider_position_is_not_upcoming():
    route = equator_route(3)
    all_hazards = detect_hazards_on_route(route, [make_hazard("h", 0.0, 0.001)])

    assert get_upcoming_hazards(all_hazards, Coord(0.0, 0.001), route) == []


def test_distance_from_rider():
    route = equator_route(3)
    rh = detect_hazards_on_route(route, [make_hazard("h", 0.0001, 0.002)])[0]
    assert rh.distance_from(STEP_M) == pytest.approx(STEP_M, rel=1e-6)
