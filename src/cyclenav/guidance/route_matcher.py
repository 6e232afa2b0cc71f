# route_matcher.py
# Projects a live position onto the active route.
# Everything that needs "distance along the route up to point i" reads it
# from the cached cumulative-distance array instead of re-summing segments.

from functools import lru_cache
from typing import Optional

import numpy as np

from .models import Coord, Route, RouteMatch
from .geo_utils import closest_point_on_segment, distance


# ---------------------------------------------------------------------------
# Cumulative distances
# ---------------------------------------------------------------------------

@lru_cache(maxsize=16)
def cumulative_distances(route: Route) -> np.ndarray:
    """
    Prefix sums of segment lengths for a route.

    Element i is the path length in metres from the first point to point i,
    so element 0 is always 0 and the array has one entry per route point.
    The array is cached per Route and marked read-only.
    """
    points = route.points
    lengths = np.fromiter(
        (distance(points[i], points[i + 1]) for i in range(len(points) - 1)),
        dtype=float,
        count=max(0, len(points) - 1),
    )
    prefix = np.concatenate(([0.0], np.cumsum(lengths))) if points else np.zeros(0)
    prefix.flags.writeable = False
    return prefix


def route_length(route: Route) -> float:
    """Total path length of the route in metres (0 for fewer than 2 points)."""
    prefix = cumulative_distances(route)
    return float(prefix[-1]) if prefix.size else 0.0


def distance_between_indices(route: Route, start: int, end: int) -> float:
    """Path length between two route point indices; indices are clamped."""
    prefix = cumulative_distances(route)
    if prefix.size == 0:
        return 0.0
    last = prefix.size - 1
    start = max(0, min(start, last))
    end = max(0, min(end, last))
    if end <= start:
        return 0.0
    return float(prefix[end] - prefix[start])


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------

def match_position(pos: Coord, route: Route) -> Optional[RouteMatch]:
    """
    Find where pos sits relative to the route.

    Every segment is checked; the one with the smallest perpendicular
    distance wins, and on ties the lowest segment index is kept.

    Args:
        pos:   Current geographic position.
        route: Route to match against.

    Returns:
        RouteMatch, or None for an empty route.
    """
    points = route.points
    if not points:
        return None
    if len(points) == 1:
        return RouteMatch(
            closest_point=points[0],
            distance_from_route_m=distance(pos, points[0]),
            distance_along_route_m=0.0,
            segment_index=0,
        )

    best_index = 0
    best_point = points[0]
    best_dist = float("inf")
    for i in range(len(points) - 1):
        point, dist = closest_point_on_segment(pos, points[i], points[i + 1])
        if dist < best_dist:
            best_dist = dist
            best_point = point
            best_index = i

    prefix = cumulative_distances(route)
    along = float(prefix[best_index]) + distance(points[best_index], best_point)
    # Projection and haversine disagree slightly; never run past the next vertex
    along = min(along, float(prefix[best_index + 1]))
    return RouteMatch(
        closest_point=best_point,
        distance_from_route_m=best_dist,
        distance_along_route_m=along,
        segment_index=best_index,
    )


def find_closest_segment_index(pos: Coord, route: Route) -> int:
    """Index of the first point of the segment nearest to pos (0 for short routes)."""
    if len(route.points) < 2:
        return 0
    match = match_position(pos, route)
    return match.segment_index


def find_closest_point_index(pos: Coord, route: Route) -> int:
    """Index of the route vertex nearest to pos (0 for an empty route)."""
    best_index = 0
    best_dist = float("inf")
    for i, point in enumerate(route.points):
        d = distance(pos, point)
        if d < best_dist:
            best_dist = d
            best_index = i
    return best_index


def distance_to_route(pos: Coord, route: Route) -> float:
    """Perpendicular distance from pos to the route in metres (0 for an empty route)."""
    match = match_position(pos, route)
    return match.distance_from_route_m if match else 0.0


def remaining_distance(pos: Coord, route: Route, segment_index: int) -> float:
    """
    Distance left to ride from pos to the end of the route.

    Args:
        pos:           Current position.
        route:         Active route.
        segment_index: Segment the rider is on (from find_closest_segment_index);
                       out-of-range values are clamped.

    Returns:
        Distance to the next route point plus every segment after it, in metres.
    """
    points = route.points
    if not points:
        return 0.0
    next_index = max(0, min(segment_index + 1, len(points) - 1))
    return distance(pos, points[next_index]) + distance_between_indices(
        route, next_index, len(points) - 1
    )
