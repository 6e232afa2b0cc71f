# geo_utils.py
# Pure mathematical / geographic helper functions.
# No side effects; the only project import is the Coord value type.

import math
from typing import Tuple

from .models import Coord


EARTH_RADIUS_M = 6_371_000.0


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance between two points in metres.

    Args:
        lat1, lon1: Origin in decimal degrees.
        lat2, lon2: Destination in decimal degrees.

    Returns:
        Distance in metres.
    """
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push a a hair past 1 for antipodal points
    a = min(1.0, a)
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def calculate_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Forward azimuth (bearing) from point 1 to point 2 in degrees [0, 360).

    Identical points have no direction; 0.0 is returned for them.

    Args:
        lat1, lon1: Origin in decimal degrees.
        lat2, lon2: Destination in decimal degrees.

    Returns:
        Bearing in degrees, 0 = north, clockwise.
    """
    if lat1 == lat2 and lon1 == lon2:
        return 0.0
    rlat1, rlon1 = math.radians(lat1), math.radians(lon1)
    rlat2, rlon2 = math.radians(lat2), math.radians(lon2)
    d_lon = rlon2 - rlon1
    y = math.sin(d_lon) * math.cos(rlat2)
    x = math.cos(rlat1) * math.sin(rlat2) - math.sin(rlat1) * math.cos(rlat2) * math.cos(d_lon)
    return (math.degrees(math.atan2(y, x)) + 360) % 360


def normalize_bearing_delta(delta: float) -> float:
    """Fold a bearing difference into (-180, 180]."""
    folded = (delta + 180.0) % 360.0 - 180.0
    return 180.0 if folded == -180.0 else folded


# ---------------------------------------------------------------------------
# Coord wrappers
# ---------------------------------------------------------------------------

def distance(a: Coord, b: Coord) -> float:
    """Great-circle distance between two coordinates in metres."""
    return haversine_distance(a.lat, a.lon, b.lat, b.lon)


def bearing(origin: Coord, target: Coord) -> float:
    """Initial bearing from origin toward target in degrees [0, 360)."""
    return calculate_bearing(origin.lat, origin.lon, target.lat, target.lon)


def closest_point_on_segment(p: Coord, seg_start: Coord, seg_end: Coord) -> Tuple[Coord, float]:
    """
    Project p onto the segment [seg_start, seg_end].

    Uses an equirectangular approximation (longitude scaled by the cosine of
    the mean latitude), which is accurate at city / regional scale. The
    projection parameter is clamped to [0, 1] so the result always lies on
    the segment itself.

    Args:
        p:         Point to project.
        seg_start: Segment start.
        seg_end:   Segment end.

    Returns:
        (closest point on the segment, haversine distance from p to it in metres)
    """
    dy = seg_end.lat - seg_start.lat
    dx = seg_end.lon - seg_start.lon

    # Degenerate segment
    if dx == 0 and dy == 0:
        return seg_start, distance(p, seg_start)

    scale = math.cos(math.radians((seg_start.lat + seg_end.lat) / 2))
    sx = dx * scale
    px = (p.lon - seg_start.lon) * scale
    py = p.lat - seg_start.lat

    denom = sx * sx + dy * dy
    if denom == 0:
        # Both ends on a pole: every point of the segment is the same place
        return seg_start, distance(p, seg_start)

    t = (px * sx + py * dy) / denom
    t = max(0.0, min(1.0, t))

    if t == 0.0:
        closest = seg_start
    elif t == 1.0:
        closest = seg_end
    else:
        closest = Coord(seg_start.lat + t * dy, seg_start.lon + t * dx)
    return closest, distance(p, closest)
