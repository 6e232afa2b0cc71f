# hazards.py
# Finds community-reported hazards that lie inside a lateral corridor around
# the route, tagged with how far along the route each one is.

import logging
from typing import Iterable, List, Sequence

from shapely.geometry import MultiPoint, Point, Polygon, box
from shapely.prepared import prep

from .models import Coord, Hazard, Route, RouteHazard
from .nav_config import HAZARD_BUFFER_M, MAX_UPCOMING_HAZARDS, ROUTE_BOUNDS_MARGIN_DEG
from .route_matcher import match_position

logger = logging.getLogger(__name__)


def route_bounds(route: Route, margin_deg: float = ROUTE_BOUNDS_MARGIN_DEG) -> Polygon:
    """
    Bounding box of the route in (lon, lat) space, grown by margin_deg.

    The margin keeps hazards just outside the extreme route points from
    being clipped by the pre-filter.
    """
    if not route.points:
        raise ValueError("Cannot compute bounds of an empty route")
    min_lon, min_lat, max_lon, max_lat = MultiPoint(
        [(p.lon, p.lat) for p in route.points]
    ).bounds
    return box(
        min_lon - margin_deg,
        min_lat - margin_deg,
        max_lon + margin_deg,
        max_lat + margin_deg,
    )


def detect_hazards_on_route(
    route: Route,
    hazards: Iterable[Hazard],
    buffer_m: float = HAZARD_BUFFER_M,
) -> List[RouteHazard]:
    """
    Hazards within buffer_m of the route line.

    A cheap bounding-box test rejects far-away hazards before each remaining
    candidate is projected onto the full route.

    Args:
        route:    Active route.
        hazards:  All known hazards, typically those in the route's area.
        buffer_m: Corridor half-width in metres.

    Returns:
        RouteHazard list sorted ascending by distance along the route.
    """
    if buffer_m < 0:
        raise ValueError(f"buffer_m must not be negative, got {buffer_m}")

    hazards = list(hazards)
    if not route.points or not hazards:
        return []

    bounds = prep(route_bounds(route))
    candidates = [h for h in hazards if bounds.covers(Point(h.location.lon, h.location.lat))]
    logger.debug(f"[Hazards] {len(candidates)}/{len(hazards)} hazards inside route bounds.")

    detected: List[RouteHazard] = []
    for hazard in candidates:
        match = match_position(hazard.location, route)
        if match.distance_from_route_m > buffer_m:
            continue
        detected.append(RouteHazard(
            hazard=hazard,
            distance_along_route_m=match.distance_along_route_m,
            distance_from_route_m=match.distance_from_route_m,
            closest_point=match.closest_point,
        ))

    # sort is stable: equal distances keep input order
    detected.sort(key=lambda rh: rh.distance_along_route_m)

    for rh in detected:
        logger.debug(
            f"[Hazards]  - {rh.hazard.category}: {rh.hazard.title!r} "
            f"at {rh.distance_along_route_m:.0f} m (offset {rh.distance_from_route_m:.0f} m)"
        )
    logger.info(f"[Hazards] {len(detected)} hazards on route (buffer {buffer_m:.0f} m).")
    return detected


def get_upcoming_hazards(
    route_hazards: Sequence[RouteHazard],
    position: Coord,
    route: Route,
    max_count: int = MAX_UPCOMING_HAZARDS,
) -> List[RouteHazard]:
    """
    The next max_count hazards strictly ahead of the rider.

    Args:
        route_hazards: Output of detect_hazards_on_route for this route.
        position:      Current rider position.
        route:         Active route.
        max_count:     Maximum number of hazards to return.

    Returns:
        Hazards in route order, nearest first.
    """
    if max_count < 0:
        raise ValueError(f"max_count must not be negative, got {max_count}")
    if not route_hazards or not route.points:
        return []

    current_along = match_position(position, route).distance_along_route_m
    ahead = [rh for rh in route_hazards if rh.distance_along_route_m > current_along]
    return ahead[:max_count]
