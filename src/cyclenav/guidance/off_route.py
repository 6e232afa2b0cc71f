# off_route.py
# Stateless route-deviation check on top of the route matcher.

from .models import Coord, Route
from .nav_config import OFF_ROUTE_THRESHOLD_M
from .route_matcher import match_position


def is_off_route(pos: Coord, route: Route, threshold_m: float = OFF_ROUTE_THRESHOLD_M) -> bool:
    """
    True when pos is further than threshold_m from every segment of the route.

    Routes with fewer than two points have no segments and are never
    considered left.
    """
    if threshold_m < 0:
        raise ValueError(f"threshold_m must not be negative, got {threshold_m}")
    if not route.is_navigable:
        return False
    return match_position(pos, route).distance_from_route_m > threshold_m
