# surface.py
# Road-surface warnings from the routing provider's per-range surface tags.

import logging
from typing import Dict, List, Optional

from .models import Coord, Route, RouteWarning, SurfaceTier
from .route_matcher import cumulative_distances, match_position

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Surface tag -> tier
# ---------------------------------------------------------------------------

SURFACE_TIERS: Dict[str, SurfaceTier] = {
    # Sealed
    "asphalt":            SurfaceTier.GOOD,
    "concrete":           SurfaceTier.GOOD,
    "paved":              SurfaceTier.GOOD,
    # Firm unsealed
    "compacted":          SurfaceTier.GOOD,
    "fine_gravel":        SurfaceTier.GOOD,
    # Rough
    "gravel":             SurfaceTier.POOR,
    "unpaved":            SurfaceTier.POOR,
    "dirt":               SurfaceTier.POOR,
    "earth":              SurfaceTier.POOR,
    "ground":             SurfaceTier.POOR,
    "sand":               SurfaceTier.POOR,
    "grass":              SurfaceTier.POOR,
    "mud":                SurfaceTier.POOR,
    "pebblestone":        SurfaceTier.POOR,
    "cobble":             SurfaceTier.POOR,
    "cobblestone":        SurfaceTier.POOR,
    "unhewn_cobblestone": SurfaceTier.POOR,
    "sett":               SurfaceTier.POOR,
}


def normalize_surface_tag(tag: Optional[str]) -> str:
    """Lower-case the tag and unify separators: 'Fine-Gravel' -> 'fine_gravel'."""
    if not tag:
        return ""
    return tag.strip().lower().replace("-", "_").replace(" ", "_")


def classify_surface(tag: Optional[str]) -> SurfaceTier:
    """
    Quality tier for a raw surface tag.

    OSM-style subtypes ("concrete:plates", "cobblestone:flattened") are
    classified by their main type. Empty and unrecognised tags are UNKNOWN.
    """
    normalized = normalize_surface_tag(tag)
    main_type = normalized.split(":", 1)[0]
    return SURFACE_TIERS.get(main_type, SurfaceTier.UNKNOWN)


# ---------------------------------------------------------------------------
# Route analysis
# ---------------------------------------------------------------------------

def analyze_route_surface(route: Route, current_position: Optional[Coord] = None) -> List[RouteWarning]:
    """
    Warnings for every poor or unknown surface range on the route.

    Args:
        route:            Route carrying SegmentDetail surface data.
        current_position: Optional rider position. When given, each warning
                          gets distance_from_user_m and ranges starting at or
                          behind the rider are dropped.

    Returns:
        RouteWarning list sorted ascending by distance along the route.
    """
    if not route.has_surface_data or not route.points:
        logger.debug("[Surface] No surface data on route.")
        return []

    prefix = cumulative_distances(route)
    last = len(route.points) - 1

    user_along: Optional[float] = None
    if current_position is not None:
        user_along = match_position(current_position, route).distance_along_route_m

    warnings: List[RouteWarning] = []
    for detail in route.surface_details:
        start = max(0, detail.start_index)
        if start > last:
            logger.warning(
                f"[Surface] Range {detail.start_index}-{detail.end_index} starts past the "
                f"last route point ({last}); skipped."
            )
            continue
        end = min(detail.end_index, last)
        if end < start:
            logger.warning(f"[Surface] Inverted range {detail.start_index}-{detail.end_index}; skipped.")
            continue

        tier = classify_surface(detail.surface)
        if tier is SurfaceTier.GOOD:
            continue

        along = float(prefix[start])
        length = float(prefix[end] - prefix[start])

        from_user: Optional[float] = None
        if user_along is not None:
            from_user = along - user_along
            if from_user <= 0:
                continue

        warnings.append(RouteWarning(
            tier=tier,
            distance_along_route_m=along,
            length_m=length,
            surface=detail.surface,
            distance_from_user_m=from_user,
        ))
        logger.debug(
            f"[Surface] {tier.value} surface '{detail.surface}' at {along:.0f} m, "
            f"length {length:.0f} m"
        )

    warnings.sort(key=lambda w: w.distance_along_route_m)
    logger.info(f"[Surface] {len(warnings)} surface warnings.")
    return warnings
