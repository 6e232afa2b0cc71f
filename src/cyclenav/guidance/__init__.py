"""Turn-by-turn guidance engine: matching, maneuvers, hazards, surfaces."""

from .models import (
    Coord,
    Hazard,
    ManeuverInstruction,
    ManeuverType,
    NavStatus,
    NavUpdate,
    Route,
    RouteHazard,
    RouteMatch,
    RouteWarning,
    SegmentDetail,
    SurfaceTier,
)
from .nav_config import NavConfig
from .navigator import NavigationSession
from .announcements import AnnouncementTracker

__all__ = [
    "AnnouncementTracker",
    "Coord",
    "Hazard",
    "ManeuverInstruction",
    "ManeuverType",
    "NavConfig",
    "NavStatus",
    "NavUpdate",
    "NavigationSession",
    "Route",
    "RouteHazard",
    "RouteMatch",
    "RouteWarning",
    "SegmentDetail",
    "SurfaceTier",
]
