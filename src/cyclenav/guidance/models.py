# models.py
# Shared data structures and enums used across all guidance modules.

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from ..errors import InvalidCoordinateError


# ---------------------------------------------------------------------------
# Coordinate
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Coord:
    """Immutable geographic coordinate in decimal degrees."""
    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.lat) and math.isfinite(self.lon)):
            raise InvalidCoordinateError(f"Non-finite coordinate: ({self.lat}, {self.lon})")


# ---------------------------------------------------------------------------
# Route
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SegmentDetail:
    """Surface tag attached to the route point range [start_index, end_index]."""
    start_index: int
    end_index: int
    surface: str


@dataclass(frozen=True)
class Route:
    """
    Ordered polyline supplied by the routing provider.

    The point sequence never changes after construction. Anything derived
    from it (maneuvers, route hazards, surface warnings) must be rebuilt
    when a new Route is activated.
    """
    points: Tuple[Coord, ...]
    surface_details: Tuple[SegmentDetail, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple(self.points))
        details = sorted(self.surface_details or (), key=lambda d: (d.start_index, d.end_index))
        object.__setattr__(self, "surface_details", tuple(details))

    def __len__(self) -> int:
        return len(self.points)

    @property
    def is_navigable(self) -> bool:
        return len(self.points) >= 2

    @property
    def has_surface_data(self) -> bool:
        return bool(self.surface_details)

    @staticmethod
    def from_latlon(
        pairs: Iterable[Sequence[float]],
        surface_details: Optional[Iterable[Sequence]] = None,
    ) -> "Route":
        """
        Build a Route from raw provider data.

        Args:
            pairs:           (lat, lon) pairs.
            surface_details: Optional [start_index, end_index, surface] triples,
                             the shape routing providers use for path details.
        """
        points = tuple(Coord(float(lat), float(lon)) for lat, lon in pairs)
        details = tuple(
            SegmentDetail(int(d[0]), int(d[1]), "" if d[2] is None else str(d[2]))
            for d in (surface_details or ())
            if len(d) >= 3
        )
        return Route(points=points, surface_details=details)


# ---------------------------------------------------------------------------
# Route matching
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RouteMatch:
    """Result of projecting a live position onto a Route."""
    closest_point: Coord
    distance_from_route_m: float
    distance_along_route_m: float
    segment_index: int


# ---------------------------------------------------------------------------
# Maneuvers
# ---------------------------------------------------------------------------

class ManeuverType(Enum):
    DEPART       = "depart"
    ARRIVE       = "arrive"
    STRAIGHT     = "straight"      # internal only, never emitted
    SLIGHT_LEFT  = "slight_left"
    TURN_LEFT    = "turn_left"
    SHARP_LEFT   = "sharp_left"
    SLIGHT_RIGHT = "slight_right"
    TURN_RIGHT   = "turn_right"
    SHARP_RIGHT  = "sharp_right"
    U_TURN       = "u_turn"


MANEUVER_TEXT = {
    ManeuverType.DEPART:       "Start your route",
    ManeuverType.ARRIVE:       "You have arrived at your destination",
    ManeuverType.STRAIGHT:     "Continue straight",
    ManeuverType.SLIGHT_LEFT:  "Keep left",
    ManeuverType.TURN_LEFT:    "Turn left",
    ManeuverType.SHARP_LEFT:   "Sharp left turn",
    ManeuverType.SLIGHT_RIGHT: "Keep right",
    ManeuverType.TURN_RIGHT:   "Turn right",
    ManeuverType.SHARP_RIGHT:  "Sharp right turn",
    ManeuverType.U_TURN:       "Make a U-turn",
}

# Short form used for spoken guidance
VOICE_TEXT = dict(MANEUVER_TEXT)
VOICE_TEXT[ManeuverType.ARRIVE] = "Arrived at your destination"


@dataclass(frozen=True)
class ManeuverInstruction:
    """A turn or direction change anchored to a route point."""
    type: ManeuverType
    text: str
    distance_m: float            # cumulative distance from route start
    location: Coord
    route_index: int

    @property
    def voice_text(self) -> str:
        return VOICE_TEXT[self.type]

    @property
    def distance_text(self) -> str:
        if self.distance_m < 100:
            return f"{self.distance_m:.0f} meters"
        if self.distance_m < 1000:
            return f"{round(self.distance_m / 10) * 10} meters"
        return f"{self.distance_m / 1000:.1f} km"

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "text": self.text,
            "distance_m": self.distance_m,
            "location": {"lat": self.location.lat, "lon": self.location.lon},
            "route_index": self.route_index,
        }


# ---------------------------------------------------------------------------
# Hazards
# ---------------------------------------------------------------------------

VERIFIED_VOTE_SCORE = 3


@dataclass(frozen=True)
class Hazard:
    """
    Community-reported point hazard.

    A hazard without an id can still be shown on the route but is never
    announced, because there is nothing to deduplicate it by.
    """
    id: Optional[str]
    location: Coord
    category: str = "other"      # pothole | construction | debris | flooding | ...
    severity: str = "medium"     # low | medium | high
    status: str = "active"       # active | resolved | disputed | expired
    is_verified: bool = False
    title: str = ""

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    @staticmethod
    def from_dict(d: dict) -> "Hazard":
        """Build a Hazard from a hazard-store record."""
        if "is_verified" in d:
            verified = bool(d["is_verified"])
        else:
            score = int(d.get("upvotes", 0)) - int(d.get("downvotes", 0))
            verified = score >= VERIFIED_VOTE_SCORE
        raw_id = d.get("id")
        return Hazard(
            id=None if raw_id is None else str(raw_id),
            location=Coord(float(d["latitude"]), float(d["longitude"])),
            category=d.get("type", "other"),
            severity=d.get("severity", "medium"),
            status=d.get("status", "active"),
            is_verified=verified,
            title=d.get("title", ""),
        )


@dataclass(frozen=True)
class RouteHazard:
    """A Hazard projected onto a specific Route."""
    hazard: Hazard
    distance_along_route_m: float
    distance_from_route_m: float
    closest_point: Coord

    def distance_from(self, current_along_m: float) -> float:
        """Distance ahead of a rider who is current_along_m into the route."""
        return self.distance_along_route_m - current_along_m


# ---------------------------------------------------------------------------
# Surface warnings
# ---------------------------------------------------------------------------

class SurfaceTier(Enum):
    GOOD    = "good"
    POOR    = "poor"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class RouteWarning:
    """Poor or unknown road surface over a sub-range of the route."""
    tier: SurfaceTier
    distance_along_route_m: float
    length_m: float
    surface: str
    distance_from_user_m: Optional[float] = None


# ---------------------------------------------------------------------------
# Navigation status
# ---------------------------------------------------------------------------

class NavStatus(Enum):
    INACTIVE  = "inactive"
    ON_ROUTE  = "on_route"
    OFF_ROUTE = "off_route"
    ARRIVED   = "arrived"


@dataclass
class NavUpdate:
    """Returned by NavigationSession.update() every GPS update."""
    status: NavStatus
    message: str
    match: Optional[RouteMatch] = None
    next_maneuver: Optional[ManeuverInstruction] = None
    distance_to_next_m: Optional[float] = None
    remaining_distance_m: Optional[float] = None
    eta_s: Optional[int] = None
    upcoming_hazards: List[RouteHazard] = field(default_factory=list)
    upcoming_warnings: List[RouteWarning] = field(default_factory=list)
    announcements: List[str] = field(default_factory=list)

    @property
    def is_off_route(self) -> bool:
        return self.status == NavStatus.OFF_ROUTE
