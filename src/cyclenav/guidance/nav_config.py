# nav_config.py
# All tuneable constants in one place.
# Module-level values are the defaults used by the pure engine functions;
# pass a NavConfig instance to NavigationSession to override them.

from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Route matching / off-route
# ---------------------------------------------------------------------------

OFF_ROUTE_THRESHOLD_M: float = 50.0

# ---------------------------------------------------------------------------
# Maneuver detection
# ---------------------------------------------------------------------------

MIN_SEGMENT_LENGTH_M: float = 10.0     # shorter segments are GPS/waypoint noise
SLIGHT_TURN_ANGLE: float = 20.0        # below this the route goes straight
MEDIUM_TURN_ANGLE: float = 45.0
SHARP_TURN_ANGLE: float = 120.0
U_TURN_ANGLE: float = 150.0

STOPPED_SPEED_MPS: float = 0.5
DEFAULT_CYCLING_SPEED_MPS: float = 4.17   # 15 km/h

# ---------------------------------------------------------------------------
# Hazard corridor
# ---------------------------------------------------------------------------

HAZARD_BUFFER_M: float = 75.0
ROUTE_BOUNDS_MARGIN_DEG: float = 0.01  # ~1 km
MAX_UPCOMING_HAZARDS: int = 5

# ---------------------------------------------------------------------------
# Announcement triggers
# ---------------------------------------------------------------------------

HAZARD_ANNOUNCE_DISTANCE_M: float = 100.0
TURN_FIRST_ANNOUNCE_DISTANCE_M: float = 200.0
TURN_REMINDER_DISTANCE_M: float = 50.0
ARRIVAL_ANNOUNCE_DISTANCE_M: float = 20.0


# ---------------------------------------------------------------------------
# Main config
# ---------------------------------------------------------------------------

@dataclass
class NavConfig:
    # Route matching
    off_route_threshold_m: float = OFF_ROUTE_THRESHOLD_M

    # Maneuvers / ETA
    min_segment_length_m: float = MIN_SEGMENT_LENGTH_M
    default_cycling_speed_mps: float = DEFAULT_CYCLING_SPEED_MPS

    # Hazards
    hazard_buffer_m: float = HAZARD_BUFFER_M
    max_upcoming_hazards: int = MAX_UPCOMING_HAZARDS

    # Announcements
    announcements_enabled: bool = True
    hazard_announce_distance_m: float = HAZARD_ANNOUNCE_DISTANCE_M
    turn_first_announce_distance_m: float = TURN_FIRST_ANNOUNCE_DISTANCE_M
    turn_reminder_distance_m: float = TURN_REMINDER_DISTANCE_M
    arrival_announce_distance_m: float = ARRIVAL_ANNOUNCE_DISTANCE_M

    def __post_init__(self) -> None:
        for name in (
            "off_route_threshold_m",
            "min_segment_length_m",
            "hazard_buffer_m",
            "hazard_announce_distance_m",
            "turn_first_announce_distance_m",
            "turn_reminder_distance_m",
            "arrival_announce_distance_m",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        if self.default_cycling_speed_mps <= 0:
            raise ValueError("default_cycling_speed_mps must be positive")
        if self.max_upcoming_hazards < 0:
            raise ValueError("max_upcoming_hazards must not be negative")
