# maneuvers.py
# Turn detection over a route polyline (offline, once per route) and the
# "what's next and how far" queries run on every GPS update.

import logging
from typing import List, Optional, Sequence

from .models import Coord, ManeuverInstruction, ManeuverType, MANEUVER_TEXT, Route
from .geo_utils import bearing, distance, normalize_bearing_delta
from .nav_config import (
    DEFAULT_CYCLING_SPEED_MPS,
    MEDIUM_TURN_ANGLE,
    MIN_SEGMENT_LENGTH_M,
    SHARP_TURN_ANGLE,
    SLIGHT_TURN_ANGLE,
    STOPPED_SPEED_MPS,
    U_TURN_ANGLE,
)
from .route_matcher import cumulative_distances, distance_between_indices

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _instruction(kind: ManeuverType, distance_m: float, location: Coord, index: int) -> ManeuverInstruction:
    return ManeuverInstruction(
        type=kind,
        text=MANEUVER_TEXT[kind],
        distance_m=distance_m,
        location=location,
        route_index=index,
    )


def classify_turn(delta: float) -> ManeuverType:
    """
    Maneuver type for a signed bearing change.

    Args:
        delta: Bearing change in degrees, normalised to (-180, 180].
               Positive values are classified as left turns.

    Returns:
        ManeuverType; STRAIGHT when the change is too small to announce.
    """
    magnitude = abs(delta)
    if magnitude < SLIGHT_TURN_ANGLE:
        return ManeuverType.STRAIGHT
    if magnitude > U_TURN_ANGLE:
        return ManeuverType.U_TURN

    if delta > 0:
        if magnitude > SHARP_TURN_ANGLE:
            return ManeuverType.SHARP_LEFT
        if magnitude > MEDIUM_TURN_ANGLE:
            return ManeuverType.TURN_LEFT
        return ManeuverType.SLIGHT_LEFT

    if magnitude > SHARP_TURN_ANGLE:
        return ManeuverType.SHARP_RIGHT
    if magnitude > MEDIUM_TURN_ANGLE:
        return ManeuverType.TURN_RIGHT
    return ManeuverType.SLIGHT_RIGHT


# ---------------------------------------------------------------------------
# Offline pass
# ---------------------------------------------------------------------------

def detect_maneuvers(route: Route, min_segment_m: float = MIN_SEGMENT_LENGTH_M) -> List[ManeuverInstruction]:
    """
    Turn the route geometry into an ordered list of instructions.

    The list always starts with DEPART at index 0 and ends with ARRIVE at the
    last index. Interior points are skipped when either neighbouring segment
    is shorter than min_segment_m, which filters closely spaced waypoints.

    Args:
        route:         Route to analyse.
        min_segment_m: Minimum length of both adjacent segments for a turn.

    Returns:
        Instructions ordered by route index; empty for routes under 2 points.
    """
    if min_segment_m < 0:
        raise ValueError(f"min_segment_m must not be negative, got {min_segment_m}")

    points = route.points
    if len(points) < 2:
        return []
    if len(points) == 2:
        return [
            _instruction(ManeuverType.DEPART, 0.0, points[0], 0),
            _instruction(ManeuverType.ARRIVE, 0.0, points[1], 1),
        ]

    prefix = cumulative_distances(route)
    maneuvers = [_instruction(ManeuverType.DEPART, 0.0, points[0], 0)]

    for i in range(1, len(points) - 1):
        length_in = prefix[i] - prefix[i - 1]
        length_out = prefix[i + 1] - prefix[i]
        if length_in < min_segment_m or length_out < min_segment_m:
            continue

        bearing_in = bearing(points[i - 1], points[i])
        bearing_out = bearing(points[i], points[i + 1])
        delta = normalize_bearing_delta(bearing_out - bearing_in)

        kind = classify_turn(delta)
        if kind is ManeuverType.STRAIGHT:
            continue

        maneuvers.append(_instruction(kind, float(prefix[i]), points[i], i))
        logger.debug(f"[Maneuvers] {kind.value} at index {i} (delta {delta:.1f} deg)")

    last = len(points) - 1
    maneuvers.append(_instruction(ManeuverType.ARRIVE, float(prefix[last]), points[last], last))

    logger.info(f"[Maneuvers] Detected {len(maneuvers)} maneuvers over {len(points)} points.")
    return maneuvers


# ---------------------------------------------------------------------------
# Online queries
# ---------------------------------------------------------------------------

def find_next_maneuver(
    maneuvers: Sequence[ManeuverInstruction],
    segment_index: int,
) -> Optional[ManeuverInstruction]:
    """
    First maneuver anchored beyond the rider's current segment.

    Falls back to the last maneuver (arrival) once everything is behind the
    rider; returns None only when the list is empty.
    """
    if not maneuvers:
        return None
    for maneuver in maneuvers:
        if maneuver.route_index > segment_index:
            return maneuver
    return maneuvers[-1]


def distance_to_maneuver(
    pos: Coord,
    route: Route,
    segment_index: int,
    maneuver: Optional[ManeuverInstruction],
) -> float:
    """
    Distance in metres the rider still has to cover to reach a maneuver.

    Args:
        pos:           Current position.
        route:         Active route.
        segment_index: Segment the rider is on; clamped to the route.
        maneuver:      Target maneuver; its anchor index is clamped as well.

    Returns:
        Distance to the next route point plus the full segments from there
        to the maneuver anchor. 0 when there is no maneuver or no route.
    """
    points = route.points
    if maneuver is None or not points:
        return 0.0
    last = len(points) - 1
    next_index = max(0, min(segment_index + 1, last))
    anchor = max(0, min(maneuver.route_index, last))
    return distance(pos, points[next_index]) + distance_between_indices(route, next_index, anchor)


def estimate_time_remaining(
    distance_m: float,
    speed_mps: Optional[float],
    default_speed_mps: float = DEFAULT_CYCLING_SPEED_MPS,
) -> int:
    """
    Seconds needed to cover distance_m at the given speed.

    A stopped or crawling rider (under 0.5 m/s, or no speed reading) is
    assumed to ride at the default cycling speed of 15 km/h.
    """
    if speed_mps is None or speed_mps < STOPPED_SPEED_MPS:
        speed_mps = default_speed_mps
    return int(round(max(0.0, distance_m) / speed_mps))
