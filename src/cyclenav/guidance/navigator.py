# navigator.py
# Public entry point for a navigation session.
# Owns no geometry. Delegates everything to the specialist modules and
# decides which events cross an announcement threshold on each GPS update.

import dataclasses
import logging
from typing import Callable, Iterable, List, Optional

from ..errors import InvalidRouteError
from .announcements import AnnouncementTracker
from .geo_utils import distance
from .hazards import detect_hazards_on_route, get_upcoming_hazards
from .maneuvers import detect_maneuvers, distance_to_maneuver, estimate_time_remaining, find_next_maneuver
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
)
from .nav_config import NavConfig
from .phrasing import format_distance, hazard_message, turn_message
from .route_matcher import match_position, remaining_distance
from .surface import analyze_route_surface

logger = logging.getLogger(__name__)

Announcer = Callable[[str], None]

_ARRIVAL_ID = "arrive"


class NavigationSession:
    """
    Turn-by-turn guidance for one active route.

    Typical lifecycle:
        session = NavigationSession(announcer=speak)
        session.start(route, hazards)

        # GPS loop:
        result = session.update(Coord(lat, lon), speed_mps=4.2)

    Args:
        config:    Optional NavConfig; defaults to NavConfig().
        announcer: Callable receiving finished sentences to speak. When
                   omitted, announcements are only returned in NavUpdate.
    """

    def __init__(self, config: Optional[NavConfig] = None, announcer: Optional[Announcer] = None) -> None:
        self.config = config or NavConfig()
        self._announcer = announcer
        self._tracker = AnnouncementTracker()

        self._route: Optional[Route] = None
        self._maneuvers: List[ManeuverInstruction] = []
        self._route_hazards: List[RouteHazard] = []
        self._surface_warnings: List[RouteWarning] = []
        self._active: bool = False

    # ------------------------------------------------------------------
    # Navigation control
    # ------------------------------------------------------------------

    def start(self, route: Route, hazards: Iterable[Hazard] = ()) -> None:
        """
        Activate a route and precompute everything derived from it.

        Args:
            route:   Route from the routing provider (at least 2 points).
            hazards: Known hazards around the route.

        Raises:
            InvalidRouteError: if the route has fewer than two points.
        """
        if not route.is_navigable:
            raise InvalidRouteError(f"Route needs at least 2 points, got {len(route)}")

        self._tracker.clear()
        self._route = route
        self._maneuvers = detect_maneuvers(route, self.config.min_segment_length_m)
        self._route_hazards = detect_hazards_on_route(route, hazards, self.config.hazard_buffer_m)
        self._surface_warnings = analyze_route_surface(route)
        self._active = True

        logger.info(
            f"[Nav] Route ready: {len(route)} points, {len(self._maneuvers)} maneuvers, "
            f"{len(self._route_hazards)} hazards, {len(self._surface_warnings)} surface warnings."
        )

    def stop(self) -> None:
        """End the current navigation session."""
        self._active = False
        self._tracker.clear()
        logger.info("[Nav] Navigation stopped.")

    # ------------------------------------------------------------------
    # GPS update: call this on every position fix
    # ------------------------------------------------------------------

    def update(self, position: Coord, speed_mps: Optional[float] = None) -> NavUpdate:
        """
        Process a new GPS position and return the current navigation status.

        Args:
            position:  Current geographic coordinate.
            speed_mps: Current speed if the location source provides one.

        Returns:
            NavUpdate with status, next maneuver, distances and the
            announcements made during this update.
        """
        if not self._active or self._route is None:
            return NavUpdate(status=NavStatus.INACTIVE, message="Navigation is not active.")

        route = self._route
        match = match_position(position, route)
        segment = match.segment_index

        next_maneuver = find_next_maneuver(self._maneuvers, segment)
        to_next = distance_to_maneuver(position, route, segment, next_maneuver)
        remaining = remaining_distance(position, route, segment)
        eta = estimate_time_remaining(remaining, speed_mps, self.config.default_cycling_speed_mps)

        result = NavUpdate(
            status=NavStatus.ON_ROUTE,
            message="",
            match=match,
            next_maneuver=next_maneuver,
            distance_to_next_m=to_next,
            remaining_distance_m=remaining,
            eta_s=eta,
            upcoming_hazards=get_upcoming_hazards(
                self._route_hazards, position, route, self.config.max_upcoming_hazards
            ),
            upcoming_warnings=self._upcoming_warnings(match),
        )

        # 1. Arrival
        if remaining <= self.config.arrival_announce_distance_m:
            result.status = NavStatus.ARRIVED
            result.message = "You have arrived at your destination."
            delivered = not self._tracker.should_announce_turn(_ARRIVAL_ID) or self._announce(
                result, self._maneuvers[-1].voice_text, turn_id=_ARRIVAL_ID
            )
            if not delivered and self.config.announcements_enabled:
                # Stay active so the next update retries the arrival sentence
                logger.warning("[Nav] Destination reached, arrival announcement pending.")
                return result
            self._active = False
            logger.info("[Nav] Destination reached.")
            return result

        # 2. Hazards are announced whether or not the rider is on the route
        self._check_hazards(result, position, match.distance_along_route_m)

        # 3. Off-route
        if match.distance_from_route_m > self.config.off_route_threshold_m:
            result.status = NavStatus.OFF_ROUTE
            result.message = (
                f"You are {format_distance(match.distance_from_route_m)} off the route. "
                "Rerouting may be needed."
            )
            logger.warning(f"[Nav] Off route by {match.distance_from_route_m:.1f} m.")
            return result

        # 4. Turns
        if next_maneuver is not None:
            self._check_turn(result, next_maneuver, to_next)
            result.message = f"{format_distance(to_next)} to next maneuver. ({next_maneuver.text})"
        return result

    # ------------------------------------------------------------------
    # Announcement checks
    # ------------------------------------------------------------------

    def _check_hazards(self, result: NavUpdate, position: Coord, current_along_m: float) -> None:
        limit = self.config.hazard_announce_distance_m
        for route_hazard in self._route_hazards:
            if route_hazard.distance_from(current_along_m) < 0:
                continue
            hazard = route_hazard.hazard
            if not self._tracker.should_announce_hazard(hazard):
                continue
            if distance(position, hazard.location) <= limit:
                self._announce(result, hazard_message(hazard), hazard_id=hazard.id)

    def _check_turn(self, result: NavUpdate, maneuver: ManeuverInstruction, to_next: float) -> None:
        if maneuver.type in (ManeuverType.DEPART, ManeuverType.ARRIVE):
            return
        first_id = f"{maneuver.route_index}:first"
        reminder_id = f"{maneuver.route_index}:reminder"

        if to_next <= self.config.turn_reminder_distance_m:
            if self._tracker.should_announce_turn(reminder_id):
                if self._announce(result, turn_message(maneuver, to_next), turn_id=reminder_id):
                    # a late first sighting must not trigger the 200 m call afterwards
                    self._tracker.mark_turn_announced(first_id)
        elif to_next <= self.config.turn_first_announce_distance_m:
            if self._tracker.should_announce_turn(first_id):
                self._announce(result, turn_message(maneuver, to_next), turn_id=first_id)

    def _announce(
        self,
        result: NavUpdate,
        message: str,
        hazard_id: Optional[str] = None,
        turn_id: Optional[str] = None,
    ) -> bool:
        """Speak a message and record it; returns False if the announcer failed."""
        if not self.config.announcements_enabled:
            return False
        if self._announcer is not None:
            try:
                self._announcer(message)
            except Exception as e:
                # Left unmarked so the next update retries it
                logger.error(f"[Nav] Announcer failed for {message!r}: {e}")
                return False

        if hazard_id is not None:
            self._tracker.mark_hazard_announced(hazard_id)
        if turn_id is not None:
            self._tracker.mark_turn_announced(turn_id)
        result.announcements.append(message)
        logger.info(f"[Nav] Announced: {message}")
        return True

    def _upcoming_warnings(self, match: RouteMatch) -> List[RouteWarning]:
        current = match.distance_along_route_m
        return [
            dataclasses.replace(w, distance_from_user_m=w.distance_along_route_m - current)
            for w in self._surface_warnings
            if w.distance_along_route_m > current
        ]

    # ------------------------------------------------------------------
    # Convenience read-only properties
    # ------------------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def route(self) -> Optional[Route]:
        return self._route

    @property
    def maneuvers(self) -> List[ManeuverInstruction]:
        return list(self._maneuvers)

    @property
    def route_hazards(self) -> List[RouteHazard]:
        return list(self._route_hazards)

    @property
    def surface_warnings(self) -> List[RouteWarning]:
        return list(self._surface_warnings)

    @property
    def tracker(self) -> AnnouncementTracker:
        return self._tracker
