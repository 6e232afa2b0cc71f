# announcements.py
# Remembers which hazards and turns were already spoken so each one is
# announced once per navigation session.

import logging
from typing import Hashable, Set

from .models import Hazard

logger = logging.getLogger(__name__)


class AnnouncementTracker:
    """
    Per-session dedup state for spoken announcements.

    The tracker is owned by one navigation session and is not thread-safe.
    It never forgets on its own: call clear() whenever a new route is
    activated or navigation restarts.

    Usage:
        tracker = AnnouncementTracker()
        if tracker.should_announce_hazard(hazard):
            announcer(message)
            tracker.mark_hazard_announced(hazard.id)
    """

    def __init__(self) -> None:
        self._hazards: Set[str] = set()
        self._turns: Set[Hashable] = set()

    # ------------------------------------------------------------------
    # Hazards
    # ------------------------------------------------------------------

    def should_announce_hazard(self, hazard: Hazard) -> bool:
        """True iff the hazard has an id, is active and was not announced yet."""
        if hazard.id is None:
            return False
        if not hazard.is_active:
            return False
        return hazard.id not in self._hazards

    def mark_hazard_announced(self, hazard_id: str) -> None:
        self._hazards.add(hazard_id)

    def was_hazard_announced(self, hazard_id: str) -> bool:
        return hazard_id in self._hazards

    # ------------------------------------------------------------------
    # Turns
    # ------------------------------------------------------------------

    def should_announce_turn(self, turn_id: Hashable) -> bool:
        return turn_id not in self._turns

    def mark_turn_announced(self, turn_id: Hashable) -> None:
        self._turns.add(turn_id)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Forget everything announced so far."""
        self._hazards.clear()
        self._turns.clear()
        logger.info("[Announcements] Cleared announced hazards and turns.")

    @property
    def announced_hazard_count(self) -> int:
        return len(self._hazards)

    @property
    def announced_turn_count(self) -> int:
        return len(self._turns)
