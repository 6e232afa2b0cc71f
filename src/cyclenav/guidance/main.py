# main.py
# Entry point: simulates a GPS loop feeding positions into NavigationSession.
# In production, replace the test_locations loop with your real GPS source
# and pass your speech engine as the announcer.
#
# Run with: python -m cyclenav.guidance.main

import logging
import time

from .models import Coord, Hazard, NavStatus, Route
from .nav_config import NavConfig
from .navigator import NavigationSession

# ------------------------------------------------------------------
# Logging setup: configure once here, all modules inherit
# ------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)

# ------------------------------------------------------------------
# Config: tweak thresholds here, not inside the modules
# ------------------------------------------------------------------
config = NavConfig(
    off_route_threshold_m=50.0,
    hazard_buffer_m=75.0,
)

# ------------------------------------------------------------------
# Simulated route: north along a street, right turn, then a gravel path
# ------------------------------------------------------------------
ROUTE = Route.from_latlon(
    [
        (39.9200, 32.8500),   # 0 start
        (39.9218, 32.8500),   # 1
        (39.9236, 32.8500),   # 2 turn right
        (39.9236, 32.8523),   # 3
        (39.9236, 32.8546),   # 4 gravel begins
        (39.9236, 32.8569),   # 5
        (39.9236, 32.8592),   # 6 arrival
    ],
    surface_details=[
        [0, 4, "asphalt"],
        [4, 6, "gravel"],
    ],
)

HAZARDS = [
    Hazard(id="h-1", location=Coord(39.9227, 32.8502), category="pothole",
           severity="high", is_verified=True, title="Deep hole near the drain"),
    Hazard(id="h-2", location=Coord(39.9238, 32.8560), category="debris",
           severity="low", title="Broken glass"),
    Hazard(id=None, location=Coord(39.9237, 32.8580), category="construction"),
    Hazard(id="h-4", location=Coord(39.9300, 32.8700), category="flooding"),  # far away
]

test_locations = [
    Coord(39.92000, 32.85000),   # start
    Coord(39.92100, 32.85002),
    Coord(39.92200, 32.85001),   # pothole ahead
    Coord(39.92320, 32.85000),   # turn in ~45 m
    Coord(39.92362, 32.85150),
    Coord(39.92600, 32.85300),   # wandered off
    Coord(39.92361, 32.85500),
    Coord(39.92360, 32.85750),
    Coord(39.92360, 32.85915),   # arrival
]


def speak(text: str) -> None:
    print(f"  [TTS] {text}")


def main() -> None:
    # 1. Activate the route
    session = NavigationSession(config=config, announcer=speak)
    session.start(ROUTE, HAZARDS)

    print("\n--- GPS Loop Active ---")

    # 2. GPS loop, replace with real GPS feed in production
    for position in test_locations:
        result = session.update(position, speed_mps=4.5)

        print(f"  GPS ({position.lat:.5f}, {position.lon:.5f}) → [{result.status.name}] {result.message}")

        if result.status == NavStatus.OFF_ROUTE:
            print("  ⚠  Off-route detected, you could trigger rerouting here.")

        elif result.status == NavStatus.ARRIVED:
            print("  ✓  Destination reached. Navigation ended.")
            break

        # Simulate GPS poll interval (remove in real use)
        time.sleep(0.05)

    session.stop()
    print("\n--- Session complete ---")


if __name__ == "__main__":
    main()
