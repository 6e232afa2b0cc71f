"""Route geometry and proximity analysis for turn-by-turn cycling navigation."""

from .errors import CycleNavError, InvalidCoordinateError, InvalidRouteError

__all__ = [
    "CycleNavError",
    "InvalidCoordinateError",
    "InvalidRouteError",
]

__version__ = "0.1.0"
