# errors.py
# Exception types raised when a caller breaks an engine contract.
# Noisy-but-plausible input (duplicate points, unknown surface tags, short
# routes) never raises; it produces empty or clamped results instead.


class CycleNavError(Exception):
    """Base class for all cyclenav errors."""


class InvalidCoordinateError(CycleNavError, ValueError):
    """Raised when a coordinate has a NaN or infinite component."""


class InvalidRouteError(CycleNavError, ValueError):
    """Raised when a route cannot be navigated (fewer than two points)."""


__all__ = [
    "CycleNavError",
    "InvalidCoordinateError",
    "InvalidRouteError",
]
