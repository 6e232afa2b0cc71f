"""Shared pytest fixtures for the guidance engine tests."""

from typing import List

import pytest

from cyclenav.guidance.models import Route

from route_factory import equator_route


@pytest.fixture
def straight_route() -> Route:
    """Three collinear points, two ~111 m segments."""
    return equator_route(3)


@pytest.fixture
def corner_route() -> Route:
    """East for three segments, then north for three: one turn at index 3."""
    return Route.from_latlon([
        (0.0, 0.0),
        (0.0, 0.001),
        (0.0, 0.002),
        (0.0, 0.003),
        (0.001, 0.003),
        (0.002, 0.003),
        (0.003, 0.003),
    ])


@pytest.fixture
def long_route() -> Route:
    """Eleven collinear points, ~1.1 km."""
    return equator_route(11)


@pytest.fixture
def spoken() -> List[str]:
    """Collects everything handed to the announcer."""
    return []
