"""Global pytest fixtures & helpers.

Adds project root to path and provides reusable route factories so the
component tests can describe itineraries in a few lines.
"""
from __future__ import annotations

import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from route_sync.models import Coordinate, Location, Stop, StopRole


BASE = datetime(2025, 3, 1, tzinfo=timezone.utc)


# --- Factory helpers -------------------------------------------------
def at_day(offset: float) -> datetime:
    return BASE + timedelta(days=offset)


def day(offset: float) -> str:
    return at_day(offset).isoformat()


def make_stop(
    name: str,
    lat: float,
    lon: float,
    arrival: str,
    departure: str,
    role: StopRole = StopRole.UNSPECIFIED,
) -> Stop:
    return Stop(
        location=Location(coordinate=Coordinate(latitude=lat, longitude=lon), name=name),
        arrival=arrival,
        departure=departure,
        role=role,
    )


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def lisbon_mine():
    return [make_stop("Lisbon", 10.0, 10.0, day(0), day(5))]


@pytest.fixture
def lisbon_theirs():
    return [make_stop("Lisbon", 10.1, 10.1, day(3), day(8))]


@pytest.fixture
def iberian_route():
    """Three-stop route supplied out of arrival order."""

    return [
        make_stop("Madrid", 40.4168, -3.7038, "2025-03-10", "2025-03-12"),
        make_stop("Lisbon", 38.7223, -9.1393, "2025-03-01", "2025-03-04"),
        make_stop("Porto", 41.1579, -8.6291, "2025-03-05", "2025-03-08"),
    ]
