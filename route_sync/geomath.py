"""Geodesic and planar geometry primitives shared by the sync engine."""

from __future__ import annotations

import math
from typing import Optional

from .config import EARTH_RADIUS_KM, SEGMENT_PARALLEL_TOLERANCE
from .models import Coordinate


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in kilometres using the haversine formula."""

    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(b.longitude - a.longitude)
    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    )
    # Rounding can push antipodal points just past 1.
    h = min(max(h, 0.0), 1.0)
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c


def midpoint(a: Coordinate, b: Coordinate) -> Coordinate:
    """Arithmetic lat/lon midpoint (adequate at the scale stops are compared)."""

    return Coordinate(
        latitude=(a.latitude + b.latitude) / 2,
        longitude=(a.longitude + b.longitude) / 2,
    )


def segment_intersection(
    p1: Coordinate,
    p2: Coordinate,
    p3: Coordinate,
    p4: Coordinate,
) -> Optional[Coordinate]:
    """Return where segment p1-p2 crosses segment p3-p4, if anywhere.

    Segments are straight lines in the (longitude, latitude) plane rather
    than geodesics, so results near the antimeridian are unreliable.
    Parallel and collinear segments never intersect.
    """

    x1, y1 = p1.longitude, p1.latitude
    x2, y2 = p2.longitude, p2.latitude
    x3, y3 = p3.longitude, p3.latitude
    x4, y4 = p4.longitude, p4.latitude

    denom = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    if abs(denom) < SEGMENT_PARALLEL_TOLERANCE:
        return None

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / denom
    u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / denom
    if not (0.0 <= t <= 1.0 and 0.0 <= u <= 1.0):
        return None

    return Coordinate(latitude=y1 + t * (y2 - y1), longitude=x1 + t * (x2 - x1))


__all__ = ["haversine_km", "midpoint", "segment_intersection"]
