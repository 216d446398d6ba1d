"""Shared stops, path crossings and headline-overlap framing between two routes."""

from __future__ import annotations

from typing import List, Optional, Sequence, Set, Tuple

from .config import (
    OVERLAP_RADIUS_MAX_KM,
    OVERLAP_RADIUS_MIN_KM,
    SHARED_STOP_THRESHOLD_KM,
)
from .geomath import haversine_km, midpoint, segment_intersection
from .models import Coordinate, CrossingPoint, Overlap, Route, SharedStop, Stop


def names_match(stop_name: str, overlap_name: str) -> bool:
    """Case-insensitive containment in either direction."""

    stop_lower = (stop_name or "").lower()
    overlap_lower = (overlap_name or "").lower()
    return stop_lower in overlap_lower or overlap_lower in stop_lower


def find_shared_stops(
    my_route: Route,
    their_route: Route,
    threshold_km: float = SHARED_STOP_THRESHOLD_KM,
) -> List[SharedStop]:
    """Return one marker per (my stop, their stop) name pair within ``threshold_km``."""

    shared: List[SharedStop] = []
    seen: Set[Tuple[str, str]] = set()
    for mine in my_route:
        for theirs in their_route:
            distance = haversine_km(mine.coordinate, theirs.coordinate)
            if distance > threshold_km:
                continue
            key = (mine.name, theirs.name)
            if key in seen:
                continue
            seen.add(key)
            shared.append(
                SharedStop(
                    coordinate=midpoint(mine.coordinate, theirs.coordinate),
                    my_stop_name=mine.name,
                    their_stop_name=theirs.name,
                    distance_km=distance,
                )
            )
    return shared


def find_crossing_points(
    my_polyline: Sequence[Coordinate],
    their_polyline: Sequence[Coordinate],
) -> List[CrossingPoint]:
    """Return every point where a segment of one polyline crosses the other.

    Brute force over all segment pairs, which is fine for routes of a few
    dozen stops. Touching segments sharing a vertex report that vertex once
    per segment pair; nothing is deduplicated.
    """

    crossings: List[CrossingPoint] = []
    for i in range(len(my_polyline) - 1):
        for j in range(len(their_polyline) - 1):
            point = segment_intersection(
                my_polyline[i],
                my_polyline[i + 1],
                their_polyline[j],
                their_polyline[j + 1],
            )
            if point is not None:
                crossings.append(point)
    return crossings


def _first_named(route: Route, overlap_name: str) -> Optional[Stop]:
    return next((s for s in route if names_match(s.name, overlap_name)), None)


def get_overlap_center(
    my_route: Route,
    their_route: Route,
    overlap: Optional[Overlap],
) -> Optional[Coordinate]:
    """Locate the headline overlap by name in both routes for circle placement."""

    if overlap is None:
        return None
    my_match = _first_named(my_route, overlap.location_name)
    their_match = _first_named(their_route, overlap.location_name)
    if my_match is not None and their_match is not None:
        return midpoint(my_match.coordinate, their_match.coordinate)
    if my_match is not None:
        return my_match.coordinate
    if their_match is not None:
        return their_match.coordinate
    return None


def get_overlap_radius(distance_km: float) -> float:
    """Overlap circle radius in metres, clamped to a legible range."""

    clamped = min(max(distance_km, OVERLAP_RADIUS_MIN_KM), OVERLAP_RADIUS_MAX_KM)
    return clamped * 1000


__all__ = [
    "find_crossing_points",
    "find_shared_stops",
    "get_overlap_center",
    "get_overlap_radius",
    "names_match",
]
