"""Overlap discovery and ranking of candidate travelers for the match list."""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional, Sequence, Tuple

from .config import (
    MATCH_OVERLAP_BASE_SCORE,
    MATCH_PROXIMITY_BONUS_MAX,
    MATCH_PROXIMITY_KM_PER_POINT,
    MATCH_RESULT_LIMIT,
    MATCH_SHARED_INTEREST_SCORE,
    SYNC_DISTANCE_THRESHOLD_KM,
)
from .geomath import haversine_km
from .models import Overlap, Route, RouteMatch
from .sync_classifier import UNKNOWN_LOCATION

LOGGER = logging.getLogger(__name__)

# (traveler id, route, interests)
Candidate = Tuple[str, Route, Sequence[str]]


def find_route_overlaps(
    my_route: Route,
    their_route: Route,
    threshold_km: float = SYNC_DISTANCE_THRESHOLD_KM,
) -> List[Overlap]:
    """Return every nearby stop pair whose date ranges intersect (inclusive)."""

    overlaps: List[Overlap] = []
    for mine in my_route:
        for theirs in their_route:
            distance = haversine_km(mine.coordinate, theirs.coordinate)
            if distance > threshold_km:
                continue
            dates = (
                mine.arrival_at,
                mine.departure_at,
                theirs.arrival_at,
                theirs.departure_at,
            )
            if None in dates:
                continue
            my_arrival, my_departure, their_arrival, their_departure = dates
            if not (my_arrival <= their_departure and their_arrival <= my_departure):
                continue
            start = max(my_arrival, their_arrival)
            end = min(my_departure, their_departure)
            overlaps.append(
                Overlap(
                    location_name=mine.name or theirs.name or UNKNOWN_LOCATION,
                    start=start.date().isoformat(),
                    end=end.date().isoformat(),
                    distance_km=math.floor(distance + 0.5),
                )
            )
    return overlaps


def score_overlaps(
    overlaps: Sequence[Overlap], shared_interests: Sequence[str]
) -> float:
    """Closer and more numerous overlaps score higher; shared interests add a bonus."""

    total = 0.0
    for overlap in overlaps:
        proximity = max(
            0.0,
            MATCH_PROXIMITY_BONUS_MAX
            - overlap.distance_km / MATCH_PROXIMITY_KM_PER_POINT,
        )
        total += MATCH_OVERLAP_BASE_SCORE + proximity
    return total + len(shared_interests) * MATCH_SHARED_INTEREST_SCORE


def rank_route_matches(
    my_route: Route,
    candidates: Iterable[Candidate],
    my_interests: Sequence[str] = (),
    exclude: Iterable[str] = (),
    limit: Optional[int] = MATCH_RESULT_LIMIT,
) -> List[RouteMatch]:
    """Score every candidate traveler against ``my_route`` and return the best.

    Candidates listed in ``exclude`` (already swiped, the viewer themself),
    with an empty route, or with no overlap at all are skipped. Results are
    ordered by descending score; ties keep candidate order.
    """

    if not my_route:
        return []
    excluded = set(exclude)
    results: List[RouteMatch] = []
    for traveler_id, route, interests in candidates:
        if traveler_id in excluded or not route:
            continue
        overlaps = find_route_overlaps(my_route, route)
        if not overlaps:
            continue
        shared = [i for i in my_interests if i in interests]
        results.append(
            RouteMatch(
                traveler_id=traveler_id,
                overlaps=overlaps,
                score=score_overlaps(overlaps, shared),
                shared_interests=shared,
            )
        )
    results.sort(key=lambda m: m.score, reverse=True)
    LOGGER.debug("Ranked %d overlapping travelers", len(results))
    if limit is not None:
        return results[:limit]
    return results


__all__ = ["Candidate", "find_route_overlaps", "rank_route_matches", "score_overlaps"]
