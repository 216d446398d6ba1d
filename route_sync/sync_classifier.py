"""Classify how two travelers' routes relate right now.

Each call recomputes from scratch for a single instant. Candidate overlaps
are ranked by :attr:`SyncStatus.priority`; the first candidate at the best
priority wins. When nothing overlaps, the other traveler may still count as
recently departed from their last stop.
"""

from __future__ import annotations

from datetime import datetime
import logging
import math
from typing import Optional

from .config import SYNC_DEPARTED_WINDOW_DAYS, SYNC_DISTANCE_THRESHOLD_KM
from .geomath import haversine_km
from .models import Route, Stop, SyncResult, SyncStatus
from .utils import days_between, start_of_day, to_utc_aware, utc_now

LOGGER = logging.getLogger(__name__)

UNKNOWN_LOCATION = "Unknown"


def _overlap_location(mine: Stop, theirs: Stop) -> str:
    return mine.name or theirs.name or UNKNOWN_LOCATION


def _classify_pair(
    mine: Stop, theirs: Stop, now: datetime, today: datetime
) -> Optional[SyncResult]:
    """Return the sync classification for one nearby stop pair, if any."""

    my_arrival, my_departure = mine.arrival_at, mine.departure_at
    their_arrival, their_departure = theirs.arrival_at, theirs.departure_at
    if None in (my_arrival, my_departure, their_arrival, their_departure):
        return None

    overlap_start = max(my_arrival, their_arrival)
    overlap_end = min(my_departure, their_departure)
    if overlap_start > overlap_end:
        return None

    location = _overlap_location(mine, theirs)
    if overlap_start <= today <= overlap_end:
        return SyncResult(status=SyncStatus.SAME_STOP, location=location)
    if overlap_start <= now < overlap_end:
        return SyncResult(status=SyncStatus.SYNCING, location=location)
    if overlap_start > now:
        days_until = math.ceil(days_between(now, overlap_start))
        return SyncResult(
            status=SyncStatus.CROSSING, location=location, days_until=days_until
        )
    return None


def _departed_result(their_route: Route, now: datetime) -> Optional[SyncResult]:
    """Return a ``DEPARTED`` result when their last stop ended recently."""

    finished = [s for s in their_route if s.departure_at is not None]
    if not finished:
        return None
    finished.sort(key=lambda s: s.departure_at, reverse=True)
    last_stop = finished[0]
    last_departure = last_stop.departure_at
    if last_departure >= now:
        return None

    days_ago = math.floor(days_between(last_departure, now))
    if days_ago > SYNC_DEPARTED_WINDOW_DAYS:
        return None

    upcoming = [
        s for s in their_route if s.arrival_at is not None and s.arrival_at > now
    ]
    upcoming.sort(key=lambda s: s.arrival_at)
    moving_to = upcoming[0].name if upcoming else None
    return SyncResult(
        status=SyncStatus.DEPARTED,
        location=last_stop.name,
        days_until=days_ago,
        moving_to=moving_to,
    )


def compute_sync_status(
    my_route: Route,
    their_route: Route,
    now: Optional[datetime] = None,
) -> SyncResult:
    """Reduce two full routes to the single most urgent :class:`SyncResult`.

    Args:
        my_route: Stops of the viewing traveler, in any order.
        their_route: Stops of the other traveler, in any order.
        now: Instant to evaluate at; defaults to the current UTC time. Naive
            values are treated as UTC.

    Returns:
        ``SAME_STOP``/``SYNCING``/``CROSSING`` for the best overlapping stop
        pair within the sync distance, otherwise ``DEPARTED`` when the other
        traveler left their latest stop recently, otherwise ``NONE``. Stops
        with unparseable dates are ignored for every time comparison.
    """

    if not my_route or not their_route:
        return SyncResult.none()

    now = to_utc_aware(now) if now is not None else utc_now()
    today = start_of_day(now)

    best = SyncResult.none()
    best_priority = SyncStatus.NONE.priority
    for mine in my_route:
        for theirs in their_route:
            distance = haversine_km(mine.coordinate, theirs.coordinate)
            if distance > SYNC_DISTANCE_THRESHOLD_KM:
                continue
            candidate = _classify_pair(mine, theirs, now, today)
            if candidate is None:
                continue
            if candidate.status.priority > best_priority:
                best = candidate
                best_priority = candidate.status.priority

    if best_priority < 0:
        departed = _departed_result(their_route, now)
        if departed is not None:
            LOGGER.debug(
                "Other traveler departed %s %d days ago",
                departed.location,
                departed.days_until,
            )
            return departed
    return best


__all__ = ["compute_sync_status", "UNKNOWN_LOCATION"]
