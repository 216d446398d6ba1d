"""Build the labelled journey timeline shown for a single route."""

from __future__ import annotations

from typing import List, Optional

from .models import JourneyStop, JourneyStopKind, Overlap, Route
from .overlap import names_match
from .route_geometry import sort_by_arrival
from .sync_classifier import UNKNOWN_LOCATION
from .utils import format_month_day

ORIGIN_LABEL = "Origin"
DESTINATION_LABEL = "Destination"


def build_journey_stops(
    route: Route, headline_overlap: Optional[Overlap] = None
) -> List[JourneyStop]:
    """Return the route's stops in arrival order with timeline labels.

    The first stop is always ``START``, including on a one-stop route. The
    last stop of a longer route is ``DESTINATION``. Interior stops named like
    ``headline_overlap`` are ``OVERLAP``.
    """

    ordered = sort_by_arrival(route)
    last_index = len(ordered) - 1
    journey: List[JourneyStop] = []
    for index, stop in enumerate(ordered):
        is_first = index == 0
        is_last = index == last_index
        date_label = format_month_day(stop.arrival)

        if is_first:
            kind = JourneyStopKind.START
            sub_label = ORIGIN_LABEL
        elif is_last:
            kind = JourneyStopKind.DESTINATION
            sub_label = DESTINATION_LABEL
        else:
            overlapping = headline_overlap is not None and names_match(
                stop.name, headline_overlap.location_name
            )
            kind = JourneyStopKind.OVERLAP if overlapping else JourneyStopKind.STOP
            sub_label = date_label

        journey.append(
            JourneyStop(
                kind=kind,
                location_name=stop.name or UNKNOWN_LOCATION,
                date_label=date_label,
                sub_label=sub_label,
            )
        )
    return journey


__all__ = ["build_journey_stops", "ORIGIN_LABEL", "DESTINATION_LABEL"]
