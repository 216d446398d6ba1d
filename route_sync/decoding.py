"""Decode stored route records into typed stops.

Records follow the stored route shape::

    {"location": {"latitude": 38.7, "longitude": -9.1, "name": "Lisbon"},
     "arrivalDate": "2025-03-01", "departureDate": "2025-03-04",
     "role": "origin", "notes": "..."}

snake_case keys (``arrival_date``/``departure_date``) are accepted too. Dates
are kept as raw strings; only structural problems raise.
"""

from __future__ import annotations

import math
from typing import Any, Iterable, List, Mapping, Optional

from .errors import RouteDataError
from .models import Coordinate, Location, Stop, StopRole


def _first_present(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return None


def _as_float(value: Any, field_name: str) -> float:
    if isinstance(value, bool):
        raise RouteDataError(f"Field '{field_name}' must be numeric, got bool")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise RouteDataError(
            f"Field '{field_name}' must be numeric, got {value!r}"
        ) from exc
    if math.isnan(number):
        raise RouteDataError(f"Field '{field_name}' is NaN")
    return number


def _date_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def location_from_record(record: Mapping[str, Any]) -> Location:
    if not isinstance(record, Mapping):
        raise RouteDataError("Stop location must be a mapping")
    latitude = _as_float(_first_present(record, "latitude", "lat"), "latitude")
    longitude = _as_float(
        _first_present(record, "longitude", "lng", "lon"), "longitude"
    )
    name = record.get("name") or ""
    return Location(
        coordinate=Coordinate(latitude=latitude, longitude=longitude),
        name=str(name),
    )


def stop_from_record(record: Mapping[str, Any]) -> Stop:
    """Build a :class:`Stop` from a stored record.

    Raises:
        RouteDataError: If the record or its location is missing or the
            coordinates are not numeric.
    """

    if not isinstance(record, Mapping):
        raise RouteDataError(
            f"Stop record must be a mapping, got {type(record).__name__}"
        )
    location = record.get("location")
    if location is None:
        raise RouteDataError("Stop record has no location")
    notes = record.get("notes")
    return Stop(
        location=location_from_record(location),
        arrival=_date_text(
            _first_present(record, "arrivalDate", "arrival_date", "arrival")
        ),
        departure=_date_text(
            _first_present(record, "departureDate", "departure_date", "departure")
        ),
        role=StopRole.parse(record.get("role")),
        notes=str(notes) if notes is not None else None,
    )


def route_from_records(records: Optional[Iterable[Mapping[str, Any]]]) -> List[Stop]:
    """Decode a stored route; ``None`` (no route yet) yields an empty route."""

    if records is None:
        return []
    stops: List[Stop] = []
    for index, record in enumerate(records):
        try:
            stops.append(stop_from_record(record))
        except RouteDataError as exc:
            raise RouteDataError(f"Stop {index}: {exc}") from exc
    return stops


__all__ = [
    "location_from_record",
    "route_from_records",
    "stop_from_record",
]
