"""Dataclasses describing routes, stops and sync-matching results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Sequence

from .utils import parse_iso_datetime


@dataclass(frozen=True, slots=True)
class Coordinate:
    latitude: float
    longitude: float


# Crossing points are plain coordinates recomputed per render.
CrossingPoint = Coordinate


@dataclass(frozen=True, slots=True)
class Location:
    coordinate: Coordinate
    name: str

    @property
    def latitude(self) -> float:
        return self.coordinate.latitude

    @property
    def longitude(self) -> float:
        return self.coordinate.longitude


class StopRole(str, Enum):
    """Role a traveler assigned to a stop when planning the route."""

    ORIGIN = "origin"
    STOP = "stop"
    DESTINATION = "destination"
    UNSPECIFIED = "unspecified"

    @classmethod
    def parse(cls, raw: object) -> "StopRole":
        """Decode a stored role tag, mapping unknown values to ``UNSPECIFIED``."""

        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return cls.UNSPECIFIED
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.UNSPECIFIED


@dataclass(frozen=True, slots=True)
class Stop:
    """A single stop on a route.

    Arrival and departure are kept as the stored strings; the parsed values
    are ``None`` when a string cannot be read as an ISO date.
    """

    location: Location
    arrival: str
    departure: str
    role: StopRole = StopRole.UNSPECIFIED
    notes: Optional[str] = None

    @property
    def name(self) -> str:
        return self.location.name

    @property
    def coordinate(self) -> Coordinate:
        return self.location.coordinate

    @property
    def arrival_at(self) -> datetime | None:
        return parse_iso_datetime(self.arrival)

    @property
    def departure_at(self) -> datetime | None:
        return parse_iso_datetime(self.departure)


Route = Sequence[Stop]


class SyncStatus(str, Enum):
    SAME_STOP = "same_stop"
    SYNCING = "syncing"
    CROSSING = "crossing"
    DEPARTED = "departed"
    NONE = "none"

    @property
    def priority(self) -> int:
        return _SYNC_PRIORITY[self]


_SYNC_PRIORITY = {
    SyncStatus.SAME_STOP: 3,
    SyncStatus.SYNCING: 2,
    SyncStatus.CROSSING: 1,
    SyncStatus.DEPARTED: 0,
    SyncStatus.NONE: -1,
}


@dataclass(frozen=True, slots=True)
class SyncResult:
    status: SyncStatus
    location: str = ""
    days_until: Optional[int] = None
    moving_to: Optional[str] = None

    @classmethod
    def none(cls) -> "SyncResult":
        return cls(status=SyncStatus.NONE)


@dataclass(frozen=True, slots=True)
class SharedStop:
    """Two stops, one per route, close enough to share a map marker."""

    coordinate: Coordinate
    my_stop_name: str
    their_stop_name: str
    distance_km: float


@dataclass(frozen=True, slots=True)
class Overlap:
    """A window during which two nearby stops are occupied at the same time."""

    location_name: str
    start: str
    end: str
    distance_km: int


class JourneyStopKind(str, Enum):
    START = "start"
    STOP = "stop"
    OVERLAP = "overlap"
    DESTINATION = "destination"


@dataclass(frozen=True, slots=True)
class JourneyStop:
    kind: JourneyStopKind
    location_name: str
    date_label: str
    sub_label: str


@dataclass(slots=True)
class RouteGeometryData:
    """Origin, destination and ordered polyline of a single route."""

    origin: Location
    destination: Location
    polyline: List[Coordinate] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class CameraFit:
    center: Coordinate
    zoom: int


@dataclass(slots=True)
class RouteMatch:
    """Candidate traveler whose route overlaps ours, with its ranking score."""

    traveler_id: str
    overlaps: List[Overlap]
    score: float
    shared_interests: List[str] = field(default_factory=list)


__all__ = [
    "CameraFit",
    "Coordinate",
    "CrossingPoint",
    "JourneyStop",
    "JourneyStopKind",
    "Location",
    "Overlap",
    "Route",
    "RouteGeometryData",
    "RouteMatch",
    "SharedStop",
    "Stop",
    "StopRole",
    "SyncResult",
    "SyncStatus",
]
