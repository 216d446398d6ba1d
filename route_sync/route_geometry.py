"""Map framing helpers: route polylines, camera fit and highlight radii."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray
from polyline import encode as polyline_encode

from .config import (
    ADAPTIVE_RADIUS_FACTOR,
    ADAPTIVE_RADIUS_FALLBACK_M,
    ADAPTIVE_RADIUS_MIN_KM,
    CAMERA_FALLBACK_CENTER,
    CAMERA_FALLBACK_ZOOM,
    CAMERA_MAX_ZOOM,
    CAMERA_MIN_DELTA_DEG,
    CAMERA_ZOOM_STEPS,
)
from .geomath import haversine_km
from .models import CameraFit, Coordinate, Route, RouteGeometryData, Stop, StopRole

LatLonArray = NDArray[np.float64]
Bounds = Tuple[float, float, float, float]


def sort_by_arrival(route: Route) -> List[Stop]:
    """Return a copy of ``route`` ordered by arrival time.

    The sort is stable; stops whose arrival cannot be parsed keep their
    relative order after every stop with a readable arrival.
    """

    def _key(stop: Stop) -> Tuple[int, float]:
        arrival = stop.arrival_at
        if arrival is None:
            return (1, 0.0)
        return (0, arrival.timestamp())

    return sorted(route, key=_key)


def build_map_data(route: Route) -> Optional[RouteGeometryData]:
    """Extract origin, destination and ordered polyline coordinates from a route.

    Returns ``None`` for an empty route. Explicit ``ORIGIN``/``DESTINATION``
    roles win over position; a single stop is both origin and destination.
    """

    if not route:
        return None
    ordered = sort_by_arrival(route)
    origin = next((s for s in ordered if s.role is StopRole.ORIGIN), ordered[0])
    destination = next(
        (s for s in ordered if s.role is StopRole.DESTINATION), ordered[-1]
    )
    return RouteGeometryData(
        origin=origin.location,
        destination=destination.location,
        polyline=[stop.coordinate for stop in ordered],
    )


def _as_latlon_array(coords: Iterable[Coordinate]) -> LatLonArray:
    array = np.asarray(
        [(c.latitude, c.longitude) for c in coords], dtype=float
    ).reshape(-1, 2)
    return array


def _bounds(array: LatLonArray) -> Bounds:
    """Return ``(min_lat, min_lon, max_lat, max_lon)`` for a non-empty array."""

    mins = array.min(axis=0)
    maxs = array.max(axis=0)
    return float(mins[0]), float(mins[1]), float(maxs[0]), float(maxs[1])


def zoom_for_span(max_delta: float) -> int:
    """Map a coordinate span (degrees) onto a zoom level for small embedded maps."""

    for threshold, zoom in CAMERA_ZOOM_STEPS:
        if max_delta > threshold:
            return zoom
    return CAMERA_MAX_ZOOM


def fit_camera_to_bounds(*coordinate_lists: Sequence[Coordinate]) -> CameraFit:
    """Compute a camera centre and zoom that fits every provided coordinate list.

    With nothing to show a fixed fallback camera is returned; callers should
    treat that as "empty", not as a meaningful location.
    """

    array = _as_latlon_array(c for coords in coordinate_lists for c in coords)
    if array.shape[0] == 0:
        lat, lon = CAMERA_FALLBACK_CENTER
        return CameraFit(
            center=Coordinate(latitude=lat, longitude=lon), zoom=CAMERA_FALLBACK_ZOOM
        )

    min_lat, min_lon, max_lat, max_lon = _bounds(array)
    center = Coordinate(
        latitude=(min_lat + max_lat) / 2,
        longitude=(min_lon + max_lon) / 2,
    )
    max_delta = max(max_lat - min_lat, max_lon - min_lon, CAMERA_MIN_DELTA_DEG)
    return CameraFit(center=center, zoom=zoom_for_span(max_delta))


def adaptive_radius(
    coords: Sequence[Coordinate], factor: float = ADAPTIVE_RADIUS_FACTOR
) -> float:
    """Return a highlight radius (metres) proportional to the visible extent."""

    array = _as_latlon_array(coords)
    if array.shape[0] == 0:
        return ADAPTIVE_RADIUS_FALLBACK_M
    min_lat, min_lon, max_lat, max_lon = _bounds(array)
    span_km = haversine_km(
        Coordinate(latitude=min_lat, longitude=min_lon),
        Coordinate(latitude=max_lat, longitude=max_lon),
    )
    return max(span_km * factor, ADAPTIVE_RADIUS_MIN_KM) * 1000


def encode_polyline(coords: Sequence[Coordinate], precision: int = 5) -> str:
    """Encode coordinates with the Google encoded-polyline algorithm."""

    if not coords:
        return ""
    return polyline_encode([(c.latitude, c.longitude) for c in coords], precision)


__all__ = [
    "adaptive_radius",
    "build_map_data",
    "encode_polyline",
    "fit_camera_to_bounds",
    "sort_by_arrival",
    "zoom_for_span",
]
