"""Route overlap and sync-matching engine."""

from .errors import RouteDataError, RouteSyncError
from .journey import build_journey_stops
from .models import (
    CameraFit,
    Coordinate,
    JourneyStop,
    JourneyStopKind,
    Location,
    Overlap,
    RouteGeometryData,
    SharedStop,
    Stop,
    StopRole,
    SyncResult,
    SyncStatus,
)
from .overlap import (
    find_crossing_points,
    find_shared_stops,
    get_overlap_center,
    get_overlap_radius,
)
from .route_geometry import adaptive_radius, build_map_data, fit_camera_to_bounds
from .sync_classifier import compute_sync_status

__all__ = [
    "CameraFit",
    "Coordinate",
    "JourneyStop",
    "JourneyStopKind",
    "Location",
    "Overlap",
    "RouteDataError",
    "RouteGeometryData",
    "RouteSyncError",
    "SharedStop",
    "Stop",
    "StopRole",
    "SyncResult",
    "SyncStatus",
    "adaptive_radius",
    "build_journey_stops",
    "build_map_data",
    "compute_sync_status",
    "find_crossing_points",
    "find_shared_stops",
    "fit_camera_to_bounds",
    "get_overlap_center",
    "get_overlap_radius",
]
