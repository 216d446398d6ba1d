"""Central error types used across the application."""

from __future__ import annotations


class RouteSyncError(RuntimeError):
    """Base error for route sync failures."""


class RouteDataError(RouteSyncError):
    """Raised when a stored route record cannot be decoded into stops."""


__all__ = [
    "RouteSyncError",
    "RouteDataError",
]
