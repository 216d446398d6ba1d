"""Central configuration for the route sync engine.

All values are constants imported by the rest of the package. Adjust as needed
for your environment. Overrides are read from environment variables (optionally
via a local `.env`).
"""

from __future__ import annotations

import importlib
import os


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


# Load .env variables when python-dotenv is available.
_load_dotenv = None
try:
    _dotenv_mod = importlib.import_module("dotenv")
    _load_dotenv = getattr(_dotenv_mod, "load_dotenv", None)
except Exception:
    _load_dotenv = None

if callable(_load_dotenv):
    # Load .env from the current directory or any parent folder.
    _load_dotenv()


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------
# Mean Earth radius (km) used by the haversine distance.
EARTH_RADIUS_KM = 6371.0

# Cross products smaller than this are treated as parallel segments.
SEGMENT_PARALLEL_TOLERANCE = 1e-10


# ---------------------------------------------------------------------------
# Sync classification
# ---------------------------------------------------------------------------
# Two stops closer than this (km) can form an overlap.
SYNC_DISTANCE_THRESHOLD_KM = _env_float("SYNC_DISTANCE_THRESHOLD_KM", 150.0)

# A traveler whose last stop ended at most this many days ago is "departed".
SYNC_DEPARTED_WINDOW_DAYS = _env_int("SYNC_DEPARTED_WINDOW_DAYS", 14)

# Default distance (km) for two stops to count as a shared stop on the map.
SHARED_STOP_THRESHOLD_KM = _env_float("SHARED_STOP_THRESHOLD_KM", 50.0)


# ---------------------------------------------------------------------------
# Map framing
# ---------------------------------------------------------------------------
# Camera returned when there is nothing to frame. Not a meaningful location.
CAMERA_FALLBACK_CENTER = (25.0, 55.0)
CAMERA_FALLBACK_ZOOM = 5

# Smallest span (degrees) considered when picking a zoom level.
CAMERA_MIN_DELTA_DEG = 0.01

# (span in degrees, zoom) pairs, checked in order with "span > threshold".
CAMERA_ZOOM_STEPS = (
    (40.0, 2),
    (20.0, 3),
    (10.0, 4),
    (5.0, 5),
    (2.0, 6),
    (1.0, 7),
    (0.5, 8),
    (0.2, 9),
    (0.1, 10),
)
CAMERA_MAX_ZOOM = 11

# Highlight circle sizing relative to the visible map extent.
ADAPTIVE_RADIUS_FACTOR = 0.025
ADAPTIVE_RADIUS_MIN_KM = 8.0
ADAPTIVE_RADIUS_FALLBACK_M = 15000.0

# Overlap circle bounds (km) regardless of the computed distance.
OVERLAP_RADIUS_MIN_KM = 20.0
OVERLAP_RADIUS_MAX_KM = 80.0


# ---------------------------------------------------------------------------
# Route matching
# ---------------------------------------------------------------------------
# Maximum number of ranked matches returned for a traveler.
MATCH_RESULT_LIMIT = _env_int("MATCH_RESULT_LIMIT", 20)

# Score weights for ranking candidate travelers.
MATCH_OVERLAP_BASE_SCORE = 10.0
MATCH_PROXIMITY_BONUS_MAX = 10.0
MATCH_PROXIMITY_KM_PER_POINT = 15.0
MATCH_SHARED_INTEREST_SCORE = 3.0


# ---------------------------------------------------------------------------
# Sync result cache (caller-owned)
# ---------------------------------------------------------------------------
# Maximum number of match pairs kept in the in-memory sync cache.
SYNC_CACHE_MAX_ENTRIES = _env_int("SYNC_CACHE_MAX_ENTRIES", 1024)

# Seconds before a cached sync result is dropped. Results move across states
# as the clock advances, so entries should not live much longer than a day.
SYNC_CACHE_TTL_SECONDS = _env_int("SYNC_CACHE_TTL_SECONDS", 6 * 3600)

# Threads used when recomputing many match pairs at once.
SYNC_RECOMPUTE_MAX_WORKERS = _env_int("SYNC_RECOMPUTE_MAX_WORKERS", 4)

# Log every recomputed pair at INFO instead of DEBUG.
SYNC_VERBOSE_RECOMPUTE = _env_bool("SYNC_VERBOSE_RECOMPUTE", False)
