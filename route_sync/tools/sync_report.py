"""Print a sync report for two stored routes.

Reads a JSON document ``{"mine": [...], "theirs": [...]}`` of stop records
and prints the sync classification, shared stops, crossing points and map
framing as JSON.
"""

from __future__ import annotations

import argparse
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from ..badges import moving_to_label, sync_badge_label
from ..config import SHARED_STOP_THRESHOLD_KM
from ..decoding import route_from_records
from ..errors import RouteDataError
from ..journey import build_journey_stops
from ..models import Route
from ..overlap import (
    find_crossing_points,
    find_shared_stops,
    get_overlap_center,
    get_overlap_radius,
)
from ..route_geometry import (
    adaptive_radius,
    build_map_data,
    encode_polyline,
    fit_camera_to_bounds,
)
from ..route_matching import find_route_overlaps
from ..sync_classifier import compute_sync_status
from ..utils import json_dumps_sorted, parse_iso_datetime


def build_sync_report(
    my_route: Route,
    their_route: Route,
    *,
    now: Optional[datetime] = None,
    shared_threshold_km: float = SHARED_STOP_THRESHOLD_KM,
) -> Dict[str, Any]:
    """Assemble everything a map renderer needs for one pair of routes."""

    sync = compute_sync_status(my_route, their_route, now=now)
    my_map = build_map_data(my_route)
    their_map = build_map_data(their_route)
    my_line = my_map.polyline if my_map else []
    their_line = their_map.polyline if their_map else []

    overlaps = find_route_overlaps(my_route, their_route)
    headline = overlaps[0] if overlaps else None
    all_coords = [*my_line, *their_line]

    return {
        "sync": sync,
        "badge": sync_badge_label(sync),
        "moving_to": moving_to_label(sync),
        "shared_stops": find_shared_stops(my_route, their_route, shared_threshold_km),
        "crossing_points": find_crossing_points(my_line, their_line),
        "camera": fit_camera_to_bounds(my_line, their_line),
        "highlight_radius_m": adaptive_radius(all_coords),
        "headline_overlap": headline,
        "overlap_center": get_overlap_center(my_route, their_route, headline),
        "overlap_radius_m": (
            get_overlap_radius(headline.distance_km) if headline is not None else None
        ),
        "my_polyline": encode_polyline(my_line),
        "their_polyline": encode_polyline(their_line),
        "their_journey": build_journey_stops(their_route, headline),
    }


def _load_routes(path: Path) -> tuple[Route, Route]:
    with path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        raise RouteDataError("Report input must be an object with 'mine' and 'theirs'")
    mine = route_from_records(payload.get("mine"))
    theirs = route_from_records(payload.get("theirs"))
    return mine, theirs


def _build_parser() -> argparse.ArgumentParser:
    """Return the CLI argument parser for the sync report tool."""

    parser = argparse.ArgumentParser(
        description="Classify how two routes relate and print map framing data."
    )
    parser.add_argument("routes", type=Path, help="JSON file with 'mine' and 'theirs'")
    parser.add_argument(
        "--now",
        help="Evaluate at this ISO timestamp instead of the current time",
    )
    parser.add_argument(
        "--shared-threshold-km",
        type=float,
        default=SHARED_STOP_THRESHOLD_KM,
        help=f"Shared stop distance (km) (default: {SHARED_STOP_THRESHOLD_KM:g})",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point used via ``python -m route_sync.tools.sync_report``."""

    parser = _build_parser()
    args = parser.parse_args(argv)

    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=logging.INFO,
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )

    now = None
    if args.now:
        now = parse_iso_datetime(args.now)
        if now is None:
            logging.error("Invalid --now timestamp '%s'", args.now)
            return 1

    try:
        my_route, their_route = _load_routes(args.routes)
    except (OSError, json.JSONDecodeError, RouteDataError) as exc:
        logging.error("Failed to load routes from '%s': %s", args.routes, exc)
        return 1

    report = build_sync_report(
        my_route,
        their_route,
        now=now,
        shared_threshold_km=args.shared_threshold_km,
    )
    print(json_dumps_sorted(report, indent=2))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
