"""Tests for route polylines, camera framing and highlight radii."""

from __future__ import annotations

import pytest

from conftest import make_stop
from route_sync.geomath import haversine_km
from route_sync.models import Coordinate, StopRole
from route_sync.route_geometry import (
    adaptive_radius,
    build_map_data,
    encode_polyline,
    fit_camera_to_bounds,
    sort_by_arrival,
    zoom_for_span,
)


def test_build_map_data_empty_route() -> None:
    assert build_map_data([]) is None


def test_build_map_data_sorts_by_arrival(iberian_route) -> None:
    data = build_map_data(iberian_route)

    assert data is not None
    assert data.origin.name == "Lisbon"
    assert data.destination.name == "Madrid"
    assert [c.latitude for c in data.polyline] == [38.7223, 41.1579, 40.4168]


def test_build_map_data_prefers_explicit_roles() -> None:
    route = [
        make_stop("Start", 0.0, 0.0, "2025-03-01", "2025-03-02"),
        make_stop("Home", 1.0, 1.0, "2025-03-03", "2025-03-04", StopRole.ORIGIN),
        make_stop("Goal", 2.0, 2.0, "2025-03-05", "2025-03-06", StopRole.DESTINATION),
        make_stop("Detour", 3.0, 3.0, "2025-03-07", "2025-03-08"),
    ]
    data = build_map_data(route)

    assert data is not None
    assert data.origin.name == "Home"
    assert data.destination.name == "Goal"
    assert len(data.polyline) == 4


def test_build_map_data_single_stop_is_origin_and_destination() -> None:
    stop = make_stop("Lisbon", 38.7, -9.1, "2025-03-01", "2025-03-04")
    data = build_map_data([stop])

    assert data is not None
    assert data.origin == data.destination
    assert data.polyline == [Coordinate(38.7, -9.1)]


def test_sort_by_arrival_is_stable_and_puts_unparseable_last() -> None:
    route = [
        make_stop("Later", 0.0, 0.0, "2025-03-05", "2025-03-06"),
        make_stop("Unknown A", 0.0, 0.0, "soon", "later"),
        make_stop("Tie 1", 0.0, 0.0, "2025-03-01", "2025-03-02"),
        make_stop("Tie 2", 0.0, 0.0, "2025-03-01", "2025-03-02"),
        make_stop("Unknown B", 0.0, 0.0, "", ""),
    ]
    ordered = [s.name for s in sort_by_arrival(route)]
    assert ordered == ["Tie 1", "Tie 2", "Later", "Unknown A", "Unknown B"]


def test_sort_by_arrival_does_not_mutate_input(iberian_route) -> None:
    before = list(iberian_route)
    sort_by_arrival(iberian_route)
    assert iberian_route == before


def test_fit_camera_fallback_when_empty() -> None:
    fit = fit_camera_to_bounds()
    assert fit.center == Coordinate(latitude=25.0, longitude=55.0)
    assert fit.zoom == 5

    fit_empty_lists = fit_camera_to_bounds([], [])
    assert fit_empty_lists.center == Coordinate(latitude=25.0, longitude=55.0)
    assert fit_empty_lists.zoom == 5


def test_fit_camera_uses_bounding_box_of_all_lists() -> None:
    fit = fit_camera_to_bounds(
        [Coordinate(0.0, 0.0)],
        [Coordinate(10.0, 4.0), Coordinate(2.0, 1.0)],
    )
    assert fit.center == Coordinate(latitude=5.0, longitude=2.0)
    # Largest span is 10 degrees, which is not > 10.
    assert fit.zoom == 5


def test_fit_camera_single_point_uses_min_delta() -> None:
    fit = fit_camera_to_bounds([Coordinate(38.7, -9.1)])
    assert fit.center == Coordinate(38.7, -9.1)
    assert fit.zoom == 11


@pytest.mark.parametrize(
    ("span", "zoom"),
    [
        (60.0, 2),
        (40.0, 3),
        (20.0, 4),
        (10.0, 5),
        (5.0, 6),
        (2.0, 7),
        (1.0, 8),
        (0.5, 9),
        (0.2, 10),
        (0.1, 11),
        (0.01, 11),
    ],
)
def test_zoom_bucket_boundaries(span: float, zoom: int) -> None:
    assert zoom_for_span(span) == zoom


def test_adaptive_radius_fallback_for_empty() -> None:
    assert adaptive_radius([]) == 15000


def test_adaptive_radius_has_minimum() -> None:
    assert adaptive_radius([Coordinate(38.7, -9.1)]) == 8000
    assert adaptive_radius([Coordinate(0.0, 0.0), Coordinate(0.1, 0.1)]) == 8000


def test_adaptive_radius_scales_with_span() -> None:
    coords = [Coordinate(0.0, 0.0), Coordinate(5.0, 10.0), Coordinate(2.0, 3.0)]
    span = haversine_km(Coordinate(0.0, 0.0), Coordinate(5.0, 10.0))

    assert adaptive_radius(coords) == pytest.approx(span * 0.025 * 1000)
    assert adaptive_radius(coords, factor=0.05) == pytest.approx(span * 0.05 * 1000)


def test_encode_polyline_matches_reference_encoding() -> None:
    coords = [
        Coordinate(38.5, -120.2),
        Coordinate(40.7, -120.95),
        Coordinate(43.252, -126.453),
    ]
    encoded = encode_polyline(coords)

    assert encoded == "_p~iF~ps|U_ulLnnqC_mqNvxq`@"


def test_empty_polyline_encoding() -> None:
    assert encode_polyline([]) == ""
