"""Tests for the sync report command line tool."""

from __future__ import annotations

import json
from pathlib import Path

from conftest import at_day, day
from route_sync.decoding import route_from_records
from route_sync.tools.sync_report import build_sync_report, main


def _records(name: str, lat: float, lon: float, arrival: str, departure: str) -> list[dict]:
    return [
        {
            "location": {"latitude": lat, "longitude": lon, "name": name},
            "arrivalDate": arrival,
            "departureDate": departure,
        }
    ]


def _write_routes(tmp_path: Path) -> Path:
    path = tmp_path / "routes.json"
    payload = {
        "mine": _records("Lisbon", 10.0, 10.0, day(0), day(5)),
        "theirs": _records("Lisbon", 10.1, 10.1, day(3), day(8)),
    }
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_build_sync_report_for_empty_routes() -> None:
    report = build_sync_report([], [], now=at_day(0))

    assert report["badge"] is None
    assert report["shared_stops"] == []
    assert report["crossing_points"] == []
    assert report["camera"].zoom == 5
    assert report["highlight_radius_m"] == 15000
    assert report["overlap_center"] is None
    assert report["overlap_radius_m"] is None
    assert report["my_polyline"] == ""


def test_build_sync_report_headline_overlap() -> None:
    mine = route_from_records(_records("Lisbon", 10.0, 10.0, day(0), day(5)))
    theirs = route_from_records(_records("Lisbon", 10.1, 10.1, day(3), day(8)))

    report = build_sync_report(mine, theirs, now=at_day(4))

    assert report["badge"] == "Same Stop: Lisbon"
    assert report["headline_overlap"].location_name == "Lisbon"
    assert report["overlap_radius_m"] == 20000
    assert len(report["shared_stops"]) == 1
    assert report["their_journey"][0].sub_label == "Origin"


def test_main_prints_json_report(tmp_path: Path, capsys) -> None:
    path = _write_routes(tmp_path)

    exit_code = main([str(path), "--now", day(4)])

    assert exit_code == 0
    report = json.loads(capsys.readouterr().out)
    assert report["sync"]["status"] == "same_stop"
    assert report["sync"]["location"] == "Lisbon"
    assert report["camera"]["zoom"] == 11
    assert report["their_journey"][0]["kind"] == "start"


def test_main_rejects_bad_input(tmp_path: Path) -> None:
    missing = tmp_path / "missing.json"
    assert main([str(missing)]) == 1

    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"mine": [{"arrivalDate": "2025-03-01"}]}), encoding="utf-8")
    assert main([str(bad)]) == 1

    routes = _write_routes(tmp_path)
    assert main([str(routes), "--now", "yesterday"]) == 1
