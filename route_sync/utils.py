"""General utility helpers shared across modules."""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from datetime import date, datetime, timezone
from enum import Enum
import json
import logging
from typing import Any

LOGGER = logging.getLogger(__name__)

_DAY_SECONDS = 24 * 60 * 60


def _parse_as_written(raw: object) -> datetime | None:
    if isinstance(raw, datetime):
        return raw
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = f"{text[:-1]}+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        LOGGER.debug("Unparseable date string %r", raw)
        return None


def parse_iso_datetime(raw: object) -> datetime | None:
    """Parse an ISO-8601 date or datetime string into a UTC-aware datetime.

    Returns ``None`` for anything that is not a parseable string. Date-only
    values resolve to midnight UTC and naive datetimes are assumed to be UTC.
    """

    parsed = _parse_as_written(raw)
    if parsed is None:
        return None
    try:
        return to_utc_aware(parsed)
    except (OverflowError, ValueError):
        LOGGER.debug("Date %r is out of range once shifted to UTC", raw)
        return None


def to_utc_aware(value: datetime) -> datetime:
    """Return ``value`` as a UTC-aware datetime."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def start_of_day(value: datetime) -> datetime:
    """Truncate ``value`` to midnight of the same (UTC) day."""

    return to_utc_aware(value).replace(hour=0, minute=0, second=0, microsecond=0)


def days_between(earlier: datetime, later: datetime) -> float:
    """Return the signed number of (fractional) days from ``earlier`` to ``later``."""

    return (later - earlier).total_seconds() / _DAY_SECONDS


def format_month_day(raw: str) -> str:
    """Format an ISO date as ``"MMM d"`` (``"Mar 4"``), echoing unparseable input.

    The calendar day is taken as written in the string, not shifted to UTC.
    """

    parsed = _parse_as_written(raw)
    if parsed is None:
        return raw
    return f"{parsed.strftime('%b')} {parsed.day}"


def _normalise_value(value: Any) -> Any:
    """Convert engine values to JSON-friendly representations."""

    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _normalise_value(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, (list, tuple)):
        return [_normalise_value(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _normalise_value(val) for key, val in value.items()}
    return value


def json_dumps_sorted(value: Any, indent: int | None = None) -> str:
    """Return canonical JSON for reports and comparisons."""

    normalised = _normalise_value(value)
    if indent is None:
        return json.dumps(normalised, sort_keys=True, separators=(",", ":"))
    return json.dumps(normalised, sort_keys=True, indent=indent)
