"""Human-readable badge text for sync results."""

from __future__ import annotations

from typing import Optional

from .models import SyncResult, SyncStatus


def sync_badge_label(result: SyncResult) -> Optional[str]:
    """Return the badge text for ``result``, or ``None`` when nothing is shown."""

    status = result.status
    if status is SyncStatus.CROSSING:
        if result.days_until is None:
            return "Crossing soon"
        plural = "" if result.days_until == 1 else "s"
        return f"Crossing in {result.days_until} day{plural}"
    if status is SyncStatus.SAME_STOP:
        return f"Same Stop: {result.location}" if result.location else "Same Stop"
    if status is SyncStatus.SYNCING:
        return f"Syncing in {result.location}" if result.location else "Syncing"
    if status is SyncStatus.DEPARTED:
        if result.days_until is None:
            return "Departed"
        return f"Departed {result.days_until}d ago"
    return None


def moving_to_label(result: SyncResult) -> Optional[str]:
    if result.status is SyncStatus.DEPARTED and result.moving_to:
        return f"Moving to: {result.moving_to}"
    return None


__all__ = ["moving_to_label", "sync_badge_label"]
