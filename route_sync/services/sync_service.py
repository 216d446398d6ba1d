"""Sync status recompute service.

Owns the caller-side "last known sync status" cache that sits outside the
pure engine. A recompute command loads both travelers' routes, runs
`compute_sync_status` and stores the result; route edits invalidate every
cached pair involving the edited traveler so callers know what to recompute.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from datetime import datetime
import logging
import threading
import time
from typing import Callable, Dict, List, Optional, Sequence

from cachetools import TTLCache

from ..config import (
    SYNC_CACHE_MAX_ENTRIES,
    SYNC_CACHE_TTL_SECONDS,
    SYNC_RECOMPUTE_MAX_WORKERS,
    SYNC_VERBOSE_RECOMPUTE,
)
from ..errors import RouteDataError
from ..models import Route, SyncResult
from ..sync_classifier import compute_sync_status
from ..utils import utc_now

RouteLoader = Callable[[str], Optional[Route]]


@dataclass(frozen=True, slots=True)
class MatchPair:
    """Two matched travelers; ``first`` is the viewer the status is computed for."""

    match_id: str
    first_traveler_id: str
    second_traveler_id: str

    def involves(self, traveler_id: str) -> bool:
        return traveler_id in (self.first_traveler_id, self.second_traveler_id)


@dataclass(frozen=True, slots=True)
class SyncRecord:
    pair: MatchPair
    result: SyncResult
    computed_at: datetime


@dataclass(slots=True)
class SyncServiceConfig:
    route_loader: RouteLoader
    clock: Callable[[], datetime] = utc_now
    max_workers: int = SYNC_RECOMPUTE_MAX_WORKERS
    cache_size: int = SYNC_CACHE_MAX_ENTRIES
    cache_ttl_seconds: int = SYNC_CACHE_TTL_SECONDS
    cache_timer: Callable[[], float] = time.monotonic
    logger: logging.Logger | None = None


class SyncService:
    def __init__(self, config: SyncServiceConfig):
        self.config = config
        self._log = self.config.logger or logging.getLogger(self.__class__.__name__)
        self._cache: TTLCache[str, SyncRecord] = TTLCache(
            maxsize=max(1, config.cache_size),
            ttl=max(1, config.cache_ttl_seconds),
            timer=config.cache_timer,
        )
        # Every pair ever recomputed; cache expiry and eviction leave it intact.
        self._pairs: Dict[str, MatchPair] = {}
        self._lock = threading.RLock()

    def _load_route(self, traveler_id: str) -> Route:
        return self.config.route_loader(traveler_id) or []

    def recompute(self, pair: MatchPair) -> SyncRecord:
        """Recompute and store the sync status for one match pair."""

        with self._lock:
            self._pairs[pair.match_id] = pair
        now = self.config.clock()
        first_route = self._load_route(pair.first_traveler_id)
        second_route = self._load_route(pair.second_traveler_id)
        result = compute_sync_status(first_route, second_route, now=now)
        record = SyncRecord(pair=pair, result=result, computed_at=now)
        with self._lock:
            self._cache[pair.match_id] = record
        level = logging.INFO if SYNC_VERBOSE_RECOMPUTE else logging.DEBUG
        self._log.log(
            level,
            "Recomputed match=%s status=%s location=%s",
            pair.match_id,
            result.status.value,
            result.location,
        )
        return record

    def recompute_many(self, pairs: Sequence[MatchPair]) -> Dict[str, SyncRecord]:
        """Recompute independent pairs in parallel; failed pairs are skipped."""

        if not pairs:
            return {}
        records: Dict[str, SyncRecord] = {}
        failed: List[str] = []
        workers = max(1, min(self.config.max_workers, len(pairs)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            future_map = {executor.submit(self.recompute, pair): pair for pair in pairs}
            for future in as_completed(future_map):
                pair = future_map[future]
                try:
                    records[pair.match_id] = future.result()
                except RouteDataError as exc:
                    failed.append(pair.match_id)
                    self._log.warning(
                        "Skipping match=%s sync recompute: %s", pair.match_id, exc
                    )
                except Exception as exc:  # pragma: no cover
                    failed.append(pair.match_id)
                    self._log.error(
                        "Match %s sync recompute failed due to unexpected error: %s",
                        pair.match_id,
                        exc,
                        exc_info=True,
                    )
        if failed:
            self._log.warning(
                "Suppressed %d sync recompute errors (matches: %s)",
                len(failed),
                ", ".join(sorted(failed)),
            )
        self._log.info(
            "Recomputed sync status for %d/%d matches", len(records), len(pairs)
        )
        return records

    def get(self, match_id: str) -> Optional[SyncRecord]:
        with self._lock:
            return self._cache.get(match_id)

    def invalidate_traveler(self, traveler_id: str) -> List[MatchPair]:
        """Drop cached results involving ``traveler_id`` and return every known pair.

        Pairs whose cached result already expired or was evicted are still
        returned so a route change never skips a match.
        """

        with self._lock:
            stale = [
                pair for pair in self._pairs.values() if pair.involves(traveler_id)
            ]
            for pair in stale:
                self._cache.pop(pair.match_id, None)
        if stale:
            self._log.debug(
                "Invalidated %d cached sync results for traveler=%s",
                len(stale),
                traveler_id,
            )
        return stale

    def on_route_changed(self, traveler_id: str) -> Dict[str, SyncRecord]:
        """Invalidate and immediately recompute every pair involving ``traveler_id``."""

        return self.recompute_many(self.invalidate_traveler(traveler_id))

    def forget(self, match_id: str) -> None:
        """Stop tracking a match, e.g. after an unmatch."""

        with self._lock:
            self._pairs.pop(match_id, None)
            self._cache.pop(match_id, None)

    def clear(self) -> None:
        with self._lock:
            self._pairs.clear()
            self._cache.clear()


__all__ = ["MatchPair", "SyncRecord", "SyncService", "SyncServiceConfig"]
