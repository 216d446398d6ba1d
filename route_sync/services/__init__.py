"""Service layer package.

Exports the caller-owned services that wrap the pure sync engine.
"""

from .sync_service import MatchPair, SyncRecord, SyncService, SyncServiceConfig

__all__ = ["MatchPair", "SyncRecord", "SyncService", "SyncServiceConfig"]
