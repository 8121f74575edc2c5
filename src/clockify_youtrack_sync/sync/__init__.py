"""Reconciliation of Clockify entries with YouTrack work items."""

from clockify_youtrack_sync.sync.engine import (
    SyncAction,
    SyncDecision,
    SyncEngine,
    SyncResult,
    build_work_type_map,
    decide,
)
from clockify_youtrack_sync.sync.normalizer import NormalizedEntry, normalize
from clockify_youtrack_sync.sync.resolver import SyncStateResolver

__all__ = [
    "NormalizedEntry",
    "SyncAction",
    "SyncDecision",
    "SyncEngine",
    "SyncResult",
    "SyncStateResolver",
    "build_work_type_map",
    "decide",
    "normalize",
]
