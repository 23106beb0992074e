"""Durable storage for Invers Wealth."""

from invers.db.snapshots import DEFAULT_SNAPSHOT_KEY, SnapshotAdapter
from invers.db.store import KeyValueStore, QuotaExceededError

__all__ = [
    "DEFAULT_SNAPSHOT_KEY",
    "KeyValueStore",
    "QuotaExceededError",
    "SnapshotAdapter",
]
