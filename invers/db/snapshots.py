"""Snapshot persistence adapter.

Reads and writes the whole application state as one JSON record in a
KeyValueStore. Loading never fails: a missing, unreadable or malformed
record yields defaults. Saving never raises: rejected writes are logged
and the last-known-good snapshot is kept.
"""

import json
import logging
import sqlite3
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from invers.db.store import KeyValueStore, QuotaExceededError
from invers.models import (
    MonthlyReport,
    NotificationSettings,
    Profile,
    Snapshot,
    ThemePreference,
)

logger = logging.getLogger(__name__)

DEFAULT_SNAPSHOT_KEY = "invers.snapshot.v4"

# Section name -> model used to recover it on its own
_SECTION_MODELS: dict[str, type[BaseModel]] = {
    "profile": Profile,
    "theme": ThemePreference,
    "notification": NotificationSettings,
}


class SnapshotAdapter:
    """Loads and saves the application Snapshot under a single key."""

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_SNAPSHOT_KEY):
        """Initialize the adapter.

        Args:
            store: Backing key-value store.
            key: Name of the snapshot record.
        """
        self._store = store
        self._key = key
        self._last_saved: Optional[Snapshot] = None

    @property
    def key(self) -> str:
        """Name of the snapshot record."""
        return self._key

    @property
    def last_saved(self) -> Optional[Snapshot]:
        """Last snapshot successfully written or read."""
        return self._last_saved

    def load(self) -> Snapshot:
        """Load the snapshot, substituting defaults on any failure.

        Returns:
            The stored snapshot, or the default snapshot if the record is
            absent or cannot be parsed.
        """
        try:
            raw = self._store.get(self._key)
        except sqlite3.Error as e:
            logger.warning("Could not read snapshot %r: %s", self._key, e)
            return Snapshot()

        if raw is None:
            logger.debug("No snapshot stored under %r, using defaults", self._key)
            return Snapshot()

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Snapshot %r is not valid JSON (%s), using defaults", self._key, e)
            return Snapshot()

        if not isinstance(data, dict):
            logger.warning("Snapshot %r is not an object, using defaults", self._key)
            return Snapshot()

        snapshot = self._parse(data)
        self._last_saved = snapshot
        return snapshot

    def save(self, snapshot: Snapshot) -> bool:
        """Write the snapshot.

        Args:
            snapshot: Full application state.

        Returns:
            True if the write succeeded, False if the store rejected it.
        """
        try:
            self._store.put(self._key, snapshot.to_json())
        except (QuotaExceededError, sqlite3.Error) as e:
            logger.warning("Storage quota exceeded or error saving data: %s", e)
            return False
        self._last_saved = snapshot
        return True

    def clear(self) -> None:
        """Remove the stored snapshot."""
        self._store.delete(self._key)
        self._last_saved = None

    def _parse(self, data: dict[str, Any]) -> Snapshot:
        """Validate a decoded snapshot, recovering bad sections one by one."""
        try:
            return Snapshot.model_validate(data)
        except ValidationError as e:
            logger.warning(
                "Snapshot %r failed validation (%d errors), recovering sections",
                self._key,
                e.error_count(),
            )

        sections: dict[str, Any] = {}
        for name, model in _SECTION_MODELS.items():
            if name not in data:
                continue
            try:
                sections[name] = model.model_validate(data[name])
            except ValidationError:
                logger.warning("Dropping malformed %s section", name)

        ledger = data.get("ledger")
        if isinstance(ledger, dict):
            sections["ledger"] = _recover_ledger(ledger)

        reports = data.get("reports")
        if isinstance(reports, dict):
            sections["reports"] = _recover_reports(reports)

        return Snapshot(**sections)


def _recover_ledger(ledger: dict[str, Any]) -> dict[str, bool]:
    """Keep only well-formed ledger entries."""
    kept = {}
    for key, value in ledger.items():
        try:
            parsed = Snapshot.model_validate({"ledger": {key: value}})
        except ValidationError:
            logger.debug("Dropping ledger entry %r=%r", key, value)
            continue
        kept.update(parsed.ledger)
    return kept


def _recover_reports(reports: dict[str, Any]) -> dict[int, MonthlyReport]:
    """Keep only well-formed monthly reports."""
    kept = {}
    for key, value in reports.items():
        try:
            parsed = Snapshot.model_validate({"reports": {key: value}})
        except ValidationError:
            logger.debug("Dropping report for month %r", key)
            continue
        kept.update(parsed.reports)
    return kept
