"""SQLite key-value store for Invers Wealth."""

import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional


class QuotaExceededError(Exception):
    """Raised when a write would exceed the store's byte quota."""


class KeyValueStore:
    """SQLite-backed string key-value store."""

    def __init__(self, db_path: Path, quota_bytes: Optional[int] = None):
        """Initialize the store.

        Args:
            db_path: Path to the SQLite database file.
            quota_bytes: Optional upper bound on the total stored value size.
        """
        self.db_path = db_path
        self.quota_bytes = quota_bytes
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.commit()
        finally:
            conn.close()

    def get(self, key: str) -> Optional[str]:
        """Get the value stored under a key.

        Args:
            key: Record key.

        Returns:
            Stored value, or None if the key is absent.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM kv WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    def put(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one.

        Args:
            key: Record key.
            value: Value to store.

        Raises:
            QuotaExceededError: If the write would exceed quota_bytes.
            sqlite3.Error: If the database rejects the write.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            if self.quota_bytes is not None:
                cursor.execute(
                    "SELECT COALESCE(SUM(LENGTH(CAST(value AS BLOB))), 0) AS used "
                    "FROM kv WHERE key != ?",
                    (key,),
                )
                used = cursor.fetchone()["used"]
                needed = len(value.encode("utf-8"))
                if used + needed > self.quota_bytes:
                    raise QuotaExceededError(
                        f"Writing {needed:,} bytes to {key!r} exceeds quota "
                        f"of {self.quota_bytes:,} bytes ({used:,} in use)"
                    )
            cursor.execute(
                """
                INSERT OR REPLACE INTO kv (key, value, updated_at)
                VALUES (?, ?, ?)
                """,
                (key, value, datetime.now().isoformat()),
            )
            conn.commit()
        finally:
            conn.close()

    def delete(self, key: str) -> None:
        """Delete a key if present.

        Args:
            key: Record key.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM kv WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()

    def keys(self) -> list[str]:
        """Get all stored keys, sorted."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT key FROM kv ORDER BY key")
            return [row["key"] for row in cursor.fetchall()]
        finally:
            conn.close()
