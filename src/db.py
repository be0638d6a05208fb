"""Shared SQLite helpers: WAL mode connections and a keyed JSON blob store."""

import json
import sqlite3
from pathlib import Path


def wal_connect(db_path: str | Path, row_factory: bool = False) -> sqlite3.Connection:
    """Open SQLite connection with WAL journal mode.

    Args:
        db_path: Path to database file.
        row_factory: If True, set conn.row_factory = sqlite3.Row.
    """
    conn = sqlite3.connect(str(db_path))
    conn.execute("PRAGMA journal_mode=WAL")
    if row_factory:
        conn.row_factory = sqlite3.Row
    return conn


class BlobStore:
    """Key -> JSON document store, the on-disk home of the wellness state."""

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path).expanduser()
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self):
        conn = wal_connect(self.db_path)
        try:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS blobs (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT DEFAULT CURRENT_TIMESTAMP
                )
            """)
            conn.commit()
        finally:
            conn.close()

    def set(self, key: str, value) -> None:
        conn = wal_connect(self.db_path)
        try:
            conn.execute(
                """
                INSERT INTO blobs (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (key, json.dumps(value)),
            )
            conn.commit()
        finally:
            conn.close()

    def get(self, key: str, default=None):
        conn = wal_connect(self.db_path)
        try:
            row = conn.execute("SELECT value FROM blobs WHERE key = ?", (key,)).fetchone()
        finally:
            conn.close()
        if row is None:
            return default
        return json.loads(row[0])

    def load_all(self) -> dict:
        """All stored documents. Rows that fail to decode are left out."""
        conn = wal_connect(self.db_path, row_factory=True)
        try:
            rows = conn.execute("SELECT key, value FROM blobs").fetchall()
        finally:
            conn.close()
        result = {}
        for row in rows:
            try:
                result[row["key"]] = json.loads(row["value"])
            except json.JSONDecodeError:
                continue
        return result
