"""Key-value blob stores backing the persistence gateway."""

import sqlite3
from pathlib import Path
from typing import Protocol

from continhas.store.schema import get_db_path


class BlobStore(Protocol):
    """Opaque key to bytes store."""

    def get(self, key: str) -> bytes | None: ...

    def set(self, key: str, blob: bytes) -> None: ...

    def delete(self, key: str) -> None: ...


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


class SqliteBlobStore:
    """Blob store on the ``blobs`` table of the continhas database.

    The schema must exist (see ``init_database``). Every call opens its own
    connection; operations raise ``sqlite3.Error`` on failure.
    """

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path if db_path is not None else get_db_path()

    def get(self, key: str) -> bytes | None:
        with _connect(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM blobs WHERE key = ?", (key,))
            row = cursor.fetchone()
            return bytes(row["value"]) if row else None

    def set(self, key: str, blob: bytes) -> None:
        with _connect(self.db_path) as conn:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    """
                    INSERT INTO blobs (key, value, updated_at) VALUES (?, ?, datetime('now'))
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                    """,
                    (key, blob),
                )
                conn.commit()
            except sqlite3.Error:
                conn.rollback()
                raise

    def delete(self, key: str) -> None:
        with _connect(self.db_path) as conn:
            cursor = conn.cursor()
            try:
                cursor.execute("DELETE FROM blobs WHERE key = ?", (key,))
                conn.commit()
            except sqlite3.Error:
                conn.rollback()
                raise


class MemoryBlobStore:
    """In-process blob store, used by tests and throwaway sessions."""

    def __init__(self) -> None:
        self.blobs: dict[str, bytes] = {}

    def get(self, key: str) -> bytes | None:
        return self.blobs.get(key)

    def set(self, key: str, blob: bytes) -> None:
        self.blobs[key] = bytes(blob)

    def delete(self, key: str) -> None:
        self.blobs.pop(key, None)
