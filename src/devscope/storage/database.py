"""SQLite persistence for workspace roots and settings."""

from __future__ import annotations

import sqlite3
import threading
from pathlib import Path
from typing import Dict, List, Optional, Union

from devscope.core.logging import get_logger

LOGGER = get_logger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS settings (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS workspaces (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    path TEXT NOT NULL UNIQUE,
    added_at TEXT NOT NULL DEFAULT (datetime('now'))
);
"""

IN_MEMORY = ":memory:"


class StorageError(Exception):
    """Database could not be opened, read or written."""


class Database:
    """Thin wrapper over a SQLite connection.

    The connection is shared across threads and serialized with a lock.
    Every ``sqlite3.Error`` is re-raised as ``StorageError``.
    """

    def __init__(self, connection: sqlite3.Connection, path: str) -> None:
        self._conn = connection
        self._path = path
        self._lock = threading.Lock()

    @classmethod
    def open(cls, db_path: Union[Path, str]) -> "Database":
        """Open or create the database and its tables.

        Args:
            db_path: Database file, or ``":memory:"``.

        Raises:
            StorageError: If the file cannot be created or opened.
        """
        target = str(db_path)
        if target != IN_MEMORY:
            try:
                Path(target).parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StorageError(f"Failed to create database directory for {target}: {e}") from e

        try:
            conn = sqlite3.connect(target, check_same_thread=False)
            conn.executescript(SCHEMA)
            conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to open database {target}: {e}") from e

        LOGGER.debug(f"Opened database {target}")
        return cls(conn, target)

    @property
    def path(self) -> str:
        return self._path

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _execute(self, sql: str, params: tuple = ()) -> List[tuple]:
        with self._lock:
            try:
                cursor = self._conn.execute(sql, params)
                rows = cursor.fetchall()
                self._conn.commit()
                return rows
            except sqlite3.Error as e:
                raise StorageError(f"Database error in {self._path}: {e}") from e

    # Settings

    def get_all_settings(self) -> Dict[str, str]:
        """Return every setting, ordered by key."""
        rows = self._execute("SELECT key, value FROM settings ORDER BY key")
        return {key: value for key, value in rows}

    def get_setting(self, key: str) -> Optional[str]:
        rows = self._execute("SELECT value FROM settings WHERE key = ?", (key,))
        return rows[0][0] if rows else None

    def set_setting(self, key: str, value: str) -> None:
        """Insert or replace a setting."""
        self._execute(
            "INSERT INTO settings (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
            (key, value),
        )

    def delete_setting(self, key: str) -> None:
        self._execute("DELETE FROM settings WHERE key = ?", (key,))

    # Workspaces

    def get_workspaces(self) -> List[str]:
        """Return workspace roots in the order they were added."""
        rows = self._execute("SELECT path FROM workspaces ORDER BY id")
        return [row[0] for row in rows]

    def add_workspace(self, path: str) -> None:
        """Add a workspace root. Adding an existing root is a no-op."""
        self._execute("INSERT OR IGNORE INTO workspaces (path) VALUES (?)", (path,))

    def remove_workspace(self, path: str) -> None:
        self._execute("DELETE FROM workspaces WHERE path = ?", (path,))
