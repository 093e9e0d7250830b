"""SQLite database utilities."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from NoteSearch.core.tokenizer import fold_case


class DatabaseManager:
    """Shared database connection manager.

    Uses singleton pattern so every store in the process talks to the same
    connection. Supports context manager protocol for automatic cleanup.
    """

    _instance = None

    def __new__(cls, db_path: Path):
        """Create or return existing DatabaseManager instance.

        Args:
            db_path: Absolute path or project-relative path to database file.

        Returns:
            DatabaseManager singleton instance.
        """
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.conn = ensure_db(db_path)
            init_schema(cls._instance.conn)
        return cls._instance

    def get_connection(self) -> sqlite3.Connection:
        """Get the shared database connection."""
        return self.conn

    def close(self) -> None:
        """Close the connection and reset the singleton.

        A new instance may then be created for a different database path.
        """
        if hasattr(self, "conn") and self.conn:
            self.conn.close()
            type(self)._instance = None

    def __enter__(self) -> DatabaseManager:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def fold(value: str | None) -> str | None:
    """Lowercase text the same way the search tokenizer does.

    SQLite's builtin ``lower()`` only handles ASCII, so stored text is folded
    through this function instead.
    """
    if value is None:
        return None
    return fold_case(str(value))


def ensure_db(db_path: Path) -> sqlite3.Connection:
    """Ensure database file exists and return connection.

    Args:
        db_path: Absolute path or project-relative path to database file.

    Returns:
        SQLite connection with the ``fold`` SQL function registered.

    Raises:
        OSError: If directory creation fails.
        sqlite3.Error: If database connection fails.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    conn.create_function("fold", 1, fold, deterministic=True)
    return conn


def init_schema(conn: sqlite3.Connection) -> None:
    """Create the notes table and its indexes if missing.

    Args:
        conn: SQLite connection.
    """
    conn.executescript("""
        CREATE TABLE IF NOT EXISTS notes (
          id INTEGER PRIMARY KEY AUTOINCREMENT,
          cw TEXT,
          text TEXT NOT NULL,
          created_at INTEGER NOT NULL DEFAULT (
            CAST(strftime('%s','now') AS INTEGER)
          )
        );

        CREATE INDEX IF NOT EXISTS idx_notes_created
          ON notes(created_at);
    """)
    conn.commit()
