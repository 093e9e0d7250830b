"""Storage layer for NoteSearch.

Provides database management, the SQLite filter sink, and the note store.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from NoteSearch.storage.db import DatabaseManager
from NoteSearch.storage.notes import NoteStore, compile_where, field_expression
from NoteSearch.storage.sink import SqliteWhereBuilder
from NoteSearch.utils.log import log

if TYPE_CHECKING:
    from NoteSearch.config import AppConfig


def create_storage(config: AppConfig) -> tuple[DatabaseManager, NoteStore]:
    """Open the configured database and its note store.

    Args:
        config: Application configuration containing storage settings.

    Returns:
        Tuple of (db_manager, note_store).
    """
    db_path = Path(config.storage.db_path)
    db_manager = DatabaseManager(db_path)
    log.info("Note database: %s", db_path)
    return db_manager, NoteStore(db_manager)


__all__ = [
    "DatabaseManager",
    "NoteStore",
    "SqliteWhereBuilder",
    "compile_where",
    "field_expression",
    "create_storage",
]
