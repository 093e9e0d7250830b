"""Note storage and search execution."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Sequence

from NoteSearch.core.condition import SearchCondition
from NoteSearch.core.models import Note
from NoteSearch.query.emit import append_condition
from NoteSearch.storage.sink import SqliteWhereBuilder
from NoteSearch.utils.log import log

if TYPE_CHECKING:
    from NoteSearch.storage.db import DatabaseManager

SEARCHABLE_FIELDS = ("cw", "text")


def field_expression(fields: Sequence[str]) -> str:
    """Build the lowercased SQL text expression searched by predicates.

    Fields are concatenated in the given order without a separator.

    Args:
        fields: Column names, each one of `SEARCHABLE_FIELDS`.

    Returns:
        SQL expression such as ``fold(coalesce(cw, '') || coalesce(text, ''))``.

    Raises:
        ValueError: If no field is given or a field is unknown.
    """
    if not fields:
        raise ValueError("At least one searchable field is required")
    for name in fields:
        if name not in SEARCHABLE_FIELDS:
            raise ValueError(f"Unknown searchable field: {name}")
    joined = " || ".join(f"coalesce({name}, '')" for name in fields)
    return f"fold({joined})"


def compile_where(condition: SearchCondition, *, fields: Sequence[str]) -> tuple[str, dict[str, Any]]:
    """Compile a condition into a WHERE fragment and its bound parameters.

    Returns:
        ``("", {})`` for `Empty`, otherwise the fragment and parameters.
    """
    builder = SqliteWhereBuilder()
    emitted = append_condition(condition, builder, field=field_expression(fields))
    log.debug("Compiled %d predicates: %s", emitted, builder.to_sql())
    return builder.to_sql(), builder.params


class NoteStore:
    """SQLite-backed note store."""

    def __init__(self, db_manager: DatabaseManager):
        log.debug("Initializing NoteStore")
        self.conn = db_manager.get_connection()

    def add_notes(self, notes: Sequence[Note]) -> int:
        """Insert notes; stored ids are assigned by the database.

        Args:
            notes: Notes to insert. Their `id` is ignored.

        Returns:
            Number of inserted rows.
        """
        if not notes:
            return 0

        for note in notes:
            if note.created_at is None:
                self.conn.execute(
                    "INSERT INTO notes (cw, text) VALUES (?, ?)",
                    (note.cw, note.text),
                )
            else:
                self.conn.execute(
                    "INSERT INTO notes (cw, text, created_at) VALUES (?, ?, ?)",
                    (note.cw, note.text, int(note.created_at.timestamp())),
                )

        self.conn.commit()
        log.debug("Inserted %d notes", len(notes))
        return len(notes)

    def count(self) -> int:
        row = self.conn.execute("SELECT COUNT(*) FROM notes").fetchone()
        return int(row[0])

    def search(
        self,
        condition: SearchCondition,
        *,
        fields: Sequence[str] = SEARCHABLE_FIELDS,
        limit: int = 20,
        newest_first: bool = True,
    ) -> list[Note]:
        """Return notes matching `condition`.

        Args:
            condition: Canonical condition tree; `Empty` matches every note.
            fields: Columns searched, concatenated in order.
            limit: Maximum number of notes returned.
            newest_first: Sort by creation time descending when True.

        Returns:
            Matching notes.
        """
        where, params = compile_where(condition, fields=fields)
        direction = "DESC" if newest_first else "ASC"

        query = "SELECT id, cw, text, created_at FROM notes"
        if where:
            query += f" WHERE {where}"
        query += f" ORDER BY created_at {direction}, id {direction} LIMIT :limit"

        cursor = self.conn.execute(query, {**params, "limit": limit})
        return [_row_to_note(row) for row in cursor]


def _row_to_note(row: tuple) -> Note:
    created_at = datetime.fromtimestamp(row[3], tz=timezone.utc) if row[3] is not None else None
    return Note(id=row[0], cw=row[1], text=row[2], created_at=created_at)
