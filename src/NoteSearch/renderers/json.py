"""JSON renderers and the note import reader.

Renders condition trees and notes into JSON-serializable objects, and reads
note files produced by other tools back into `Note` objects.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

from dateutil import parser as dt_parser

from NoteSearch.core.condition import And, Contains, NotContains, Or, SearchCondition
from NoteSearch.core.models import Note
from NoteSearch.utils.log import log


def condition_to_dict(condition: SearchCondition) -> dict[str, Any]:
    """Convert a condition tree into nested dicts.

    Leaves become ``{"type": "contains", "value": ...}``; compounds become
    ``{"type": "and", "sub_conditions": [...]}``; `Empty` is ``{"type": "empty"}``.
    """
    if isinstance(condition, Contains):
        return {"type": "contains", "value": condition.value}
    if isinstance(condition, NotContains):
        return {"type": "not_contains", "value": condition.value}
    if isinstance(condition, (And, Or)):
        return {
            "type": "and" if isinstance(condition, And) else "or",
            "sub_conditions": [condition_to_dict(sub) for sub in condition.sub_conditions],
        }
    return {"type": "empty"}


def note_to_dict(note: Note) -> dict[str, Any]:
    return {
        "id": note.id,
        "cw": note.cw,
        "text": note.text,
        "created_at": note.created_at.isoformat() if note.created_at else None,
    }


def render_json(notes: Iterable[Note]) -> list[dict[str, Any]]:
    """Render notes into JSON-serializable Python objects."""
    return [note_to_dict(note) for note in notes]


def dumps(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2)


def load_note(data: Any, index: int) -> Note:
    """Build a `Note` from one decoded JSON object.

    Args:
        data: Mapping with a required ``text`` and optional ``cw``/``created_at``.
            ``created_at`` may be an ISO 8601 string or epoch seconds.
        index: Position in the source list, used in error messages.

    Raises:
        ValueError: If the entry is malformed.
    """
    if not isinstance(data, dict):
        raise ValueError(f"notes[{index}] must be an object")
    text = data.get("text")
    if not isinstance(text, str):
        raise ValueError(f"notes[{index}].text must be a string")
    cw = data.get("cw")
    if cw is not None and not isinstance(cw, str):
        raise ValueError(f"notes[{index}].cw must be a string or null")
    return Note(id=None, text=text, cw=cw, created_at=_parse_created_at(data.get("created_at"), index))


def load_notes_file(filepath: str | Path) -> list[Note]:
    """Load notes from a JSON file holding a list of note objects.

    Raises:
        ValueError: If the file is not a JSON list of valid note objects.
    """
    path = Path(filepath)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON list of notes")

    notes = [load_note(item, idx) for idx, item in enumerate(data)]
    log.info("Loaded %d notes from %s", len(notes), path)
    return notes


def _parse_created_at(raw_value: Any, index: int) -> datetime | None:
    if raw_value is None:
        return None
    if isinstance(raw_value, (int, float)) and not isinstance(raw_value, bool):
        return datetime.fromtimestamp(raw_value, tz=timezone.utc)
    if not isinstance(raw_value, str):
        raise ValueError(f"notes[{index}].created_at must be an ISO string or epoch seconds")
    try:
        parsed = dt_parser.isoparse(raw_value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"notes[{index}].created_at is not ISO 8601: {raw_value}") from e

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed
