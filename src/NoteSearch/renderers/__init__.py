"""Output renderers for NoteSearch."""

from __future__ import annotations

from NoteSearch.renderers.console import render_condition, render_notes, render_where
from NoteSearch.renderers.json import condition_to_dict, load_notes_file, render_json

__all__ = [
    "render_condition",
    "render_notes",
    "render_where",
    "condition_to_dict",
    "load_notes_file",
    "render_json",
]
