"""Turning condition trees into query-builder calls."""

from __future__ import annotations

from NoteSearch.query.emit import FilterSink, LikePredicate, append_condition
from NoteSearch.query.escape import escape_like

__all__ = [
    "FilterSink",
    "LikePredicate",
    "append_condition",
    "escape_like",
]
