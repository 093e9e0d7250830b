"""Command implementations for the NoteSearch CLI.

Each command holds its inputs and collaborators and returns the text to
print from `execute()`, keeping click and output plumbing out of the logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from NoteSearch.renderers.console import render_condition, render_notes, render_where
from NoteSearch.renderers.json import condition_to_dict, dumps, load_notes_file, render_json
from NoteSearch.services.search import NoteSearchService
from NoteSearch.storage.notes import NoteStore
from NoteSearch.utils.log import log


class Command(Protocol):
    def execute(self) -> str:
        raise NotImplementedError


@dataclass(slots=True)
class ParseCommand:
    """Show the canonical condition tree of a query."""

    service: NoteSearchService
    query: str
    output_format: str = "console"

    def execute(self) -> str:
        condition = self.service.parse(self.query)
        if self.output_format == "json":
            return dumps(condition_to_dict(condition)) + "\n"
        return render_condition(condition) + "\n"


@dataclass(slots=True)
class ExplainCommand:
    """Show the SQL filter a query compiles to."""

    service: NoteSearchService
    query: str
    output_format: str = "console"

    def execute(self) -> str:
        where, params = self.service.explain(self.query)
        if self.output_format == "json":
            return dumps({"where": where, "params": params}) + "\n"
        return render_where(where, params)


@dataclass(slots=True)
class SearchCommand:
    """Run a query against the note store."""

    service: NoteSearchService
    query: str
    limit: int | None = None
    output_format: str = "console"

    def execute(self) -> str:
        notes = self.service.search(self.query, max_results=self.limit)
        if self.output_format == "json":
            payload = {
                "query": self.query,
                "condition": condition_to_dict(self.service.parse(self.query)),
                "notes": render_json(notes),
            }
            return dumps(payload) + "\n"
        if not notes:
            return "No notes found.\n"
        return render_notes(notes)


@dataclass(slots=True)
class ImportCommand:
    """Load notes from a JSON file into the store."""

    store: NoteStore
    path: Path

    def execute(self) -> str:
        notes = load_notes_file(self.path)
        inserted = self.store.add_notes(notes)
        log.info("Note count after import: %d", self.store.count())
        return f"Imported {inserted} notes\n"
