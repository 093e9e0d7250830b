"""Search service: parse a query, compile it, run it against the store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Sequence

from NoteSearch.core.condition import SearchCondition, iter_atoms
from NoteSearch.core.models import Note
from NoteSearch.core.parser import parse_search_string
from NoteSearch.storage.notes import SEARCHABLE_FIELDS, compile_where
from NoteSearch.utils.log import log


class NoteSource(Protocol):
    """Anything that can execute a condition tree and return notes."""

    def search(
        self,
        condition: SearchCondition,
        *,
        fields: Sequence[str],
        limit: int,
        newest_first: bool,
    ) -> list[Note]:
        raise NotImplementedError


@dataclass(slots=True)
class NoteSearchService:
    """Application service for free-text note search."""

    store: NoteSource | None = None
    fields: tuple[str, ...] = SEARCHABLE_FIELDS
    max_results: int = 20
    newest_first: bool = True

    def parse(self, query: str) -> SearchCondition:
        """Parse a user query into its canonical condition tree."""
        condition = parse_search_string(query)
        log.debug("Parsed %r into %s", query, condition)
        return condition

    def explain(self, query: str) -> tuple[str, dict[str, Any]]:
        """Return the WHERE fragment and parameters a query compiles to."""
        return compile_where(self.parse(query), fields=self.fields)

    def search(self, query: str, *, max_results: int | None = None) -> list[Note]:
        """Run a user query.

        Args:
            query: Raw search string; blank input matches every note.
            max_results: Override of the configured result limit.

        Returns:
            Matching notes in configured order.
        """
        if self.store is None:
            raise RuntimeError("No note store is configured")

        condition = self.parse(query)
        limit = max_results if max_results is not None else self.max_results
        if limit <= 0:
            raise ValueError("max_results must be positive")

        terms = sum(1 for _ in iter_atoms(condition))
        log.info("Searching with %d terms (limit=%d)", terms, limit)
        notes = self.store.search(
            condition,
            fields=self.fields,
            limit=limit,
            newest_first=self.newest_first,
        )
        log.info("Found %d notes", len(notes))
        return notes
