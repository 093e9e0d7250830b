"""Search service layer for NoteSearch."""

from __future__ import annotations

from typing import TYPE_CHECKING

from NoteSearch.services.search import NoteSearchService, NoteSource

if TYPE_CHECKING:
    from NoteSearch.config import AppConfig


def create_search_service(config: AppConfig, store: NoteSource | None = None) -> NoteSearchService:
    """Create a search service with configured behavior.

    Without a store the service can still parse and explain queries.
    """
    return NoteSearchService(
        store=store,
        fields=config.search.fields,
        max_results=config.search.max_results,
        newest_first=config.search.newest_first,
    )


__all__ = [
    "NoteSearchService",
    "NoteSource",
    "create_search_service",
]
