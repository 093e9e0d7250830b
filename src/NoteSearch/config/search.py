"""Search domain configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from NoteSearch.config.common import (
    expect_choice,
    expect_int,
    expect_str,
    expect_str_list,
    get_optional_value,
    get_section,
)
from NoteSearch.storage.notes import SEARCHABLE_FIELDS

_ALLOWED_ORDERS = {"newest", "oldest"}


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Store validated search behavior.

    Attributes:
        fields: Note columns matched by the search, concatenated in order.
        max_results: Default result limit.
        order: `newest` or `oldest` first.
    """

    fields: tuple[str, ...]
    max_results: int
    order: str

    @property
    def newest_first(self) -> bool:
        return self.order == "newest"


def load_search(raw: Mapping[str, Any]) -> SearchConfig:
    """Load search domain config from raw mapping.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed search configuration.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If a field or order is unknown.
    """
    section = get_section(raw, "search", required=True)
    return SearchConfig(
        fields=_parse_fields(get_optional_value(section, "fields", list(SEARCHABLE_FIELDS))),
        max_results=expect_int(get_optional_value(section, "max_results", 20), "search.max_results"),
        order=expect_choice(get_optional_value(section, "order", "newest"), "search.order", _ALLOWED_ORDERS),
    )


def check_search(config: SearchConfig) -> None:
    """Validate search domain constraints.

    Raises:
        ValueError: If values violate search constraints.
    """
    if not config.fields:
        raise ValueError("search.fields must include at least one field")
    if config.max_results <= 0:
        raise ValueError("search.max_results must be positive")


def _parse_fields(value: Any) -> tuple[str, ...]:
    """Normalize configured field names, keeping order and dropping duplicates.

    Raises:
        TypeError: If value is not a string list.
        ValueError: If a field is unknown.
    """
    items = expect_str_list(value, "search.fields")

    normalized: list[str] = []
    for idx, item in enumerate(items):
        name = expect_str(item, f"search.fields[{idx}]").strip().lower()
        if not name:
            continue
        if name not in SEARCHABLE_FIELDS:
            raise ValueError(f"search.fields has unknown field: {name}")
        if name not in normalized:
            normalized.append(name)
    return tuple(normalized)
