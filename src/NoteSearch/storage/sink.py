"""SQLite WHERE-clause builder implementing `FilterSink`."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Literal

from NoteSearch.query.emit import LikePredicate

Conjunction = Literal["AND", "OR"]


class SqliteWhereBuilder:
    """Accumulate predicates and bracketed groups into one WHERE fragment.

    Clauses are joined with the conjunction they were added with; the first
    clause's conjunction is dropped. Nested groups share the parameter
    mapping of the outermost builder, so names must be unique per statement.
    """

    def __init__(self, params: dict[str, Any] | None = None) -> None:
        self.params: dict[str, Any] = params if params is not None else {}
        self._clauses: list[tuple[Conjunction, str]] = []

    def and_where(self, predicate: LikePredicate) -> None:
        self._add("AND", self._render(predicate))

    def or_where(self, predicate: LikePredicate) -> None:
        self._add("OR", self._render(predicate))

    def and_group(self, build: Callable[[SqliteWhereBuilder], None]) -> None:
        self._add_group("AND", build)

    def or_group(self, build: Callable[[SqliteWhereBuilder], None]) -> None:
        self._add_group("OR", build)

    def is_empty(self) -> bool:
        return not self._clauses

    def to_sql(self) -> str:
        """Render accumulated clauses, or an empty string when there are none."""
        parts: list[str] = []
        for idx, (conjunction, sql) in enumerate(self._clauses):
            if idx:
                parts.append(conjunction)
            parts.append(sql)
        return " ".join(parts)

    def _add(self, conjunction: Conjunction, sql: str) -> None:
        self._clauses.append((conjunction, sql))

    def _add_group(self, conjunction: Conjunction, build: Callable[[SqliteWhereBuilder], None]) -> None:
        inner = SqliteWhereBuilder(self.params)
        build(inner)
        if inner.is_empty():
            return
        self._add(conjunction, f"({inner.to_sql()})")

    def _render(self, predicate: LikePredicate) -> str:
        if predicate.param in self.params:
            raise ValueError(f"Duplicate bound parameter: {predicate.param}")
        self.params[predicate.param] = predicate.pattern
        op = "NOT LIKE" if predicate.negated else "LIKE"
        return f"{predicate.field} {op} :{predicate.param} ESCAPE '\\'"
