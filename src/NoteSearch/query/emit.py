"""Predicate emission.

Walks a canonical condition tree and drives a `FilterSink` (a WHERE-clause
builder). Emission alternates between two contexts:

- AND context: leaves become `and_where`; an `And` is flattened into the
  current sink; an `Or` opens an `and_group` whose members are emitted in
  OR context.
- OR context: leaves become `or_where`; an `And` opens an `or_group` whose
  members are emitted in AND context.

Every leaf binds its pattern to a fresh parameter name (`q1`, `q2`, ...)
so predicates can be combined into one statement.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from NoteSearch.core.condition import And, Contains, NotContains, Or, SearchCondition
from NoteSearch.query.escape import escape_like


@dataclass(frozen=True, slots=True)
class LikePredicate:
    """Case-insensitive substring test against a field expression.

    Attributes:
        field: SQL expression producing lowercased text.
        negated: Whether this is a NOT LIKE test.
        pattern: Escaped LIKE pattern, already wrapped in ``%``.
        param: Unique bound parameter name.
    """

    field: str
    negated: bool
    pattern: str
    param: str


class FilterSink(Protocol):
    """Query builder capability consumed by `append_condition`."""

    def and_where(self, predicate: LikePredicate) -> None:
        """AND-require a predicate."""
        raise NotImplementedError

    def or_where(self, predicate: LikePredicate) -> None:
        """OR-require a predicate."""
        raise NotImplementedError

    def and_group(self, build: Callable[[FilterSink], None]) -> None:
        """AND-require a bracketed group filled by `build`."""
        raise NotImplementedError

    def or_group(self, build: Callable[[FilterSink], None]) -> None:
        """OR-require a bracketed group filled by `build`."""
        raise NotImplementedError


def append_condition(
    condition: SearchCondition,
    sink: FilterSink,
    *,
    field: str,
    param_prefix: str = "q",
) -> int:
    """Emit `condition` into `sink`.

    Args:
        condition: Canonical condition tree. `Empty` emits nothing.
        sink: Builder receiving predicates and groups.
        field: SQL expression the substrings are matched against.
        param_prefix: Prefix of generated parameter names.

    Returns:
        Number of leaf predicates emitted.
    """
    emitter = _Emitter(field=field, param_prefix=param_prefix)
    emitter.to_and_context(condition, sink)
    return emitter.count


@dataclass(slots=True)
class _Emitter:
    field: str
    param_prefix: str
    count: int = 0

    def predicate(self, value: str, *, negated: bool) -> LikePredicate:
        self.count += 1
        return LikePredicate(
            field=self.field,
            negated=negated,
            pattern=f"%{escape_like(value)}%",
            param=f"{self.param_prefix}{self.count}",
        )

    def to_and_context(self, condition: SearchCondition, sink: FilterSink) -> None:
        if isinstance(condition, Contains):
            sink.and_where(self.predicate(condition.value, negated=False))
        elif isinstance(condition, NotContains):
            sink.and_where(self.predicate(condition.value, negated=True))
        elif isinstance(condition, And):
            for sub in condition.sub_conditions:
                self.to_and_context(sub, sink)
        elif isinstance(condition, Or):
            sink.and_group(lambda group: self._each_to_or_context(condition.sub_conditions, group))

    def to_or_context(self, condition: SearchCondition, sink: FilterSink) -> None:
        if isinstance(condition, Contains):
            sink.or_where(self.predicate(condition.value, negated=False))
        elif isinstance(condition, NotContains):
            sink.or_where(self.predicate(condition.value, negated=True))
        elif isinstance(condition, And):
            sink.or_group(lambda group: self._each_to_and_context(condition.sub_conditions, group))
        elif isinstance(condition, Or):
            # not produced by the parser; an OR inside OR needs no brackets
            self._each_to_or_context(condition.sub_conditions, sink)

    def _each_to_and_context(self, conditions: tuple[SearchCondition, ...], sink: FilterSink) -> None:
        for sub in conditions:
            self.to_and_context(sub, sink)

    def _each_to_or_context(self, conditions: tuple[SearchCondition, ...], sink: FilterSink) -> None:
        for sub in conditions:
            self.to_or_context(sub, sink)
