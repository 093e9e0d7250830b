"""Search condition tree and the algebra used to build it.

A parsed search string is represented as an immutable tree of
`SearchCondition` nodes. Leaves test for (the absence of) a lowercased
substring; `And`/`Or` hold an ordered tuple of children.

The parser never builds `And`/`Or` directly. It combines terms through
`join_conditions`, which keeps the tree in canonical form:

- no `And` directly inside an `And`, no `Or` directly inside an `Or`
- redundant siblings are pruned with `covers` while merging
- `Empty` only ever appears as a standalone value
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Literal, Sequence, Union


@dataclass(frozen=True, slots=True)
class Contains:
    """Target text contains `value` as a substring."""

    value: str


@dataclass(frozen=True, slots=True)
class NotContains:
    """Target text does not contain `value`."""

    value: str


@dataclass(frozen=True, slots=True)
class And:
    """Conjunction of at least two non-`And` conditions."""

    sub_conditions: tuple[SearchCondition, ...]


@dataclass(frozen=True, slots=True)
class Or:
    """Disjunction of at least two non-`Or` conditions."""

    sub_conditions: tuple[SearchCondition, ...]


@dataclass(frozen=True, slots=True)
class Empty:
    """No filter at all; matches everything."""


SearchCondition = Union[Contains, NotContains, And, Or, Empty]
JoinMode = Literal["and", "or", "not"]

EMPTY = Empty()


def negate(condition: SearchCondition) -> SearchCondition:
    """Return the logical negation of a condition (De Morgan).

    Args:
        condition: Condition to negate.

    Returns:
        Negated condition. `Empty` negates to itself.
    """
    if isinstance(condition, Contains):
        return NotContains(condition.value)
    if isinstance(condition, NotContains):
        return Contains(condition.value)
    if isinstance(condition, And):
        return Or(tuple(negate(sub) for sub in condition.sub_conditions))
    if isinstance(condition, Or):
        return And(tuple(negate(sub) for sub in condition.sub_conditions))
    return condition


def covers(main: SearchCondition, other: SearchCondition) -> bool:
    """Tell whether `main` holds whenever `other` holds.

    When both are asserted together under AND, `main` is the weaker and
    therefore redundant condition. Compound operands are treated the same
    way whether they are `And` or `Or`; this is a bounded heuristic and not
    a general entailment check.

    Args:
        main: Candidate weaker condition.
        other: Candidate stronger condition.

    Returns:
        True if `main` is considered implied by `other`.
    """
    if isinstance(main, Contains):
        if isinstance(other, Contains):
            return main.value in other.value
        if isinstance(other, (And, Or)):
            return all(covers(main, sub) for sub in other.sub_conditions)
        return False
    if isinstance(main, NotContains):
        if isinstance(other, NotContains):
            return other.value in main.value
        if isinstance(other, (And, Or)):
            return all(covers(main, sub) for sub in other.sub_conditions)
        return False
    if isinstance(main, (And, Or)):
        return all(covers(sub, other) for sub in main.sub_conditions)
    return False


def join_conditions(left: SearchCondition, right: SearchCondition, mode: JoinMode) -> SearchCondition:
    """Combine an accumulated condition with the next parsed term.

    Args:
        left: Condition accumulated so far.
        right: Newly parsed term or group.
        mode: Pending operator. `not` means "and the negation of `right`".

    Returns:
        Canonical combined condition.
    """
    if isinstance(right, Empty):
        return left

    # NOT is an AND against the negated term
    if mode == "not":
        right = negate(right)
        op: Literal["and", "or"] = "and"
    else:
        op = mode

    if isinstance(left, Empty):
        return right

    return merge_condition_lists(op, _terms_for(op, left), _terms_for(op, right))


def merge_condition_lists(
    op: Literal["and", "or"],
    left: Sequence[SearchCondition],
    right: Sequence[SearchCondition],
) -> SearchCondition:
    """Concatenate two sibling lists under `op`, pruning redundant terms.

    Under `and` a term that covers a sibling adds nothing and is dropped.
    Under `or` a term covered by a sibling is dropped. The left side is
    pruned against the full right side first, then the right side against
    the surviving left terms, so of two equivalent terms the right one goes.

    Args:
        op: Operator joining the two lists.
        left: Terms already accumulated.
        right: Terms being added.

    Returns:
        The single surviving term, or an `And`/`Or` over all survivors.
    """
    if op == "and":
        left_pruned = [lc for lc in left if not any(covers(lc, rc) for rc in right)]
        right_pruned = [rc for rc in right if not any(covers(rc, lc) for lc in left_pruned)]
    else:
        left_pruned = [lc for lc in left if not any(covers(rc, lc) for rc in right)]
        right_pruned = [rc for rc in right if not any(covers(lc, rc) for lc in left_pruned)]

    combined = tuple(left_pruned + right_pruned)
    if len(combined) == 1:
        return combined[0]
    if op == "and":
        return And(combined)
    return Or(combined)


def iter_atoms(condition: SearchCondition) -> Iterator[Contains | NotContains]:
    """Yield the leaf predicates of a condition in emission order."""
    if isinstance(condition, (Contains, NotContains)):
        yield condition
    elif isinstance(condition, (And, Or)):
        for sub in condition.sub_conditions:
            yield from iter_atoms(sub)


def _terms_for(op: Literal["and", "or"], condition: SearchCondition) -> list[SearchCondition]:
    """Split `condition` into sibling terms for a merge under `op`."""
    if op == "and" and isinstance(condition, And):
        return list(condition.sub_conditions)
    if op == "or" and isinstance(condition, Or):
        return list(condition.sub_conditions)
    return [condition]
