"""In-memory evaluation of condition trees.

Reference semantics for what the SQL sink computes: a `Contains` leaf is a
substring test on the haystack lowercased with `fold_case`.
"""

from __future__ import annotations

from typing import Iterable

from NoteSearch.core.condition import And, Contains, Empty, NotContains, Or, SearchCondition
from NoteSearch.core.tokenizer import fold_case


def matches(condition: SearchCondition, haystack: str) -> bool:
    """Return True if `haystack` satisfies `condition`.

    Args:
        condition: Canonical condition tree.
        haystack: Text to test; case-folded before matching.

    Returns:
        Match result. `Empty` matches everything.
    """
    return _matches(condition, fold_case(haystack))


def filter_texts(condition: SearchCondition, texts: Iterable[str]) -> list[str]:
    """Keep the texts that satisfy `condition`, preserving order."""
    if isinstance(condition, Empty):
        return list(texts)
    return [text for text in texts if matches(condition, text)]


def _matches(condition: SearchCondition, folded: str) -> bool:
    if isinstance(condition, Contains):
        return condition.value in folded
    if isinstance(condition, NotContains):
        return condition.value not in folded
    if isinstance(condition, And):
        return all(_matches(sub, folded) for sub in condition.sub_conditions)
    if isinstance(condition, Or):
        return any(_matches(sub, folded) for sub in condition.sub_conditions)
    return True
