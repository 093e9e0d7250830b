"""Console text renderers.

Renders condition trees back into search syntax and notes into numbered
text blocks.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Iterable

from NoteSearch.core.condition import And, Contains, Empty, NotContains, Or, SearchCondition
from NoteSearch.core.models import Note
from NoteSearch.core.tokenizer import SPACE_CHARS

_RE_NEEDS_QUOTE = re.compile(rf'[{SPACE_CHARS}()+\-"\\]')
_RE_QUOTE_ESCAPE = re.compile(r'["\\]')

EMPTY_LABEL = "<empty>"


def _quote(value: str) -> str:
    """Quote a term when the tokenizer would otherwise split or reinterpret it."""
    if value and value != "or" and not _RE_NEEDS_QUOTE.search(value):
        return value
    return '"' + _RE_QUOTE_ESCAPE.sub(lambda m: "\\" + m.group(0), value) + '"'


def render_condition(condition: SearchCondition) -> str:
    """Render a condition tree in search syntax.

    Terms are joined by spaces (AND) or ` OR `; nested groups are bracketed.
    Feeding the result back to the parser reproduces simple canonical trees.

    Args:
        condition: Condition tree.

    Returns:
        Query-like text, or `<empty>` for `Empty`.
    """
    if isinstance(condition, Empty):
        return EMPTY_LABEL
    return _render(condition)


def _render(condition: SearchCondition) -> str:
    if isinstance(condition, Contains):
        return _quote(condition.value)
    if isinstance(condition, NotContains):
        return "-" + _quote(condition.value)
    if isinstance(condition, And):
        return " ".join(_render_nested(sub) for sub in condition.sub_conditions)
    if isinstance(condition, Or):
        return " OR ".join(_render_or_member(sub) for sub in condition.sub_conditions)
    return ""


def _render_nested(condition: SearchCondition) -> str:
    if isinstance(condition, (And, Or)):
        return f"({_render(condition)})"
    return _render(condition)


def _render_or_member(condition: SearchCondition) -> str:
    # "-" after OR would replace the OR, so a negated alternative needs its own group
    if isinstance(condition, NotContains):
        return f"({_render(condition)})"
    return _render_nested(condition)


def _fmt_dt(dt: datetime | None) -> str:
    if not dt:
        return "-"
    return dt.strftime("%Y-%m-%d %H:%M")


def render_notes(notes: Iterable[Note]) -> str:
    """Render notes into a human-readable text block.

    Args:
        notes: Iterable of notes.

    Returns:
        A formatted string ready to be printed; empty when there are no notes.
    """
    lines: list[str] = []
    for idx, note in enumerate(notes, start=1):
        lines.append(f"{idx}. [#{note.id}] {_fmt_dt(note.created_at)}")
        if note.cw:
            lines.append(f"   CW: {note.cw}")
        for text_line in note.text.splitlines() or [""]:
            lines.append(f"   {text_line}")
        lines.append("")
    if not lines:
        return ""
    return "\n".join(lines).rstrip() + "\n"


def render_where(where: str, params: dict[str, object]) -> str:
    """Render a compiled WHERE fragment with its parameters, one per line."""
    if not where:
        return "(no filter)\n"
    lines = [where]
    for name, value in params.items():
        lines.append(f"  :{name} = {value!r}")
    return "\n".join(lines) + "\n"
