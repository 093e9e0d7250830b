"""Recursive-descent parser for search strings.

Malformed input never fails: an unmatched `)` at the top level behaves as if
an opening paren had been typed before everything read so far, and groups
left open at end of input are closed implicitly.
"""

from __future__ import annotations

from NoteSearch.core.condition import EMPTY, Contains, JoinMode, SearchCondition, join_conditions
from NoteSearch.core.tokenizer import Control, Tokenizer


def parse_search_string(text: str) -> SearchCondition:
    """Parse a search string into a canonical condition tree.

    Args:
        text: Raw user input.

    Returns:
        Canonical `SearchCondition`; `Empty` when there is nothing to match.
    """
    return _parse_level(Tokenizer(text), is_root=True)


def _parse_level(tokenizer: Tokenizer, is_root: bool) -> SearchCondition:
    condition: SearchCondition = EMPTY
    mode: JoinMode = "and"
    for token in tokenizer:
        if isinstance(token, Control):
            symbol = token.symbol
            if symbol == "(":
                nested = _parse_level(tokenizer, is_root=False)
                condition = join_conditions(condition, nested, mode)
                mode = "and"
            elif symbol == ")":
                if not is_root:
                    return condition
                # stray close paren: only clears the pending operator
                mode = "and"
            elif symbol == "or":
                mode = "or"
            elif symbol == "+":
                mode = "and"
            elif symbol == "-":
                mode = "not"
        else:
            # "" comes from an empty phrase and matches nothing in particular
            if token:
                condition = join_conditions(condition, Contains(token), mode)
            mode = "and"
    return condition
