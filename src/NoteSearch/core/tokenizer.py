"""Tokenizer for user-typed search strings.

Splits raw input into lowercased text words and control symbols.

Rules
- Whitespace separates words: ASCII tab, LF, VT, FF, CR and space, NBSP,
  the Unicode space separators (including the ideographic space U+3000),
  LS, PS and the BOM U+FEFF. The information separators U+001C-U+001F
  and NEL U+0085 are ordinary text.
- `(` `)` `+` `-` are control symbols unless quoted or escaped.
- `"..."` is a phrase: whitespace and symbols inside are literal text.
  An unterminated phrase runs to the end of input.
- `\\` takes the next character literally, inside or outside quotes.
- An unquoted word `or` (any case) is the OR operator.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Literal, Union

SPACE_CHARS = r"\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"

_RE_SPACE = re.compile(f"[{SPACE_CHARS}]")
_CONTROL_CHARS = frozenset("()+-")

ControlSymbol = Literal["(", ")", "+", "-", "or"]


@dataclass(frozen=True, slots=True)
class Control:
    """Operator or grouping symbol."""

    symbol: ControlSymbol


# Lowercased text, control symbol, or None once input is exhausted.
Token = Union[str, Control, None]

OR = Control("or")


class Tokenizer:
    """Stateful cursor producing one token per call."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def next_token(self) -> Token:
        """Read the next token.

        Returns:
            A lowercased word, a `Control`, or None when nothing is left.
        """
        in_quote = False
        in_escape = False
        token = ""
        text = self.text
        while self.pos < len(text):
            c = text[self.pos]
            if c == '"':
                if in_escape:
                    token += c
                elif in_quote:
                    self.pos += 1
                    # a closed phrase is always text, even when it reads "or"
                    return token
                elif token:
                    return _word(token)
                else:
                    in_quote = True
                in_escape = False
            elif c == "\\":
                if in_escape:
                    token += c
                    in_escape = False
                else:
                    in_escape = True
            elif c in _CONTROL_CHARS:
                if in_escape or in_quote:
                    token += c
                elif token:
                    # hand back the pending word; the symbol is read next call
                    return _word(token)
                else:
                    self.pos += 1
                    return Control(c)
                in_escape = False
            else:
                if in_escape or in_quote or not _RE_SPACE.match(c):
                    token += c.lower()
                elif token:
                    self.pos += 1
                    return _word(token)
                in_escape = False
            self.pos += 1

        if not token:
            return None
        if in_quote:
            return token
        return _word(token)

    def __iter__(self) -> Iterator[str | Control]:
        while True:
            token = self.next_token()
            if token is None:
                return
            yield token


def tokenize(text: str) -> list[str | Control]:
    """Return every token of `text` as a list."""
    return list(Tokenizer(text))


def _word(token: str) -> str | Control:
    return OR if token == "or" else token


def fold_case(text: str) -> str:
    """Lowercase `text` one character at a time, the way words are read.

    Unlike `str.lower()` on a whole string this never applies context rules
    such as the Greek final sigma, so stored text folds exactly like a query.
    """
    return "".join(c.lower() for c in text)
