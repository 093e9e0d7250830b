"""LIKE pattern escaping."""

from __future__ import annotations

import re

LIKE_ESCAPE_CHAR = "\\"

_RE_LIKE_SPECIAL = re.compile(r"[\\%_]")


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the pattern matches `value` literally.

    The result must be used with ``ESCAPE '\\'``.

    Args:
        value: Literal substring.

    Returns:
        `value` with ``\\``, ``%`` and ``_`` prefixed by a backslash.
    """
    return _RE_LIKE_SPECIAL.sub(lambda m: LIKE_ESCAPE_CHAR + m.group(0), value)
