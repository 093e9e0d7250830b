from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True, slots=True)
class Note:
    """A stored note.

    Attributes:
        id: Database row id; None for notes not yet stored.
        text: Body text.
        cw: Optional content warning shown before the body.
        created_at: Creation time if known.
    """

    id: Optional[int]
    text: str
    cw: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def searchable_text(self) -> str:
        """Text the search matches against: content warning then body."""
        return (self.cw or "") + self.text
