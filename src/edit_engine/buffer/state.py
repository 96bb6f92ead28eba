"""Caret and selection state for in-memory sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .source import Range


@dataclass(slots=True)
class CaretState:
    """Mutable caret, selection anchor and last scroll target."""

    caret: int = 0
    anchor: Optional[int] = None
    scrolled_to: Optional[int] = None

    def set_caret(self, offset: int) -> None:
        self.caret = offset
        self.anchor = None

    def set_selection(self, start: int, end: int) -> None:
        self.anchor = start
        self.caret = end

    @property
    def selection(self) -> Range:
        if self.anchor is None:
            return (self.caret, self.caret)
        return (min(self.anchor, self.caret), max(self.anchor, self.caret))
