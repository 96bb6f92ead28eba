"""Boundary protocol between the engine and whatever widget holds the text."""

from __future__ import annotations

from typing import Protocol, Tuple, runtime_checkable

Range = Tuple[int, int]  # (start, end) character offsets, end exclusive


@runtime_checkable
class TextSource(Protocol):
    """Capability set the search and highlight services need from a buffer.

    Offsets are character indices into ``text()``. Implementations exist per
    host widget; the engine never branches on the concrete type.
    """

    def text(self) -> str:
        ...

    def length(self) -> int:
        ...

    def caret_offset(self) -> int:
        ...

    def selection(self) -> Range:
        """Return the ordered ``(start, end)`` selection; empty when equal."""
        ...

    def replace_range(self, start: int, end: int, new_text: str) -> None:
        ...

    def set_caret(self, offset: int) -> None:
        ...

    def set_selection(self, start: int, end: int) -> None:
        ...

    def scroll_into_view(self, offset: int) -> None:
        ...


class TextRangeError(RuntimeError):
    """Raised when a caller addresses offsets outside the current text."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset


def selected_text(source: TextSource) -> str:
    start, end = source.selection()
    return source.text()[start:end]


__all__ = ["Range", "TextRangeError", "TextSource", "selected_text"]
