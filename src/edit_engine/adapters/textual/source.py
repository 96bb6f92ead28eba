"""``TextSource`` backed by a Textual ``TextArea`` widget."""

from __future__ import annotations

from textual.widgets import TextArea
from textual.widgets.text_area import Selection

from edit_engine.buffer import Range, ensure_offset, ensure_range

Location = tuple[int, int]  # (row, column) as used by TextArea


class TextAreaSource:
    """Translates character offsets to and from ``TextArea`` locations."""

    def __init__(self, text_area: TextArea) -> None:
        self.text_area = text_area

    def text(self) -> str:
        return self.text_area.text

    def length(self) -> int:
        return len(self.text_area.text)

    def caret_offset(self) -> int:
        return self._offset(self.text_area.cursor_location)

    def selection(self) -> Range:
        selection = self.text_area.selection
        start = self._offset(selection.start)
        end = self._offset(selection.end)
        return (min(start, end), max(start, end))

    def replace_range(self, start: int, end: int, new_text: str) -> None:
        start, end = ensure_range(self.length(), start, end)
        self.text_area.replace(new_text, self._location(start), self._location(end))

    def set_caret(self, offset: int) -> None:
        self.text_area.move_cursor(self._location(offset))

    def set_selection(self, start: int, end: int) -> None:
        self.text_area.selection = Selection(self._location(start), self._location(end))

    def scroll_into_view(self, offset: int) -> None:
        ensure_offset(self.length(), offset)
        self.text_area.scroll_cursor_visible(center=True)

    def _offset(self, location: Location) -> int:
        return self.text_area.document.get_index_from_location(location)

    def _location(self, offset: int) -> Location:
        ensure_offset(self.length(), offset)
        return self.text_area.document.get_location_from_index(offset)


__all__ = ["TextAreaSource"]
