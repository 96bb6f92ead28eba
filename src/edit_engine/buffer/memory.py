"""In-memory ``TextSource`` with undo history and telemetry spans."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Optional

from edit_engine.runtime import telemetry

from .source import Range
from .state import CaretState
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_offset, ensure_range


@dataclass(frozen=True, slots=True)
class SourceView:
    version: int
    text: str
    caret: int
    selection: Range


class MemoryTextSource:
    """Plain-string buffer used by tests, scripts, and headless hosts."""

    def __init__(
        self,
        text: str = "",
        *,
        name: str = "default",
        state: Optional[CaretState] = None,
        undo: Optional[UndoTimeline] = None,
    ) -> None:
        self.name = name
        self._text = text
        self.version = 0
        self.state = state or CaretState()
        self.undo_timeline = undo or UndoTimeline()

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        caret: int = 0,
        selection: Optional[Range] = None,
        name: str = "default",
    ) -> "MemoryTextSource":
        source = cls(text, name=name)
        if selection is not None:
            source.set_selection(*selection)
        else:
            source.set_caret(caret)
        return source

    def text(self) -> str:
        return self._text

    def length(self) -> int:
        return len(self._text)

    def caret_offset(self) -> int:
        return self.state.caret

    def selection(self) -> Range:
        return self.state.selection

    def set_caret(self, offset: int) -> None:
        self.state.set_caret(ensure_offset(len(self._text), offset))

    def set_selection(self, start: int, end: int) -> None:
        length = len(self._text)
        self.state.set_selection(ensure_offset(length, start), ensure_offset(length, end))

    def scroll_into_view(self, offset: int) -> None:
        self.state.scrolled_to = ensure_offset(len(self._text), offset)

    def replace_range(self, start: int, end: int, new_text: str) -> None:
        start, end = ensure_range(len(self._text), start, end)
        with Transaction(self, "replace_range") as tx:
            before = self._text
            after = before[:start] + new_text + before[end:]
            self._apply(after, start + len(new_text))
            tx.commit(before, after)

    def snapshot(self) -> SourceView:
        return SourceView(
            version=self.version,
            text=self._text,
            caret=self.state.caret,
            selection=self.state.selection,
        )

    def undo(self) -> bool:
        entry = self.undo_timeline.undo()
        if entry is None:
            return False
        self._apply(entry.before_text, entry.caret_before)
        return True

    def redo(self) -> bool:
        entry = self.undo_timeline.redo()
        if entry is None:
            return False
        self._apply(entry.after_text, entry.caret_after)
        return True

    def _apply(self, text: str, caret: int) -> None:
        self._text = text
        self.version += 1
        self.state.set_caret(min(caret, len(text)))


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps one mutation in a telemetry span and records its undo entry."""

    def __init__(self, source: MemoryTextSource, label: str) -> None:
        self.source = source
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None
        self._caret_before = 0

    def __enter__(self) -> "Transaction":
        self._caret_before = self.source.state.caret
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.source.name},
        )
        self._span_cm.__enter__()
        return self

    def commit(self, before_text: str, after_text: str) -> None:
        self.source.undo_timeline.push(
            UndoEntry(
                label=self.label,
                before_text=before_text,
                after_text=after_text,
                caret_before=self._caret_before,
                caret_after=self.source.state.caret,
            )
        )

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
