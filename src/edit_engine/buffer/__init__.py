"""Text sources: the boundary protocol plus an in-memory implementation."""

from .memory import MemoryTextSource, SourceView, Transaction
from .source import Range, TextRangeError, TextSource, selected_text
from .state import CaretState
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_offset, ensure_range

__all__ = [
    "CaretState",
    "MemoryTextSource",
    "Range",
    "SourceView",
    "TextRangeError",
    "TextSource",
    "Transaction",
    "UndoEntry",
    "UndoTimeline",
    "ensure_offset",
    "ensure_range",
    "selected_text",
]
