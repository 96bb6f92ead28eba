from __future__ import annotations

import pytest

from edit_engine.buffer import (
    MemoryTextSource,
    TextRangeError,
    TextSource,
    UndoEntry,
    UndoTimeline,
    selected_text,
)
from edit_engine.search import FindSession


def test_memory_source_satisfies_protocol() -> None:
    assert isinstance(MemoryTextSource("abc"), TextSource)


def test_selection_is_reported_in_order() -> None:
    source = MemoryTextSource.from_text("hello world", selection=(9, 6))

    assert source.selection() == (6, 9)
    assert source.caret_offset() == 6
    assert selected_text(source) == "wor"


def test_set_caret_collapses_selection() -> None:
    source = MemoryTextSource.from_text("hello", selection=(1, 4))

    source.set_caret(2)

    assert source.selection() == (2, 2)


def test_replace_range_places_caret_after_insert() -> None:
    source = MemoryTextSource("hello world")

    source.replace_range(6, 11, "there")

    assert source.text() == "hello there"
    assert source.caret_offset() == 11
    assert source.version == 1


def test_offsets_outside_text_are_rejected() -> None:
    source = MemoryTextSource("abc")

    with pytest.raises(TextRangeError) as excinfo:
        source.set_selection(0, 4)
    assert excinfo.value.offset == 4

    with pytest.raises(TextRangeError):
        source.replace_range(-1, 2, "x")
    assert source.text() == "abc"


def test_undo_and_redo_restore_text_and_caret() -> None:
    source = MemoryTextSource.from_text("one two", caret=3)
    source.replace_range(0, 3, "1")

    assert source.undo() is True
    assert source.text() == "one two"
    assert source.caret_offset() == 3
    assert source.undo() is False

    assert source.redo() is True
    assert source.text() == "1 two"
    assert source.redo() is False


def test_snapshot_reflects_current_state() -> None:
    source = MemoryTextSource.from_text("abc", selection=(0, 2))

    view = source.snapshot()

    assert view.text == "abc"
    assert view.selection == (0, 2)
    assert view.version == 0


def test_undo_timeline_drops_redo_tail_and_respects_limit() -> None:
    timeline = UndoTimeline(limit=2)
    for label in ("a", "b", "c"):
        timeline.push(UndoEntry(label, "", "", 0, 0))

    assert len(timeline) == 2
    assert timeline.undo().label == "c"
    timeline.push(UndoEntry("d", "", "", 0, 0))
    assert timeline.can_redo() is False
    assert [timeline.undo().label, timeline.undo().label] == ["d", "b"]
    assert timeline.undo() is None


def test_found_match_is_scrolled_into_view() -> None:
    source = MemoryTextSource("one\ntwo\nthree")
    session = FindSession(source)
    session.set_query("three")

    session.find_next()

    assert source.selection() == (8, 13)
    assert source.state.scrolled_to == 8
