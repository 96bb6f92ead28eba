from __future__ import annotations

import pytest

from edit_engine.buffer import MemoryTextSource
from edit_engine.search import (
    EmptyQueryError,
    Match,
    MatchQuery,
    PatternError,
    SearchMode,
    find_next,
    rebuild_with_replacements,
    replace_all,
    replace_one,
)


def make_source(text: str, *, selection: tuple[int, int] | None = None) -> MemoryTextSource:
    return MemoryTextSource.from_text(text, selection=selection)


def count_by_find_next(text: str, query: MatchQuery) -> int:
    count = 0
    position = 0
    while position <= len(text):
        hit = find_next(text, query, position)
        if hit is None or hit.wrapped:
            break
        count += 1
        match = hit.match
        position = match.end + 1 if match.is_empty else match.end
    return count


def test_replace_all_single_characters() -> None:
    source = make_source("aaa")

    count = replace_all(source, MatchQuery("a"), "b")

    assert count == 3
    assert source.text() == "bbb"


def test_replace_all_second_pass_finds_nothing() -> None:
    source = make_source("one two one")
    query = MatchQuery("one")

    assert replace_all(source, query, "three") == 2
    assert replace_all(source, query, "three") == 0
    assert source.text() == "three two three"


def test_replace_all_count_matches_repeated_find_next() -> None:
    text = "one two ONE two one"
    query = MatchQuery("one")

    _, count = rebuild_with_replacements(text, query, "x")

    assert count == count_by_find_next(text, query) == 3


def test_replace_all_offsets_follow_original_text() -> None:
    source = make_source("a a")

    count = replace_all(source, MatchQuery("a"), "aa")

    assert count == 2
    assert source.text() == "aa aa"


def test_replace_all_zero_length_matches_terminate() -> None:
    source = make_source("ab")

    count = replace_all(source, MatchQuery("x*", SearchMode.REGEX), "-")

    assert count == 3
    assert source.text() == "-a-b-"


def test_replace_all_empty_match_after_non_empty_match() -> None:
    rebuilt, count = rebuild_with_replacements(
        "baaa", MatchQuery("a*", SearchMode.REGEX), "-"
    )

    assert (rebuilt, count) == ("-b--", 3)


def test_replace_all_is_a_single_undoable_mutation() -> None:
    source = make_source("cat cat cat")

    replace_all(source, MatchQuery("cat"), "dog")

    assert len(source.undo_timeline) == 1
    assert source.undo() is True
    assert source.text() == "cat cat cat"


def test_replace_all_without_matches_leaves_buffer_untouched() -> None:
    source = make_source("cat")

    assert replace_all(source, MatchQuery("dog"), "x") == 0
    assert source.version == 0
    assert len(source.undo_timeline) == 0


def test_replace_all_rejects_empty_query() -> None:
    source = make_source("cat")

    with pytest.raises(EmptyQueryError):
        replace_all(source, MatchQuery(""), "x")
    assert source.text() == "cat"


def test_replace_all_invalid_pattern_keeps_selection() -> None:
    source = make_source("cat", selection=(0, 2))

    with pytest.raises(PatternError):
        replace_all(source, MatchQuery("[", SearchMode.REGEX), "x")
    assert source.text() == "cat"
    assert source.selection() == (0, 2)


def test_replace_one_replaces_selected_match_and_selects_next() -> None:
    source = make_source("cat dog cat", selection=(0, 3))

    outcome = replace_one(source, MatchQuery("cat"), "cow")

    assert outcome.replaced is True
    assert source.text() == "cow dog cat"
    assert outcome.hit is not None
    assert outcome.hit.match == Match(8, 11)
    assert source.selection() == (8, 11)


def test_replace_one_without_matching_selection_only_finds() -> None:
    source = make_source("dog cat")

    outcome = replace_one(source, MatchQuery("cat"), "cow")

    assert outcome.replaced is False
    assert source.text() == "dog cat"
    assert source.selection() == (4, 7)


def test_replace_one_steps_through_every_match() -> None:
    source = make_source("cat cat")
    query = MatchQuery("cat")

    first = replace_one(source, query, "dog")
    second = replace_one(source, query, "dog")
    third = replace_one(source, query, "dog")

    assert first.replaced is False
    assert second.replaced is True
    assert third.replaced is True
    assert third.hit is None
    assert source.text() == "dog dog"
    assert source.caret_offset() == 7


def test_replace_one_uses_case_rules_for_selection() -> None:
    source = make_source("CAT", selection=(0, 3))

    outcome = replace_one(source, MatchQuery("cat", case_sensitive=False), "dog")

    assert outcome.replaced is True
    assert source.text() == "dog"


def test_replace_one_regex_selection_must_match_fully() -> None:
    source = make_source("a1 a22", selection=(3, 6))

    outcome = replace_one(source, MatchQuery(r"a\d+", SearchMode.REGEX), "z")

    assert outcome.replaced is True
    assert source.text() == "a1 z"
    assert outcome.hit is not None
    assert outcome.hit.wrapped is True
    assert outcome.hit.match == Match(0, 2)


def test_replace_one_regex_selection_sees_surrounding_text() -> None:
    source = make_source("xcat cat", selection=(1, 4))

    outcome = replace_one(source, MatchQuery(r"\bcat", SearchMode.REGEX), "dog")

    assert outcome.replaced is False
    assert source.text() == "xcat cat"
    assert outcome.hit is not None and outcome.hit.match == Match(5, 8)
    assert source.selection() == (5, 8)
