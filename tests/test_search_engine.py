from __future__ import annotations

import pytest

from edit_engine.buffer import MemoryTextSource
from edit_engine.search import (
    EmptyQueryError,
    Match,
    MatchQuery,
    PatternError,
    SearchMode,
    compile_query,
    find_next,
    find_previous,
    fold_case,
)


def literal(pattern: str, *, case_sensitive: bool = False) -> MatchQuery:
    return MatchQuery(pattern, SearchMode.LITERAL, case_sensitive)


def test_find_next_returns_first_match_without_wrapping() -> None:
    source = MemoryTextSource.from_text("xx abc yy abc")

    hit = find_next(source, literal("abc"), 0)

    assert hit is not None
    assert hit.match == Match(3, 6)
    assert hit.wrapped is False


def test_find_next_from_offset_before_match() -> None:
    hit = find_next("...target", literal("target"), 2)

    assert hit is not None
    assert hit.match == Match(3, 9)
    assert not hit.wrapped


def test_find_next_wraps_to_beginning() -> None:
    hit = find_next("abc def", literal("abc"), 4)

    assert hit is not None
    assert hit.match == Match(0, 3)
    assert hit.wrapped is True


def test_find_next_reports_not_found() -> None:
    assert find_next("abc def", literal("xyz"), 0) is None
    assert find_next("", literal("xyz"), 0) is None


def test_case_insensitive_literal_search() -> None:
    hit = find_next("Hello world", literal("WORLD"), 0)

    assert hit is not None
    assert hit.match == Match(6, 11)


def test_case_sensitive_literal_search_skips_other_case() -> None:
    assert find_next("Hello world", literal("WORLD", case_sensitive=True), 0) is None


def test_case_folding_keeps_offsets_aligned() -> None:
    text = "İstanbul ist"

    assert len(fold_case(text)) == len(text)
    hit = find_next(text, literal("IST"), 1)
    assert hit is not None
    assert hit.match == Match(9, 12)


def test_whole_word_skips_embedded_occurrences() -> None:
    query = MatchQuery("cat", SearchMode.WHOLE_WORD)

    hit = find_next("concatenate cat", query, 0)

    assert hit is not None
    assert hit.match == Match(12, 15)


def test_regex_search_honours_start_offset() -> None:
    query = MatchQuery(r"\d+", SearchMode.REGEX)

    first = find_next("a1 b22 c333", query, 0)
    second = find_next("a1 b22 c333", query, 2)

    assert first is not None and first.match == Match(1, 2)
    assert second is not None and second.match == Match(4, 6)


def test_regex_case_insensitive_flag() -> None:
    query = MatchQuery("w[a-z]+", SearchMode.REGEX, case_sensitive=False)

    hit = find_next("Hello World", query, 0)

    assert hit is not None
    assert hit.match == Match(6, 11)


def test_invalid_regex_raises_pattern_error() -> None:
    with pytest.raises(PatternError) as info:
        find_next("text", MatchQuery("(", SearchMode.REGEX), 0)

    assert str(info.value).startswith("Invalid regular expression")


def test_empty_query_is_rejected() -> None:
    with pytest.raises(EmptyQueryError):
        find_next("text", literal(""), 0)


def test_zero_length_regex_match() -> None:
    hit = find_next("ab", MatchQuery("x*", SearchMode.REGEX), 1)

    assert hit is not None
    assert hit.match == Match(1, 1)


def test_find_previous_takes_closest_match_before_offset() -> None:
    query = literal("ab")

    hit = find_previous("ab ab ab", query, 4)

    assert hit is not None
    assert hit.match == Match(3, 5)
    assert hit.wrapped is False


def test_find_previous_includes_match_starting_at_offset() -> None:
    hit = find_previous("ab ab ab", literal("ab"), 0)

    assert hit is not None
    assert hit.match == Match(0, 2)


def test_find_previous_wraps_to_last_match() -> None:
    hit = find_previous("ab ab ab", literal("ab"), -1)

    assert hit is not None
    assert hit.match == Match(6, 8)
    assert hit.wrapped is True


def test_find_previous_considers_overlapping_candidates() -> None:
    literal_hit = find_previous("aaa", literal("aa"), 2)
    regex_hit = find_previous("aaa", MatchQuery("aa", SearchMode.REGEX), 2)

    assert literal_hit is not None and literal_hit.match == Match(1, 3)
    assert regex_hit is not None and regex_hit.match == Match(1, 3)


def test_find_previous_not_found() -> None:
    assert find_previous("abc", literal("z"), 3) is None


def test_compiled_query_matches_range() -> None:
    text = "Cat concatenate a22"

    assert compile_query(literal("cat")).matches_range(text, 0, 3)
    assert not compile_query(literal("cat", case_sensitive=True)).matches_range(
        text, 0, 3
    )
    whole = compile_query(MatchQuery("cat", SearchMode.WHOLE_WORD))
    assert not whole.matches_range(text, 7, 10)
    pattern = compile_query(MatchQuery(r"a\d+", SearchMode.REGEX))
    assert pattern.matches_range(text, 16, 19)
    assert not pattern.matches_range(text, 15, 19)
