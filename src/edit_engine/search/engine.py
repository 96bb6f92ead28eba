"""Directional search with wraparound over a text snapshot."""

from __future__ import annotations

from typing import Optional, Union

from edit_engine.buffer import TextSource

from .query import CompiledQuery, MatchQuery, SearchHit, compile_query

QueryLike = Union[MatchQuery, CompiledQuery]
SourceLike = Union[TextSource, str]


def _read_text(source: SourceLike) -> str:
    return source if isinstance(source, str) else source.text()


def find_next(
    source: SourceLike, query: QueryLike, from_offset: int
) -> Optional[SearchHit]:
    """Return the first match at or after ``from_offset``, wrapping to 0.

    ``None`` means the query matches nowhere in the text.
    """

    compiled = compile_query(query)
    text = _read_text(source)
    haystack = compiled.prepare(text)
    start = max(0, from_offset)

    match = compiled.find_from(haystack, start)
    if match is not None:
        return SearchHit(match, wrapped=False)
    match = compiled.find_from(haystack, 0)
    if match is not None:
        return SearchHit(match, wrapped=True)
    return None


def find_previous(
    source: SourceLike, query: QueryLike, from_offset: int
) -> Optional[SearchHit]:
    """Return the last match starting at or before ``from_offset``.

    When nothing starts at or before ``from_offset`` the scan wraps and takes
    the last match in the whole text, i.e. the one closest to the end. A
    negative offset always wraps.
    """

    compiled = compile_query(query)
    text = _read_text(source)
    haystack = compiled.prepare(text)

    match = compiled.find_last(haystack, min(from_offset, len(text)))
    if match is not None:
        return SearchHit(match, wrapped=False)
    match = compiled.find_last(haystack, len(text))
    if match is not None:
        return SearchHit(match, wrapped=True)
    return None


def resume_offset(
    source: TextSource, query: QueryLike, *, forward: bool = True
) -> int:
    """Where the next search starts given the current selection.

    A selection that is itself an occurrence of the query is stepped over:
    forward search resumes at its end, backward search just before its start.
    Otherwise both directions start from the caret.
    """

    compiled = compile_query(query)
    start, end = source.selection()
    if start != end and compiled.matches_range(source.text(), start, end):
        return end if forward else start - 1
    return source.caret_offset()


def select_hit(source: TextSource, hit: SearchHit) -> None:
    source.set_selection(hit.match.start, hit.match.end)
    source.scroll_into_view(hit.match.start)


__all__ = [
    "QueryLike",
    "SourceLike",
    "find_next",
    "find_previous",
    "resume_offset",
    "select_hit",
]
