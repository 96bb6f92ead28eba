"""Query values, match values, and query compilation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Optional

import regex


class SearchMode(str, Enum):
    """How ``MatchQuery.pattern`` is interpreted."""

    LITERAL = "literal"
    WHOLE_WORD = "whole_word"
    REGEX = "regex"


@dataclass(frozen=True, slots=True)
class MatchQuery:
    pattern: str
    mode: SearchMode = SearchMode.LITERAL
    case_sensitive: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", SearchMode(self.mode))


@dataclass(frozen=True, slots=True)
class Match:
    """Half-open ``[start, end)`` range valid for one text snapshot."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid match range ({self.start}, {self.end})")

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def as_range(self) -> tuple[int, int]:
        return (self.start, self.end)


@dataclass(frozen=True, slots=True)
class SearchHit:
    """A located match plus whether the scan wrapped around the buffer end."""

    match: Match
    wrapped: bool = False


class QueryError(ValueError):
    """Base class for problems with user-supplied search input."""


class EmptyQueryError(QueryError):
    def __init__(self) -> None:
        super().__init__("Please enter text to find")


class PatternError(QueryError):
    """Raised when a ``REGEX`` query does not compile."""

    def __init__(self, pattern: str, detail: str) -> None:
        super().__init__(f"Invalid regular expression: {detail}")
        self.pattern = pattern
        self.detail = detail


def _fold_char(char: str) -> str:
    lowered = char.lower()
    return lowered if len(lowered) == 1 else char


def fold_case(text: str) -> str:
    """Lower-case ``text`` without changing its length or offsets."""

    if text.isascii():
        return text.lower()
    return "".join(map(_fold_char, text))


class CompiledQuery:
    """A ``MatchQuery`` ready to scan text.

    Scans run over a *haystack* from ``prepare``: the folded text for
    case-insensitive literals, the text itself otherwise. Offsets in either
    are identical to offsets in the original text.
    """

    def __init__(self, query: MatchQuery, pattern: Optional["regex.Pattern[str]"]):
        self.query = query
        self.pattern = pattern
        self._fold = pattern is None and not query.case_sensitive
        self.needle = fold_case(query.pattern) if self._fold else query.pattern

    @property
    def mode(self) -> SearchMode:
        return self.query.mode

    def prepare(self, text: str) -> str:
        return fold_case(text) if self._fold else text

    def find_from(self, haystack: str, pos: int) -> Optional[Match]:
        """First match starting at or after ``pos``."""

        if pos > len(haystack):
            return None
        if self.pattern is None:
            index = haystack.find(self.needle, pos)
            if index < 0:
                return None
            return Match(index, index + len(self.needle))
        found = self.pattern.search(haystack, pos)
        if found is None:
            return None
        return Match(found.start(), found.end())

    def find_last(self, haystack: str, limit: int) -> Optional[Match]:
        """Last match starting at or before ``limit``, overlaps included."""

        if limit < 0:
            return None
        if self.pattern is None:
            index = haystack.rfind(self.needle, 0, limit + len(self.needle))
            if index < 0:
                return None
            return Match(index, index + len(self.needle))
        last: Optional[Match] = None
        for found in self.pattern.finditer(haystack, overlapped=True):
            if found.start() > limit:
                break
            last = Match(found.start(), found.end())
        return last

    def matches_range(self, text: str, start: int, end: int) -> bool:
        """Whether ``text[start:end]`` is itself an occurrence of the query."""

        if not 0 <= start <= end <= len(text):
            return False
        if self.pattern is None:
            return self.prepare(text[start:end]) == self.needle
        # matched in place so lookbehind and \b see the surrounding text
        found = self.pattern.match(text, start)
        return found is not None and found.end() == end


def _build_pattern(query: MatchQuery) -> Optional["regex.Pattern[str]"]:
    flags = 0 if query.case_sensitive else regex.IGNORECASE
    if query.mode is SearchMode.LITERAL:
        return None
    if query.mode is SearchMode.WHOLE_WORD:
        return regex.compile(r"\b" + regex.escape(query.pattern) + r"\b", flags)
    try:
        return regex.compile(query.pattern, flags)
    except regex.error as exc:
        raise PatternError(query.pattern, str(exc)) from exc


@lru_cache(maxsize=64)
def _compile_cached(query: MatchQuery) -> CompiledQuery:
    return CompiledQuery(query, _build_pattern(query))


def compile_query(query: MatchQuery | CompiledQuery) -> CompiledQuery:
    """Compile ``query``; raises ``EmptyQueryError`` or ``PatternError``."""

    if isinstance(query, CompiledQuery):
        return query
    if not query.pattern:
        raise EmptyQueryError()
    return _compile_cached(query)


__all__ = [
    "CompiledQuery",
    "EmptyQueryError",
    "Match",
    "MatchQuery",
    "PatternError",
    "QueryError",
    "SearchHit",
    "SearchMode",
    "compile_query",
    "fold_case",
]
