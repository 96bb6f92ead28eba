"""Search and replace over ``TextSource`` buffers."""

from .engine import find_next, find_previous, resume_offset, select_hit
from .query import (
    CompiledQuery,
    EmptyQueryError,
    Match,
    MatchQuery,
    PatternError,
    QueryError,
    SearchHit,
    SearchMode,
    compile_query,
    fold_case,
)
from .replace import ReplaceOutcome, rebuild_with_replacements, replace_all, replace_one
from .session import FindSession, SearchOutcome, SearchState

__all__ = [
    "CompiledQuery",
    "EmptyQueryError",
    "FindSession",
    "Match",
    "MatchQuery",
    "PatternError",
    "QueryError",
    "ReplaceOutcome",
    "SearchHit",
    "SearchMode",
    "SearchOutcome",
    "SearchState",
    "compile_query",
    "find_next",
    "find_previous",
    "fold_case",
    "rebuild_with_replacements",
    "replace_all",
    "replace_one",
    "resume_offset",
    "select_hit",
]
