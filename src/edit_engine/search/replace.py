"""Replace-and-advance and whole-buffer replace built on the search engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from edit_engine.buffer import TextSource

from .engine import QueryLike, find_next, resume_offset, select_hit
from .query import CompiledQuery, SearchHit, compile_query


@dataclass(frozen=True, slots=True)
class ReplaceOutcome:
    """What ``replace_one`` did: the optional replacement, then the next hit."""

    replaced: bool
    hit: Optional[SearchHit] = None


def replace_one(
    source: TextSource, query: QueryLike, replacement: str
) -> ReplaceOutcome:
    """Replace the selected occurrence and select the following one.

    When the selection is not an occurrence of the query nothing is replaced
    and the call behaves like find-next, so one "replace" action also serves
    as "find if nothing is selected".
    """

    compiled = compile_query(query)
    start, end = source.selection()
    replaced = start != end and compiled.matches_range(source.text(), start, end)
    if replaced:
        source.replace_range(start, end, replacement)
        source.set_caret(start + len(replacement))
        origin = source.caret_offset()
    else:
        origin = resume_offset(source, compiled, forward=True)

    hit = find_next(source, compiled, origin)
    if hit is not None:
        select_hit(source, hit)
    return ReplaceOutcome(replaced=replaced, hit=hit)


def rebuild_with_replacements(
    text: str, query: QueryLike, replacement: str
) -> Tuple[str, int]:
    """Return ``text`` with every non-overlapping match replaced, plus the count.

    Matches are located in the original ``text`` only; each scan resumes at
    the end of the previous match, one character further for empty matches.
    """

    compiled: CompiledQuery = compile_query(query)
    haystack = compiled.prepare(text)
    pieces: List[str] = []
    copied = 0
    scan = 0
    count = 0
    while scan <= len(text):
        match = compiled.find_from(haystack, scan)
        if match is None:
            break
        pieces.append(text[copied : match.start])
        pieces.append(replacement)
        copied = match.end
        count += 1
        scan = match.end + 1 if match.is_empty else match.end
    pieces.append(text[copied:])
    return "".join(pieces), count


def replace_all(source: TextSource, query: QueryLike, replacement: str) -> int:
    """Replace every occurrence in one mutation and return how many there were."""

    text = source.text()
    rebuilt, count = rebuild_with_replacements(text, query, replacement)
    if count:
        source.replace_range(0, len(text), rebuilt)
    return count


__all__ = [
    "ReplaceOutcome",
    "rebuild_with_replacements",
    "replace_all",
    "replace_one",
]
