"""Find/replace session: owns the query state and turns results into statuses."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Literal, Optional

from edit_engine.buffer import TextSource, selected_text
from edit_engine.runtime import telemetry

from .engine import find_next, find_previous, resume_offset, select_hit
from .query import (
    CompiledQuery,
    EmptyQueryError,
    Match,
    MatchQuery,
    PatternError,
    SearchHit,
    SearchMode,
    compile_query,
)
from .replace import replace_all, replace_one

Status = Literal["found", "found_wrapped", "not_found", "invalid_pattern", "empty_query"]

FOUND_MESSAGE = "Found"
WRAPPED_FORWARD_MESSAGE = "Found (wrapped to beginning)"
WRAPPED_BACKWARD_MESSAGE = "Found (wrapped to end)"
NOT_FOUND_MESSAGE = "No matches found"


@dataclass(frozen=True, slots=True)
class SearchOutcome:
    """Result of one session command, phrased for a status line."""

    status: Status
    message: str
    hit: Optional[SearchHit] = None
    count: int = 0
    replaced: bool = False

    @property
    def is_error(self) -> bool:
        return self.status in {"not_found", "invalid_pattern", "empty_query"}

    @property
    def match(self) -> Optional[Match]:
        return self.hit.match if self.hit else None


@dataclass(slots=True)
class SearchState:
    last_query: Optional[MatchQuery] = None
    anchor: int = 0
    last_match: Optional[Match] = None


class FindSession:
    """Find/replace commands against one ``TextSource``.

    The session never raises for bad user input: empty queries and invalid
    patterns come back as ``SearchOutcome`` values and leave the buffer and
    selection untouched.
    """

    def __init__(
        self,
        source: TextSource,
        *,
        logger_name: str | None = "edit_engine.search",
    ) -> None:
        self.source = source
        self.query = MatchQuery("")
        self.state = SearchState()
        self._logger_name = logger_name

    def set_query(
        self,
        pattern: str,
        mode: SearchMode | str = SearchMode.LITERAL,
        case_sensitive: bool = False,
    ) -> MatchQuery:
        query = MatchQuery(pattern, SearchMode(mode), case_sensitive)
        if query.pattern != self.query.pattern:
            self.state = SearchState()
        self.query = query
        return query

    def set_options(
        self,
        *,
        mode: SearchMode | str | None = None,
        case_sensitive: bool | None = None,
    ) -> MatchQuery:
        changes: dict[str, object] = {}
        if mode is not None:
            changes["mode"] = SearchMode(mode)
        if case_sensitive is not None:
            changes["case_sensitive"] = case_sensitive
        self.query = replace(self.query, **changes)
        return self.query

    def seed_from_selection(self) -> bool:
        """Adopt a non-empty single-line selection as the search pattern."""

        text = selected_text(self.source)
        if not text or "\n" in text:
            return False
        self.set_query(text, self.query.mode, self.query.case_sensitive)
        return True

    def find_next(self) -> SearchOutcome:
        return self._run("find_next", self._find_next)

    def find_previous(self) -> SearchOutcome:
        return self._run("find_previous", self._find_previous)

    def replace_one(self, replacement: str) -> SearchOutcome:
        return self._run("replace_one", lambda c: self._replace_one(c, replacement))

    def replace_all(self, replacement: str) -> SearchOutcome:
        return self._run("replace_all", lambda c: self._replace_all(c, replacement))

    def _run(
        self, operation: str, body: Callable[[CompiledQuery], SearchOutcome]
    ) -> SearchOutcome:
        with telemetry.span(
            f"search::{operation}",
            logger_name=self._logger_name,
            component="search",
            metadata={"mode": self.query.mode.value},
        ) as handle:
            try:
                compiled = compile_query(self.query)
            except EmptyQueryError as exc:
                outcome = SearchOutcome(status="empty_query", message=str(exc))
            except PatternError as exc:
                outcome = SearchOutcome(status="invalid_pattern", message=str(exc))
            else:
                self.state.last_query = self.query
                outcome = body(compiled)
            handle.add_metadata("status", outcome.status)

        telemetry.record_event(
            "search.outcome",
            level="warning" if outcome.is_error else "debug",
            data={
                "operation": operation,
                "status": outcome.status,
                "count": outcome.count,
            },
            logger_name=self._logger_name,
        )
        return outcome

    def _find_next(self, compiled: CompiledQuery) -> SearchOutcome:
        origin = resume_offset(self.source, compiled, forward=True)
        hit = find_next(self.source, compiled, origin)
        if hit is not None and self._repeats_empty_match(hit, origin):
            hit = find_next(self.source, compiled, origin + 1)
        return self._select(hit, origin, forward=True)

    def _find_previous(self, compiled: CompiledQuery) -> SearchOutcome:
        origin = resume_offset(self.source, compiled, forward=False)
        if self._repeats_empty_match_at(origin):
            origin -= 1
        hit = find_previous(self.source, compiled, origin)
        return self._select(hit, origin, forward=False)

    def _replace_one(self, compiled: CompiledQuery, replacement: str) -> SearchOutcome:
        result = replace_one(self.source, compiled, replacement)
        outcome = self._select(
            result.hit, self.source.caret_offset(), forward=True, apply=False
        )
        if result.replaced:
            suffix = "" if result.hit else f"; {NOT_FOUND_MESSAGE.lower()}"
            outcome = replace(
                outcome,
                message=f"Replaced 1 occurrence{suffix}",
                replaced=True,
                count=1,
            )
        return outcome

    def _replace_all(self, compiled: CompiledQuery, replacement: str) -> SearchOutcome:
        count = replace_all(self.source, compiled, replacement)
        self.state.last_match = None
        if not count:
            return SearchOutcome(status="not_found", message=NOT_FOUND_MESSAGE)
        return SearchOutcome(
            status="found",
            message=f"Replaced {count} occurrence(s)",
            count=count,
            replaced=True,
        )

    def _select(
        self,
        hit: Optional[SearchHit],
        origin: int,
        *,
        forward: bool,
        apply: bool = True,
    ) -> SearchOutcome:
        self.state.anchor = origin
        if hit is None:
            self.state.last_match = None
            return SearchOutcome(status="not_found", message=NOT_FOUND_MESSAGE)
        if apply:
            select_hit(self.source, hit)
        self.state.last_match = hit.match
        if not hit.wrapped:
            return SearchOutcome(status="found", message=FOUND_MESSAGE, hit=hit)
        message = WRAPPED_FORWARD_MESSAGE if forward else WRAPPED_BACKWARD_MESSAGE
        return SearchOutcome(status="found_wrapped", message=message, hit=hit)

    def _repeats_empty_match(self, hit: SearchHit, origin: int) -> bool:
        return (
            hit.match.is_empty
            and hit.match.start == origin
            and hit.match == self.state.last_match
        )

    def _repeats_empty_match_at(self, origin: int) -> bool:
        last = self.state.last_match
        return last is not None and last.is_empty and last.start == origin


__all__ = [
    "FindSession",
    "SearchOutcome",
    "SearchState",
    "Status",
]
