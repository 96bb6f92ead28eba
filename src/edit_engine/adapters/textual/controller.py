"""UI-toolkit-neutral controller wiring find/replace and highlighting to hooks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from edit_engine.highlight import Highlighter, Span
from edit_engine.search import FindSession, SearchMode, SearchOutcome


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class EditorUIHooks:
    """Callbacks invoked by the adapter to update host widgets."""

    update_status: Callable[[str], None]
    update_spans: Callable[[tuple[Span, ...]], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


def mode_from_flags(*, whole_word: bool = False, use_regex: bool = False) -> SearchMode:
    """Map dialog checkboxes to a mode; the regex box wins over whole word."""

    if use_regex:
        return SearchMode.REGEX
    if whole_word:
        return SearchMode.WHOLE_WORD
    return SearchMode.LITERAL


class TextualEditorAdapter:
    """Bridges a ``FindSession`` and a ``Highlighter`` to a host UI surface."""

    def __init__(
        self,
        session: FindSession,
        highlighter: Highlighter,
        hooks: EditorUIHooks,
    ) -> None:
        self.session = session
        self.highlighter = highlighter
        self.hooks = hooks
        self.highlighter.subscribe(self._spans_changed)
        self.highlighter.on_text_settled(self.session.source.text())

    def set_query(
        self,
        pattern: str,
        *,
        case_sensitive: bool = False,
        whole_word: bool = False,
        use_regex: bool = False,
    ) -> None:
        mode = mode_from_flags(whole_word=whole_word, use_regex=use_regex)
        self.session.set_query(pattern, mode, case_sensitive)
        self._log_state("query ->", pattern=pattern, mode=mode.value)

    def open_find(self) -> str:
        """Seed the query from the selection, as when the find bar opens."""

        self.session.seed_from_selection()
        return self.session.query.pattern

    def find_next(self) -> SearchOutcome:
        return self._report("find_next", self.session.find_next())

    def find_previous(self) -> SearchOutcome:
        return self._report("find_previous", self.session.find_previous())

    def replace(self, replacement: str) -> SearchOutcome:
        outcome = self._report("replace", self.session.replace_one(replacement))
        if outcome.replaced:
            self.text_changed(self.session.source.text())
        return outcome

    def replace_all(self, replacement: str) -> SearchOutcome:
        outcome = self._report("replace_all", self.session.replace_all(replacement))
        if outcome.replaced:
            self.text_changed(self.session.source.text())
        return outcome

    def text_changed(self, text: str) -> int:
        return self.highlighter.text_changed(text)

    def set_language(self, name: str) -> str:
        profile = self.highlighter.set_language_profile(name)
        self.hooks.update_status(f"Language: {profile.name}")
        return profile.name

    def process_timeouts(self) -> bool:
        """Forward expired debounce timers; ``True`` when spans were refreshed."""

        return self.highlighter.process_timeouts()

    def _report(self, command: str, outcome: SearchOutcome) -> SearchOutcome:
        self.hooks.update_status(outcome.message)
        self._log_state(
            f"{command} <-",
            status=outcome.status,
            match=outcome.match.as_range() if outcome.match else None,
            count=outcome.count or None,
        )
        return outcome

    def _spans_changed(self, spans: tuple[Span, ...]) -> None:
        self.hooks.update_spans(spans)
        self._log_state("spans ->", spans=len(spans))

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        source = self.session.source
        last: Optional[object] = self.session.state.last_match
        return {
            "caret": source.caret_offset(),
            "selection": source.selection(),
            "profile": self.highlighter.profile.name,
            "revision": self.highlighter.revision,
            "last_match": last,
        }


__all__ = ["EditorUIHooks", "TextualEditorAdapter", "mode_from_flags"]
