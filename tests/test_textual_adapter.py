from __future__ import annotations

from typing import List

from edit_engine.adapters.textual import (
    EditorUIHooks,
    TextualEditorAdapter,
    mode_from_flags,
)
from edit_engine.buffer import MemoryTextSource
from edit_engine.config import HighlightSettings
from edit_engine.highlight import DebounceScheduler, Highlighter, Span
from edit_engine.search import FindSession, SearchMode


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class Recorder:
    def __init__(self) -> None:
        self.statuses: List[str] = []
        self.spans: List[tuple[Span, ...]] = []
        self.logs: List[str] = []

    def hooks(self) -> EditorUIHooks:
        return EditorUIHooks(
            update_status=self.statuses.append,
            update_spans=self.spans.append,
            log=self.logs.append,
        )


def make_adapter(
    text: str, recorder: Recorder, clock: FakeClock | None = None
) -> TextualEditorAdapter:
    source = MemoryTextSource(text)
    highlighter = Highlighter(
        settings=HighlightSettings(debounce_ms=50, language="code"),
        scheduler=DebounceScheduler(clock=clock or FakeClock()),
    )
    return TextualEditorAdapter(FindSession(source), highlighter, recorder.hooks())


def test_mode_from_flags_prefers_regex() -> None:
    assert mode_from_flags() is SearchMode.LITERAL
    assert mode_from_flags(whole_word=True) is SearchMode.WHOLE_WORD
    assert mode_from_flags(whole_word=True, use_regex=True) is SearchMode.REGEX


def test_adapter_publishes_initial_spans() -> None:
    recorder = Recorder()
    make_adapter("int x;", recorder)

    assert recorder.spans
    assert recorder.spans[-1][0] == Span(0, 3, "keyword")
    assert any(line.startswith("spans ->") for line in recorder.logs)


def test_find_commands_report_status_and_select() -> None:
    recorder = Recorder()
    adapter = make_adapter("foo bar foo", recorder)
    adapter.set_query("foo")

    adapter.find_next()
    adapter.find_next()
    outcome = adapter.find_next()

    assert recorder.statuses == ["Found", "Found", "Found (wrapped to beginning)"]
    assert outcome.match is not None and outcome.match.as_range() == (0, 3)
    assert adapter.session.source.selection() == (0, 3)

    previous = adapter.find_previous()
    assert previous.message == "Found (wrapped to end)"
    assert adapter.session.source.selection() == (8, 11)


def test_replace_updates_text_and_schedules_highlight() -> None:
    recorder = Recorder()
    clock = FakeClock()
    adapter = make_adapter("foo bar foo", recorder, clock)
    adapter.set_query("foo")
    adapter.find_next()
    revision = adapter.highlighter.revision

    outcome = adapter.replace("baz")

    assert outcome.replaced
    assert recorder.statuses[-1] == "Replaced 1 occurrence"
    assert adapter.session.source.text() == "baz bar foo"
    assert adapter.session.source.selection() == (8, 11)
    assert adapter.highlighter.revision == revision + 1

    published = len(recorder.spans)
    clock.now = 0.1
    assert adapter.process_timeouts() is True
    assert len(recorder.spans) == published + 1


def test_replace_all_reports_count() -> None:
    recorder = Recorder()
    adapter = make_adapter("a-b-c", recorder)
    adapter.set_query("-")

    outcome = adapter.replace_all("+")

    assert outcome.count == 2
    assert recorder.statuses[-1] == "Replaced 2 occurrence(s)"
    assert adapter.session.source.text() == "a+b+c"


def test_invalid_pattern_leaves_text_alone() -> None:
    recorder = Recorder()
    adapter = make_adapter("(value)", recorder)
    adapter.set_query("(", use_regex=True)

    outcome = adapter.replace_all("x")

    assert outcome.status == "invalid_pattern"
    assert recorder.statuses[-1].startswith("Invalid regular expression:")
    assert adapter.session.source.text() == "(value)"


def test_empty_query_prompts_for_text() -> None:
    recorder = Recorder()
    adapter = make_adapter("abc", recorder)

    adapter.find_next()

    assert recorder.statuses == ["Please enter text to find"]


def test_open_find_seeds_query_from_selection() -> None:
    recorder = Recorder()
    adapter = make_adapter("alpha beta", recorder)
    adapter.session.source.set_selection(6, 10)

    assert adapter.open_find() == "beta"
    assert adapter.find_next().message == "Found (wrapped to beginning)"


def test_set_language_switches_profile() -> None:
    recorder = Recorder()
    adapter = make_adapter("<p>hi</p>", recorder)

    assert adapter.set_language("html") == "markup"
    assert recorder.statuses[-1] == "Language: markup"
    assert recorder.spans[-1][0] == Span(0, 3, "tag")


def test_adapter_emits_log_lines() -> None:
    recorder = Recorder()
    adapter = make_adapter("abc", recorder)

    adapter.set_query("b", case_sensitive=True)
    adapter.find_next()

    assert any(line.startswith("query ->") for line in recorder.logs)
    assert any(line.startswith("find_next <-") for line in recorder.logs)
