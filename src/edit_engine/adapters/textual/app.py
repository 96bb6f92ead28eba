"""Executable Textual app that hosts the find/replace and highlighting engine."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Checkbox, Footer, Header, Input, Static, TextArea

from edit_engine.config import HighlightSettings
from edit_engine.highlight import Highlighter, Span
from edit_engine.search import FindSession

from .controller import EditorUIHooks, TextualEditorAdapter
from .source import TextAreaSource

CATEGORY_STYLES = {
    "keyword": "bold magenta",
    "paren": "yellow",
    "brace": "yellow",
    "bracket": "yellow",
    "semicolon": "dim",
    "string": "green",
    "comment": "italic grey50",
    "number": "cyan",
    "tag": "bold blue",
    "attribute": "magenta",
}

SAMPLE_TEXT = """public class Hello {
    // prints a greeting
    public static void main(String[] args) {
        System.out.println("Hello world");
    }
}
"""


def render_spans(text: str, spans: Sequence[Span]) -> Text:
    rendered = Text(text)
    for item in spans:
        style = CATEGORY_STYLES.get(item.category or "")
        if style:
            rendered.stylize(style, item.start, item.end)
    return rendered


class EditorApp(App[None]):
    """Minimal Textual UI embedding the editing core."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor {
		height: 1fr;
	}

	#preview {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#find-bar Input {
		width: 1fr;
	}

	#find-bar Checkbox {
		width: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+f", "open_find", "Find"),
        ("f3", "find_next", "Next"),
        ("shift+f3", "find_previous", "Previous"),
        ("ctrl+r", "replace", "Replace"),
        ("ctrl+shift+r", "replace_all", "Replace all"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        text: str = SAMPLE_TEXT,
        settings: HighlightSettings | None = None,
    ) -> None:
        super().__init__()
        self._initial_text = text
        self._settings = settings or HighlightSettings.from_env()
        self.adapter: TextualEditorAdapter | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="editor-area"):
            yield TextArea(self._initial_text, id="editor")
            yield Static("", id="preview")
        with Horizontal(id="find-bar"):
            yield Input(placeholder="Find text...", id="find")
            yield Input(placeholder="Replace with...", id="replace")
            yield Checkbox("Case sensitive", id="case")
            yield Checkbox("Whole word", id="word")
            yield Checkbox("Regular expression", id="regex")
        yield Static("", id="status-line")
        yield Footer()

    def on_mount(self) -> None:
        editor = self.query_one("#editor", TextArea)
        hooks = EditorUIHooks(
            update_status=self._update_status,
            update_spans=self._update_spans,
        )
        self.adapter = TextualEditorAdapter(
            FindSession(TextAreaSource(editor)),
            Highlighter(settings=self._settings),
            hooks,
        )
        self.set_interval(0.02, self._process_timeouts)

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if self.adapter:
            self.adapter.text_changed(event.text_area.text)

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "find":
            self._sync_query()

    def on_checkbox_changed(self, event: Checkbox.Changed) -> None:
        del event
        self._sync_query()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "find":
            self.action_find_next()
        elif event.input.id == "replace":
            self.action_replace()

    def action_open_find(self) -> None:
        if not self.adapter:
            return
        pattern = self.adapter.open_find()
        find = self.query_one("#find", Input)
        find.value = pattern
        find.focus()

    def action_find_next(self) -> None:
        if self.adapter:
            self._sync_query()
            self.adapter.find_next()

    def action_find_previous(self) -> None:
        if self.adapter:
            self._sync_query()
            self.adapter.find_previous()

    def action_replace(self) -> None:
        if self.adapter:
            self._sync_query()
            self.adapter.replace(self.query_one("#replace", Input).value)

    def action_replace_all(self) -> None:
        if self.adapter:
            self._sync_query()
            self.adapter.replace_all(self.query_one("#replace", Input).value)

    def _sync_query(self) -> None:
        if not self.adapter:
            return
        self.adapter.set_query(
            self.query_one("#find", Input).value,
            case_sensitive=self.query_one("#case", Checkbox).value,
            whole_word=self.query_one("#word", Checkbox).value,
            use_regex=self.query_one("#regex", Checkbox).value,
        )

    def _process_timeouts(self) -> None:
        if self.adapter:
            self.adapter.process_timeouts()

    def _update_status(self, status: str) -> None:
        self.query_one("#status-line", Static).update(status)

    def _update_spans(self, spans: tuple[Span, ...]) -> None:
        editor = self.query_one("#editor", TextArea)
        self.query_one("#preview", Static).update(render_spans(editor.text, spans))


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    defaults = HighlightSettings.from_env()
    parser = argparse.ArgumentParser(description="Run the edit engine Textual demo.")
    parser.add_argument(
        "--language",
        default=defaults.language,
        help="Highlighting profile or alias (default: %(default)s)",
    )
    parser.add_argument(
        "--debounce-ms",
        type=int,
        default=defaults.debounce_ms,
        help="Quiet window before re-highlighting (default: %(default)s)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    settings = HighlightSettings(debounce_ms=args.debounce_ms, language=args.language)
    EditorApp(settings=settings).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
