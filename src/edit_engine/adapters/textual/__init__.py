"""Textual integration: widget-backed source, UI controller, demo app."""

from .controller import EditorUIHooks, TextualEditorAdapter, mode_from_flags
from .source import TextAreaSource

__all__ = [
    "EditorUIHooks",
    "TextAreaSource",
    "TextualEditorAdapter",
    "mode_from_flags",
]
