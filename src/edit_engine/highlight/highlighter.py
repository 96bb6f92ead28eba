"""Debounced highlighting for one document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional

from edit_engine.config import HighlightSettings
from edit_engine.runtime import telemetry

from .defaults import load_default_profiles
from .models import LanguageProfile, Span
from .registry import ProfileRegistry
from .scheduler import DebounceScheduler
from .tokenizer import tokenize

SpanListener = Callable[[tuple[Span, ...]], None]


@dataclass(frozen=True, slots=True)
class HighlightJob:
    """Text snapshot captured when an edit scheduled re-tokenization."""

    revision: int
    text: str


class Highlighter:
    """Keeps the live spans of one document in step with its settled text.

    Every edit bumps a revision and schedules a run for that snapshot. When a
    run fires for a revision that is no longer current it is dropped, so
    spans computed for older text never replace spans for newer text.
    """

    def __init__(
        self,
        registry: ProfileRegistry | None = None,
        *,
        settings: HighlightSettings | None = None,
        scheduler: DebounceScheduler[HighlightJob] | None = None,
        document_key: str = "document",
        logger_name: str | None = "edit_engine.highlight",
    ) -> None:
        self.settings = (
            settings if settings is not None else HighlightSettings.from_env()
        )
        self.registry = (
            registry
            if registry is not None
            else load_default_profiles(ProfileRegistry(logger_name=logger_name))
        )
        self.scheduler: DebounceScheduler[HighlightJob] = (
            scheduler if scheduler is not None else DebounceScheduler()
        )
        self.document_key = document_key
        self._logger_name = logger_name
        self._profile = self.registry.resolve(self.settings.language)
        self._revision = 0
        self._text = ""
        self._spans: tuple[Span, ...] = ()
        self._spans_revision = 0
        self._listeners: List[SpanListener] = []

    @property
    def profile(self) -> LanguageProfile:
        return self._profile

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def spans_revision(self) -> int:
        """Revision of the text the live spans were computed from."""

        return self._spans_revision

    def subscribe(self, listener: SpanListener) -> None:
        self._listeners.append(listener)

    def set_language_profile(self, name: str) -> LanguageProfile:
        """Switch profiles and re-highlight the latest known text right away."""

        self._profile = self.registry.resolve(name)
        telemetry.record_event(
            "highlight.profile",
            data={"requested": name, "profile": self._profile.name},
            logger_name=self._logger_name,
        )
        self.scheduler.cancel(self.document_key)
        self._settle(HighlightJob(self._revision, self._text))
        return self._profile

    def text_changed(self, text: str) -> int:
        """Record an edit and (re)start the quiet window for it."""

        self._revision += 1
        self._text = text
        self.scheduler.schedule(
            self.document_key,
            HighlightJob(self._revision, text),
            self.settings.debounce_ms,
        )
        return self._revision

    def process_timeouts(self) -> bool:
        """Run the pending job if its quiet window has elapsed."""

        applied = False
        for _key, run in self.scheduler.due(self.document_key):
            applied = self._settle(run.payload) or applied
        return applied

    def flush(self) -> bool:
        """Run the pending job immediately, ignoring the quiet window."""

        applied = False
        for _key, run in self.scheduler.flush(self.document_key):
            applied = self._settle(run.payload) or applied
        return applied

    def on_text_settled(self, text: str) -> tuple[Span, ...]:
        """Tokenize ``text`` as the current document state and publish it."""

        if text != self._text:
            self._revision += 1
            self._text = text
        self._settle(HighlightJob(self._revision, text))
        return self._spans

    def current_spans(self) -> tuple[Span, ...]:
        return self._spans

    def _settle(self, job: HighlightJob) -> bool:
        if job.revision != self._revision:
            telemetry.record_event(
                "highlight.stale_dropped",
                level="debug",
                data={"job": job.revision, "current": self._revision},
                logger_name=self._logger_name,
            )
            return False

        spans = self._tokenize(job.text)
        if spans is None:
            return False
        self._spans = spans
        self._spans_revision = job.revision
        for listener in list(self._listeners):
            listener(spans)
        return True

    def _tokenize(self, text: str) -> Optional[tuple[Span, ...]]:
        with telemetry.span(
            "highlight::tokenize",
            logger_name=self._logger_name,
            component="highlight",
            metadata={"profile": self._profile.name, "length": len(text)},
        ) as handle:
            try:
                return tokenize(text, self._profile)
            except Exception as exc:
                handle.warn(f"{type(exc).__name__}: {exc}")
                telemetry.record_event(
                    "highlight.failed",
                    level="error",
                    data={"profile": self._profile.name, "error": str(exc)},
                    logger_name=self._logger_name,
                )
                return None


__all__ = ["HighlightJob", "Highlighter", "SpanListener"]
