"""Single-pass, gap-filling tokenizer driven by a ``LanguageProfile``."""

from __future__ import annotations

from typing import List

from .models import LanguageProfile, Span


def tokenize(text: str, profile: LanguageProfile) -> tuple[Span, ...]:
    """Classify ``text`` into spans that cover ``[0, len(text))`` exactly once.

    Unmatched stretches become uncategorized spans. Empty text yields ``()``.
    """

    if not text:
        return ()
    pattern = profile.pattern
    if pattern is None:
        return (Span(0, len(text)),)

    spans: List[Span] = []
    last_end = 0
    for found in pattern.finditer(text):
        start, end = found.span()
        if start == end:
            continue
        if start > last_end:
            spans.append(Span(last_end, start))
        spans.append(Span(start, end, profile.category_for(found)))
        last_end = end
    if last_end < len(text):
        spans.append(Span(last_end, len(text)))
    return tuple(spans)


def covers(spans: tuple[Span, ...], length: int) -> bool:
    """Whether ``spans`` tile ``[0, length)`` contiguously without overlap."""

    position = 0
    for item in spans:
        if item.start != position:
            return False
        position = item.end
    return position == length


__all__ = ["covers", "tokenize"]
