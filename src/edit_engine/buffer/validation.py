"""Validation helpers shared across text sources."""

from __future__ import annotations

from .source import Range, TextRangeError


def ensure_offset(length: int, offset: int) -> int:
    if offset < 0 or offset > length:
        raise TextRangeError("Offset out of range", offset=offset)
    return offset


def ensure_range(length: int, start: int, end: int) -> Range:
    ensure_offset(length, start)
    ensure_offset(length, end)
    if start > end:
        start, end = end, start
    return start, end
