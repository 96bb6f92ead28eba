"""Regex-driven lexical highlighting with debounced re-tokenization."""

from .defaults import (
    CODE_PROFILE,
    DEFAULT_PROFILES,
    MARKUP_PROFILE,
    PLAIN_PROFILE,
    load_default_profiles,
)
from .highlighter import HighlightJob, Highlighter
from .models import LanguageProfile, LexRule, ProfileError, Span
from .registry import FALLBACK_PROFILE, ProfileRegistry
from .scheduler import DebounceScheduler, PendingRun
from .tokenizer import covers, tokenize

__all__ = [
    "CODE_PROFILE",
    "DEFAULT_PROFILES",
    "DebounceScheduler",
    "FALLBACK_PROFILE",
    "HighlightJob",
    "Highlighter",
    "LanguageProfile",
    "LexRule",
    "MARKUP_PROFILE",
    "PLAIN_PROFILE",
    "PendingRun",
    "ProfileError",
    "ProfileRegistry",
    "Span",
    "covers",
    "load_default_profiles",
    "tokenize",
]
