"""Built-in language profiles registered at startup."""

from __future__ import annotations

from typing import Sequence

from .models import LanguageProfile, LexRule
from .registry import ProfileRegistry

# fmt: off
CODE_KEYWORDS: tuple[str, ...] = (
    "abstract", "assert", "boolean", "break", "byte", "case", "catch", "char",
    "class", "const", "continue", "default", "do", "double", "else", "enum",
    "extends", "final", "finally", "float", "for", "goto", "if", "implements",
    "import", "instanceof", "int", "interface", "long", "native", "new",
    "package", "private", "protected", "public", "return", "short", "static",
    "strictfp", "super", "switch", "synchronized", "this", "throw", "throws",
    "transient", "try", "void", "volatile", "while", "var", "record", "sealed",
    "permits", "non-sealed",
)
# fmt: on

DOUBLE_QUOTED = r'"(?:[^"\\]|\\.)*"'

CODE_PROFILE = LanguageProfile(
    name="code",
    aliases=("java", "generic"),
    rules=(
        LexRule("keyword", r"\b(?:" + "|".join(CODE_KEYWORDS) + r")\b"),
        LexRule("paren", r"\(|\)"),
        LexRule("brace", r"\{|\}"),
        LexRule("bracket", r"\[|\]"),
        LexRule("semicolon", r";"),
        LexRule("string", DOUBLE_QUOTED),
        LexRule("comment", r"//[^\n]*|/\*[\s\S]*?\*/"),
        LexRule("number", r"\b\d+(?:\.\d+)?\b"),
    ),
)

MARKUP_PROFILE = LanguageProfile(
    name="markup",
    aliases=("xml", "html"),
    rules=(
        LexRule("tag", r"</?\s*[a-zA-Z][a-zA-Z0-9]*\s*/?>"),
        LexRule("attribute", r"\s+[a-zA-Z][a-zA-Z0-9]*\s*="),
        LexRule("string", DOUBLE_QUOTED),
        LexRule("comment", r"<!--[\s\S]*?-->"),
    ),
)

PLAIN_PROFILE = LanguageProfile(name="plain", aliases=("text", "txt"))

DEFAULT_PROFILES: tuple[LanguageProfile, ...] = (
    CODE_PROFILE,
    MARKUP_PROFILE,
    PLAIN_PROFILE,
)


def load_default_profiles(
    registry: ProfileRegistry,
    *,
    include: Sequence[str] | None = None,
    replace: bool = False,
) -> ProfileRegistry:
    """Register the built-in profiles (optionally only those in ``include``)."""

    wanted = {name.lower() for name in include} if include else None
    for profile in DEFAULT_PROFILES:
        if wanted is not None and profile.name not in wanted:
            continue
        registry.register(profile, replace=replace)
    return registry


__all__ = [
    "CODE_KEYWORDS",
    "CODE_PROFILE",
    "DEFAULT_PROFILES",
    "MARKUP_PROFILE",
    "PLAIN_PROFILE",
    "load_default_profiles",
]
