"""Dataclasses describing lexical rules, language profiles, and spans."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

import regex

# group numbers shift once rules are joined into one alternation
_BACKREFERENCE = regex.compile(r"(?<!\\)(?:\\\\)*\\(?:[1-9]|g<\d+>)")


class ProfileError(ValueError):
    """Raised when a built-in or registered profile cannot be compiled."""

    def __init__(self, profile: str, message: str, *, category: str | None = None):
        where = f"{profile}:{category}" if category else profile
        super().__init__(f"Profile '{where}': {message}")
        self.profile = profile
        self.category = category


@dataclass(frozen=True, slots=True)
class LexRule:
    """One ``category`` produced wherever ``pattern`` matches."""

    category: str
    pattern: str

    def __post_init__(self) -> None:
        if not self.category:
            raise ValueError("rule category cannot be empty")
        if not self.pattern:
            raise ValueError("rule pattern cannot be empty")


def _normalize_aliases(aliases: Iterable[str]) -> tuple[str, ...]:
    values = (alias.strip().lower() for alias in aliases)
    return tuple(dict.fromkeys(alias for alias in values if alias))


@dataclass(frozen=True, slots=True)
class LanguageProfile:
    """Ordered rules for one language; earlier rules win ties at an offset.

    The combined pattern is compiled once, when the profile is built, so a
    broken rule fails at load time instead of on a keystroke.
    """

    name: str
    rules: tuple[LexRule, ...] = ()
    aliases: tuple[str, ...] = ()
    flags: int = 0
    _pattern: Optional["regex.Pattern[str]"] = field(
        default=None, init=False, repr=False, compare=False
    )
    _groups: tuple[tuple[str, str], ...] = field(
        default=(), init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("profile name cannot be empty")
        object.__setattr__(self, "name", self.name.strip().lower())
        object.__setattr__(self, "rules", tuple(self.rules))
        object.__setattr__(self, "aliases", _normalize_aliases(self.aliases))
        self._compile()

    @property
    def pattern(self) -> Optional["regex.Pattern[str]"]:
        """Combined alternation, or ``None`` for a profile with no rules."""

        return self._pattern

    @property
    def categories(self) -> tuple[str, ...]:
        return tuple(dict.fromkeys(rule.category for rule in self.rules))

    def category_for(self, found: "regex.Match[str]") -> Optional[str]:
        for group, category in self._groups:
            if found.start(group) != -1:
                return category
        return None

    def _compile(self) -> None:
        if not self.rules:
            return
        parts: list[str] = []
        groups: list[tuple[str, str]] = []
        for index, rule in enumerate(self.rules):
            try:
                single = regex.compile(rule.pattern, self.flags)
            except regex.error as exc:
                raise ProfileError(self.name, str(exc), category=rule.category) from exc
            if _BACKREFERENCE.search(rule.pattern):
                raise ProfileError(
                    self.name,
                    "rules may not use numbered backreferences",
                    category=rule.category,
                )
            if single.groupindex:
                raise ProfileError(
                    self.name, "rules may not use named groups", category=rule.category
                )
            if single.fullmatch("") is not None:
                raise ProfileError(
                    self.name, "rule matches the empty string", category=rule.category
                )
            group = f"r{index}"
            parts.append(f"(?P<{group}>{rule.pattern})")
            groups.append((group, rule.category))
        combined = regex.compile("|".join(parts), self.flags)
        object.__setattr__(self, "_pattern", combined)
        object.__setattr__(self, "_groups", tuple(groups))


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open range of text; ``category=None`` marks unstyled text."""

    start: int
    end: int
    category: Optional[str] = None

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid span range ({self.start}, {self.end})")

    @property
    def length(self) -> int:
        return self.end - self.start


__all__ = ["LanguageProfile", "LexRule", "ProfileError", "Span"]
