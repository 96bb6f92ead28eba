"""Registry mapping language identifiers and aliases to profiles."""

from __future__ import annotations

from typing import Dict, Iterator, Optional

from edit_engine.runtime.telemetry import record_event, span

from .models import LanguageProfile, ProfileError

FALLBACK_PROFILE = "plain"


class ProfileRegistry:
    """Owns immutable language profiles, keyed by name and alias."""

    def __init__(
        self,
        *,
        fallback: str = FALLBACK_PROFILE,
        logger_name: str | None = None,
    ) -> None:
        self._profiles: Dict[str, LanguageProfile] = {}
        self._aliases: Dict[str, str] = {}
        self._fallback = fallback
        self._logger_name = logger_name

    def register(
        self, profile: LanguageProfile, *, replace: bool = False
    ) -> LanguageProfile:
        with span(
            "highlight::register_profile",
            logger_name=self._logger_name,
            component="highlight",
            metadata={"profile": profile.name},
        ) as handle:
            if not replace and profile.name in self._profiles:
                raise ValueError(f"Profile '{profile.name}' already registered")
            shadowed = self._aliases.get(profile.name)
            if shadowed is not None and shadowed != profile.name:
                raise ProfileError(
                    profile.name, f"name is already an alias of '{shadowed}'"
                )
            for alias in profile.aliases:
                owner = self._aliases.get(alias, self._profile_owning(alias))
                if owner is not None and owner != profile.name:
                    handle.add_metadata("alias_conflict", alias)
                    raise ProfileError(
                        profile.name, f"alias '{alias}' already used by '{owner}'"
                    )

            previous = self._profiles.get(profile.name)
            if previous is not None:
                for alias in previous.aliases:
                    self._aliases.pop(alias, None)
            self._profiles[profile.name] = profile
            for alias in profile.aliases:
                self._aliases[alias] = profile.name
            return profile

    def get(self, name: str) -> LanguageProfile:
        key = self._canonical(name)
        try:
            return self._profiles[key]
        except KeyError as exc:
            raise KeyError(f"Profile '{name}' is not registered") from exc

    def resolve(self, name: Optional[str]) -> LanguageProfile:
        """Like ``get`` but unknown names fall back to the plain profile."""

        key = self._canonical(name or "")
        profile = self._profiles.get(key)
        if profile is not None:
            return profile
        record_event(
            "highlight.unknown_profile",
            level="warning",
            data={"requested": name, "fallback": self._fallback},
            logger_name=self._logger_name,
        )
        return self.get(self._fallback)

    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self._profiles))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._canonical(name) in self._profiles

    def __iter__(self) -> Iterator[LanguageProfile]:
        return iter(self._profiles.values())

    def _canonical(self, name: str) -> str:
        key = name.strip().lower()
        return self._aliases.get(key, key)

    def _profile_owning(self, alias: str) -> Optional[str]:
        return alias if alias in self._profiles else None


__all__ = ["FALLBACK_PROFILE", "ProfileRegistry"]
