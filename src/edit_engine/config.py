"""Environment-driven settings for telemetry and highlighting."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "EDIT_ENGINE_"


def _env(
    name: str, default: Optional[str] = None, *, environ: Mapping[str, str] | None = None
) -> Optional[str]:
    source = os.environ if environ is None else environ
    return source.get(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool, *, environ: Mapping[str, str] | None = None) -> bool:
    raw = _env(name, environ=environ)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, fallback: int, *, environ: Mapping[str, str] | None = None) -> int:
    value = _env(name, environ=environ)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


@dataclass(frozen=True, slots=True)
class TelemetrySettings:
    """Logger configuration consumed by ``runtime.telemetry``."""

    logger_name: str = "edit_engine"
    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False
    console: bool = True
    colored: bool = True
    buffered: bool = False
    buffer_size: int = 2048

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "TelemetrySettings":
        return cls(
            logger_name=_env("LOGGER", "edit_engine", environ=environ) or "edit_engine",
            level=(_env("LOG_LEVEL", environ=environ) or "INFO").upper(),
            log_file=_env("LOG_FILE", "", environ=environ) or "",
            json_format=_env_flag("LOG_JSON", False, environ=environ),
            console=not _env_flag("DISABLE_CONSOLE", False, environ=environ),
            colored=not _env_flag("NO_COLOR", False, environ=environ),
            buffered=_env_flag("LOG_BUFFERED", False, environ=environ),
            buffer_size=_env_int("LOG_BUFFER_SIZE", 2048, environ=environ),
        )


@dataclass(frozen=True, slots=True)
class HighlightSettings:
    """Debounce window and initial language for the highlighter."""

    debounce_ms: int = 50
    language: str = "code"

    def __post_init__(self) -> None:
        if self.debounce_ms < 0:
            raise ValueError("debounce_ms cannot be negative")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "HighlightSettings":
        debounce = _env_int("DEBOUNCE_MS", 50, environ=environ)
        if debounce < 0:
            debounce = 50
        return cls(
            debounce_ms=debounce,
            language=_env("LANGUAGE", "code", environ=environ) or "code",
        )


__all__ = ["ENV_PREFIX", "HighlightSettings", "TelemetrySettings"]
