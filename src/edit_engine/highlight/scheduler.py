"""Debounce timers keyed by document, with generation-based supersession."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")


@dataclass
class PendingRun(Generic[T]):
    deadline: float
    delay_ms: int
    generation: int
    payload: T


class DebounceScheduler(Generic[T]):
    """Coalesces bursts of ``schedule`` calls into one run per quiet window.

    Scheduling again for the same key replaces the pending run, so only the
    newest payload can ever fire. The host drives time by calling ``due``
    from its event loop (e.g. a UI interval timer).
    """

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._pending: Dict[str, PendingRun[T]] = {}
        self._counter = 0

    def schedule(self, key: str, payload: T, delay_ms: int) -> int:
        self._counter += 1
        self._pending[key] = PendingRun(
            deadline=self._clock() + (delay_ms / 1000.0),
            delay_ms=delay_ms,
            generation=self._counter,
            payload=payload,
        )
        return self._counter

    def cancel(self, key: str) -> bool:
        return self._pending.pop(key, None) is not None

    def pending(self, key: str) -> Optional[PendingRun[T]]:
        return self._pending.get(key)

    def due(self, key: Optional[str] = None) -> List[Tuple[str, PendingRun[T]]]:
        """Pop expired runs; with ``key`` only that key's run is considered."""

        now = self._clock()
        expired = [
            (name, run)
            for name, run in self._pending.items()
            if run.deadline <= now and (key is None or name == key)
        ]
        return [item for item in expired if self._pop(*item)]

    def flush(self, key: Optional[str] = None) -> List[Tuple[str, PendingRun[T]]]:
        if key is not None:
            run = self._pending.get(key)
            if run is None:
                return []
            return [(key, run)] if self._pop(key, run) else []

        current = list(self._pending.items())
        return [item for item in current if self._pop(*item)]

    def _pop(self, key: str, run: PendingRun[T]) -> bool:
        active = self._pending.get(key)
        if active is None or active.generation != run.generation:
            return False
        del self._pending[key]
        return True

    def __len__(self) -> int:
        return len(self._pending)


__all__ = ["DebounceScheduler", "PendingRun"]
