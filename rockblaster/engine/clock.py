"""Wall-clock sources for time-based game rules."""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Protocol


class Clock(Protocol):
    def now_ms(self) -> float:
        ...


class SystemClock:
    """Monotonic wall clock in milliseconds."""

    def now_ms(self) -> float:
        return time.monotonic() * 1000.0


@dataclass
class ManualClock:
    """Clock that only moves when told to; used to drive sessions in tests."""

    _now: float = 0.0

    def now_ms(self) -> float:
        return self._now

    def advance(self, ms: float) -> float:
        """Advance the clock and return the new time."""

        if ms < 0:
            raise ValueError("clock cannot run backwards")
        self._now += ms
        return self._now

    def set(self, now_ms: float) -> None:
        self._now = float(now_ms)


__all__ = ["Clock", "ManualClock", "SystemClock"]
