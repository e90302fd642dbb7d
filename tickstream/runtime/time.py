"""Tick timing primitives."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from time import monotonic


@dataclass(frozen=True, slots=True)
class TimeContext:
    """Timing of one driver tick."""

    tick_index: int
    delta_seconds: float
    elapsed_seconds: float


class FrameClock:
    """Monotonic tick clock with optionally bounded deltas.

    Deltas are unbounded by default so timers keep wall-clock pace across
    idle gaps between platform ticks.
    """

    def __init__(
        self,
        *,
        time_source: Callable[[], float] | None = None,
        max_delta_seconds: float | None = None,
    ) -> None:
        if max_delta_seconds is not None and max_delta_seconds <= 0.0:
            raise ValueError("max_delta_seconds must be > 0")
        self._time_source = time_source or monotonic
        self._max_delta_seconds = max_delta_seconds
        self._last_seconds: float | None = None
        self._elapsed_seconds = 0.0

    def start(self) -> None:
        """Pin the reference point so the first tick measures from here."""
        self._last_seconds = self._time_source()

    def next(self, tick_index: int) -> TimeContext:
        """Advance the clock and return the next tick context."""
        now = self._time_source()
        if self._last_seconds is None:
            delta = 0.0
        else:
            delta = max(0.0, now - self._last_seconds)
            if self._max_delta_seconds is not None:
                delta = min(delta, self._max_delta_seconds)
        self._last_seconds = now
        self._elapsed_seconds += delta
        return TimeContext(
            tick_index=tick_index,
            delta_seconds=delta,
            elapsed_seconds=self._elapsed_seconds,
        )
