"""Headless platform source that replays a fixed script of ticks."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from tickstream.api.platform import PlatformSink, PlatformSource


@dataclass(frozen=True, slots=True)
class ScriptedTick:
    """Raw callbacks delivered in one tick, after advancing simulated time."""

    raw_events: tuple[object, ...] = ()
    advance_seconds: float = 0.0


@dataclass(slots=True)
class ScriptedPlatform(PlatformSource):
    """Deterministic platform loop for headless runs and tests.

    Every scripted tick advances the simulated clock, delivers its raw events
    and then signals tick completion. Shutdown is signalled once the script is
    exhausted.
    """

    ticks: tuple[ScriptedTick, ...] = ()
    window: object | None = None
    now_seconds: float = 0.0
    tick_requests: int = 0
    requested_delays: list[float] = field(default_factory=list)
    delivered_ticks: int = 0
    _stopped: bool = field(default=False, repr=False)

    @classmethod
    def from_batches(
        cls,
        batches: Iterable[Iterable[object]],
        *,
        seconds_per_tick: float = 0.0,
    ) -> ScriptedPlatform:
        """Build a script with one tick per batch of raw events."""
        ticks = tuple(
            ScriptedTick(raw_events=tuple(batch), advance_seconds=seconds_per_tick)
            for batch in batches
        )
        return cls(ticks=ticks)

    @property
    def stopped(self) -> bool:
        return self._stopped

    def time_source(self) -> float:
        return self.now_seconds

    def run(self, sink: PlatformSink) -> None:
        for tick in self.ticks:
            if self._stopped:
                return
            if tick.advance_seconds < 0.0:
                raise ValueError("advance_seconds must be >= 0")
            self.now_seconds += tick.advance_seconds
            for raw in tick.raw_events:
                sink.on_raw(raw)
                if self._stopped:
                    return
            self.delivered_ticks += 1
            sink.on_tick_complete()
        if not self._stopped:
            sink.on_shutdown()

    def stop(self) -> None:
        self._stopped = True

    def request_tick(self) -> None:
        self.tick_requests += 1

    def request_tick_after(self, delay_seconds: float) -> None:
        self.tick_requests += 1
        self.requested_delays.append(delay_seconds)


__all__ = ["ScriptedPlatform", "ScriptedTick"]
