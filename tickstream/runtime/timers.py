"""Timer operations for cooperative tasks."""

from __future__ import annotations

from tickstream.runtime.poll import PENDING, Pollable, Waker
from tickstream.runtime.scheduler import Scheduler


class Sleep(Pollable[None]):
    """Completes once `seconds` of driver time have elapsed after first poll.

    The countdown starts on first poll. Only the most recent waker is resumed.
    """

    __slots__ = ("_scheduler", "_seconds", "_timer_id", "_fired", "_cancelled", "_waker")

    def __init__(self, scheduler: Scheduler, seconds: float) -> None:
        if seconds < 0.0:
            raise ValueError("seconds must be >= 0")
        self._scheduler = scheduler
        self._seconds = float(seconds)
        self._timer_id: int | None = None
        self._fired = False
        self._cancelled = False
        self._waker: Waker | None = None

    @property
    def fired(self) -> bool:
        return self._fired

    def poll(self, waker: Waker) -> None:
        if self._fired:
            return None
        if self._cancelled:
            raise RuntimeError("sleep was cancelled")
        self._waker = waker
        if self._timer_id is None:
            self._timer_id = self._scheduler.call_later(self._seconds, self._fire)
        return PENDING

    def cancel(self) -> None:
        """Drop the pending timer; the sleep never fires afterwards."""
        if self._fired or self._cancelled:
            return
        self._cancelled = True
        self._waker = None
        if self._timer_id is not None:
            self._scheduler.cancel(self._timer_id)

    def _fire(self) -> None:
        self._fired = True
        waker = self._waker
        self._waker = None
        if waker is not None:
            waker.wake()


class Timers:
    """Factory for timer operations bound to one scheduler."""

    def __init__(self, scheduler: Scheduler | None = None) -> None:
        self._scheduler = scheduler if scheduler is not None else Scheduler()

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def pending(self) -> bool:
        return self._scheduler.pending_count > 0

    @property
    def next_due_in(self) -> float | None:
        """Seconds of driver time until the earliest pending timer fires."""
        due_seconds = self._scheduler.next_due_seconds
        if due_seconds is None:
            return None
        return max(0.0, due_seconds - self._scheduler.now_seconds)

    def sleep(self, seconds: float) -> Sleep:
        return Sleep(self._scheduler, seconds)


__all__ = ["Sleep", "Timers"]
