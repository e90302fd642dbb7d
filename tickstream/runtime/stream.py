"""Event mailbox and the pull-based event stream over it."""

from __future__ import annotations

from collections import deque
from typing import Generic, TypeVar

from tickstream.runtime.poll import PENDING, Pollable, Waker

E = TypeVar("E")


class Mailbox(Generic[E]):
    """Ordered event queue plus a one-slot waker and a tick-boundary flag.

    Only the most recently parked consumer is remembered; a second consumer
    parking on the same mailbox silently replaces the first one's waker.
    Access is serialized by the single-threaded cooperative executor.
    """

    __slots__ = ("_events", "_waker", "_ready")

    def __init__(self) -> None:
        self._events: deque[E] = deque()
        self._waker: Waker | None = None
        self._ready = False

    @property
    def pending_count(self) -> int:
        return len(self._events)

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def has_waiter(self) -> bool:
        return self._waker is not None

    def push(self, event: E) -> None:
        """Append an event and resume the parked consumer, if any."""
        self._events.append(event)
        self.mark_ready()

    def mark_ready(self) -> None:
        """Mark the end of the current tick's batch."""
        self._ready = True
        waker = self._waker
        self._waker = None
        if waker is not None:
            waker.wake()

    def poll_next(self, waker: Waker) -> E | None:
        """Consumer side of `EventStream.next_event`.

        Returns the oldest event, `None` once per batch when drained, or
        `PENDING` after parking `waker`.
        """
        if self._events:
            return self._events.popleft()
        if self._ready:
            self._ready = False
            return None
        self._waker = waker
        return PENDING


class NextEvent(Pollable[E | None]):
    """Pending pull of the next event from a mailbox.

    Holds no state of its own, so it can be raced, dropped, or awaited again
    without losing events.
    """

    __slots__ = ("_mailbox",)

    def __init__(self, mailbox: Mailbox[E]) -> None:
        self._mailbox = mailbox

    def poll(self, waker: Waker) -> E | None:
        return self._mailbox.poll_next(waker)


class EventStream(Generic[E]):
    """Shared handle over one mailbox; every clone sees the same events.

    `await stream.next_event()` yields events in push order. `None` means the
    current tick's batch is drained, not that the stream ended:

        while True:
            while (event := await events.next_event()) is not None:
                handle(event)
            per_tick_work()

    Run one consumer per stream at a time.
    """

    __slots__ = ("_mailbox",)

    def __init__(self, mailbox: Mailbox[E] | None = None) -> None:
        self._mailbox: Mailbox[E] = mailbox if mailbox is not None else Mailbox()

    @property
    def mailbox(self) -> Mailbox[E]:
        return self._mailbox

    def next_event(self) -> NextEvent[E]:
        return NextEvent(self._mailbox)

    def clone(self) -> EventStream[E]:
        return EventStream(self._mailbox)

    def __copy__(self) -> EventStream[E]:
        return self.clone()


__all__ = ["EventStream", "Mailbox", "NextEvent"]
