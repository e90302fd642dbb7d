"""Build a custom stream on top of EventStream with `select`."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tickstream import run
from tickstream.api.events import CloseRequestedEvent, Event
from tickstream.runtime.combinators import join_all, ready, select
from tickstream.runtime.poll import Pollable
from tickstream.runtime.stream import EventStream

_LOG = logging.getLogger("tickstream.demos")


@dataclass(frozen=True, slots=True)
class StreamEvent:
    """A platform event, or None at the end of a tick's batch."""

    event: Event | None


@dataclass(frozen=True, slots=True)
class Loaded:
    resource: list[str]


class CustomStream:
    """Yields platform events, plus one `Loaded` when the resource is ready."""

    def __init__(self, events: EventStream[Event], loading: Pollable[list[str]]) -> None:
        self._events = events
        self._loading: Pollable[list[str]] | None = loading

    async def next_event(self) -> StreamEvent | Loaded:
        loading = self._loading
        if loading is None:
            return StreamEvent(await self._events.next_event())
        self._loading = None
        outcome = await select(loading, self._events.next_event())
        if outcome.index == 0:
            return Loaded(outcome.value)
        self._loading = outcome.remaining[0]
        return StreamEvent(outcome.value)


async def app(window: object, events: EventStream[Event]) -> int:
    _ = window
    stream = CustomStream(events, join_all(ready("Resource A"), ready("Resource B")))
    loads = 0
    while True:
        item = await stream.next_event()
        if isinstance(item, Loaded):
            loads += 1
            _LOG.info("resource loaded: %s", item.resource)
            continue
        if item.event is None:
            continue
        _LOG.info("event: %r", item.event)
        if isinstance(item.event, CloseRequestedEvent):
            return loads


def main() -> None:
    run(app)


if __name__ == "__main__":
    main()
