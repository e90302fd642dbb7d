"""Keep handling events while a resource loads, using `select`."""

from __future__ import annotations

import logging

from tickstream import run
from tickstream.api.events import CloseRequestedEvent, Event
from tickstream.runtime.combinators import join_all, ready, select
from tickstream.runtime.poll import Pollable
from tickstream.runtime.stream import EventStream

_LOG = logging.getLogger("tickstream.demos")


def load_resources() -> Pollable[list[str]]:
    return join_all(
        ready("Resource A"),
        ready("Resource B"),
        ready("Resource C"),
        ready("Resource D"),
    )


async def app(window: object, events: EventStream[Event]) -> list[str] | None:
    _ = window
    loading: Pollable[list[str]] | None = load_resources()
    loaded: list[str] | None = None
    while True:
        if loading is None:
            event = await events.next_event()
            if event is not None:
                _LOG.info("resources loaded, event: %r", event)
        else:
            outcome = await select(loading, events.next_event())
            if outcome.index == 0:
                loaded = outcome.value
                loading = None
                _LOG.info("loaded resources: %s", ", ".join(loaded))
                continue
            loading = outcome.remaining[0]
            event = outcome.value
            _LOG.info("resources loading, event: %r", event)
        if isinstance(event, CloseRequestedEvent):
            return loaded


def main() -> None:
    run(app)


if __name__ == "__main__":
    main()
