"""Log every event, one batch per tick."""

from __future__ import annotations

import logging

from tickstream import run
from tickstream.api.events import CloseRequestedEvent, Event
from tickstream.runtime.stream import EventStream

_LOG = logging.getLogger("tickstream.demos")


async def app(window: object, events: EventStream[Event]) -> int:
    _ = window
    batches = 0
    while True:
        while (event := await events.next_event()) is not None:
            _LOG.info("event %r", event)
            if isinstance(event, CloseRequestedEvent):
                return batches
        batches += 1


def main() -> None:
    run(app)


if __name__ == "__main__":
    main()
