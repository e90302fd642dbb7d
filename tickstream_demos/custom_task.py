"""Custom events, background tasks and dispatch through a TaskContext."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tickstream import run_custom
from tickstream.api.events import CloseRequestedEvent, Event, KeyboardEvent
from tickstream.runtime.context import TaskContext

_LOG = logging.getLogger("tickstream.demos")


@dataclass(frozen=True, slots=True)
class PlatformEvent:
    event: Event


@dataclass(frozen=True, slots=True)
class Ticked:
    count: int


@dataclass(frozen=True, slots=True)
class Handled:
    key: str


@dataclass(frozen=True, slots=True)
class AssetReady:
    path: str
    size: int


MyEvent = PlatformEvent | Ticked | Handled | AssetReady

ASSET_PATH = "assets/level-1.txt"


async def tick_loop(context: TaskContext[MyEvent]) -> None:
    count = 0
    while True:
        count += 1
        context.dispatch(Ticked(count))
        await context.sleep(1.0)


async def load_file(context: TaskContext[MyEvent], path: str) -> bytes:
    """Stand-in for slow I/O: the contents arrive half a second later."""
    await context.sleep(0.5)
    return f"contents of {path}".encode()


async def asset_loader(context: TaskContext[MyEvent]) -> None:
    data = await load_file(context, ASSET_PATH)
    context.dispatch(AssetReady(ASSET_PATH, len(data)))


def button_handler(key: str):
    async def handle(context: TaskContext[MyEvent]) -> None:
        _LOG.info("handling %s", key)
        context.dispatch(Handled(key))

    return handle


async def app(window: object, context: TaskContext[MyEvent]) -> list[MyEvent]:
    _ = window
    seen: list[MyEvent] = []
    context.spawn(tick_loop)
    context.spawn(asset_loader)
    while True:
        while (event := await context.stream().next_event()) is not None:
            _LOG.info("got event: %r", event)
            seen.append(event)
            if not isinstance(event, PlatformEvent):
                continue
            platform_event = event.event
            if isinstance(platform_event, CloseRequestedEvent):
                return seen
            if not isinstance(platform_event, KeyboardEvent) or not platform_event.is_down:
                continue
            if platform_event.key == "Escape":
                return seen
            if platform_event.key == " ":
                context.spawn(button_handler("space"))


def main() -> None:
    run_custom(app, event_mapper=PlatformEvent)


if __name__ == "__main__":
    main()
