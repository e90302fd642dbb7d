from __future__ import annotations

import logging

import pytest

from tests.tickstream.conftest import key_down, pointer_move
from tickstream.api.events import CloseRequestedEvent, KeyboardEvent, PointerMovedEvent
from tickstream.runtime.config import RuntimeConfig
from tickstream.runtime.context import TaskContext
from tickstream.runtime.driver import Driver
from tickstream.runtime.entrypoint import run, run_custom
from tickstream.runtime.stream import EventStream
from tickstream.window.scripted import ScriptedPlatform, ScriptedTick

_CONFIG = RuntimeConfig(window_backend="scripted")


async def _collect_batches(window: object, events: EventStream[object]) -> list[list[object]]:
    _ = window
    batches: list[list[object]] = []
    while True:
        batch: list[object] = []
        while (event := await events.next_event()) is not None:
            if isinstance(event, CloseRequestedEvent):
                batches.append(batch)
                return batches
            batch.append(event)
        batches.append(batch)


def test_driver_delivers_each_tick_as_one_batch_in_arrival_order() -> None:
    platform = ScriptedPlatform.from_batches(
        [
            [key_down("a"), key_down("b")],
            [],
            [pointer_move(3.0, 4.0)],
        ]
    )

    driver = run(_collect_batches, platform=platform, config=_CONFIG)

    assert driver.root is not None
    assert driver.root.result() == [
        [KeyboardEvent("a", True), KeyboardEvent("b", True)],
        [],
        [PointerMovedEvent(0, 3.0, 4.0)],
        [],
    ]
    stats = driver.stats()
    assert stats.ticks == 4
    assert stats.events_ingested == 4
    assert stats.tasks_completed == 1
    assert stats.tasks_in_flight == 0


def test_driver_drops_unroutable_callbacks() -> None:
    platform = ScriptedPlatform.from_batches([[{"event_type": "before_draw"}, 42, key_down("x")]])

    driver = run(_collect_batches, platform=platform, config=_CONFIG)

    assert driver.root is not None
    assert driver.root.result() == [[KeyboardEvent("x", True)], []]
    assert driver.stats().events_dropped == 2


def test_driver_logs_unroutable_callbacks_when_configured(caplog) -> None:
    config = RuntimeConfig(window_backend="scripted", unroutable_policy="log")
    platform = ScriptedPlatform.from_batches([[{"event_type": "animate"}]])

    with caplog.at_level(logging.DEBUG, logger="tickstream.runtime"):
        run(_collect_batches, platform=platform, config=config)

    assert any("raw_event_dropped" in record.getMessage() for record in caplog.records)


def test_driver_stops_pumping_when_root_task_completes() -> None:
    async def _first_key(window: object, events: EventStream[object]) -> object:
        _ = window
        while True:
            event = await events.next_event()
            if event is not None:
                return event

    platform = ScriptedPlatform.from_batches([[key_down("q")], [key_down("w")], [key_down("e")]])

    driver = run(_first_key, platform=platform, config=_CONFIG)

    assert driver.root is not None
    assert driver.root.result() == KeyboardEvent("q", True)
    assert platform.stopped is True
    assert platform.delivered_ticks == 1
    assert driver.stats().ticks == 1


def test_driver_delivers_close_request_in_a_final_tick() -> None:
    platform = ScriptedPlatform.from_batches([[]])

    driver = run(_collect_batches, platform=platform, config=_CONFIG)

    assert driver.stopped is True
    assert driver.root is not None and driver.root.done is True
    assert driver.stats().ticks == 2


def test_driver_requests_ticks_while_timers_are_pending() -> None:
    async def _sleeper(window: object, context: TaskContext[object]) -> str:
        _ = window
        await context.sleep(1.0)
        return "woke"

    platform = ScriptedPlatform(
        ticks=(ScriptedTick(), ScriptedTick(advance_seconds=0.5), ScriptedTick(advance_seconds=0.5))
    )

    driver = run_custom(_sleeper, platform=platform, config=_CONFIG)

    assert driver.root is not None
    assert driver.root.result() == "woke"
    assert platform.tick_requests == 2
    assert platform.requested_delays == [1.0, 0.5]
    assert platform.delivered_ticks == 3


def test_driver_reraises_root_task_failure() -> None:
    async def _broken(window: object, events: EventStream[object]) -> None:
        _ = window
        await events.next_event()
        raise ValueError("app crashed")

    platform = ScriptedPlatform.from_batches([[key_down("a")], [key_down("b")]])

    with pytest.raises(ValueError, match="app crashed"):
        run(_broken, platform=platform, config=_CONFIG)
    assert platform.delivered_ticks == 1


def test_driver_applies_event_mapper_to_platform_and_close_events() -> None:
    async def _app(window: object, context: TaskContext[tuple[str, object]]) -> list[object]:
        _ = window
        seen: list[object] = []
        while True:
            while (event := await context.stream().next_event()) is not None:
                seen.append(event)
                if isinstance(event[1], CloseRequestedEvent):
                    return seen

    platform = ScriptedPlatform.from_batches([[key_down("m")]])

    driver = run_custom(_app, platform=platform, config=_CONFIG, event_mapper=lambda e: ("platform", e))

    assert driver.root is not None
    assert driver.root.result() == [
        ("platform", KeyboardEvent("m", True)),
        ("platform", CloseRequestedEvent()),
    ]


def test_spawned_task_dispatch_reaches_root_in_the_same_tick() -> None:
    async def _dispatcher(context: TaskContext[object]) -> None:
        context.dispatch("e3")

    async def _app(window: object, context: TaskContext[object]) -> list[object]:
        _ = window
        context.spawn(_dispatcher)
        seen: list[object] = []
        while True:
            while (event := await context.stream().next_event()) is not None:
                seen.append(event)
                if event == "e3":
                    return seen

    platform = ScriptedPlatform.from_batches([[key_down("k")], [key_down("never")]])

    driver = run_custom(_app, platform=platform, config=_CONFIG)

    assert driver.root is not None
    assert driver.root.result() == [KeyboardEvent("k", True), "e3"]
    assert platform.delivered_ticks == 1


def test_driver_ignores_callbacks_after_stop_and_single_root() -> None:
    platform = ScriptedPlatform()
    driver: Driver[object] = Driver(platform, config=_CONFIG)

    async def _noop() -> None:
        return None

    driver.start(_noop())
    with pytest.raises(RuntimeError, match="already started"):
        driver.start(_noop())

    driver.on_tick_complete()
    assert driver.stopped is True
    assert platform.stopped is True

    driver.on_raw(key_down("late"))
    driver.on_tick_complete()
    driver.on_shutdown()
    assert driver.stats().events_ingested == 0
    assert driver.stats().ticks == 1


def test_driver_rejects_unknown_unroutable_policy() -> None:
    with pytest.raises(ValueError):
        Driver(ScriptedPlatform(), config=RuntimeConfig(unroutable_policy="explode"))


def test_driver_requests_no_ticks_without_pending_timers() -> None:
    async def _wait_for_close(window: object, events: EventStream[object]) -> None:
        _ = window
        while not isinstance(await events.next_event(), CloseRequestedEvent):
            pass

    platform = ScriptedPlatform.from_batches([[key_down("a")], [], []])

    run(_wait_for_close, platform=platform, config=_CONFIG)

    assert platform.tick_requests == 0
    assert platform.requested_delays == []


def test_driver_requests_immediate_tick_for_zero_length_sleep() -> None:
    async def _yield_once(window: object, context: TaskContext[object]) -> str:
        _ = window
        await context.sleep(0.0)
        return "resumed"

    platform = ScriptedPlatform(ticks=(ScriptedTick(), ScriptedTick()))

    driver = run_custom(_yield_once, platform=platform, config=_CONFIG)

    assert driver.root is not None
    assert driver.root.result() == "resumed"
    assert platform.tick_requests == 1
    assert platform.requested_delays == []
