from __future__ import annotations

from tests.tickstream.conftest import key_down
from tickstream.api.events import KeyboardEvent
from tickstream.runtime.config import RuntimeConfig
from tickstream.runtime.entrypoint import run, run_custom
from tickstream.window.scripted import ScriptedPlatform, ScriptedTick
from tickstream_demos import custom_stream, custom_task, echo, non_blocking

_CONFIG = RuntimeConfig(window_backend="scripted")


def test_echo_counts_batches_until_close() -> None:
    platform = ScriptedPlatform.from_batches([[key_down("a")], []])

    driver = run(echo.app, platform=platform, config=_CONFIG)

    assert driver.root is not None
    assert driver.root.result() == 2


def test_non_blocking_loads_resources_while_handling_events() -> None:
    platform = ScriptedPlatform.from_batches([[key_down("a")], [key_down("b")]])

    driver = run(non_blocking.app, platform=platform, config=_CONFIG)

    assert driver.root is not None
    assert driver.root.result() == ["Resource A", "Resource B", "Resource C", "Resource D"]
    assert driver.stats().events_ingested == 3


def test_custom_stream_reports_one_load() -> None:
    platform = ScriptedPlatform.from_batches([[key_down("a")]])

    driver = run(custom_stream.app, platform=platform, config=_CONFIG)

    assert driver.root is not None
    assert driver.root.result() == 1


def test_custom_task_interleaves_timers_loader_and_spawned_handlers() -> None:
    platform = ScriptedPlatform(
        ticks=(
            ScriptedTick(),
            ScriptedTick(raw_events=(key_down(" "),)),
            ScriptedTick(advance_seconds=1.0),
            ScriptedTick(raw_events=(key_down("Escape"),)),
            ScriptedTick(raw_events=(key_down("unreached"),)),
        )
    )

    driver = run_custom(
        custom_task.app,
        platform=platform,
        config=_CONFIG,
        event_mapper=custom_task.PlatformEvent,
    )

    assert driver.root is not None
    assert driver.root.result() == [
        custom_task.Ticked(1),
        custom_task.PlatformEvent(KeyboardEvent(" ", True)),
        custom_task.Handled("space"),
        custom_task.AssetReady(
            custom_task.ASSET_PATH, len(f"contents of {custom_task.ASSET_PATH}".encode())
        ),
        custom_task.Ticked(2),
        custom_task.PlatformEvent(KeyboardEvent("Escape", True)),
    ]
    assert platform.delivered_ticks == 4
    assert platform.requested_delays == [0.5, 0.5, 1.0]
    assert driver.stats().tasks_in_flight == 1
