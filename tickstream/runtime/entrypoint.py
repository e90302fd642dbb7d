"""Application entrypoints."""

from __future__ import annotations

from collections.abc import Callable, Coroutine
from typing import Any, TypeVar

from tickstream.api.events import Event
from tickstream.api.platform import PlatformSource
from tickstream.runtime.config import RuntimeConfig, load_runtime_config
from tickstream.runtime.context import TaskContext
from tickstream.runtime.driver import Driver, EventMapper
from tickstream.runtime.logging import setup_tickstream_logging, shutdown_tickstream_logging
from tickstream.runtime.stream import EventStream
from tickstream.window.factory import create_platform

E = TypeVar("E")

StreamApp = Callable[[Any, EventStream[Event]], Coroutine[Any, Any, Any]]
ContextApp = Callable[[Any, TaskContext[E]], Coroutine[Any, Any, Any]]


def run(
    app: StreamApp,
    *,
    platform: PlatformSource | None = None,
    config: RuntimeConfig | None = None,
) -> Driver[Event]:
    """Run `app(window, events)` as the root task until it or the platform stops."""
    return _run_root(
        lambda driver: app(driver.platform.window, driver.event_stream()),
        name=_app_name(app),
        platform=platform,
        config=config,
        event_mapper=None,
    )


def run_custom(
    app: ContextApp[E],
    *,
    platform: PlatformSource | None = None,
    config: RuntimeConfig | None = None,
    event_mapper: EventMapper | None = None,
) -> Driver[E]:
    """Run `app(window, context)` with a task context over custom events.

    `event_mapper` converts each platform event into the application's event
    type before it is queued.
    """
    return _run_root(
        lambda driver: app(driver.platform.window, driver.task_context()),
        name=_app_name(app),
        platform=platform,
        config=config,
        event_mapper=event_mapper,
    )


def _run_root(
    make_root: Callable[[Driver[Any]], Coroutine[Any, Any, Any]],
    *,
    name: str,
    platform: PlatformSource | None,
    config: RuntimeConfig | None,
    event_mapper: EventMapper | None,
) -> Driver[Any]:
    cfg = config or load_runtime_config()
    owns_logging = setup_tickstream_logging(
        cfg.log_level,
        console_format=cfg.log_format,
        file_path=cfg.log_file,
    )
    try:
        source = platform if platform is not None else create_platform(config=cfg)
        driver: Driver[Any] = Driver(source, config=cfg, event_mapper=event_mapper)
        driver.start(make_root(driver), name=name)
        driver.run()
    finally:
        if owns_logging:
            shutdown_tickstream_logging()
    return driver


def _app_name(app: Callable[..., Any]) -> str:
    return str(getattr(app, "__qualname__", "app"))
