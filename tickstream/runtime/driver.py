"""Driver bridging platform callbacks to the mailbox and task pool."""

from __future__ import annotations

import logging
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from tickstream.api.events import CloseRequestedEvent, Event
from tickstream.api.platform import PlatformSink, PlatformSource
from tickstream.runtime.config import UNROUTABLE_POLICIES, RuntimeConfig
from tickstream.runtime.context import TaskContext
from tickstream.runtime.stream import EventStream, Mailbox
from tickstream.runtime.tasks import TaskHandle, TaskPool
from tickstream.runtime.time import FrameClock
from tickstream.runtime.timers import Timers
from tickstream.window.convert import convert_platform_event

E = TypeVar("E")

RawConverter = Callable[[object], Event | None]
EventMapper = Callable[[Event], Any]

_LOG = logging.getLogger("tickstream.runtime")


@dataclass(frozen=True, slots=True)
class DriverStats:
    """Driver counters since construction."""

    ticks: int
    events_ingested: int
    events_dropped: int
    tasks_completed: int
    tasks_in_flight: int


class Driver(PlatformSink, Generic[E]):
    """Owns the mailbox and pool and runs them from platform callbacks.

    Per tick, raw callbacks are converted and pushed in arrival order; on tick
    completion the mailbox is marked ready, timers advance, and the pool runs
    until stalled. While timers are pending, one tick is requested for when the
    earliest one is due. The driver stops pumping when the platform signals
    shutdown or when the root task completes. In-flight tasks are never
    cancelled.
    """

    def __init__(
        self,
        platform: PlatformSource,
        *,
        config: RuntimeConfig | None = None,
        pool: TaskPool | None = None,
        timers: Timers | None = None,
        clock: FrameClock | None = None,
        converter: RawConverter = convert_platform_event,
        event_mapper: EventMapper | None = None,
    ) -> None:
        self._config = config or RuntimeConfig()
        if self._config.unroutable_policy not in UNROUTABLE_POLICIES:
            raise ValueError(f"unsupported unroutable_policy: {self._config.unroutable_policy!r}")
        self._platform = platform
        self._mailbox: Mailbox[E] = Mailbox()
        self._pool = pool or TaskPool()
        self._timers = timers or Timers()
        self._clock = clock or FrameClock(time_source=getattr(platform, "time_source", None))
        self._converter = converter
        self._event_mapper = event_mapper
        self._root: TaskHandle[Any] | None = None
        self._stopped = False
        self._tick_index = 0
        self._events_ingested = 0
        self._events_dropped = 0
        self._tasks_completed = 0

    @property
    def platform(self) -> PlatformSource:
        return self._platform

    @property
    def pool(self) -> TaskPool:
        return self._pool

    @property
    def timers(self) -> Timers:
        return self._timers

    @property
    def stopped(self) -> bool:
        return self._stopped

    @property
    def root(self) -> TaskHandle[Any] | None:
        return self._root

    def event_stream(self) -> EventStream[E]:
        return EventStream(self._mailbox)

    def task_context(self) -> TaskContext[E]:
        return TaskContext(
            self.event_stream(),
            self._pool,
            self._timers,
            spawn_failure_policy=self._config.spawn_failure_policy,
        )

    def start(self, root: Coroutine[Any, Any, Any], *, name: str = "app") -> TaskHandle[Any]:
        """Spawn the root application task; the driver stops when it completes."""
        if self._root is not None:
            raise RuntimeError("root task already started")
        self._root = self._pool.spawn(root, name=name)
        return self._root

    def run(self) -> None:
        """Pump the platform until it stops; re-raise a failed root task's error."""
        self._clock.start()
        self._platform.run(self)
        if self._root is not None and self._root.done:
            self._root.result()

    def stats(self) -> DriverStats:
        return DriverStats(
            ticks=self._tick_index,
            events_ingested=self._events_ingested,
            events_dropped=self._events_dropped,
            tasks_completed=self._tasks_completed,
            tasks_in_flight=self._pool.task_count,
        )

    def on_raw(self, raw: object) -> None:
        if self._stopped:
            return
        event = self._converter(raw)
        if event is None:
            self._events_dropped += 1
            if self._config.unroutable_policy == "log":
                _LOG.debug("raw_event_dropped payload=%r", raw)
            return
        self._enqueue(event)

    def on_tick_complete(self) -> None:
        if self._stopped:
            return
        self._drain_tick()
        if self._root is not None and self._root.done:
            _LOG.info("root_task_finished ticks=%d", self._tick_index)
            self._stop()
            return
        self._request_timer_tick()

    def on_shutdown(self) -> None:
        if self._stopped:
            return
        _LOG.info("shutdown_requested ticks=%d", self._tick_index)
        self._enqueue(CloseRequestedEvent())
        self._drain_tick()
        self._stop()

    def _enqueue(self, event: Event) -> None:
        mapped = self._event_mapper(event) if self._event_mapper is not None else event
        self._mailbox.push(mapped)
        self._events_ingested += 1

    def _drain_tick(self) -> None:
        self._tick_index += 1
        timing = self._clock.next(self._tick_index)
        self._mailbox.mark_ready()
        self._timers.scheduler.advance(timing.delta_seconds)
        self._tasks_completed += self._pool.run_until_stalled()

    def _request_timer_tick(self) -> None:
        delay = self._timers.next_due_in
        if delay is None:
            return
        if delay <= 0.0:
            self._platform.request_tick()
        else:
            self._platform.request_tick_after(delay)

    def _stop(self) -> None:
        self._stopped = True
        self._platform.stop()


__all__ = ["Driver", "DriverStats"]
