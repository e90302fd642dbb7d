"""Task context shared by the root application task and everything it spawns."""

from __future__ import annotations

import logging
from collections.abc import Callable, Coroutine
from typing import Any, Generic, TypeVar

from tickstream.api.errors import SpawnError
from tickstream.runtime.stream import EventStream
from tickstream.runtime.tasks import TaskHandle, TaskPool
from tickstream.runtime.timers import Sleep, Timers

E = TypeVar("E")
T = TypeVar("T")

_LOG = logging.getLogger("tickstream.runtime")
_SPAWN_FAILURE_POLICIES = frozenset({"raise", "log"})


class TaskContext(Generic[E]):
    """Event stream plus spawner; every clone shares the mailbox and pool."""

    def __init__(
        self,
        stream: EventStream[E],
        pool: TaskPool,
        timers: Timers | None = None,
        *,
        spawn_failure_policy: str = "raise",
    ) -> None:
        if spawn_failure_policy not in _SPAWN_FAILURE_POLICIES:
            raise ValueError(f"unsupported spawn_failure_policy: {spawn_failure_policy!r}")
        self._stream = stream
        self._pool = pool
        self._timers = timers if timers is not None else Timers()
        self._spawn_failure_policy = spawn_failure_policy

    @property
    def timers(self) -> Timers:
        return self._timers

    def clone(self) -> TaskContext[E]:
        return TaskContext(
            self._stream.clone(),
            self._pool,
            self._timers,
            spawn_failure_policy=self._spawn_failure_policy,
        )

    def __copy__(self) -> TaskContext[E]:
        return self.clone()

    def stream(self) -> EventStream[E]:
        """Return the event stream the owning task should pull from."""
        return self._stream

    def dispatch(self, event: E) -> None:
        """Queue a synthetic event behind everything already pushed."""
        self._stream.mailbox.push(event)

    def spawn(self, factory: TaskFactory[E, T], *, name: str | None = None) -> TaskHandle[T] | None:
        """Start `factory(clone_of_self)` as a concurrent task.

        Raises `SpawnError` when the pool rejects the task, unless the context
        was built with the `log` failure policy, in which case the failure is
        logged and `None` is returned.
        """
        task = factory(self.clone())
        task_name = name or getattr(factory, "__qualname__", None)
        try:
            return self._pool.spawn(task, name=task_name)
        except SpawnError:
            if self._spawn_failure_policy == "raise":
                raise
            _LOG.error("spawn_failed name=%s", task_name, exc_info=True)
            return None

    def sleep(self, seconds: float) -> Sleep:
        return self._timers.sleep(seconds)


TaskFactory = Callable[[TaskContext[E]], Coroutine[Any, Any, T]]

__all__ = ["TaskContext", "TaskFactory"]
