"""Single-threaded cooperative task pool."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Coroutine
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from tickstream.api.errors import SpawnError
from tickstream.runtime.poll import PENDING, CoroutinePoll, Pollable, Waker

T = TypeVar("T")

_LOG = logging.getLogger("tickstream.runtime")


class TaskHandle(Generic[T]):
    """Completion view of one spawned task.

    Tasks are fire-and-forget: a handle can observe the outcome but cannot
    cancel the task.
    """

    def __init__(self, task_id: int, name: str) -> None:
        self.task_id = task_id
        self.name = name
        self._done = False
        self._result: T | None = None
        self._exception: BaseException | None = None
        self._joiners: list[Waker] = []

    @property
    def done(self) -> bool:
        return self._done

    def result(self) -> T:
        """Return the task result; re-raise its exception if it failed."""
        if not self._done:
            raise RuntimeError(f"task {self.task_id} has not completed")
        if self._exception is not None:
            raise self._exception
        return self._result  # type: ignore[return-value]

    def exception(self) -> BaseException | None:
        if not self._done:
            raise RuntimeError(f"task {self.task_id} has not completed")
        return self._exception

    def join(self) -> _Join[T]:
        """Return an operation that completes when the task does."""
        return _Join(self)

    def _finish(self, result: T | None, exception: BaseException | None) -> None:
        self._done = True
        self._result = result
        self._exception = exception
        joiners = self._joiners
        self._joiners = []
        for waker in joiners:
            waker.wake()

    def _park_joiner(self, waker: Waker) -> None:
        if waker not in self._joiners:
            self._joiners.append(waker)

    def __repr__(self) -> str:
        return f"TaskHandle(id={self.task_id}, name={self.name!r}, done={self._done})"


class _Join(Pollable[T]):
    __slots__ = ("_handle",)

    def __init__(self, handle: TaskHandle[T]) -> None:
        self._handle = handle

    def poll(self, waker: Waker) -> T:
        if self._handle.done:
            return self._handle.result()
        self._handle._park_joiner(waker)
        return PENDING


@dataclass(slots=True)
class _Task:
    task_id: int
    future: CoroutinePoll[Any]
    handle: TaskHandle[Any]
    waker: Waker
    queued: bool = False
    polls: int = 0


class TaskPool:
    """Unordered collection of in-flight cooperative tasks.

    Tasks run only inside `run_until_stalled`, each until its next suspension
    point. Exactly one task runs at any instant.
    """

    def __init__(self) -> None:
        self._tasks: dict[int, _Task] = {}
        self._ready: deque[int] = deque()
        self._next_task_id = 1
        self._closed = False
        self._running = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def task_count(self) -> int:
        """Return count of tasks that have not completed."""
        return len(self._tasks)

    @property
    def ready_count(self) -> int:
        return len(self._ready)

    def spawn(self, coroutine: Coroutine[Any, Any, T], *, name: str | None = None) -> TaskHandle[T]:
        """Queue a coroutine as a new task; it first runs on the next pass."""
        if self._closed:
            coroutine.close()
            raise SpawnError("task pool is closed")
        task_id = self._next_task_id
        self._next_task_id += 1
        label = name or getattr(coroutine, "__qualname__", "task")
        handle: TaskHandle[T] = TaskHandle(task_id, label)
        waker = Waker(lambda: self._schedule(task_id), label=f"task-{task_id}")
        self._tasks[task_id] = _Task(
            task_id=task_id,
            future=CoroutinePoll(coroutine),
            handle=handle,
            waker=waker,
        )
        self._schedule(task_id)
        _LOG.debug("task_spawned id=%d name=%s", task_id, label)
        return handle

    def run_until_stalled(self) -> int:
        """Poll ready tasks until none can progress; return completed count.

        Tasks spawned or woken during the pass are polled in the same pass.
        """
        if self._running:
            raise RuntimeError("run_until_stalled is not reentrant")
        self._running = True
        completed = 0
        try:
            while self._ready:
                task_id = self._ready.popleft()
                task = self._tasks.get(task_id)
                if task is None:
                    continue
                task.queued = False
                if self._step(task):
                    completed += 1
        finally:
            self._running = False
        return completed

    def close(self) -> None:
        """Reject further spawns; in-flight tasks are left untouched."""
        self._closed = True

    def _step(self, task: _Task) -> bool:
        task.polls += 1
        try:
            result = task.future.poll(task.waker)
        except Exception as exc:
            self._tasks.pop(task.task_id, None)
            _LOG.error(
                "task_failed id=%d name=%s error=%s",
                task.task_id,
                task.handle.name,
                exc,
                exc_info=exc,
            )
            task.handle._finish(None, exc)
            return True
        except BaseException as exc:
            self._tasks.pop(task.task_id, None)
            task.handle._finish(None, exc)
            raise
        if result is PENDING:
            return False
        self._tasks.pop(task.task_id, None)
        _LOG.debug("task_completed id=%d name=%s polls=%d", task.task_id, task.handle.name, task.polls)
        task.handle._finish(result, None)
        return True

    def _schedule(self, task_id: int) -> None:
        task = self._tasks.get(task_id)
        if task is None or task.queued:
            return
        task.queued = True
        self._ready.append(task_id)


__all__ = ["TaskHandle", "TaskPool"]
