"""Cooperative poll protocol shared by streams, timers and the task pool.

A `Pollable` is polled with a `Waker`. It either completes with a value or
returns `PENDING` after arranging for `waker.wake()` to be called once it can
make progress. `await pollable` inside a pool task polls with the waker of the
task currently being stepped and suspends the coroutine while pending.
"""

from __future__ import annotations

from collections.abc import Callable, Coroutine, Generator
from contextvars import ContextVar
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class _Pending:
    __slots__ = ()

    def __repr__(self) -> str:
        return "PENDING"

    def __bool__(self) -> bool:
        return False


PENDING: Any = _Pending()


class _Suspend:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<suspend>"


_SUSPEND = _Suspend()


class Waker:
    """Handle that resumes a parked computation."""

    __slots__ = ("_callback", "label")

    def __init__(self, callback: Callable[[], None], *, label: str = "") -> None:
        self._callback = callback
        self.label = label

    def wake(self) -> None:
        self._callback()

    def __repr__(self) -> str:
        return f"Waker({self.label!r})"


_CURRENT_WAKER: ContextVar[Waker | None] = ContextVar("tickstream_current_waker", default=None)


def current_waker() -> Waker:
    """Return the waker of the task being stepped right now."""
    waker = _CURRENT_WAKER.get()
    if waker is None:
        raise RuntimeError("tickstream awaitables must be awaited inside a task pool task")
    return waker


class Pollable(Generic[T]):
    """Base class for awaitable operations driven by explicit polling."""

    __slots__ = ()

    def poll(self, waker: Waker) -> T:
        """Return the result, or `PENDING` after registering `waker`."""
        raise NotImplementedError

    def __await__(self) -> Generator[Any, None, T]:
        while True:
            result = self.poll(current_waker())
            if result is not PENDING:
                return result
            yield _SUSPEND


class CoroutinePoll(Pollable[T]):
    """Adapts a coroutine so it can be polled like any other operation."""

    __slots__ = ("_coroutine", "_done", "_value")

    def __init__(self, coroutine: Coroutine[Any, Any, T]) -> None:
        self._coroutine = coroutine
        self._done = False
        self._value: T | None = None

    @property
    def done(self) -> bool:
        return self._done

    @property
    def coroutine(self) -> Coroutine[Any, Any, T]:
        return self._coroutine

    def poll(self, waker: Waker) -> T:
        if self._done:
            raise RuntimeError("coroutine polled after completion")
        token = _CURRENT_WAKER.set(waker)
        try:
            yielded = self._coroutine.send(None)
        except StopIteration as stop:
            self._done = True
            self._value = stop.value
            return stop.value
        except BaseException:
            self._done = True
            raise
        finally:
            _CURRENT_WAKER.reset(token)
        if yielded is not _SUSPEND:
            self._done = True
            self._coroutine.close()
            raise RuntimeError(
                f"unsupported awaitable yielded {yielded!r}; "
                "only tickstream awaitables may be awaited inside a task"
            )
        return PENDING

    def close(self) -> None:
        if not self._done:
            self._done = True
            self._coroutine.close()

    def __repr__(self) -> str:
        name = getattr(self._coroutine, "__qualname__", type(self._coroutine).__name__)
        return f"CoroutinePoll({name}, done={self._done})"


class Ready(Pollable[T]):
    """Operation that is complete from the start."""

    __slots__ = ("_value",)

    def __init__(self, value: T) -> None:
        self._value = value

    def poll(self, waker: Waker) -> T:
        _ = waker
        return self._value


def as_pollable(operation: Pollable[T] | Coroutine[Any, Any, T]) -> Pollable[T]:
    """Return `operation` as a pollable, wrapping coroutines."""
    if isinstance(operation, Pollable):
        return operation
    if isinstance(operation, Coroutine):
        return CoroutinePoll(operation)
    raise TypeError(f"expected a Pollable or coroutine, got {type(operation).__name__}")


__all__ = [
    "PENDING",
    "CoroutinePoll",
    "Pollable",
    "Ready",
    "Waker",
    "as_pollable",
    "current_waker",
]
