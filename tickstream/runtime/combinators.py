"""Racing and joining cooperative operations."""

from __future__ import annotations

from collections.abc import Coroutine
from typing import Any, Generic, NamedTuple, TypeVar

from tickstream.runtime.poll import PENDING, Pollable, Ready, Waker, as_pollable

T = TypeVar("T")

Operation = Pollable[Any] | Coroutine[Any, Any, Any]


class Selected(NamedTuple):
    """Outcome of `select`: the winner and every operation still pending."""

    value: Any
    index: int
    remaining: tuple[Pollable[Any], ...]


class Select(Pollable[Selected]):
    """First-of-N race over independently polled operations.

    Operations are polled in index order each pass, so the lowest ready index
    wins a tie. Losers are never polled past the winner and are handed back
    untouched in `Selected.remaining`.
    """

    __slots__ = ("_operations",)

    def __init__(self, operations: tuple[Pollable[Any], ...]) -> None:
        if not operations:
            raise ValueError("select requires at least one operation")
        self._operations = operations

    def poll(self, waker: Waker) -> Selected:
        for index, operation in enumerate(self._operations):
            value = operation.poll(waker)
            if value is PENDING:
                continue
            remaining = self._operations[:index] + self._operations[index + 1 :]
            return Selected(value, index, remaining)
        return PENDING


class JoinAll(Pollable[list[T]], Generic[T]):
    """Completes with every result, in argument order, once all are done."""

    __slots__ = ("_operations", "_results", "_done")

    def __init__(self, operations: tuple[Pollable[T], ...]) -> None:
        self._operations = operations
        self._results: list[T | None] = [None] * len(operations)
        self._done = [False] * len(operations)

    def poll(self, waker: Waker) -> list[T]:
        for index, operation in enumerate(self._operations):
            if self._done[index]:
                continue
            value = operation.poll(waker)
            if value is PENDING:
                continue
            self._results[index] = value
            self._done[index] = True
        if all(self._done):
            return list(self._results)  # type: ignore[arg-type]
        return PENDING


def select(*operations: Operation) -> Select:
    """Race operations; await the result for a `Selected`."""
    return Select(tuple(as_pollable(operation) for operation in operations))


def join_all(*operations: Operation) -> JoinAll[Any]:
    return JoinAll(tuple(as_pollable(operation) for operation in operations))


def ready(value: T) -> Ready[T]:
    return Ready(value)


__all__ = ["JoinAll", "Select", "Selected", "join_all", "ready", "select"]
