"""Public runtime error types."""

from __future__ import annotations


class SpawnError(RuntimeError):
    """Raised when the task pool refuses a new task."""


__all__ = ["SpawnError"]
