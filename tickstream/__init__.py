"""Async event streams over push-driven platform event loops."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from tickstream.runtime.driver import Driver


def run(app: Any, **kwargs: Any) -> "Driver[Any]":
    """Run `app(window, events)` on the configured platform."""
    from tickstream.runtime.entrypoint import run as runtime_run

    return runtime_run(app, **kwargs)


def run_custom(app: Any, **kwargs: Any) -> "Driver[Any]":
    """Run `app(window, context)` with spawn/dispatch support."""
    from tickstream.runtime.entrypoint import run_custom as runtime_run_custom

    return runtime_run_custom(app, **kwargs)


__all__ = ["run", "run_custom"]
