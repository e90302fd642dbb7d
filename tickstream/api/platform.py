"""Platform callback source contracts."""

from __future__ import annotations

from typing import Protocol


class PlatformSink(Protocol):
    """Receiver of raw platform callbacks, implemented by the runtime driver."""

    def on_raw(self, raw: object) -> None:
        """Accept one raw platform callback value."""

    def on_tick_complete(self) -> None:
        """Signal that every callback for the current tick was delivered."""

    def on_shutdown(self) -> None:
        """Signal that the platform requested shutdown."""


class PlatformSource(Protocol):
    """Push-driven platform event loop that calls back once per tick."""

    window: object | None

    def run(self, sink: PlatformSink) -> None:
        """Pump platform callbacks into `sink` until stopped."""

    def stop(self) -> None:
        """Stop pumping callbacks; no further sink calls are made."""

    def request_tick(self) -> None:
        """Ask the platform to deliver another tick even without input."""

    def request_tick_after(self, delay_seconds: float) -> None:
        """Ask for one tick once `delay_seconds` have passed."""


__all__ = ["PlatformSink", "PlatformSource"]
