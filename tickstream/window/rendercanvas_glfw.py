"""Rendercanvas/GLFW-backed platform source."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from tickstream.api.platform import PlatformSink, PlatformSource

_LOG = logging.getLogger("tickstream.window")

FORWARDED_EVENT_TYPES: tuple[str, ...] = (
    "resize",
    "focus",
    "pointer_down",
    "pointer_move",
    "pointer_up",
    "pointer_enter",
    "pointer_leave",
    "key_down",
    "key_up",
    "char",
    "wheel",
)


def run_backend_loop(rc_auto: Any) -> None:
    """Run rendercanvas backend loop."""
    loop = getattr(rc_auto, "loop", None)
    if loop is not None and hasattr(loop, "run"):
        loop.run()
        return
    run_func = getattr(rc_auto, "run", None)
    if callable(run_func):
        run_func()
        return
    raise RuntimeError("rendercanvas.auto did not expose a runnable loop.")


def stop_backend_loop(rc_auto: Any) -> None:
    """Stop rendercanvas backend loop when supported."""
    loop = getattr(rc_auto, "loop", None)
    if loop is not None and hasattr(loop, "stop"):
        loop.stop()


@dataclass(slots=True)
class RenderCanvasPlatform(PlatformSource):
    """Platform source over a rendercanvas canvas.

    Canvas event handlers forward raw events to the sink and request a draw;
    each draw marks the end of a tick. A `close` event is the shutdown signal.
    """

    canvas: Any
    backend: str = "rendercanvas.glfw"
    events_trace_enabled: bool = False
    _rc_auto: Any | None = field(default=None, repr=False)
    _sink: PlatformSink | None = field(default=None, repr=False)
    _stopped: bool = field(default=False, repr=False)

    @property
    def window(self) -> Any:
        return self.canvas

    def run(self, sink: PlatformSink) -> None:
        self._sink = sink
        self._bind_canvas_events()
        draw_setter = getattr(self.canvas, "request_draw", None)
        if callable(draw_setter):
            draw_setter(self._on_draw)
        if self._rc_auto is None:
            raise RuntimeError("rendercanvas backend loop unavailable.")
        run_backend_loop(self._rc_auto)

    def stop(self) -> None:
        if self._stopped:
            return
        self._stopped = True
        if self._rc_auto is not None:
            stop_backend_loop(self._rc_auto)
        closer = getattr(self.canvas, "close", None)
        if callable(closer):
            closer()

    def request_tick(self) -> None:
        if self._stopped:
            return
        request_draw = getattr(self.canvas, "request_draw", None)
        if callable(request_draw):
            try:
                request_draw()
            except TypeError:
                return

    def request_tick_after(self, delay_seconds: float) -> None:
        if self._stopped:
            return
        loop = getattr(self._rc_auto, "loop", None)
        call_later = getattr(loop, "call_later", None)
        if not callable(call_later):
            self.request_tick()
            return
        call_later(float(delay_seconds), self.request_tick)

    def _bind_canvas_events(self) -> None:
        add_handler = getattr(self.canvas, "add_event_handler", None)
        if not callable(add_handler):
            return
        for event_type in FORWARDED_EVENT_TYPES:
            self._try_add_event_handler(add_handler, self._on_raw_event, event_type)
        self._try_add_event_handler(add_handler, self._on_close, "close")

    def _try_add_event_handler(self, add_handler: Any, handler: Any, event_type: str) -> None:
        try:
            add_handler(handler, event_type)
        except (TypeError, ValueError, KeyError) as exc:
            _LOG.debug("event_handler_rejected type=%s error=%s", event_type, exc)

    def _on_raw_event(self, event: object) -> None:
        if self._stopped or self._sink is None:
            return
        if self.events_trace_enabled:
            _LOG.debug("window_event payload=%r", event)
        self._sink.on_raw(event)
        self.request_tick()

    def _on_close(self, event: object) -> None:
        _ = event
        if self._stopped or self._sink is None:
            return
        self._sink.on_shutdown()

    def _on_draw(self) -> None:
        if self._stopped or self._sink is None:
            return
        self._sink.on_tick_complete()


def create_rendercanvas_platform(
    canvas: Any | None = None,
    *,
    width: int = 1024,
    height: int = 768,
    title: str = "tickstream",
    update_mode: str = "ondemand",
    max_fps: float = 60.0,
    vsync: bool = True,
    events_trace_enabled: bool = False,
) -> RenderCanvasPlatform:
    """Create a platform source over an existing or newly created canvas."""
    try:
        import rendercanvas.auto as rc_auto
    except ImportError as exc:
        raise RuntimeError(
            "Render canvas backend unavailable. Install a desktop backend such as glfw."
        ) from exc
    if canvas is not None:
        return RenderCanvasPlatform(
            canvas=canvas, events_trace_enabled=events_trace_enabled, _rc_auto=rc_auto
        )
    canvas_cls = getattr(rc_auto, "RenderCanvas", None)
    if canvas_cls is None:
        raise RuntimeError("rendercanvas.auto did not expose RenderCanvas.")
    try:
        canvas = canvas_cls(
            size=(int(width), int(height)),
            title=title,
            update_mode=update_mode,
            max_fps=float(max_fps),
            vsync=bool(vsync),
        )
    except TypeError:
        canvas = canvas_cls(size=(int(width), int(height)), title=title)
    return RenderCanvasPlatform(
        canvas=canvas, events_trace_enabled=events_trace_enabled, _rc_auto=rc_auto
    )


__all__ = ["RenderCanvasPlatform", "create_rendercanvas_platform"]
