"""Platform backend selection and factory helpers."""

from __future__ import annotations

from typing import Any

from tickstream.api.platform import PlatformSource
from tickstream.runtime.config import RuntimeConfig, load_runtime_config
from tickstream.window.rendercanvas_glfw import create_rendercanvas_platform
from tickstream.window.scripted import ScriptedPlatform


def create_platform(
    *,
    config: RuntimeConfig | None = None,
    backend: str | None = None,
    **window_options: Any,
) -> PlatformSource:
    """Create the configured platform source; window options pass through as-is."""
    cfg = config or load_runtime_config()
    resolved = (backend or cfg.window_backend).strip().lower()
    if resolved in {"rendercanvas", "rendercanvas_glfw", "glfw"}:
        return create_rendercanvas_platform(
            events_trace_enabled=cfg.events_trace_enabled,
            **window_options,
        )
    if resolved in {"scripted", "headless"}:
        return ScriptedPlatform(**window_options)
    raise RuntimeError(f"Unsupported TICKSTREAM_WINDOW_BACKEND: {resolved!r}")


__all__ = ["create_platform"]
