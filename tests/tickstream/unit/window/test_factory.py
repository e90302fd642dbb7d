from __future__ import annotations

import pytest

import tickstream.window.factory as factory
from tickstream.runtime.config import RuntimeConfig
from tickstream.window.scripted import ScriptedPlatform


def test_create_platform_uses_rendercanvas_backend(monkeypatch) -> None:
    sentinel = object()
    seen: dict[str, object] = {}

    def _create(**kwargs):
        seen.update(kwargs)
        return sentinel

    monkeypatch.setenv("TICKSTREAM_WINDOW_BACKEND", "rendercanvas_glfw")
    monkeypatch.setattr(factory, "create_rendercanvas_platform", _create)

    out = factory.create_platform(width=800, height=600, title="x")

    assert out is sentinel
    assert seen == {"events_trace_enabled": False, "width": 800, "height": 600, "title": "x"}


def test_create_platform_builds_scripted_platform() -> None:
    out = factory.create_platform(config=RuntimeConfig(window_backend="scripted"))

    assert isinstance(out, ScriptedPlatform)
    assert out.ticks == ()


def test_create_platform_backend_argument_overrides_config() -> None:
    out = factory.create_platform(config=RuntimeConfig(), backend="headless")

    assert isinstance(out, ScriptedPlatform)


def test_create_platform_rejects_unknown_backend(monkeypatch) -> None:
    monkeypatch.setenv("TICKSTREAM_WINDOW_BACKEND", "sdl")

    with pytest.raises(RuntimeError, match="Unsupported TICKSTREAM_WINDOW_BACKEND"):
        factory.create_platform()
