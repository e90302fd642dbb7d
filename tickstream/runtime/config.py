"""Runtime configuration sourced from environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

UNROUTABLE_POLICIES: tuple[str, ...] = ("drop", "log")
SPAWN_FAILURE_POLICIES: tuple[str, ...] = ("raise", "log")
LOG_FORMATS: tuple[str, ...] = ("text", "json")


def _flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _choice(name: str, choices: tuple[str, ...], default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    return value if value in choices else default


def _optional_path(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Immutable driver and window backend configuration."""

    window_backend: str = "rendercanvas_glfw"
    unroutable_policy: str = "drop"
    spawn_failure_policy: str = "raise"
    events_trace_enabled: bool = False
    log_level: str = "INFO"
    log_format: str = "text"
    log_file: str | None = None


def resolve_log_level_name(default: str = "INFO") -> str:
    """Resolve runtime log level with tickstream-prefixed override."""
    value = os.getenv("TICKSTREAM_LOG_LEVEL")
    if value is None:
        value = os.getenv("LOG_LEVEL", default)
    return value.strip().upper()


def resolve_window_backend(default: str = "rendercanvas_glfw") -> str:
    raw = os.getenv("TICKSTREAM_WINDOW_BACKEND", default)
    value = str(raw).strip().lower()
    if value in {"rendercanvas", "rendercanvas_glfw", "glfw"}:
        return "rendercanvas_glfw"
    if value in {"scripted", "headless"}:
        return "scripted"
    return value


def load_runtime_config() -> RuntimeConfig:
    """Load immutable runtime configuration from env vars."""
    return RuntimeConfig(
        window_backend=resolve_window_backend(),
        unroutable_policy=_choice("TICKSTREAM_UNROUTABLE_POLICY", UNROUTABLE_POLICIES, "drop"),
        spawn_failure_policy=_choice(
            "TICKSTREAM_SPAWN_FAILURE_POLICY", SPAWN_FAILURE_POLICIES, "raise"
        ),
        events_trace_enabled=_flag("TICKSTREAM_EVENTS_TRACE", False),
        log_level=resolve_log_level_name(),
        log_format=_choice("TICKSTREAM_LOG_FORMAT", LOG_FORMATS, "text"),
        log_file=_optional_path("TICKSTREAM_LOG_FILE"),
    )
