"""Platform sources and raw event conversion."""

from tickstream.window.convert import convert_platform_event
from tickstream.window.factory import create_platform
from tickstream.window.rendercanvas_glfw import RenderCanvasPlatform, create_rendercanvas_platform
from tickstream.window.scripted import ScriptedPlatform, ScriptedTick

__all__ = [
    "RenderCanvasPlatform",
    "ScriptedPlatform",
    "ScriptedTick",
    "convert_platform_event",
    "create_platform",
    "create_rendercanvas_platform",
]
