"""Public tickstream API contracts."""

from tickstream.api.errors import SpawnError
from tickstream.api.events import (
    CloseRequestedEvent,
    Event,
    FocusChangedEvent,
    KeyboardEvent,
    Modifiers,
    PointerEnteredEvent,
    PointerInputEvent,
    PointerLeftEvent,
    PointerMovedEvent,
    ReceivedCharacterEvent,
    ResizedEvent,
    ScrollEvent,
)
from tickstream.api.logging import LoggingConfig
from tickstream.api.platform import PlatformSink, PlatformSource

__all__ = [
    "CloseRequestedEvent",
    "Event",
    "FocusChangedEvent",
    "KeyboardEvent",
    "LoggingConfig",
    "Modifiers",
    "PlatformSink",
    "PlatformSource",
    "PointerEnteredEvent",
    "PointerInputEvent",
    "PointerLeftEvent",
    "PointerMovedEvent",
    "ReceivedCharacterEvent",
    "ResizedEvent",
    "ScrollEvent",
    "SpawnError",
]
