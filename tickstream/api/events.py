"""Public platform event types."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Modifiers:
    """Keyboard modifier state attached to key and pointer events."""

    shift: bool = False
    ctrl: bool = False
    alt: bool = False
    logo: bool = False

    @classmethod
    def from_names(cls, names: Iterable[object]) -> Modifiers:
        """Build modifier state from backend modifier names."""
        normalized = {str(name).strip().lower() for name in names}
        return cls(
            shift="shift" in normalized,
            ctrl="control" in normalized or "ctrl" in normalized,
            alt="alt" in normalized,
            logo=bool(normalized & {"meta", "super", "logo", "cmd", "command"}),
        )


@dataclass(frozen=True, slots=True)
class ResizedEvent:
    """The window has a new logical size."""

    logical_width: float
    logical_height: float
    dpi_scale: float = 1.0


@dataclass(frozen=True, slots=True)
class FocusChangedEvent:
    """The window gained (True) or lost (False) focus."""

    focused: bool


@dataclass(frozen=True, slots=True)
class ReceivedCharacterEvent:
    """Text input, independent of the physical key that produced it."""

    character: str


@dataclass(frozen=True, slots=True)
class KeyboardEvent:
    """A key was pressed or released.

    Operating system key repeat may produce several presses for one hold.
    """

    key: str
    is_down: bool
    modifiers: Modifiers = Modifiers()


@dataclass(frozen=True, slots=True)
class PointerEnteredEvent:
    pointer_id: int


@dataclass(frozen=True, slots=True)
class PointerLeftEvent:
    pointer_id: int


@dataclass(frozen=True, slots=True)
class PointerMovedEvent:
    """Pointer position in logical window coordinates."""

    pointer_id: int
    x: float
    y: float
    modifiers: Modifiers = Modifiers()


@dataclass(frozen=True, slots=True)
class PointerInputEvent:
    """A pointer button was pressed or released."""

    pointer_id: int
    button: int
    is_down: bool
    x: float
    y: float
    modifiers: Modifiers = Modifiers()


@dataclass(frozen=True, slots=True)
class ScrollEvent:
    """Wheel or trackpad scroll delta."""

    dx: float
    dy: float
    modifiers: Modifiers = Modifiers()


@dataclass(frozen=True, slots=True)
class CloseRequestedEvent:
    """The platform asked the application to shut down."""


Event = (
    ResizedEvent
    | FocusChangedEvent
    | ReceivedCharacterEvent
    | KeyboardEvent
    | PointerEnteredEvent
    | PointerLeftEvent
    | PointerMovedEvent
    | PointerInputEvent
    | ScrollEvent
    | CloseRequestedEvent
)


__all__ = [
    "CloseRequestedEvent",
    "Event",
    "FocusChangedEvent",
    "KeyboardEvent",
    "Modifiers",
    "PointerEnteredEvent",
    "PointerInputEvent",
    "PointerLeftEvent",
    "PointerMovedEvent",
    "ReceivedCharacterEvent",
    "ResizedEvent",
    "ScrollEvent",
]
