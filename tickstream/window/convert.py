"""Conversion of raw rendercanvas-style callbacks into platform events."""

from __future__ import annotations

from collections.abc import Callable

from tickstream.api.events import (
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

_EVENT_TYPE_ALIASES: dict[str, str] = {
    "mouse_down": "pointer_down",
    "mouse_up": "pointer_up",
    "mouse_move": "pointer_move",
}


def convert_platform_event(raw: object) -> Event | None:
    """Map one raw callback to zero or one event; unknown input maps to None."""
    event_type = str(_event_value(raw, "event_type", "")).strip().lower()
    event_type = _EVENT_TYPE_ALIASES.get(event_type, event_type)
    parser = _PARSERS.get(event_type)
    if parser is None:
        return None
    return parser(raw)


def _parse_resize(raw: object) -> ResizedEvent | None:
    size = _event_value(raw, "size")
    if isinstance(size, (tuple, list)) and len(size) >= 2:
        width, height = size[0], size[1]
    else:
        width = _event_value(raw, "width")
        height = _event_value(raw, "height")
    if not _is_number(width) or not _is_number(height):
        return None
    ratio = _event_value(raw, "pixel_ratio", 1.0)
    dpi_scale = float(ratio) if _is_number(ratio) and ratio > 0 else 1.0
    return ResizedEvent(float(width), float(height), dpi_scale)


def _parse_focus(raw: object) -> FocusChangedEvent | None:
    focused = _event_value(raw, "focused")
    if not isinstance(focused, bool):
        return None
    return FocusChangedEvent(focused)


def _parse_char(raw: object) -> ReceivedCharacterEvent | None:
    value = _event_value(raw, "data")
    if not isinstance(value, str) or not value:
        return None
    return ReceivedCharacterEvent(value)


def _parse_key(raw: object, *, is_down: bool) -> KeyboardEvent | None:
    key = _event_value(raw, "key")
    if not isinstance(key, str) or not key:
        return None
    return KeyboardEvent(key, is_down, _parse_modifiers(raw))


def _parse_pointer_crossing(raw: object, *, entered: bool) -> PointerEnteredEvent | PointerLeftEvent:
    pointer_id = _pointer_id(raw)
    if entered:
        return PointerEnteredEvent(pointer_id)
    return PointerLeftEvent(pointer_id)


def _parse_pointer_move(raw: object) -> PointerMovedEvent | None:
    x = _event_value(raw, "x")
    y = _event_value(raw, "y")
    if not _is_number(x) or not _is_number(y):
        return None
    return PointerMovedEvent(_pointer_id(raw), float(x), float(y), _parse_modifiers(raw))


def _parse_pointer_button(raw: object, *, is_down: bool) -> PointerInputEvent | None:
    x = _event_value(raw, "x")
    y = _event_value(raw, "y")
    if not _is_number(x) or not _is_number(y):
        return None
    button = _event_value(raw, "button", 0)
    if not isinstance(button, int) or isinstance(button, bool) or button <= 0:
        button = 1
    return PointerInputEvent(
        pointer_id=_pointer_id(raw),
        button=int(button),
        is_down=is_down,
        x=float(x),
        y=float(y),
        modifiers=_parse_modifiers(raw),
    )


def _parse_wheel(raw: object) -> ScrollEvent | None:
    dx = _event_value(raw, "dx", 0.0)
    dy = _event_value(raw, "dy")
    if not _is_number(dx) or not _is_number(dy):
        return None
    return ScrollEvent(float(dx), float(dy), _parse_modifiers(raw))


def _parse_modifiers(raw: object) -> Modifiers:
    names = _event_value(raw, "modifiers", ())
    if not isinstance(names, (tuple, list, set, frozenset)):
        return Modifiers()
    return Modifiers.from_names(names)


def _pointer_id(raw: object) -> int:
    pointer_id = _event_value(raw, "pointer_id", 0)
    if isinstance(pointer_id, int) and not isinstance(pointer_id, bool):
        return pointer_id
    return 0


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _event_value(event: object, key: str, default: object | None = None) -> object | None:
    if isinstance(event, dict):
        return event.get(key, default)
    return getattr(event, key, default)


_PARSERS: dict[str, Callable[[object], Event | None]] = {
    "resize": _parse_resize,
    "focus": _parse_focus,
    "char": _parse_char,
    "key_down": lambda raw: _parse_key(raw, is_down=True),
    "key_up": lambda raw: _parse_key(raw, is_down=False),
    "pointer_enter": lambda raw: _parse_pointer_crossing(raw, entered=True),
    "pointer_leave": lambda raw: _parse_pointer_crossing(raw, entered=False),
    "pointer_move": _parse_pointer_move,
    "pointer_down": lambda raw: _parse_pointer_button(raw, is_down=True),
    "pointer_up": lambda raw: _parse_pointer_button(raw, is_down=False),
    "wheel": _parse_wheel,
}


__all__ = ["convert_platform_event"]
