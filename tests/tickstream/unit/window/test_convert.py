from __future__ import annotations

from types import SimpleNamespace

import pytest

from tickstream.api.events import (
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
from tickstream.window.convert import convert_platform_event


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (
            {"event_type": "resize", "width": 800, "height": 600, "pixel_ratio": 2.0},
            ResizedEvent(800.0, 600.0, 2.0),
        ),
        ({"event_type": "resize", "size": (320, 240)}, ResizedEvent(320.0, 240.0, 1.0)),
        ({"event_type": "focus", "focused": False}, FocusChangedEvent(False)),
        ({"event_type": "char", "data": "é"}, ReceivedCharacterEvent("é")),
        (
            {"event_type": "key_down", "key": "a", "modifiers": ("Shift", "Control")},
            KeyboardEvent("a", True, Modifiers(shift=True, ctrl=True)),
        ),
        ({"event_type": "key_up", "key": "Escape"}, KeyboardEvent("Escape", False)),
        ({"event_type": "pointer_enter", "pointer_id": 2}, PointerEnteredEvent(2)),
        ({"event_type": "pointer_leave"}, PointerLeftEvent(0)),
        (
            {"event_type": "pointer_move", "x": 10, "y": 20.5},
            PointerMovedEvent(0, 10.0, 20.5),
        ),
        (
            {"event_type": "pointer_down", "x": 1, "y": 2, "button": 3, "modifiers": ["Meta"]},
            PointerInputEvent(0, 3, True, 1.0, 2.0, Modifiers(logo=True)),
        ),
        (
            {"event_type": "mouse_up", "x": 1, "y": 2, "button": 0},
            PointerInputEvent(0, 1, False, 1.0, 2.0),
        ),
        ({"event_type": "wheel", "dy": -120}, ScrollEvent(0.0, -120.0)),
    ],
)
def test_convert_platform_event_maps_known_callbacks(raw, expected) -> None:
    assert convert_platform_event(raw) == expected


def test_convert_platform_event_reads_attribute_objects() -> None:
    raw = SimpleNamespace(event_type="KEY_DOWN", key="x", modifiers=("alt",))

    assert convert_platform_event(raw) == KeyboardEvent("x", True, Modifiers(alt=True))


@pytest.mark.parametrize(
    "raw",
    [
        {"event_type": "before_draw"},
        {"event_type": "resize", "width": "wide", "height": 10},
        {"event_type": "focus"},
        {"event_type": "char", "data": ""},
        {"event_type": "key_down"},
        {"event_type": "pointer_move", "x": True, "y": 1},
        {"event_type": "wheel", "dx": 1},
        {},
        None,
        "key_down",
    ],
)
def test_convert_platform_event_returns_none_for_unroutable_input(raw) -> None:
    assert convert_platform_event(raw) is None


def test_non_positive_pixel_ratio_falls_back_to_one() -> None:
    raw = {"event_type": "resize", "width": 10, "height": 10, "pixel_ratio": 0}

    assert convert_platform_event(raw) == ResizedEvent(10.0, 10.0, 1.0)
