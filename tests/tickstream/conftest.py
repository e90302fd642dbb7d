from __future__ import annotations

from dataclasses import dataclass, field

from tickstream.runtime.poll import Waker


@dataclass(slots=True)
class RecordingWaker:
    """Waker wrapper counting how often it was woken."""

    label: str = "recording"
    wakes: int = 0
    waker: Waker = field(init=False)

    def __post_init__(self) -> None:
        self.waker = Waker(self._wake, label=self.label)

    def _wake(self) -> None:
        self.wakes += 1


class FakeClock:
    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def key_down(key: str, *modifiers: str) -> dict[str, object]:
    return {"event_type": "key_down", "key": key, "modifiers": tuple(modifiers)}


def pointer_move(x: float, y: float) -> dict[str, object]:
    return {"event_type": "pointer_move", "x": x, "y": y, "button": 0}
