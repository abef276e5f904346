"""Turning keyboard and mouse input into camera events."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from .events import PanCameraEvent, ZoomCameraEvent
from .projected import Projected

# Larger values pan further per key press.
PAN_AMOUNT = 15.0

# Converts line-based scrolling to a reasonable zoom velocity.
LINE_SCROLL_FACTOR = 10.0


class Key(enum.Enum):
    """Keys that move the camera."""

    ARROW_UP = "ArrowUp"
    ARROW_RIGHT = "ArrowRight"
    ARROW_DOWN = "ArrowDown"
    ARROW_LEFT = "ArrowLeft"


_KEY_PANS = {
    Key.ARROW_UP: PanCameraEvent.up,
    Key.ARROW_RIGHT: PanCameraEvent.right,
    Key.ARROW_DOWN: PanCameraEvent.down,
    Key.ARROW_LEFT: PanCameraEvent.left,
}


class ScrollUnit(enum.Enum):
    LINE = "line"
    PIXEL = "pixel"


@dataclass(frozen=True)
class ScrollEvent:
    """Vertical scroll amount in the given unit."""

    unit: ScrollUnit
    y: float


def pan_events_for_keys(keys: Iterable[Any]) -> List[PanCameraEvent]:
    """Pan events for the just-pressed keys, in order; other keys are ignored."""
    return [_KEY_PANS[key](PAN_AMOUNT) for key in keys if key in _KEY_PANS]


def scroll_zoom_event(
    scroll_events: Iterable[ScrollEvent], mouse_position: Projected[Any]
) -> Optional[ZoomCameraEvent]:
    """One zoom event for the summed scroll, or None when it sums to zero."""
    amount = sum(
        event.y * LINE_SCROLL_FACTOR if event.unit is ScrollUnit.LINE else event.y
        for event in scroll_events
    )
    if amount == 0:
        return None
    return ZoomCameraEvent.from_scroll(amount, mouse_position)


def drag_pan_event(deltas: Iterable[Tuple[float, float]]) -> Optional[PanCameraEvent]:
    """Camera pan for mouse drag deltas in screen pixels (y grows downward).

    Dragging right moves the camera left; dragging up moves it down.
    """
    x_sum = 0.0
    y_sum = 0.0
    for dx, dy in deltas:
        x_sum -= dx
        y_sum += dy
    if x_sum == 0 and y_sum == 0:
        return None
    return PanCameraEvent(x_sum, y_sum)