"""
Single / double tap disambiguation.

A tap is held back for the length of the double-tap window. A second tap
inside the window turns the pair into a double tap; otherwise the held tap
is released as a single tap by ``flush``. Time is passed in by the caller
as millisecond timestamps, there are no timers.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .geometry import Point, PointLike


class TapKind(str, Enum):
    SINGLE = "single"
    DOUBLE = "double"
    LONG_PRESS = "long_press"


@dataclass(frozen=True)
class TapEvent:
    kind: TapKind
    point: Point
    timestamp_ms: int


class TapDispatcher:
    """Turns raw taps into single, double and long-press events."""

    def __init__(self, double_tap_window_ms: int = 300):
        self.double_tap_window_ms = double_tap_window_ms
        self._last_tap_ms: Optional[int] = None
        self._pending: Optional[TapEvent] = None

    @property
    def pending(self) -> Optional[TapEvent]:
        return self._pending

    def tap(self, point: PointLike, timestamp_ms: int) -> Optional[TapEvent]:
        """
        Register a tap.

        Returns:
            A DOUBLE event when this tap lands inside the window of the
            previous one, otherwise None (the tap is held as a pending
            single tap)
        """
        point = Point(point[0], point[1])
        previous = self._last_tap_ms
        self._last_tap_ms = timestamp_ms

        if previous is not None and timestamp_ms - previous < self.double_tap_window_ms:
            self._pending = None
            # A third quick tap starts a new sequence
            self._last_tap_ms = None
            return TapEvent(TapKind.DOUBLE, point, timestamp_ms)

        self._pending = TapEvent(TapKind.SINGLE, point, timestamp_ms)
        return None

    def flush(self, timestamp_ms: int) -> Optional[TapEvent]:
        """Release the pending single tap once its window has elapsed."""
        if self._pending is None:
            return None
        if timestamp_ms - self._pending.timestamp_ms < self.double_tap_window_ms:
            return None
        event, self._pending = self._pending, None
        return event

    def long_press(self, point: PointLike, timestamp_ms: int) -> TapEvent:
        """A long press resolves immediately and cancels any pending tap."""
        self._pending = None
        self._last_tap_ms = None
        return TapEvent(TapKind.LONG_PRESS, Point(point[0], point[1]), timestamp_ms)

    def reset(self) -> None:
        self._pending = None
        self._last_tap_ms = None
