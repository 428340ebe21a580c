"""Shared fixtures."""

from typing import Any, List, Optional, Sequence, Tuple

import pytest

from py_mosaic.config import Settings
from py_mosaic.core.alea_prng import AleaPRNG
from py_mosaic.core.geometry import Rect
from py_mosaic.models import Task


class RecordingSurface:
    """DrawingSurface that records every call instead of drawing."""

    def __init__(self, width: float = 750, height: float = 800):
        self.width = width
        self.height = height
        self.calls: List[Tuple] = []
        self.fill: Optional[str] = None
        self.stroke: Optional[str] = None

    def clear(self, rect: Rect) -> None:
        self.calls.append(("clear", tuple(rect)))

    def set_fill_color(self, color: str) -> None:
        self.fill = color
        self.calls.append(("fill_color", color))

    def set_stroke_color(self, color: str, width: float = 1) -> None:
        self.stroke = color
        self.calls.append(("stroke_color", color, width))

    def fill_polygon(self, points: Sequence) -> None:
        self.calls.append(("fill", self.fill, tuple(tuple(p) for p in points)))

    def stroke_polygon(self, points: Sequence) -> None:
        self.calls.append(("stroke", self.stroke, tuple(tuple(p) for p in points)))

    def draw_text(self, text: str, position, size: int = 14,
                  color: Optional[str] = None, bold: bool = False) -> None:
        self.calls.append(("text", text, tuple(position), color))

    def draw_image(self, image: Any, origin=(0, 0)) -> None:
        self.calls.append(("image", image, tuple(origin)))

    def of_kind(self, kind: str) -> List[Tuple]:
        return [c for c in self.calls if c[0] == kind]


@pytest.fixture
def prng():
    return AleaPRNG("test_seed")


@pytest.fixture
def board_rect():
    return Rect(x=20, y=20, width=710, height=760)


@pytest.fixture
def recording_surface():
    return RecordingSurface()


@pytest.fixture
def surface_factory():
    """Factory with the (width, height) signature sessions expect."""
    return RecordingSurface


@pytest.fixture
def small_settings():
    return Settings(canvas_width=300, canvas_height=300, canvas_margin=20,
                    double_tap_window_ms=300, default_seed=None)


@pytest.fixture
def tasks():
    return [
        Task(id="read", name="Read 20 pages", difficulty="easy", score=5),
        Task(id="run", name="Run 5k", difficulty="hard", score=20),
        Task(id="code", name="Practice coding", difficulty="medium", score=10),
        Task(id="water", name="Drink water", difficulty="easy", score=2),
    ]
