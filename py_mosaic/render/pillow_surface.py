"""
Drawing surface backed by a Pillow image.

Coordinates passed in are board (logical) pixels; every call multiplies
them by ``scale`` so a board generated at 750x800 can be rendered at any
device pixel ratio.
"""

import io
from typing import Any, List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from ..core.geometry import PointLike, Rect
from .fonts import get_font


class PillowSurface:
    """``DrawingSurface`` implementation drawing into an RGB ``PIL.Image``."""

    def __init__(self, width: float, height: float, background: str = "#ffffff",
                 scale: float = 1.0):
        self.width = width
        self.height = height
        self.scale = scale
        self.background = background
        self.image = Image.new(
            "RGB", (round(width * scale), round(height * scale)), background
        )
        self._draw = ImageDraw.Draw(self.image)
        self._fill: Optional[str] = None
        self._stroke: Optional[str] = "#000"
        self._stroke_width = 1.0

    def _px(self, points: Sequence[PointLike]) -> List[Tuple[float, float]]:
        s = self.scale
        return [(p[0] * s, p[1] * s) for p in points]

    def clear(self, rect: Rect) -> None:
        s = self.scale
        self._draw.rectangle(
            [rect.x * s, rect.y * s, rect.right * s - 1, rect.bottom * s - 1],
            fill=self.background,
        )

    def set_fill_color(self, color: str) -> None:
        self._fill = color

    def set_stroke_color(self, color: str, width: float = 1) -> None:
        self._stroke = color
        self._stroke_width = width

    def fill_polygon(self, points: Sequence[PointLike]) -> None:
        if len(points) < 3 or self._fill is None:
            return
        self._draw.polygon(self._px(points), fill=self._fill)

    def stroke_polygon(self, points: Sequence[PointLike]) -> None:
        if len(points) < 2 or self._stroke is None:
            return
        pixels = self._px(points)
        pixels.append(pixels[0])
        width = max(1, round(self._stroke_width * self.scale))
        self._draw.line(pixels, fill=self._stroke, width=width, joint="curve")

    def draw_text(self, text: str, position: PointLike, size: int = 14,
                  color: Optional[str] = None, bold: bool = False) -> None:
        """Draw ``text`` horizontally centred on ``position``, baseline at its y."""
        font = get_font(round(size * self.scale), bold)
        left, top, right, bottom = self._draw.textbbox((0, 0), text, font=font)
        x = position[0] * self.scale - (right - left) / 2 - left
        y = position[1] * self.scale - bottom
        self._draw.text((x, y), text, fill=color or self._fill or "#000", font=font)

    def draw_image(self, image: Any, origin: PointLike = (0, 0)) -> None:
        if image is None:
            return
        if image.size != self.image.size:
            image = image.resize(
                (round(image.width * self.scale), round(image.height * self.scale))
            )
        offset = (round(origin[0] * self.scale), round(origin[1] * self.scale))
        if image.mode == "RGBA":
            self.image.paste(image, offset, image)
        else:
            self.image.paste(image.convert("RGB"), offset)

    def to_png(self) -> bytes:
        buffer = io.BytesIO()
        self.image.save(buffer, format="PNG")
        return buffer.getvalue()
