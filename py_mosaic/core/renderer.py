"""
Board renderer.

Paints regions onto any object implementing the ``DrawingSurface``
protocol. The background (quote image) is drawn first over the whole
surface; covered regions are then filled on top of it, revealed regions
only get a thin outline so the background shows through.
"""

from typing import Any, Optional, Protocol, Sequence, Tuple, runtime_checkable

import structlog
from pydantic import BaseModel, Field

from .geometry import Point, PointLike, Rect
from .regions import Region

logger = structlog.get_logger()

CHECK_MARK = "✓"


@runtime_checkable
class DrawingSurface(Protocol):
    """Minimal 2D drawing contract needed by the renderer."""

    width: float
    height: float

    def clear(self, rect: Rect) -> None: ...

    def set_fill_color(self, color: str) -> None: ...

    def set_stroke_color(self, color: str, width: float = 1) -> None: ...

    def fill_polygon(self, points: Sequence[PointLike]) -> None: ...

    def stroke_polygon(self, points: Sequence[PointLike]) -> None: ...

    def draw_text(self, text: str, position: PointLike, size: int = 14,
                  color: Optional[str] = None, bold: bool = False) -> None: ...

    def draw_image(self, image: Any, origin: PointLike = (0, 0)) -> None: ...


class RendererOptions(BaseModel):
    """Presentation options of the board."""

    show_numbers: bool = Field(default=True, description="Draw region numbers")
    show_borders: bool = Field(default=True, description="Stroke covered region borders")
    margin: float = Field(default=20, ge=0, description="Inset of the outer frame")

    border_color: str = "#333"
    border_width: float = 2
    completed_border_color: str = "#999"
    outline_color: str = "#ddd"
    outline_width: float = 1
    frame_color: str = "#000"
    frame_width: float = 3

    label_color: str = "#333"
    completed_label_color: str = "#999"
    label_size: int = 14
    check_color: str = "#52c41a"
    check_size: int = 20


class Renderer:
    """Draws a board's regions onto a surface."""

    def __init__(self, surface: DrawingSurface, options: Optional[RendererOptions] = None):
        self.surface = surface
        self.options = options or RendererOptions()

    def _frame(self) -> Tuple[Point, ...]:
        m = self.options.margin
        return tuple(Rect(m, m, self.surface.width - m * 2, self.surface.height - m * 2).corners())

    def render(self, regions: Sequence[Region], background: Optional[Any] = None) -> None:
        """
        Repaint the whole surface.

        Args:
            regions: Regions in index order
            background: Image to show through revealed regions; None draws
                nothing underneath (revealed regions show the cleared surface)
        """
        surface = self.surface
        opts = self.options

        surface.clear(Rect(0, 0, surface.width, surface.height))
        if background is not None:
            surface.draw_image(background, (0, 0))

        surface.set_stroke_color(opts.frame_color, opts.frame_width)
        surface.stroke_polygon(self._frame())

        for index, region in enumerate(regions):
            if region.revealed:
                self._draw_revealed(region)
            else:
                self._draw_covered(index, region)

        logger.debug("Board rendered", regions=len(regions),
                     revealed=sum(1 for r in regions if r.revealed),
                     background=background is not None)

    def _draw_revealed(self, region: Region) -> None:
        self.surface.set_stroke_color(self.options.outline_color, self.options.outline_width)
        self.surface.stroke_polygon(region.polygon)

    def _draw_covered(self, index: int, region: Region) -> None:
        surface = self.surface
        opts = self.options

        if len(region.polygon) < 3:
            return

        surface.set_fill_color(region.color)
        surface.fill_polygon(region.polygon)

        if opts.show_borders:
            border = opts.completed_border_color if region.completed else opts.border_color
            surface.set_stroke_color(border, opts.border_width)
            surface.stroke_polygon(region.polygon)

        if not opts.show_numbers:
            return

        cx, cy = region.center
        label_color = opts.completed_label_color if region.completed else opts.label_color
        surface.draw_text(str(index + 1), (cx, cy + 5), size=opts.label_size,
                          color=label_color, bold=True)

        # Task done but cover not yet removed
        if region.completed:
            surface.draw_text(CHECK_MARK, (cx, cy - 15), size=opts.check_size,
                              color=opts.check_color, bold=True)
