"""
Offscreen quote background.

The quote of the day is painted into its own image once per session; the
renderer draws that image under the regions.
"""

from pathlib import Path
from typing import Callable, List, Optional, Union

import structlog
from PIL import Image, ImageDraw, UnidentifiedImageError

from ..models import Quote
from .fonts import get_font

logger = structlog.get_logger()

BACKGROUND_COLOR = "#f8f9fa"
QUOTE_COLOR = "#666"
AUTHOR_COLOR = "#999"
QUOTE_FONT_SIZE = 24
AUTHOR_FONT_SIZE = 18
TEXT_MARGIN = 40
LINE_HEIGHT = 30
LINE_SPACING = 35


def wrap_text(text: str, max_width: float, measure: Callable[[str], float]) -> List[str]:
    """
    Greedy per-character wrap.

    Breaks between any two characters, which suits CJK text without spaces.

    Args:
        text: Text to wrap
        max_width: Maximum line width in pixels
        measure: Width in pixels of a string

    Returns:
        Lines, at least one (possibly empty)
    """
    lines: List[str] = []
    current = ""
    for i, char in enumerate(text):
        candidate = current + char
        if measure(candidate) > max_width and i > 0:
            lines.append(current)
            current = char
        else:
            current = candidate
    lines.append(current)
    return lines


def _draw_centered(draw: ImageDraw.ImageDraw, text: str, x: float, baseline: float,
                   color: str, font) -> None:
    left, _, right, bottom = draw.textbbox((0, 0), text, font=font)
    draw.text((x - (right - left) / 2 - left, baseline - bottom), text, fill=color, font=font)


def render_quote_background(quote: Quote, width: int, height: int) -> Image.Image:
    """Paint ``quote`` centred on a light background of the board's size."""
    image = Image.new("RGB", (int(width), int(height)), BACKGROUND_COLOR)
    draw = ImageDraw.Draw(image)

    quote_font = get_font(QUOTE_FONT_SIZE, bold=True)
    author_font = get_font(AUTHOR_FONT_SIZE)

    def measure(s: str) -> float:
        return draw.textlength(s, font=quote_font)

    lines = wrap_text(quote.text, width - TEXT_MARGIN * 2, measure)
    start_y = height / 2 - (len(lines) * LINE_HEIGHT) / 2

    for index, line in enumerate(lines):
        _draw_centered(draw, line, width / 2, start_y + index * LINE_SPACING,
                       QUOTE_COLOR, quote_font)

    if quote.author:
        _draw_centered(draw, f"—— {quote.author}", width / 2,
                       start_y + len(lines) * LINE_SPACING + 40, AUTHOR_COLOR, author_font)

    logger.info("Quote background rendered", lines=len(lines), author=quote.author)
    return image


def load_background(path: Union[str, Path]) -> Optional[Image.Image]:
    """
    Load a background image from disk.

    A missing or unreadable file is not fatal: the board renders without a
    background, so this logs and returns None.
    """
    try:
        with Image.open(path) as image:
            image.load()
            return image.convert("RGB")
    except (OSError, UnidentifiedImageError) as e:
        logger.warning("Background image unavailable", path=str(path), error=str(e))
        return None
