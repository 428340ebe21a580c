"""Font lookup shared by the surface and the background renderer."""

from functools import lru_cache

from PIL import ImageFont

_TRUETYPE_CANDIDATES = {
    False: ("DejaVuSans.ttf", "Arial.ttf", "arial.ttf"),
    True: ("DejaVuSans-Bold.ttf", "Arial Bold.ttf", "arialbd.ttf"),
}


@lru_cache(maxsize=32)
def get_font(size: int, bold: bool = False):
    """TrueType font of ``size`` px if one is installed, else Pillow's built-in font."""
    for name in _TRUETYPE_CANDIDATES[bold]:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)
