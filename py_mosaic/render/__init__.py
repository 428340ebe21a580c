"""Pillow implementation of the drawing surface and the quote background."""

from .background import load_background, render_quote_background, wrap_text
from .pillow_surface import PillowSurface

__all__ = ['PillowSurface', 'load_background', 'render_quote_background', 'wrap_text']
