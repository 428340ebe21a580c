"""Tests for the Pillow drawing surface and quote background."""

import io

import pytest
from PIL import Image

from py_mosaic.core.geometry import Rect
from py_mosaic.models import Quote
from py_mosaic.render.background import (
    BACKGROUND_COLOR, load_background, render_quote_background, wrap_text,
)
from py_mosaic.render.pillow_surface import PillowSurface

RED = (255, 0, 0)
WHITE = (255, 255, 255)
SQUARE = [(10, 10), (60, 10), (60, 60), (10, 60)]


class TestPillowSurface:

    def test_fill_polygon(self):
        surface = PillowSurface(100, 100)
        surface.set_fill_color("#ff0000")
        surface.fill_polygon(SQUARE)

        assert surface.image.getpixel((35, 35)) == RED
        assert surface.image.getpixel((80, 80)) == WHITE

    def test_stroke_polygon(self):
        surface = PillowSurface(100, 100)
        surface.set_stroke_color("#ff0000", 3)
        surface.stroke_polygon(SQUARE)

        assert surface.image.getpixel((35, 10)) == RED
        assert surface.image.getpixel((35, 35)) == WHITE

    def test_clear(self):
        surface = PillowSurface(100, 100)
        surface.set_fill_color("#ff0000")
        surface.fill_polygon(SQUARE)
        surface.clear(Rect(0, 0, 100, 100))
        assert surface.image.getpixel((35, 35)) == WHITE

    def test_scale(self):
        surface = PillowSurface(100, 100, scale=2.0)
        surface.set_fill_color("#ff0000")
        surface.fill_polygon(SQUARE)

        assert surface.image.size == (200, 200)
        assert surface.image.getpixel((110, 110)) == RED
        assert surface.image.getpixel((130, 130)) == WHITE

    def test_draw_text_marks_pixels(self):
        surface = PillowSurface(100, 100)
        surface.draw_text("8", (50, 60), size=20, color="#000000", bold=True)
        assert surface.image.getbbox() is not None
        assert surface.image.convert("L").getextrema()[0] < 128

    def test_draw_image(self):
        surface = PillowSurface(50, 50)
        surface.draw_image(Image.new("RGB", (50, 50), RED))
        assert surface.image.getpixel((25, 25)) == RED

    def test_to_png(self):
        data = PillowSurface(40, 30).to_png()
        with Image.open(io.BytesIO(data)) as image:
            assert image.format == "PNG"
            assert image.size == (40, 30)


class TestQuoteBackground:

    def test_wrap_text_per_character(self):
        lines = wrap_text("abcdefg", 30, lambda s: len(s) * 10)
        assert lines == ["abc", "def", "g"]

    def test_wrap_text_keeps_oversized_first_char(self):
        assert wrap_text("W", 5, lambda s: 10) == ["W"]

    def test_wrap_text_empty(self):
        assert wrap_text("", 100, len) == [""]

    def test_render_quote_background(self):
        quote = Quote(text="Small steps every day add up to big results", author="Anon")
        image = render_quote_background(quote, 300, 200)

        assert image.size == (300, 200)
        assert image.getpixel((0, 0)) == Image.new("RGB", (1, 1), BACKGROUND_COLOR).getpixel((0, 0))
        # Text darker than the background somewhere near the middle
        assert image.convert("L").crop((0, 60, 300, 160)).getextrema()[0] < 200

    def test_load_background(self, tmp_path):
        path = tmp_path / "bg.png"
        Image.new("RGB", (20, 20), RED).save(path)

        image = load_background(path)

        assert image is not None
        assert image.getpixel((5, 5)) == RED

    @pytest.mark.parametrize("content", [None, b"not an image"])
    def test_load_background_failure(self, tmp_path, content):
        path = tmp_path / "broken.png"
        if content is not None:
            path.write_bytes(content)
        assert load_background(path) is None
