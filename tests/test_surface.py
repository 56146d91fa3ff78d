"""Test the Pillow drawing surface.

:author: Shay Hill
:created: 2026-10-19
"""

import math

from image_algebra import make_image as mi
from image_algebra.color import Color
from image_algebra.surface import PilSurface, write_png

from conftest import TEST_OUTPUT

RED = Color(255, 0, 0)
BLUE = Color(0, 0, 255)


def _pixel(surface: PilSurface, x: int, y: int) -> tuple[int, ...]:
    return tuple(surface.get_pixel_buffer(x, y, 1, 1))


class TestPilSurface:
    def test_starts_transparent(self):
        """A new surface is fully transparent."""
        surface = PilSurface(4, 4)
        assert _pixel(surface, 2, 2) == (0, 0, 0, 0)

    def test_fill_rect(self):
        """Fill paints every pixel in the rectangle."""
        surface = PilSurface(10, 10)
        surface.fill_rect(0, 0, 10, 10, BLUE)
        assert _pixel(surface, 0, 0) == (0, 0, 255, 255)
        assert _pixel(surface, 9, 9) == (0, 0, 255, 255)

    def test_fill_rect_keeps_path(self):
        """Filling a rectangle does not replace the current path."""
        surface = PilSurface(10, 10)
        surface.begin_path()
        surface.rect(0, 0, 3, 3)
        surface.fill_rect(5, 5, 5, 5, BLUE)
        surface.fill(RED)
        assert _pixel(surface, 1, 1) == (255, 0, 0, 255)

    def test_translate(self):
        """Translation moves what is drawn."""
        surface = PilSurface(10, 10)
        surface.translate(5, 5)
        surface.fill_rect(0, 0, 5, 5, RED)
        assert _pixel(surface, 7, 7) == (255, 0, 0, 255)
        assert _pixel(surface, 2, 2) == (0, 0, 0, 0)

    def test_save_restore(self):
        """Restore brings back the saved transform."""
        surface = PilSurface(10, 10)
        surface.save()
        surface.translate(5, 5)
        surface.restore()
        surface.fill_rect(0, 0, 3, 3, RED)
        assert _pixel(surface, 1, 1) == (255, 0, 0, 255)

    def test_rotate(self):
        """A quarter turn maps x onto y."""
        surface = PilSurface(10, 10)
        surface.translate(10, 0)
        surface.rotate(math.pi / 2)
        surface.fill_rect(0, 0, 10, 3, RED)
        assert _pixel(surface, 8, 5) == (255, 0, 0, 255)
        assert _pixel(surface, 2, 5) == (0, 0, 0, 0)

    def test_fill_nonzero(self):
        """A self-crossing path fills where its edges wind around twice."""
        surface = PilSurface(100, 100)
        surface.begin_path()
        for i in range(5):
            angle = math.radians(-90 + 144 * i)
            point = (50 + 40 * math.cos(angle), 50 + 40 * math.sin(angle))
            if i == 0:
                surface.move_to(*point)
            else:
                surface.line_to(*point)
        surface.close_path()
        surface.fill(RED)
        assert _pixel(surface, 50, 50) == (255, 0, 0, 255)
        assert _pixel(surface, 2, 2) == (0, 0, 0, 0)

    def test_overlapping_subpaths(self):
        """Overlapping subpaths drawn the same way round fill their overlap."""
        surface = PilSurface(10, 10)
        surface.begin_path()
        surface.rect(0, 0, 6, 10)
        surface.rect(4, 0, 6, 10)
        surface.fill(RED)
        assert _pixel(surface, 5, 5) == (255, 0, 0, 255)

    def test_arc(self):
        """A full arc fills a disk."""
        surface = PilSurface(20, 20)
        surface.begin_path()
        surface.arc(10, 10, 10, 0, 2 * math.pi)
        surface.close_path()
        surface.fill(RED)
        assert _pixel(surface, 10, 10) == (255, 0, 0, 255)
        assert _pixel(surface, 10, 1) == (255, 0, 0, 255)
        assert _pixel(surface, 0, 0) == (0, 0, 0, 0)

    def test_line_after_close(self):
        """Drawing on after closing a subpath starts again from its first point."""
        surface = PilSurface(10, 10)
        surface.begin_path()
        surface.move_to(0, 0)
        surface.line_to(4, 0)
        surface.line_to(4, 4)
        surface.close_path()
        surface.line_to(0, 10)
        surface.line_to(4, 10)
        surface.fill(RED)
        assert _pixel(surface, 1, 8) == (255, 0, 0, 255)

    def test_stroke_rect_inside(self):
        """A stroked rectangle inset by half a pixel paints the edge pixels."""
        surface = PilSurface(10, 10)
        surface.stroke_rect(0.5, 0.5, 9, 9, BLUE)
        assert _pixel(surface, 9, 5) == (0, 0, 255, 255)
        assert _pixel(surface, 5, 5) == (0, 0, 0, 0)

    def test_clip(self):
        """Paint outside the clip is discarded."""
        surface = PilSurface(10, 10)
        surface.save()
        surface.begin_path()
        surface.rect(0, 0, 5, 10)
        surface.clip()
        surface.fill_rect(0, 0, 10, 10, RED)
        surface.restore()
        assert _pixel(surface, 2, 5) == (255, 0, 0, 255)
        assert _pixel(surface, 8, 5) == (0, 0, 0, 0)

    def test_clip_restored(self):
        """Restore lifts a clip set after save."""
        surface = PilSurface(10, 10)
        surface.save()
        surface.begin_path()
        surface.rect(0, 0, 5, 10)
        surface.clip()
        surface.restore()
        surface.fill_rect(0, 0, 10, 10, RED)
        assert _pixel(surface, 8, 5) == (255, 0, 0, 255)

    def test_translucent(self):
        """Alpha below one is kept in the pixels."""
        surface = PilSurface(4, 4)
        surface.fill_rect(0, 0, 4, 4, Color(255, 0, 0, 0.5))
        *rgb, alpha = _pixel(surface, 1, 1)
        assert rgb[0] >= 254
        assert rgb[1:] == [0, 0]
        assert abs(alpha - 128) <= 1

    def test_zero_size(self):
        """A zero-sized surface ignores painting."""
        surface = PilSurface(0, 0)
        surface.fill_rect(0, 0, 10, 10, RED)
        assert surface.image.size == (0, 0)

    def test_draw_image(self):
        """Bitmaps are copied at their offset."""
        source = PilSurface(2, 2)
        source.fill_rect(0, 0, 2, 2, BLUE)
        surface = PilSurface(6, 6)
        surface.draw_image(source.image, 3, 3)
        assert _pixel(surface, 4, 4) == (0, 0, 255, 255)
        assert _pixel(surface, 1, 1) == (0, 0, 0, 0)


class TestWritePng:
    def test_write(self):
        """Images are written as png files."""
        img = mi.overlay(mi.circle(10, "solid", "red"), mi.square(30, "solid", "blue"))
        outfile = write_png(img, TEST_OUTPUT / "overlay")
        assert outfile.suffix == ".png"
        assert outfile.exists()
