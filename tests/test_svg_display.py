"""Test drawing images as svg.

:author: Shay Hill
:created: 2026-10-19
"""

import pytest

from image_algebra import make_image as mi
from image_algebra.exceptions import RenderError
from image_algebra.svg_display import SvgSurface, new_image_blem, write_image_svg

from conftest import TEST_OUTPUT


def _elements(surface: SvgSurface, name: str) -> list:
    """Every element under the surface group with a given local name."""
    return [
        elem
        for elem in surface.group.iter()
        if isinstance(elem.tag, str) and elem.tag.rsplit("}", 1)[-1] == name
    ]


class TestSvgSurface:
    def test_fill(self):
        """A filled path becomes a path element."""
        surface = SvgSurface(10, 10)
        mi.rectangle(10, 10, "solid", "red").render(surface)
        paths = _elements(surface, "path")
        assert len(paths) == 1
        assert paths[0].get("fill") == "#ff0000"

    def test_path_data(self):
        """Polygons are written as lines in device coordinates and closed."""
        surface = SvgSurface(20, 20)
        surface.translate(5, 5)
        mi.rectangle(10, 10, "solid", "red").render(surface)
        path = _elements(surface, "path")[0]
        assert path.get("d") == "M 5 15 L 5 5 L 15 5 L 15 15 Z"

    def test_curves_kept(self):
        """Ellipses are written as cubic curves, not flattened."""
        surface = SvgSurface(20, 10)
        mi.ellipse(20, 10, "solid", "red").render(surface)
        data = _elements(surface, "path")[0].get("d")
        assert data.count("C") == 4
        assert "L" not in data

    def test_stroke(self):
        """An outline becomes a stroked path."""
        surface = SvgSurface(10, 10)
        mi.rectangle(10, 10, "outline", "blue").render(surface)
        paths = _elements(surface, "path")
        assert paths[0].get("fill") == "none"
        assert paths[0].get("stroke") == "#0000ff"

    def test_clip(self):
        """Scenes clip their children with a clip path."""
        dot = mi.circle(5, "solid", "red")
        scene = mi.place_image(dot, 0, 0, mi.empty_scene(20, 20))
        surface = SvgSurface(20, 20)
        scene.render(surface)
        assert _elements(surface, "clipPath")

    def test_text(self, measure):
        """Text becomes a text element."""
        surface = SvgSurface(40, 20)
        mi.text("hello", 10, "red", measure=measure).render(surface)
        texts = _elements(surface, "text")
        assert [e.text for e in texts] == ["hello"]

    def test_no_pixels(self):
        """An svg surface cannot be read back."""
        with pytest.raises(RenderError):
            _ = SvgSurface(1, 1).get_pixel_buffer(0, 0, 1, 1)


class TestWriteSvg:
    def test_description_comment(self):
        """The drawing opens with the image's description."""
        img = mi.beside(mi.circle(10, "solid", "red"), mi.square(20, "outline", "blue"))
        blem = new_image_blem(img)
        comment = blem.elem[0]
        assert comment.text == img.aria_text

    def test_write(self):
        """Images are written as svg files."""
        img = mi.above(
            mi.star(20, "solid", "gold"),
            mi.rotate(30, mi.rectangle(40, 10, "solid", "navy")),
        )
        outfile = write_image_svg(img, TEST_OUTPUT / "star_above_bar")
        assert outfile.suffix == ".svg"
        assert "<!--" in outfile.read_text()

    def test_write_bitmap(self, tmp_path):
        """Bitmaps are embedded in the svg."""
        img = mi.color_list_to_bitmap(["red", "blue", "blue", "red"], 2, 2)
        outfile = write_image_svg(img, tmp_path / "bitmap")
        assert "data:image/png;base64," in outfile.read_text()
