"""Draw images as svg.

The svg surface records every paint call as an lxml element inside one group.
Paths are written in device coordinates, already transformed. Text and embedded
bitmaps carry the current transform as a matrix. Each clip becomes a clipPath
element that is itself clipped by the clip that was active before it, so nested
clips intersect.

Nothing here can read pixels back. Use a PilSurface for comparisons.

:author: Shay Hill
:created: 2026-10-19
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import svg_ultralight as su
from lxml import etree
from svg_ultralight import write_svg

from image_algebra.exceptions import RenderError
from image_algebra.fonts import FontStyle, FontWeight
from image_algebra.image_ops import new_image_elem
from image_algebra.surface import PathCanvas

if TYPE_CHECKING:
    import os

    from lxml.etree import _Element as EtreeElement  # type: ignore
    from PIL.Image import Image as ImageType

    from image_algebra.base_image import Image
    from image_algebra.color import Color
    from image_algebra.fonts import FontSpec
    from image_algebra.surface import Matrix

_CLIP_ID = "image_clip"


def _format_matrix(matrix: Matrix) -> str:
    return "matrix({})".format(" ".join(f"{x:g}" for x in matrix))


class SvgSurface(PathCanvas[str]):
    """A surface that builds an svg group. The clip is a clipPath id."""

    def __init__(self, width: float, height: float, *, equality_test: bool = False):
        """Create an empty group with a defs element for clip paths.

        :param width: canvas width in pixels
        :param height: canvas height in pixels
        :param equality_test: set when drawing to compare images
        """
        super().__init__(width, height, equality_test=equality_test)
        self.group = su.new_element("g")
        self._defs = su.new_sub_element(self.group, "defs")
        self._clip_count = 0

    def _clip_attribute(self) -> dict[str, str]:
        if self._clip is None:
            return {}
        return {"clip_path": f"url(#{self._clip})"}

    def _container(self) -> EtreeElement:
        """The group new elements go into. A clipped group while a clip is active.

        The clip is applied to a parent group because clip paths are in device
        coordinates and text and bitmaps carry their own transform.
        """
        if self._clip is None:
            return self.group
        return su.new_sub_element(self.group, "g", **self._clip_attribute())

    def _add(self, tag: str, **attributes: str | float) -> EtreeElement:
        return su.new_sub_element(self._container(), tag, **attributes)

    def fill(self, color: Color) -> None:
        path_data = self._path_data()
        if not path_data or color.a == 0:
            return
        _ = self._add(
            "path",
            d=path_data,
            fill=color.hex,
            fill_opacity=color.a,
            stroke="none",
        )

    def stroke(self, color: Color) -> None:
        path_data = self._path_data()
        if not path_data or color.a == 0:
            return
        _ = self._add(
            "path",
            d=path_data,
            fill="none",
            stroke=color.hex,
            stroke_opacity=color.a,
            stroke_width=self.line_width * self._line_scale(),
            stroke_linejoin="round",
        )

    def clip(self) -> None:
        self._clip_count += 1
        clip_id = f"{_CLIP_ID}_{self._clip_count}"
        clip_path = su.new_sub_element(
            self._defs, "clipPath", id=clip_id, **self._clip_attribute()
        )
        _ = su.new_sub_element(clip_path, "path", d=self._path_data() or "M0 0")
        self._clip = clip_id

    def fill_text(
        self, text: str, x: float, y: float, font: FontSpec, color: Color
    ) -> None:
        """Write a text element with its left end of baseline at (x, y)."""
        attributes: dict[str, str | float] = {
            "x": x,
            "y": y,
            "fill": color.hex,
            "fill_opacity": color.a,
            "font_family": font.face,
            "font_size": font.size,
            "transform": _format_matrix(self._matrix),
        }
        if font.style is not FontStyle.NORMAL:
            attributes["font_style"] = font.style.css
        if font.weight is not FontWeight.NORMAL:
            attributes["font_weight"] = font.weight.css
        elem = self._add("text", **attributes)
        elem.text = text

    def draw_image(self, image: ImageType, x: float = 0, y: float = 0) -> None:
        """Embed a bitmap with its top-left at (x, y) in user space."""
        matrix = self._translated_matrix(x, y)
        elem = new_image_elem(image, transform=_format_matrix(matrix))
        self._container().append(elem)

    def get_pixel_buffer(self, x: int, y: int, width: int, height: int) -> bytes:
        msg = "cannot read pixels from an svg surface"
        raise RenderError(msg)


def new_image_blem(image: Image) -> su.BoundElement:
    """Draw an image into an svg group bound to the image's size.

    The group opens with a comment holding the image's description.

    :param image: any image
    :return: a BoundElement wrapping the drawn group
    """
    surface = SvgSurface(image.width, image.height)
    image.render(surface)
    # xml comments cannot contain "--"
    surface.group.insert(0, etree.Comment(image.aria_text.replace("--", "- -")))
    bbox = su.BoundingBox(0, 0, image.width, image.height)
    return su.BoundElement(surface.group, bbox)


def write_image_svg(
    image: Image,
    outfile: str | os.PathLike[str],
    print_width: float | None = None,
) -> Path:
    """Write an image to an svg file.

    :param image: any image
    :param outfile: path to write. The suffix is replaced with ".svg".
    :param print_width: optional width of the svg in print units. Defaults to the
        image width.
    :return: the path written
    """
    blem = new_image_blem(image)
    root = su.new_svg_root_around_bounds(blem, print_width_=print_width)
    root.extend(list(blem.elem))
    outfile = Path(outfile).with_suffix(".svg")
    _ = write_svg(outfile, root)
    return outfile
