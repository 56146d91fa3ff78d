"""The contract every image satisfies, and the default polygon renderer.

Images are frozen dataclasses. Width and height are stored as floats so nested
transforms do not compound rounding error, and exposed rounded. A pinhole left as
None is the center of the image. A baseline left at 0 is the bottom of the image.

:author: Shay Hill
:created: 2026-10-19
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, NamedTuple

from image_algebra import compare
from image_algebra.color import BLACK, OUTLINE, Color, FillMode
from image_algebra.exceptions import RenderError
from image_algebra.geometry import centroid, round_half_up
from image_algebra.globs import OUTLINE_OFFSET

if TYPE_CHECKING:
    from collections.abc import Iterable

    from typing import Self

    from image_algebra.type_hints import Surface, Vertex, Vertices


class Polygon(NamedTuple):
    """Everything that decides what a plain polygon image looks like."""

    style: FillMode
    color: Color
    vertices: Vertices


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class Image:
    """Common fields and default behavior for all images."""

    raw_width: float = 0
    raw_height: float = 0
    pinhole: Vertex | None = None
    baseline: float = 0
    raw_vertices: Vertices | None = None
    style: FillMode = OUTLINE
    color: Color = BLACK
    aria_text: str = "image"

    # ---------------------------------------------------------------------------
    #   geometry
    # ---------------------------------------------------------------------------

    @property
    def exact_width(self) -> float:
        return self.raw_width

    @property
    def exact_height(self) -> float:
        return self.raw_height

    @property
    def width(self) -> int:
        """Width rounded to a whole number of pixels."""
        return max(0, round_half_up(self.exact_width))

    @property
    def height(self) -> int:
        """Height rounded to a whole number of pixels."""
        return max(0, round_half_up(self.exact_height))

    @property
    def pinhole_x(self) -> float:
        if self.pinhole is None:
            return self.exact_width / 2
        return self.pinhole[0]

    @property
    def pinhole_y(self) -> float:
        if self.pinhole is None:
            return self.exact_height / 2
        return self.pinhole[1]

    @property
    def alpha_baseline(self) -> float:
        """Vertical anchor for text alignment. The bottom edge if never set."""
        # the rounded pixel height, so an unset baseline sits on the last pixel row
        return self.baseline or self.height

    @property
    def vertices(self) -> Vertices:
        """The outline of the image. The bounding rectangle if no polygon is set."""
        if self.raw_vertices is not None:
            return self.raw_vertices
        w, h = self.exact_width, self.exact_height
        return ((0, 0), (w, 0), (w, h), (0, h))

    def polygon(self) -> Polygon | None:
        """Return the polygon that fully describes this image, if there is one.

        Images with a polygon are compared by style, color, and vertices instead of
        by pixels.
        """
        if self.raw_vertices is None:
            return None
        return Polygon(self.style, self.color, self.raw_vertices)

    # ---------------------------------------------------------------------------
    #   copy-on-write updates
    # ---------------------------------------------------------------------------

    def offset_pinhole(self, dx: float, dy: float) -> Self:
        """Return a copy with the pinhole moved by (dx, dy)."""
        return self.update_pinhole(self.pinhole_x + dx, self.pinhole_y + dy)

    def update_pinhole(self, x: float, y: float) -> Self:
        """Return a copy with the pinhole at (x, y)."""
        return dataclasses.replace(self, pinhole=(x, y))

    # ---------------------------------------------------------------------------
    #   drawing and comparison
    # ---------------------------------------------------------------------------

    def render(self, surface: Surface) -> None:
        """Draw the image with its top-left corner at the surface origin.

        :raise RenderError: if the image has neither a polygon nor its own renderer
        """
        if self.raw_vertices is None:
            msg = f"render not implemented for {type(self).__name__}"
            raise RenderError(msg)
        render_polygon(surface, (self.raw_vertices,), self.style, self.color)

    def same_as(self, other: Image) -> bool:
        """Whether other is built from the same parameters and equal children."""
        return False

    def equals(self, other: Image) -> bool:
        """Whether two images look the same."""
        return compare.images_equal(self, other)

    def difference(self, other: Image) -> float | str:
        """RMS pixel difference, or a string explaining why there is none."""
        return compare.images_difference(self, other)


def _pull_toward_center(loop: Vertices) -> Vertices:
    """Move each vertex half a unit toward the loop's centroid on each axis."""
    mid_x, mid_y = centroid(loop)

    def nudge(value: float, mid: float) -> float:
        if value < mid:
            return value + OUTLINE_OFFSET
        if value > mid:
            return value - OUTLINE_OFFSET
        return value

    return tuple((nudge(x, mid_x), nudge(y, mid_y)) for x, y in loop)


def render_polygon(
    surface: Surface, loops: Iterable[Vertices], style: FillMode, color: Color
) -> None:
    """Fill or stroke one or more closed vertex loops as a single path.

    Outline strokes are nudged onto pixel centers unless the surface is comparing
    images, where two equal images must produce identical pixels.
    """
    surface.begin_path()
    for loop in loops:
        if not loop:
            continue
        if style.is_outline and not surface.equality_test:
            loop = _pull_toward_center(loop)
        surface.move_to(*loop[0])
        for vertex in loop[1:]:
            surface.line_to(*vertex)
        surface.close_path()
    if style.is_outline:
        surface.stroke(color)
    else:
        surface.fill(style.apply(color))


def render_border(surface: Surface, width: float, height: float) -> None:
    """Stroke a one-pixel black border just inside a width x height box.

    The stroke is centered half a pixel in from each edge so the right and bottom
    lines land on the last column and row instead of past them.
    """
    surface.stroke_rect(
        OUTLINE_OFFSET,
        OUTLINE_OFFSET,
        width - 2 * OUTLINE_OFFSET,
        height - 2 * OUTLINE_OFFSET,
        BLACK,
    )
