"""Drawing surfaces the images draw themselves on.

``PathCanvas`` holds what every surface shares: the save/restore stack, the
transform matrix, and the current path. Path points are moved to device space as
they are added, so every call sees the transform that was current when it was
made. Curves stay curves. Arcs are stored as cubic beziers.

``PilSurface`` rasterizes paths with aggdraw, which fills with the nonzero winding
rule, and composites them onto a Pillow RGBA image. Clipping is kept as an "L"
mask that multiplies into everything painted afterward.

:author: Shay Hill
:created: 2026-10-19
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import TYPE_CHECKING, Generic, TypeAlias, TypeVar

import aggdraw  # type: ignore[import-not-found]
from PIL import Image, ImageChops, ImageDraw

from image_algebra.fonts import load_font, measure_text

if TYPE_CHECKING:
    import os
    from collections.abc import Iterator

    from PIL.Image import Image as ImageType

    from image_algebra.base_image import Image as AlgebraImage
    from image_algebra.color import Color
    from image_algebra.fonts import FontSpec
    from image_algebra.type_hints import Vertex

# (a, b, c, d, e, f) maps (x, y) to (a*x + c*y + e, b*x + d*y + f)
Matrix: TypeAlias = tuple[float, float, float, float, float, float]

IDENTITY: Matrix = (1, 0, 0, 1, 0, 0)

# one svg path command ("M", "L", "C", or "Z") and its device-space coordinates
PathCommand: TypeAlias = tuple[str, tuple[float, ...]]

_ClipT = TypeVar("_ClipT")


def _format_number(value: float) -> str:
    """Write a coordinate without exponents or trailing zeros."""
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text in {"", "-0"} else text


class PathCanvas(Generic[_ClipT]):
    """Transform stack and path building shared by all surfaces.

    Subclasses decide what a clip is and how paths are painted.
    """

    def __init__(self, width: float, height: float, *, equality_test: bool = False):
        """Start with an identity transform and an empty path.

        :param width: canvas width in pixels. Negative values are treated as 0.
        :param height: canvas height in pixels
        :param equality_test: set when drawing to compare images. Shapes skip
            cosmetic pixel adjustments that would make equal images differ.
        """
        self._size = (max(0, math.ceil(width)), max(0, math.ceil(height)))
        self.equality_test = equality_test
        self.line_width = 1.0
        self._matrix = IDENTITY
        self._clip: _ClipT | None = None
        self._stack: list[tuple[Matrix, _ClipT | None, float]] = []
        self._path: list[PathCommand] = []
        self._start: Vertex | None = None
        self._current: Vertex | None = None

    @property
    def width(self) -> int:
        return self._size[0]

    @property
    def height(self) -> int:
        return self._size[1]

    # ---------------------------------------------------------------------------
    #   state and transforms
    # ---------------------------------------------------------------------------

    def save(self) -> None:
        self._stack.append((self._matrix, self._clip, self.line_width))

    def restore(self) -> None:
        if self._stack:
            self._matrix, self._clip, self.line_width = self._stack.pop()

    def translate(self, x: float, y: float) -> None:
        a, b, c, d, e, f = self._matrix
        self._matrix = (a, b, c, d, a * x + c * y + e, b * x + d * y + f)

    def rotate(self, radians: float) -> None:
        a, b, c, d, e, f = self._matrix
        cos, sin = math.cos(radians), math.sin(radians)
        self._matrix = (
            a * cos + c * sin,
            b * cos + d * sin,
            c * cos - a * sin,
            d * cos - b * sin,
            e,
            f,
        )

    def scale(self, x: float, y: float) -> None:
        a, b, c, d, e, f = self._matrix
        self._matrix = (a * x, b * x, c * y, d * y, e, f)

    def _to_device(self, x: float, y: float) -> Vertex:
        a, b, c, d, e, f = self._matrix
        return a * x + c * y + e, b * x + d * y + f

    def _line_scale(self) -> float:
        """How much the current transform stretches lengths, on average."""
        a, b, c, d, _, _ = self._matrix
        return math.sqrt(abs(a * d - b * c))

    def _translated_matrix(self, x: float, y: float) -> Matrix:
        """The current matrix with its origin moved to (x, y) in user space."""
        a, b, c, d, e, f = self._matrix
        return a, b, c, d, a * x + c * y + e, b * x + d * y + f

    # ---------------------------------------------------------------------------
    #   paths
    # ---------------------------------------------------------------------------

    def begin_path(self) -> None:
        self._path = []
        self._start = None
        self._current = None

    def _continue_subpath(self) -> None:
        """Start a new subpath at the current point after a close."""
        if self._path and self._path[-1][0] == "Z" and self._current is not None:
            self._path.append(("M", self._current))

    def move_to(self, x: float, y: float) -> None:
        point = self._to_device(x, y)
        self._path.append(("M", point))
        self._start = self._current = point

    def line_to(self, x: float, y: float) -> None:
        if self._current is None:
            self.move_to(x, y)
            return
        self._continue_subpath()
        point = self._to_device(x, y)
        self._path.append(("L", point))
        self._current = point

    def bezier_curve_to(
        self, cp1x: float, cp1y: float, cp2x: float, cp2y: float, x: float, y: float
    ) -> None:
        """Add a cubic curve. An affine transform maps control points exactly."""
        if self._current is None:
            self.move_to(cp1x, cp1y)
        self._continue_subpath()
        point = self._to_device(x, y)
        coords = (*self._to_device(cp1x, cp1y), *self._to_device(cp2x, cp2y), *point)
        self._path.append(("C", coords))
        self._current = point

    def arc(
        self,
        x: float,
        y: float,
        radius: float,
        start: float,
        end: float,
        anticlockwise: bool = False,
    ) -> None:
        """Add a circular arc, joined to the current point by a straight line.

        The arc is split into pieces of at most a quarter turn, each drawn as one
        cubic bezier.
        """
        full = 2 * math.pi
        if anticlockwise:
            sweep = -full if start - end >= full else -((start - end) % full)
        else:
            sweep = full if end - start >= full else (end - start) % full
        first = (x + radius * math.cos(start), y + radius * math.sin(start))
        if self._current is None:
            self.move_to(*first)
        else:
            self.line_to(*first)
        pieces = math.ceil(abs(sweep) / (math.pi / 2))
        if not pieces:
            return
        delta = sweep / pieces
        handle = 4 / 3 * math.tan(delta / 4) * radius
        for i in range(pieces):
            beg = start + delta * i
            end_ = beg + delta
            cos0, sin0 = math.cos(beg), math.sin(beg)
            cos1, sin1 = math.cos(end_), math.sin(end_)
            self.bezier_curve_to(
                x + radius * cos0 - handle * sin0,
                y + radius * sin0 + handle * cos0,
                x + radius * cos1 + handle * sin1,
                y + radius * sin1 - handle * cos1,
                x + radius * cos1,
                y + radius * sin1,
            )

    def rect(self, x: float, y: float, width: float, height: float) -> None:
        self.move_to(x, y)
        self.line_to(x + width, y)
        self.line_to(x + width, y + height)
        self.line_to(x, y + height)
        self.close_path()

    def close_path(self) -> None:
        if self._current is None or self._path[-1][0] in {"M", "Z"}:
            return
        self._path.append(("Z", ()))
        self._current = self._start

    def _generate_symbol(self) -> Iterator[str]:
        """Sequence generator for the current path as svg path data."""
        for command, coords in self._path:
            yield command
            yield from map(_format_number, coords)

    def _path_data(self) -> str:
        """The current path as svg path data. Empty if nothing would draw."""
        if all(command == "M" for command, _ in self._path):
            return ""
        return " ".join(self._generate_symbol())

    # ---------------------------------------------------------------------------
    #   painting
    # ---------------------------------------------------------------------------

    def fill(self, color: Color) -> None:
        raise NotImplementedError

    def stroke(self, color: Color) -> None:
        raise NotImplementedError

    def _swap_path(
        self, path: tuple[list[PathCommand], Vertex | None, Vertex | None]
    ) -> tuple[list[PathCommand], Vertex | None, Vertex | None]:
        """Replace the current path and return the one it replaced."""
        replaced = (self._path, self._start, self._current)
        self._path, self._start, self._current = path
        return replaced

    def fill_rect(
        self, x: float, y: float, width: float, height: float, color: Color
    ) -> None:
        """Fill a rectangle without disturbing the current path."""
        kept = self._swap_path(([], None, None))
        self.rect(x, y, width, height)
        self.fill(color)
        _ = self._swap_path(kept)

    def stroke_rect(
        self, x: float, y: float, width: float, height: float, color: Color
    ) -> None:
        """Outline a rectangle without disturbing the current path."""
        kept = self._swap_path(([], None, None))
        self.rect(x, y, width, height)
        self.stroke(color)
        _ = self._swap_path(kept)


class PilSurface(PathCanvas["ImageType"]):
    """An off-screen RGBA canvas."""

    def __init__(self, width: float, height: float, *, equality_test: bool = False):
        """Create a transparent canvas.

        :param width: canvas width in pixels. Negative values are treated as 0.
        :param height: canvas height in pixels
        :param equality_test: set when drawing to compare images
        """
        super().__init__(width, height, equality_test=equality_test)
        self.image = Image.new("RGBA", self._size, (0, 0, 0, 0))

    def _draw_path(
        self, pen: aggdraw.Pen | None = None, brush: aggdraw.Brush | None = None
    ) -> ImageType:
        """Rasterize the current path into a coverage mask."""
        mask = Image.new("L", self.image.size, 0)
        path = self._path_data()
        if not path or not self.width or not self.height:
            return mask
        draw = aggdraw.Draw(mask)
        symbol = aggdraw.Symbol(path)
        draw.symbol((0, 0), symbol, pen, brush)
        draw.flush()
        del draw
        return mask

    def _paint(self, mask: ImageType, color: Color) -> None:
        """Composite a color through a coverage mask, honoring the clip."""
        if not self.width or not self.height:
            return
        if self._clip is not None:
            mask = ImageChops.multiply(mask, self._clip)
        alpha = color.rgba8[3]
        if alpha < 255:
            mask = mask.point(lambda v: v * alpha // 255)
        layer = Image.new("RGBA", self.image.size, (*color.rgb, 0))
        layer.putalpha(mask)
        self.image.alpha_composite(layer)

    def fill(self, color: Color) -> None:
        self._paint(self._draw_path(brush=aggdraw.Brush(255)), color)

    def stroke(self, color: Color) -> None:
        pen = aggdraw.Pen(255, self.line_width * self._line_scale())
        self._paint(self._draw_path(pen=pen), color)

    def clip(self) -> None:
        mask = self._draw_path(brush=aggdraw.Brush(255))
        if self._clip is not None:
            mask = ImageChops.multiply(mask, self._clip)
        self._clip = mask

    def fill_text(
        self, text: str, x: float, y: float, font: FontSpec, color: Color
    ) -> None:
        """Draw text with its left end of baseline at (x, y)."""
        pil_font = load_font(font)
        metrics = measure_text(text, font)
        size = (math.ceil(metrics.width) + 1, math.ceil(metrics.height) + 1)
        stamp = Image.new("RGBA", size, (0, 0, 0, 0))
        ImageDraw.Draw(stamp).text((0, 0), text, font=pil_font, fill=color.rgba8)
        self.draw_image(stamp, x, y - metrics.ascent)

    def draw_image(self, image: ImageType, x: float = 0, y: float = 0) -> None:
        """Composite a Pillow image with its top-left at (x, y) in user space."""
        if not self.width or not self.height:
            return
        a, b, c, d, e, f = self._translated_matrix(x, y)
        det = a * d - b * c
        if det == 0:
            return
        inverse = (
            d / det,
            -c / det,
            (c * f - d * e) / det,
            -b / det,
            a / det,
            (b * e - a * f) / det,
        )
        layer = image.convert("RGBA").transform(
            self.image.size,
            Image.Transform.AFFINE,
            inverse,
            resample=Image.Resampling.BILINEAR,
        )
        if self._clip is not None:
            layer.putalpha(ImageChops.multiply(layer.getchannel("A"), self._clip))
        self.image.alpha_composite(layer)

    def get_pixel_buffer(self, x: int, y: int, width: int, height: int) -> bytes:
        """Return RGBA bytes, row by row, for a rectangle of the canvas."""
        return self.image.crop((x, y, x + width, y + height)).tobytes()


def render_to_pil(image: AlgebraImage) -> ImageType:
    """Draw an image onto a new canvas of its own size and return the pixels."""
    surface = PilSurface(image.width, image.height)
    image.render(surface)
    return surface.image


def write_png(image: AlgebraImage, outfile: str | os.PathLike[str]) -> Path:
    """Draw an image and save it as a png.

    :param image: any image
    :param outfile: path to write. The suffix is replaced with ".png".
    :return: the path written
    """
    outfile = Path(outfile).with_suffix(".png")
    render_to_pil(image).save(outfile, format="PNG")
    return outfile
