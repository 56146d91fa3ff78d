"""Primitive shapes and the geometry that places their vertices.

Each ``new_*`` function takes shape parameters, a fill mode, and a color, and
returns a finished image. Vertices are in y-down coordinates translated so the
smallest x and y are zero. Angles are degrees.

These functions trust their arguments. ``make_image`` validates user input before
calling them.

:author: Shay Hill
:created: 2026-10-19
"""

from __future__ import annotations

import dataclasses
import math
from typing import TYPE_CHECKING

from image_algebra.base_image import Image, render_polygon
from image_algebra.color import OUTLINE
from image_algebra.colornames import color_to_spoken_string, with_article
from image_algebra.geometry import (
    centroid,
    find_height,
    find_width,
    to_non_negative,
    translate_vertices,
)
from image_algebra.globs import BEZIER_KAPPA, OUTLINE_OFFSET, WEDGE_STEP

if TYPE_CHECKING:
    from collections.abc import Sequence

    from image_algebra.color import Color, FillMode
    from image_algebra.colordb import ColorDB
    from image_algebra.type_hints import Surface, Vertex, Vertices


def _describe(
    style: FillMode, color: Color, rest: str, color_db: ColorDB | None
) -> str:
    """Build a description like "a solid red square of size 10"."""
    return with_article(f"{color_to_spoken_string(color, style, color_db)} {rest}")


def _outline_adjust(image: Image, surface: Surface) -> float:
    """Half a pixel for outlines drawn for display, else zero."""
    if image.style.is_outline and not surface.equality_test:
        return OUTLINE_OFFSET
    return 0


def _paint_path(image: Image, surface: Surface) -> None:
    """Stroke or fill whatever path the image just built."""
    if image.style.is_outline:
        surface.stroke(image.color)
    else:
        surface.fill(image.style.apply(image.color))


# ===================================================================================
#   Ellipse
# ===================================================================================


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class EllipseImage(Image):
    """An axis-aligned ellipse. Has no polygon, so compares by pixels."""

    @property
    def is_circle(self) -> bool:
        return self.raw_width == self.raw_height

    def render(self, surface: Surface) -> None:
        """Draw four quarter-ellipse bezier curves."""
        adjust = _outline_adjust(self, surface)
        width = self.exact_width - 2 * adjust
        height = self.exact_height - 2 * adjust
        left, top = adjust, adjust
        right, bottom = left + width, top + height
        mid_x, mid_y = left + width / 2, top + height / 2
        h_b = width / 2 * BEZIER_KAPPA
        v_b = height / 2 * BEZIER_KAPPA

        surface.save()
        surface.begin_path()
        surface.move_to(left, mid_y)
        surface.bezier_curve_to(left, mid_y - v_b, mid_x - h_b, top, mid_x, top)
        surface.bezier_curve_to(mid_x + h_b, top, right, mid_y - v_b, right, mid_y)
        surface.bezier_curve_to(right, mid_y + v_b, mid_x + h_b, bottom, mid_x, bottom)
        surface.bezier_curve_to(mid_x - h_b, bottom, left, mid_y + v_b, left, mid_y)
        surface.close_path()
        _paint_path(self, surface)
        surface.restore()

    def same_as(self, other: Image) -> bool:
        return (
            type(other) is EllipseImage
            and (self.raw_width, self.raw_height) == (other.raw_width, other.raw_height)
            and self.style == other.style
            and self.color == other.color
        )


def new_ellipse(
    width: float,
    height: float,
    style: FillMode,
    color: Color,
    *,
    color_db: ColorDB | None = None,
) -> EllipseImage:
    """Create an ellipse with the given diameters."""
    if width == height:
        rest = f"circle of radius {width / 2:g}"
        aria_text = _describe(style, color, rest, color_db)
    else:
        aria_text = _describe(
            style,
            color,
            f"ellipse of width {width:g} and height {height:g}",
            color_db,
        )
    return EllipseImage(
        raw_width=width,
        raw_height=height,
        style=style,
        color=color,
        aria_text=aria_text,
    )


def new_circle(
    radius: float, style: FillMode, color: Color, *, color_db: ColorDB | None = None
) -> EllipseImage:
    """Create a circle."""
    return new_ellipse(radius * 2, radius * 2, style, color, color_db=color_db)


# ===================================================================================
#   Polygons
# ===================================================================================


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class RectangleImage(Image):
    """An axis-aligned rectangle."""


def new_rectangle(
    width: float,
    height: float,
    style: FillMode,
    color: Color,
    *,
    color_db: ColorDB | None = None,
) -> RectangleImage:
    """Create a rectangle with corners bottom-left, top-left, top-right, bottom-right.

    :param width: horizontal side length
    :param height: vertical side length
    :param style: fill mode
    :param color: fill or stroke color
    :param color_db: catalog the description names the color from
    :return: a RectangleImage with its pinhole at the center
    """
    if width == height:
        aria_text = _describe(style, color, f"square of size {width:g}", color_db)
    else:
        aria_text = _describe(
            style,
            color,
            f"rectangle of width {width:g} and height {height:g}",
            color_db,
        )
    return RectangleImage(
        raw_width=width,
        raw_height=height,
        raw_vertices=((0, height), (0, 0), (width, 0), (width, height)),
        style=style,
        color=color,
        aria_text=aria_text,
    )


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class RegularPolygonImage(Image):
    """A regular polygon or a star polygon drawn as one or more closed loops."""

    loops: tuple[Vertices, ...]

    def render(self, surface: Surface) -> None:
        render_polygon(surface, self.loops, self.style, self.color)


def new_regular_polygon(
    length: float,
    count: int,
    step: int,
    style: FillMode,
    color: Color,
    *,
    color_db: ColorDB | None = None,
    flat_bottom: bool = True,
) -> RegularPolygonImage:
    """Create a regular polygon {count} or star polygon {count/step}.

    :param length: side length of the polygon with the same count and step 1
    :param count: number of vertices
    :param step: connect every step-th vertex. A step sharing a factor with count
        traces gcd(count, step) separate loops.
    :param style: fill mode
    :param color: fill or stroke color
    :param color_db: catalog the description names the color from
    :param flat_bottom: rotate even-sided polygons so a side, not a vertex, is at
        the bottom
    :return: a RegularPolygonImage with its pinhole at the mean of its vertices
    """
    radius = length / (2 * math.sin(math.pi / count))
    adjust = math.pi / 2
    if flat_bottom and count % 2 == 0:
        adjust += math.pi / count
    angle = 2 * math.pi / count

    num_loops = math.gcd(count, step)
    per_loop = count // num_loops
    raw_loops: list[list[Vertex]] = []
    for loop in range(num_loops):
        radians = loop * angle
        points: list[Vertex] = []
        for _ in range(per_loop):
            radians += step * angle
            x = radius * math.cos(radians - adjust)
            points.append((x, radius * math.sin(radians - adjust)))
        raw_loops.append(points)

    flat = [v for loop in raw_loops for v in loop]
    vertices, (dx, dy) = to_non_negative(flat)
    loops = tuple(translate_vertices(loop, dx, dy) for loop in raw_loops)
    return RegularPolygonImage(
        raw_width=find_width(vertices),
        raw_height=find_height(vertices),
        pinhole=centroid(vertices),
        raw_vertices=vertices,
        loops=loops,
        style=style,
        color=color,
        aria_text=_describe(
            style,
            color,
            f"{count} sided polygon with each side of length {length:g}",
            color_db,
        ),
    )


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class StarImage(Image):
    """A radial star alternating between an outer and an inner radius."""


def new_star(
    points: int,
    outer: float,
    inner: float,
    style: FillMode,
    color: Color,
    *,
    color_db: ColorDB | None = None,
) -> StarImage:
    """Create a radial star with its first point straight up.

    :param points: number of points
    :param outer: radius of the points
    :param inner: radius of the notches between points
    :param style: fill mode
    :param color: fill or stroke color
    :param color_db: catalog the description names the color from
    :return: a StarImage with its pinhole at the mean of its vertices
    """
    max_radius = max(outer, inner)
    step = math.pi / points
    raw: list[Vertex] = []
    for i in range(2 * points):
        radius = outer if i % 2 == 0 else inner
        raw.append(
            (
                max_radius + math.sin(i * step) * radius,
                max_radius - math.cos(i * step) * radius,
            )
        )
    vertices, _ = to_non_negative(raw)
    return StarImage(
        raw_width=find_width(vertices),
        raw_height=find_height(vertices),
        pinhole=centroid(vertices),
        raw_vertices=vertices,
        style=style,
        color=color,
        aria_text=_describe(
            style,
            color,
            f"star with {points} points, inner radius {inner:g}"
            + f" and outer radius {outer:g}",
            color_db,
        ),
    )


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class PointPolygonImage(Image):
    """A polygon through arbitrary points."""


def new_point_polygon(
    points: Sequence[Vertex],
    style: FillMode,
    color: Color,
    *,
    color_db: ColorDB | None = None,
) -> PointPolygonImage:
    """Create a polygon from points given with y pointing up.

    :param points: (x, y) vertices in order, math convention
    :param style: fill mode
    :param color: fill or stroke color
    :param color_db: catalog the description names the color from
    :return: a PointPolygonImage with its pinhole at the mean of its vertices
    """
    vertices, _ = to_non_negative([(x, -y) for x, y in points])
    return PointPolygonImage(
        raw_width=find_width(vertices),
        raw_height=find_height(vertices),
        pinhole=centroid(vertices),
        raw_vertices=vertices,
        style=style,
        color=color,
        aria_text=_describe(
            style, color, f"polygon with {len(vertices)} points", color_db
        ),
    )


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class TriangleImage(Image):
    """A triangle from its base, the angle at the base's left end, and a side."""


def new_triangle(
    side_c: float,
    angle_a: float,
    side_b: float,
    style: FillMode,
    color: Color,
    *,
    color_db: ColorDB | None = None,
) -> TriangleImage:
    """Create a triangle from two sides and the angle between them.

    Side c runs along the bottom (or top) edge from vertex A. Side b leaves vertex A
    at angle_a. Angles past 180 put the third vertex above the base.

    :param side_c: length of the base
    :param angle_a: angle between side c and side b, degrees
    :param side_b: length of the second side
    :param style: fill mode
    :param color: fill or stroke color
    :param color_db: catalog the description names the color from
    :return: a TriangleImage with its pinhole at the centroid
    """
    rad = math.radians(angle_a)
    third_x = side_b * math.cos(rad)
    third_y = side_b * math.sin(rad)
    offset_x = -min(0, third_x)

    if third_y > 0:
        vertices: Vertices = (
            (offset_x, 0),
            (offset_x + side_c, 0),
            (offset_x + third_x, third_y),
        )
    else:
        vertices = (
            (offset_x, -third_y),
            (offset_x + side_c, -third_y),
            (offset_x + third_x, 0),
        )
    return TriangleImage(
        raw_width=max(side_c, third_x) + offset_x,
        raw_height=abs(third_y),
        pinhole=centroid(vertices),
        raw_vertices=vertices,
        style=style,
        color=color,
        aria_text=_describe(
            style,
            color,
            f"triangle whose base is of length {side_c:g}, with an angle of"
            + f" {angle_a % 180:g} degrees between it and a side of length"
            + f" {side_b:g}",
            color_db,
        ),
    )


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class RhombusImage(Image):
    """A diamond with four equal sides."""


def new_rhombus(
    side: float,
    angle: float,
    style: FillMode,
    color: Color,
    *,
    color_db: ColorDB | None = None,
) -> RhombusImage:
    """Create a rhombus standing on one vertex.

    :param side: length of every side
    :param angle: angle at the top and bottom vertices, degrees
    :param style: fill mode
    :param color: fill or stroke color
    :param color_db: catalog the description names the color from
    :return: a RhombusImage with its pinhole at the center
    """
    half = math.radians(angle) / 2
    width = 2 * side * math.sin(half)
    height = 2 * side * abs(math.cos(half))
    return RhombusImage(
        raw_width=width,
        raw_height=height,
        raw_vertices=(
            (width / 2, 0),
            (width, height / 2),
            (width / 2, height),
            (0, height / 2),
        ),
        style=style,
        color=color,
        aria_text=_describe(
            style,
            color,
            f"rhombus with size {side:g} and top and bottom angle {angle:g}",
            color_db,
        ),
    )


# ===================================================================================
#   Wedge and line
# ===================================================================================


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class WedgeImage(Image):
    """A circular sector opening counterclockwise from the positive x axis."""

    radius: float
    angle: float

    def render(self, surface: Surface) -> None:
        """Draw a true arc. The vertices only approximate it."""
        adjust = _outline_adjust(self, surface)
        surface.save()
        surface.begin_path()
        surface.move_to(self.pinhole_x, self.pinhole_y)
        surface.arc(
            self.pinhole_x,
            self.pinhole_y,
            self.radius - 2 * adjust,
            0,
            -math.radians(self.angle),
            anticlockwise=True,
        )
        surface.close_path()
        _paint_path(self, surface)
        surface.restore()


def new_wedge(
    radius: float,
    angle: float,
    style: FillMode,
    color: Color,
    *,
    color_db: ColorDB | None = None,
) -> WedgeImage:
    """Create a wedge (pie slice).

    :param radius: radius of the circle the wedge is cut from
    :param angle: angle of the slice in degrees, (0, 360]
    :param style: fill mode
    :param color: fill or stroke color
    :param color_db: catalog the description names the color from
    :return: a WedgeImage with its pinhole at the circle's center
    """
    raw: list[Vertex] = [(0, 0), (radius, 0)]
    for degrees in range(WEDGE_STEP, math.ceil(angle), WEDGE_STEP):
        rad = math.radians(degrees)
        raw.append((radius * math.cos(rad), -radius * math.sin(rad)))
    rad = math.radians(angle)
    raw.append((radius * math.cos(rad), -radius * math.sin(rad)))

    vertices, _ = to_non_negative(raw)
    return WedgeImage(
        raw_width=find_width(vertices),
        raw_height=find_height(vertices),
        pinhole=vertices[0],
        raw_vertices=vertices,
        radius=radius,
        angle=angle,
        style=style,
        color=color,
        aria_text=_describe(
            style,
            color,
            f"wedge of angle {angle:g} and radius {radius:g}",
            color_db,
        ),
    )


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class LineImage(Image):
    """A straight segment. Always an outline."""


def new_line(
    x: float, y: float, color: Color, *, color_db: ColorDB | None = None
) -> LineImage:
    """Create a line from the origin to (x, y), moved into non-negative space."""
    vertices, _ = to_non_negative([(0, 0), (x, y)])
    return LineImage(
        raw_width=abs(x),
        raw_height=abs(y),
        raw_vertices=vertices,
        style=OUTLINE,
        color=color,
        aria_text=_describe(
            OUTLINE,
            color,
            f"line whose endpoint is at x {x:g} and y {y:g}",
            color_db,
        ),
    )
