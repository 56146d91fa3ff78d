"""Public construction API: one validating function per shape and combinator.

Every function checks its arguments before any geometry is computed, so bad input
raises a ValidationError and never yields a half-built image. Colors may be given
as Color values or catalog names. Fill modes may be "solid", "outline", an alpha
multiplier in [0, 1], or a FillMode.

Functions that take a list of images fold it from the left. An empty list gives
an empty transparent scene.

:author: Shay Hill
:created: 2026-10-19
"""

from __future__ import annotations

import functools as ft
import math
import numbers
from typing import TYPE_CHECKING, TypeGuard

from image_algebra.color import TRANSPARENT, Color, to_fill_mode
from image_algebra.colordb import default_color_db
from image_algebra.combinators import (
    XPlace,
    YPlace,
    new_crop,
    new_flip,
    new_frame,
    new_overlay,
    new_pinhole_mark,
    new_rotate,
    new_scale,
)
from image_algebra.compare import images_difference as _images_difference
from image_algebra.compare import images_equal as _images_equal
from image_algebra.exceptions import ValidationError
from image_algebra.file_image import (
    load_resource,
    new_file_image,
    new_file_video,
    new_image_data_from_colors,
)
from image_algebra.fonts import (
    FontFamily,
    FontSpec,
    FontStyle,
    FontWeight,
    measure_text,
)
from image_algebra.geometry import (
    canonicalize_angle,
    cos_rel,
    excess,
    sides_dont_fit,
    to_cartesian,
)
from image_algebra.image_ops import pil_to_colors
from image_algebra.scene import SceneImage, new_scene
from image_algebra.shapes import (
    new_circle,
    new_ellipse,
    new_line,
    new_point_polygon,
    new_rectangle,
    new_regular_polygon,
    new_rhombus,
    new_star,
    new_triangle,
    new_wedge,
)
from image_algebra.surface import render_to_pil
from image_algebra.text_image import new_text

if TYPE_CHECKING:
    import os
    from collections.abc import Sequence
    from concurrent.futures import Executor

    from image_algebra.base_image import Image
    from image_algebra.colordb import ColorDB
    from image_algebra.file_image import FileImage, FileVideo, ImageDataImage
    from image_algebra.geometry import PolarPoint
    from image_algebra.shapes import (
        EllipseImage,
        LineImage,
        PointPolygonImage,
        RectangleImage,
        RegularPolygonImage,
        RhombusImage,
        StarImage,
        TriangleImage,
        WedgeImage,
    )
    from image_algebra.text_image import TextImage
    from image_algebra.type_hints import ColorArg, FillArg, TextMeasurer

_NOT_A_TRIANGLE = "The given side, angle, and side will not form a triangle"


# ===================================================================================
#   Argument checks
# ===================================================================================


def _is_number(value: object) -> TypeGuard[float]:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_int(value: object) -> TypeGuard[int]:
    return isinstance(value, int) and not isinstance(value, bool)


def is_angle(value: object) -> bool:
    """Whether a value is an angle in degrees in [0, 360)."""
    return _is_number(value) and 0 <= value < 360


def is_side_count(value: object) -> bool:
    """Whether a value is an int of at least 3."""
    return _is_int(value) and value >= 3


def is_step_count(value: object) -> bool:
    """Whether a value is an int of at least 1."""
    return _is_int(value) and value >= 1


def _check_number(name: str, value: float) -> float:
    if not _is_number(value) or not math.isfinite(value):
        msg = f"{name} must be a finite number, got {value!r}"
        raise ValidationError(msg)
    return float(value)


def _check_size(name: str, value: float) -> float:
    """Require a non-negative number."""
    if not _is_number(value) or not math.isfinite(value) or value < 0:
        msg = f"{name} must be a non-negative number, got {value!r}"
        raise ValidationError(msg)
    return float(value)


def _check_angle(name: str, value: float) -> float:
    if not is_angle(value):
        msg = f"{name} must be an angle in [0, 360), got {value!r}"
        raise ValidationError(msg)
    return float(value)


def _check_count(name: str, value: int, minimum: int) -> int:
    if not _is_int(value) or value < minimum:
        msg = f"{name} must be an integer of at least {minimum}, got {value!r}"
        raise ValidationError(msg)
    return value


def _catalog(color_db: ColorDB | None) -> ColorDB:
    return default_color_db() if color_db is None else color_db


def _to_color(color: ColorArg, color_db: ColorDB | None = None) -> Color:
    """Pass a Color through or look up a catalog name."""
    return _catalog(color_db).resolve(color)


def _empty_list_scene() -> SceneImage:
    return new_scene(0, 0, color=TRANSPARENT)


# ===================================================================================
#   Shapes
# ===================================================================================


def circle(
    radius: float, mode: FillArg, color: ColorArg, *, color_db: ColorDB | None = None
) -> EllipseImage:
    """Create a circle.

    :param radius: non-negative radius
    :param mode: fill mode
    :param color: a Color or a color name
    :param color_db: catalog for color names. Defaults to the bundled catalog.
    :return: an EllipseImage of width and height 2 * radius
    """
    radius = _check_size("radius", radius)
    return new_circle(
        radius, to_fill_mode(mode), _to_color(color, color_db), color_db=color_db
    )


def ellipse(
    width: float,
    height: float,
    mode: FillArg,
    color: ColorArg,
    *,
    color_db: ColorDB | None = None,
) -> EllipseImage:
    """Create an ellipse with the given diameters."""
    width = _check_size("width", width)
    height = _check_size("height", height)
    return new_ellipse(
        width, height, to_fill_mode(mode), _to_color(color, color_db), color_db=color_db
    )


def rectangle(
    width: float,
    height: float,
    mode: FillArg,
    color: ColorArg,
    *,
    color_db: ColorDB | None = None,
) -> RectangleImage:
    """Create a rectangle."""
    width = _check_size("width", width)
    height = _check_size("height", height)
    return new_rectangle(
        width, height, to_fill_mode(mode), _to_color(color, color_db), color_db=color_db
    )


def square(
    side: float, mode: FillArg, color: ColorArg, *, color_db: ColorDB | None = None
) -> RectangleImage:
    """Create a square."""
    side = _check_size("side", side)
    return new_rectangle(
        side,
        side,
        to_fill_mode(mode),
        _to_color(color, color_db),
        color_db=color_db,
    )


def regular_polygon(
    length: float,
    count: int,
    mode: FillArg,
    color: ColorArg,
    *,
    color_db: ColorDB | None = None,
) -> RegularPolygonImage:
    """Create a regular polygon resting on a flat side.

    :param length: side length
    :param count: number of sides, at least 3
    :param mode: fill mode
    :param color: a Color or a color name
    :param color_db: catalog for color names
    :return: a RegularPolygonImage
    """
    length = _check_size("length", length)
    count = _check_count("count", count, 3)
    return new_regular_polygon(
        length,
        count,
        1,
        to_fill_mode(mode),
        _to_color(color, color_db),
        color_db=color_db,
    )


def star_polygon(
    length: float,
    count: int,
    step: int,
    mode: FillArg,
    color: ColorArg,
    *,
    color_db: ColorDB | None = None,
) -> RegularPolygonImage:
    """Create a star polygon by joining every step-th of count points on a circle.

    :param length: side length of the regular polygon with the same count
    :param count: number of points, at least 3
    :param step: connect every step-th point, at least 1
    :param mode: fill mode
    :param color: a Color or a color name
    :param color_db: catalog for color names
    :return: a RegularPolygonImage with one loop per cycle the step traces
    """
    length = _check_size("length", length)
    count = _check_count("count", count, 3)
    step = _check_count("step", step, 1)
    return new_regular_polygon(
        length,
        count,
        step,
        to_fill_mode(mode),
        _to_color(color, color_db),
        flat_bottom=False,
        color_db=color_db,
    )


def star(
    side: float, mode: FillArg, color: ColorArg, *, color_db: ColorDB | None = None
) -> RegularPolygonImage:
    """Create a five-pointed star polygon {5/2}."""
    return star_polygon(side, 5, 2, mode, color, color_db=color_db)


def star_sized(
    point_count: int,
    outer: float,
    inner: float,
    mode: FillArg,
    color: ColorArg,
    *,
    color_db: ColorDB | None = None,
) -> StarImage:
    """Create a radial star with points on one circle and notches on another.

    :param point_count: number of points, at least 2
    :param outer: radius of the points
    :param inner: radius of the notches
    :param mode: fill mode
    :param color: a Color or a color name
    :param color_db: catalog for color names
    :return: a StarImage
    """
    point_count = _check_count("point_count", point_count, 2)
    outer = _check_size("outer", outer)
    inner = _check_size("inner", inner)
    return new_star(
        point_count,
        outer,
        inner,
        to_fill_mode(mode),
        _to_color(color, color_db),
        color_db=color_db,
    )


radial_star = star_sized


def point_polygon(
    points: Sequence[PolarPoint | Sequence[float]],
    mode: FillArg,
    color: ColorArg,
    *,
    color_db: ColorDB | None = None,
) -> PointPolygonImage:
    """Create a polygon through points given with y pointing up.

    :param points: at least 3 (x, y) pairs or PolarPoints
    :param mode: fill mode
    :param color: a Color or a color name
    :param color_db: catalog for color names
    :return: a PointPolygonImage
    """
    if len(points) < 3:
        msg = f"A polygon needs at least 3 points, got {len(points)}"
        raise ValidationError(msg)
    try:
        vertices = [to_cartesian(p) for p in points]
    except (TypeError, ValueError) as e:
        msg = f"Points must be (x, y) pairs or PolarPoints: {e}"
        raise ValidationError(msg) from e
    for x, y in vertices:
        _ = _check_number("point coordinate", x)
        _ = _check_number("point coordinate", y)
    return new_point_polygon(
        vertices, to_fill_mode(mode), _to_color(color, color_db), color_db=color_db
    )


def rhombus(
    side: float,
    angle: float,
    mode: FillArg,
    color: ColorArg,
    *,
    color_db: ColorDB | None = None,
) -> RhombusImage:
    """Create a rhombus with the given top and bottom angle in degrees."""
    side = _check_size("side", side)
    angle = _check_angle("angle", angle)
    return new_rhombus(
        side, angle, to_fill_mode(mode), _to_color(color, color_db), color_db=color_db
    )


def wedge(
    radius: float,
    angle: float,
    mode: FillArg,
    color: ColorArg,
    *,
    color_db: ColorDB | None = None,
) -> WedgeImage:
    """Create a wedge (pie slice) opening counterclockwise from 3 o'clock."""
    radius = _check_size("radius", radius)
    angle = _check_angle("angle", angle)
    return new_wedge(
        radius, angle, to_fill_mode(mode), _to_color(color, color_db), color_db=color_db
    )


def line(
    x: float, y: float, color: ColorArg, *, color_db: ColorDB | None = None
) -> LineImage:
    """Create a line from the origin to (x, y)."""
    x = _check_number("x", x)
    y = _check_number("y", y)
    return new_line(x, y, _to_color(color, color_db), color_db=color_db)


# ===================================================================================
#   Triangles
# ===================================================================================


def _angle_opposite(side_a: float, side_b: float, side_c: float) -> float:
    """Angle A, in degrees, opposite side a, by the law of cosines."""
    cos_a = excess(side_b, side_c, side_a) / (2 * side_b * side_c)
    return math.degrees(math.acos(max(-1.0, min(1.0, cos_a))))


def _triangle(
    side_c: float,
    angle_a: float,
    side_b: float,
    mode: FillArg,
    color: ColorArg,
    color_db: ColorDB | None,
) -> TriangleImage:
    return new_triangle(
        side_c,
        angle_a,
        side_b,
        to_fill_mode(mode),
        _to_color(color, color_db),
        color_db=color_db,
    )


def triangle(
    side: float, mode: FillArg, color: ColorArg, *, color_db: ColorDB | None = None
) -> TriangleImage:
    """Create an equilateral triangle pointing up."""
    side = _check_size("side", side)
    return _triangle(side, 360 - 60, side, mode, color, color_db)


def right_triangle(
    side1: float,
    side2: float,
    mode: FillArg,
    color: ColorArg,
    *,
    color_db: ColorDB | None = None,
) -> TriangleImage:
    """Create a right triangle with legs side1 (the base) and side2 (upright)."""
    side1 = _check_size("side1", side1)
    side2 = _check_size("side2", side2)
    return _triangle(side1, 360 - 90, side2, mode, color, color_db)


def isosceles_triangle(
    side: float,
    angle_c: float,
    mode: FillArg,
    color: ColorArg,
    *,
    color_db: ColorDB | None = None,
) -> TriangleImage:
    """Create an isosceles triangle with two sides of the given length.

    :param side: length of the two equal sides
    :param angle_c: angle between the two equal sides, at the top
    :param mode: fill mode
    :param color: a Color or a color name
    :param color_db: catalog for color names
    :return: a TriangleImage
    """
    side = _check_size("side", side)
    angle_c = _check_angle("angle_c", angle_c)
    angle_ab = (180 - angle_c) / 2
    base = 2 * side * math.sin(math.radians(angle_c) / 2)
    return _triangle(base, 360 - angle_ab, side, mode, color, color_db)


def triangle_sss(
    side_a: float,
    side_b: float,
    side_c: float,
    mode: FillArg,
    color: ColorArg,
    *,
    color_db: ColorDB | None = None,
) -> TriangleImage:
    """Create a triangle from three side lengths.

    :raise ValidationError: if any two sides together are shorter than the third
    """
    side_a = _check_size("side_a", side_a)
    side_b = _check_size("side_b", side_b)
    side_c = _check_size("side_c", side_c)
    if sides_dont_fit(side_a, side_b, side_c) or 0 in (side_b, side_c):
        raise ValidationError(_NOT_A_TRIANGLE)
    angle_a = _angle_opposite(side_a, side_b, side_c)
    return _triangle(side_c, angle_a, side_b, mode, color, color_db)


def triangle_sas(
    side_a: float,
    angle_b: float,
    side_c: float,
    mode: FillArg,
    color: ColorArg,
    *,
    color_db: ColorDB | None = None,
) -> TriangleImage:
    """Create a triangle from two sides and the angle between them."""
    side_a = _check_size("side_a", side_a)
    angle_b = _check_angle("angle_b", angle_b)
    side_c = _check_size("side_c", side_c)
    side_b2 = cos_rel(side_a, side_c, angle_b)
    if side_b2 <= 0:
        raise ValidationError(_NOT_A_TRIANGLE)
    side_b = math.sqrt(side_b2)
    if sides_dont_fit(side_a, side_b, side_c) or side_c == 0:
        raise ValidationError(_NOT_A_TRIANGLE)
    angle_a = _angle_opposite(side_a, side_b, side_c)
    return _triangle(side_c, angle_a, side_b, mode, color, color_db)


def triangle_ass(
    angle_a: float,
    side_b: float,
    side_c: float,
    mode: FillArg,
    color: ColorArg,
    *,
    color_db: ColorDB | None = None,
) -> TriangleImage:
    """Create a triangle from an angle and the two sides that meet at it."""
    angle_a = _check_angle("angle_a", angle_a)
    side_b = _check_size("side_b", side_b)
    side_c = _check_size("side_c", side_c)
    if angle_a > 180:
        raise ValidationError(_NOT_A_TRIANGLE)
    return _triangle(side_c, angle_a, side_b, mode, color, color_db)


def triangle_ssa(
    side_a: float,
    side_b: float,
    angle_c: float,
    mode: FillArg,
    color: ColorArg,
    *,
    color_db: ColorDB | None = None,
) -> TriangleImage:
    """Create a triangle from two sides and the angle between them, at C."""
    side_a = _check_size("side_a", side_a)
    side_b = _check_size("side_b", side_b)
    angle_c = _check_angle("angle_c", angle_c)
    if angle_c > 180:
        raise ValidationError(_NOT_A_TRIANGLE)
    side_c2 = cos_rel(side_a, side_b, angle_c)
    if side_c2 <= 0:
        raise ValidationError(_NOT_A_TRIANGLE)
    side_c = math.sqrt(side_c2)
    if sides_dont_fit(side_a, side_b, side_c) or side_b == 0:
        raise ValidationError(_NOT_A_TRIANGLE)
    angle_a = _angle_opposite(side_a, side_b, side_c)
    return _triangle(side_c, angle_a, side_b, mode, color, color_db)


def triangle_aas(
    angle_a: float,
    angle_b: float,
    side_c: float,
    mode: FillArg,
    color: ColorArg,
    *,
    color_db: ColorDB | None = None,
) -> TriangleImage:
    """Create a triangle from two angles and the side opposite the third."""
    angle_a = _check_angle("angle_a", angle_a)
    angle_b = _check_angle("angle_b", angle_b)
    side_c = _check_size("side_c", side_c)
    angle_c = 180 - angle_a - angle_b
    if angle_c <= 0:
        raise ValidationError(_NOT_A_TRIANGLE)
    hypotenuse = side_c / math.sin(math.radians(angle_c))
    side_b = hypotenuse * math.sin(math.radians(angle_b))
    return _triangle(side_c, angle_a, side_b, mode, color, color_db)


def triangle_asa(
    angle_a: float,
    side_b: float,
    angle_c: float,
    mode: FillArg,
    color: ColorArg,
    *,
    color_db: ColorDB | None = None,
) -> TriangleImage:
    """Create a triangle from two angles and the side between them."""
    angle_a = _check_angle("angle_a", angle_a)
    side_b = _check_size("side_b", side_b)
    angle_c = _check_angle("angle_c", angle_c)
    angle_b = 180 - angle_a - angle_c
    if angle_b <= 0:
        raise ValidationError(_NOT_A_TRIANGLE)
    side_c = side_b * math.sin(math.radians(angle_c)) / math.sin(math.radians(angle_b))
    return _triangle(side_c, angle_a, side_b, mode, color, color_db)


def triangle_saa(
    side_a: float,
    angle_b: float,
    angle_c: float,
    mode: FillArg,
    color: ColorArg,
    *,
    color_db: ColorDB | None = None,
) -> TriangleImage:
    """Create a triangle from a side and the two angles not touching it."""
    side_a = _check_size("side_a", side_a)
    angle_b = _check_angle("angle_b", angle_b)
    angle_c = _check_angle("angle_c", angle_c)
    angle_a = 180 - angle_b - angle_c
    if angle_a <= 0:
        raise ValidationError(_NOT_A_TRIANGLE)
    hypotenuse = side_a / math.sin(math.radians(angle_a))
    side_c = hypotenuse * math.sin(math.radians(angle_c))
    side_b = hypotenuse * math.sin(math.radians(angle_b))
    return _triangle(side_c, angle_a, side_b, mode, color, color_db)


# ===================================================================================
#   Text
# ===================================================================================


def text(
    string: str,
    size: float,
    color: ColorArg,
    *,
    color_db: ColorDB | None = None,
    measure: TextMeasurer = measure_text,
) -> TextImage:
    """Set a string in the default face at the given size."""
    size = _check_size("size", size)
    font = FontSpec(size=size)
    return new_text(
        str(string),
        _to_color(color, color_db),
        font,
        measure=measure,
        color_db=color_db,
    )


def text_font(
    string: str,
    size: float,
    color: ColorArg,
    face: str,
    family: FontFamily | str,
    style: FontStyle | str,
    weight: FontWeight | str,
    underline: bool,
    *,
    color_db: ColorDB | None = None,
    measure: TextMeasurer = measure_text,
) -> TextImage:
    """Set a string with every font option given.

    :param string: the text
    :param size: font size in pixels
    :param color: a Color or a color name
    :param face: font face name, e.g. "Arial"
    :param family: generic family, used as a fallback hint
    :param style: normal, italic, or slant
    :param weight: normal, bold, or light
    :param underline: draw a line under the text
    :param color_db: catalog for color names
    :param measure: text measurer. Defaults to Pillow.
    :return: a TextImage
    """
    size = _check_size("size", size)
    try:
        font = FontSpec(
            size=size,
            face=face,
            family=FontFamily(family),
            style=FontStyle(style),
            weight=FontWeight(weight),
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e
    return new_text(
        str(string),
        _to_color(color, color_db),
        font,
        underline=underline,
        measure=measure,
        color_db=color_db,
    )


# ===================================================================================
#   Overlay family
# ===================================================================================


def overlay_onto_offset(
    img1: Image,
    place_x1: XPlace | str,
    place_y1: YPlace | str,
    offset_x: float,
    offset_y: float,
    img2: Image,
    place_x2: XPlace | str,
    place_y2: YPlace | str,
) -> Image:
    """Align an anchor of img1 with an anchor of img2, then move img2 by an offset.

    img1 is drawn on top.
    """
    return new_overlay(
        img1,
        XPlace.parse(place_x1),
        YPlace.parse(place_y1),
        _check_number("offset_x", offset_x),
        _check_number("offset_y", offset_y),
        img2,
        XPlace.parse(place_x2),
        YPlace.parse(place_y2),
    )


def _fold(images: Sequence[Image], combine: ft.partial[Image]) -> Image:
    """Fold a list of images from the left. An empty list is an empty scene."""
    if not images:
        return _empty_list_scene()
    return ft.reduce(combine, images)


def overlay(img1: Image, img2: Image) -> Image:
    """Put img1 over img2, pinhole on pinhole."""
    return overlay_align(XPlace.PINHOLE, YPlace.PINHOLE, img1, img2)


def overlay_list(images: Sequence[Image]) -> Image:
    """Put each image over the next, pinhole on pinhole. The first is on top."""
    return overlay_align_list(XPlace.PINHOLE, YPlace.PINHOLE, images)


def overlay_xy(img1: Image, dx: float, dy: float, img2: Image) -> Image:
    """Put img1 over img2 with img2's top-left corner moved by (dx, dy)."""
    return overlay_onto_offset(img1, "left", "top", dx, dy, img2, "left", "top")


def overlay_align(
    place_x: XPlace | str, place_y: YPlace | str, img1: Image, img2: Image
) -> Image:
    """Put img1 over img2 with the same anchor of each aligned."""
    return overlay_onto_offset(img1, place_x, place_y, 0, 0, img2, place_x, place_y)


def overlay_align_list(
    place_x: XPlace | str, place_y: YPlace | str, images: Sequence[Image]
) -> Image:
    """Overlay a list of images aligned on one anchor. The first is on top."""
    return _fold(images, ft.partial(_overlay_pair, place_x, place_y))


def _overlay_pair(
    place_x: XPlace | str, place_y: YPlace | str, acc: Image, img: Image
) -> Image:
    return overlay_align(place_x, place_y, acc, img)


def _underlay_pair(
    place_x: XPlace | str, place_y: YPlace | str, acc: Image, img: Image
) -> Image:
    return overlay_align(place_x, place_y, img, acc)


def underlay(img1: Image, img2: Image) -> Image:
    """Put img2 over img1, pinhole on pinhole."""
    return overlay(img2, img1)


def underlay_list(images: Sequence[Image]) -> Image:
    """Put each image under the next, pinhole on pinhole. The last is on top."""
    return underlay_align_list(XPlace.PINHOLE, YPlace.PINHOLE, images)


def underlay_xy(img1: Image, dx: float, dy: float, img2: Image) -> Image:
    """Put img2 over img1 with img2's top-left corner at (dx, dy) on img1."""
    return overlay_onto_offset(img2, "left", "top", -dx, -dy, img1, "left", "top")


def underlay_align(
    place_x: XPlace | str, place_y: YPlace | str, img1: Image, img2: Image
) -> Image:
    """Put img2 over img1 with the same anchor of each aligned."""
    return overlay_align(place_x, place_y, img2, img1)


def underlay_align_list(
    place_x: XPlace | str, place_y: YPlace | str, images: Sequence[Image]
) -> Image:
    """Underlay a list of images aligned on one anchor. The last is on top."""
    return _fold(images, ft.partial(_underlay_pair, place_x, place_y))


def beside(img1: Image, img2: Image) -> Image:
    """Put img1 left of img2, centered vertically."""
    return beside_align(YPlace.CENTER, img1, img2)


def beside_align(place_y: YPlace | str, img1: Image, img2: Image) -> Image:
    """Put img1 left of img2, aligned on a vertical anchor."""
    return overlay_onto_offset(img1, "right", place_y, 0, 0, img2, "left", place_y)


def _beside_pair(place_y: YPlace | str, acc: Image, img: Image) -> Image:
    return beside_align(place_y, acc, img)


def beside_list(images: Sequence[Image]) -> Image:
    """Put images in a row, left to right, centered vertically."""
    return beside_align_list(YPlace.CENTER, images)


def beside_align_list(place_y: YPlace | str, images: Sequence[Image]) -> Image:
    """Put images in a row, left to right, aligned on a vertical anchor."""
    return _fold(images, ft.partial(_beside_pair, place_y))


def above(img1: Image, img2: Image) -> Image:
    """Put img1 above img2, centered horizontally."""
    return above_align(XPlace.MIDDLE, img1, img2)


def above_align(place_x: XPlace | str, img1: Image, img2: Image) -> Image:
    """Put img1 above img2, aligned on a horizontal anchor."""
    return overlay_onto_offset(img1, place_x, "bottom", 0, 0, img2, place_x, "top")


def _above_pair(place_x: XPlace | str, acc: Image, img: Image) -> Image:
    return above_align(place_x, acc, img)


def _below_pair(place_x: XPlace | str, acc: Image, img: Image) -> Image:
    return above_align(place_x, img, acc)


def above_list(images: Sequence[Image]) -> Image:
    """Stack images top to bottom, centered horizontally."""
    return above_align_list(XPlace.MIDDLE, images)


def above_align_list(place_x: XPlace | str, images: Sequence[Image]) -> Image:
    """Stack images top to bottom, aligned on a horizontal anchor."""
    return _fold(images, ft.partial(_above_pair, place_x))


def below(img1: Image, img2: Image) -> Image:
    """Put img1 below img2, centered horizontally."""
    return above(img2, img1)


def below_align(place_x: XPlace | str, img1: Image, img2: Image) -> Image:
    """Put img1 below img2, aligned on a horizontal anchor."""
    return above_align(place_x, img2, img1)


def below_list(images: Sequence[Image]) -> Image:
    """Stack images bottom to top, centered horizontally."""
    return below_align_list(XPlace.MIDDLE, images)


def below_align_list(place_x: XPlace | str, images: Sequence[Image]) -> Image:
    """Stack images bottom to top, aligned on a horizontal anchor."""
    return _fold(images, ft.partial(_below_pair, place_x))


# ===================================================================================
#   Transforms
# ===================================================================================


def rotate(angle: float, img: Image) -> Image:
    """Rotate an image counterclockwise by angle degrees."""
    angle = canonicalize_angle(_check_number("angle", angle))
    return new_rotate(-angle, img)


def scale(factor: float, img: Image) -> Image:
    """Scale an image by the same factor on both axes."""
    factor = _check_number("factor", factor)
    return new_scale(factor, factor, img)


def scale_xy(x_factor: float, y_factor: float, img: Image) -> Image:
    """Scale an image by separate horizontal and vertical factors."""
    x_factor = _check_number("x_factor", x_factor)
    y_factor = _check_number("y_factor", y_factor)
    return new_scale(x_factor, y_factor, img)


def flip_horizontal(img: Image) -> Image:
    """Mirror an image left to right."""
    return new_flip(img, "horizontal")


def flip_vertical(img: Image) -> Image:
    """Mirror an image top to bottom."""
    return new_flip(img, "vertical")


reflect_y = flip_horizontal
reflect_x = flip_vertical


def frame(img: Image) -> Image:
    """Draw a black border around an image."""
    return new_frame(img)


def draw_pinhole(img: Image) -> Image:
    """Draw a crosshair on an image's pinhole."""
    return new_pinhole_mark(img)


def crop(x: float, y: float, width: float, height: float, img: Image) -> Image:
    """Cut the rectangle with top-left (x, y) out of an image."""
    x = _check_number("x", x)
    y = _check_number("y", y)
    width = _check_size("width", width)
    height = _check_size("height", height)
    return new_crop(x, y, width, height, img)


# ===================================================================================
#   Scenes and placement
# ===================================================================================


def empty_scene(width: float, height: float) -> SceneImage:
    """Create a transparent scene with a black border."""
    width = _check_size("width", width)
    height = _check_size("height", height)
    return new_scene(width, height, with_border=True, color=TRANSPARENT)


def empty_color_scene(
    width: float, height: float, color: ColorArg, *, color_db: ColorDB | None = None
) -> SceneImage:
    """Create a scene filled with a color, with a black border."""
    width = _check_size("width", width)
    height = _check_size("height", height)
    return new_scene(
        width, height, with_border=True, color=_to_color(color, color_db)
    )


def empty_image() -> SceneImage:
    """Create a zero-sized image."""
    return new_scene(0, 0, with_border=True, color=TRANSPARENT)


def _as_scene(background: Image) -> SceneImage:
    """Use a scene as is. Put anything else on a transparent scene of its size."""
    if isinstance(background, SceneImage):
        return background
    scene = new_scene(background.width, background.height, color=TRANSPARENT)
    return scene.add(background, background.width / 2, background.height / 2)


def place_image(picture: Image, x: float, y: float, background: Image) -> SceneImage:
    """Center a picture on (x, y) of a background, clipped to the background.

    (x, y) is measured from the background's top-left corner, y pointing down.
    """
    x = _check_number("x", x)
    y = _check_number("y", y)
    return _as_scene(background).add(picture, x, y)


translate = place_image


def put_image(picture: Image, x: float, y: float, background: Image) -> SceneImage:
    """Center a picture on (x, y) of a background, y measured up from the bottom."""
    x = _check_number("x", x)
    y = _check_number("y", y)
    return _as_scene(background).add(picture, x, background.height - y)


def place_image_align(
    img: Image,
    x: float,
    y: float,
    place_x: XPlace | str,
    place_y: YPlace | str,
    background: Image,
) -> SceneImage:
    """Place an image so the given anchor of it lands on (x, y) of a background.

    Pinhole and baseline anchors are treated like middle and center.
    """
    x = _check_number("x", x)
    y = _check_number("y", y)
    x_place, y_place = XPlace.parse(place_x), YPlace.parse(place_y)
    if x_place is XPlace.LEFT:
        x += img.width / 2
    elif x_place is XPlace.RIGHT:
        x -= img.width / 2
    if y_place is YPlace.TOP:
        y += img.height / 2
    elif y_place is YPlace.BOTTOM:
        y -= img.height / 2
    return _as_scene(background).add(img, x, y)


def add_line(
    img: Image,
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    color: ColorArg,
    *,
    color_db: ColorDB | None = None,
) -> Image:
    """Draw a line from (x1, y1) to (x2, y2) on an image, growing it if needed."""
    x1, y1 = _check_number("x1", x1), _check_number("y1", y1)
    x2, y2 = _check_number("x2", x2), _check_number("y2", y2)
    segment = new_line(
        x2 - x1, y2 - y1, _to_color(color, color_db), color_db=color_db
    )
    leftmost, topmost = min(x1, x2), min(y1, y2)
    return new_overlay(
        segment,
        XPlace.LEFT,
        YPlace.TOP,
        -leftmost,
        -topmost,
        img,
        XPlace.LEFT,
        YPlace.TOP,
    )


def scene_line(
    img: Image,
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    color: ColorArg,
    *,
    color_db: ColorDB | None = None,
) -> SceneImage:
    """Draw a line from (x1, y1) to (x2, y2) on an image, clipped to the image."""
    x1, y1 = _check_number("x1", x1), _check_number("y1", y1)
    x2, y2 = _check_number("x2", x2), _check_number("y2", y2)
    segment = new_line(
        x2 - x1, y2 - y1, _to_color(color, color_db), color_db=color_db
    )
    scene = new_scene(img.width, img.height, with_border=True, color=TRANSPARENT)
    scene = scene.add(img, img.width / 2, img.height / 2)
    leftmost, topmost = min(x1, x2), min(y1, y2)
    return scene.add(
        segment,
        segment.exact_width / 2 + leftmost,
        segment.exact_height / 2 + topmost,
    )


# ===================================================================================
#   Pinholes and measurements
# ===================================================================================


def move_pinhole(dx: float, dy: float, img: Image) -> Image:
    """Move an image's pinhole by (dx, dy)."""
    return img.offset_pinhole(_check_number("dx", dx), _check_number("dy", dy))


def place_pinhole(x: float, y: float, img: Image) -> Image:
    """Put an image's pinhole at (x, y)."""
    return img.update_pinhole(_check_number("x", x), _check_number("y", y))


def center_pinhole(img: Image) -> Image:
    """Put an image's pinhole at its center."""
    return img.update_pinhole(img.width / 2, img.height / 2)


def image_width(img: Image) -> int:
    return img.width


def image_height(img: Image) -> int:
    return img.height


def image_baseline(img: Image) -> float:
    return img.alpha_baseline


def image_pinhole_x(img: Image) -> float:
    return img.pinhole_x


def image_pinhole_y(img: Image) -> float:
    return img.pinhole_y


def images_equal(img1: Image, img2: Image) -> bool:
    """Whether two images look the same."""
    return _images_equal(img1, img2)


def images_difference(img1: Image, img2: Image) -> float | str:
    """RMS pixel difference of two images, or a string saying why there is none."""
    return _images_difference(img1, img2)


# ===================================================================================
#   Pixels and colors
# ===================================================================================


def color_at_position(img: Image, x: int, y: int) -> Color:
    """Read the color of one pixel.

    :raise ValidationError: if (x, y) is outside the image
    """
    width, height = img.width, img.height
    if not _is_int(x) or not 0 <= x < width:
        msg = (
            f"The given x coordinate {x} must be between 0 (inclusive) and the image"
            + f" width of {width} (exclusive)"
        )
        raise ValidationError(msg)
    if not _is_int(y) or not 0 <= y < height:
        msg = (
            f"The given y coordinate {y} must be between 0 (inclusive) and the image"
            + f" height of {height} (exclusive)"
        )
        raise ValidationError(msg)
    r, g, b, a = render_to_pil(img).getpixel((x, y))  # type: ignore[misc]
    return Color(r, g, b, a / 255)


def image_to_color_list(img: Image) -> list[Color]:
    """List every pixel's color, row by row from the top."""
    return pil_to_colors(render_to_pil(img))


def color_list_to_image(
    colors: Sequence[ColorArg],
    width: int,
    height: int,
    pinhole_x: float,
    pinhole_y: float,
    *,
    color_db: ColorDB | None = None,
) -> ImageDataImage:
    """Build an image from colors listed row by row, with a given pinhole.

    :raise ValidationError: if the list does not have width * height colors
    """
    image = color_list_to_bitmap(colors, width, height, color_db=color_db)
    return image.update_pinhole(
        _check_number("pinhole_x", pinhole_x), _check_number("pinhole_y", pinhole_y)
    )


def color_list_to_bitmap(
    colors: Sequence[ColorArg],
    width: int,
    height: int,
    *,
    color_db: ColorDB | None = None,
) -> ImageDataImage:
    """Build an image from colors listed row by row, pinhole at the center.

    :raise ValidationError: if the list does not have width * height colors
    """
    width = _check_count("width", width, 0)
    height = _check_count("height", height, 0)
    resolved = [_to_color(c, color_db) for c in colors]
    return new_image_data_from_colors(resolved, width, height)


def name_to_color(name: str, *, color_db: ColorDB | None = None) -> Color | None:
    """Look up a catalog color by name, ignoring case. None if unknown."""
    return _catalog(color_db).get(name)


def color_named(name: str, *, color_db: ColorDB | None = None) -> Color:
    """Look up a catalog color by name, ignoring case.

    :raise ValidationError: if the name is unknown
    """
    return _catalog(color_db).resolve(name)


# ===================================================================================
#   Files
# ===================================================================================


def image_url(
    src: str | os.PathLike[str], executor: Executor | None = None
) -> FileImage:
    """Load a bitmap from a path or an http(s) url.

    :param src: where to read the image
    :param executor: read in the background on this executor. The image is
        zero-sized until the read finishes.
    :return: a FileImage
    """
    return new_file_image(load_resource(src, executor))


bitmap_url = image_url


def video_url(
    src: str | os.PathLike[str], executor: Executor | None = None
) -> FileVideo:
    """Load a video (any multi-frame format Pillow reads) from a path or url."""
    return new_file_video(load_resource(src, executor))
