"""Images built from other images: overlay, rotate, scale, crop, flip, and marks.

A combinator never changes its children. It computes its own size, pinhole, and
outline from theirs when it is built and replays the same transform when drawn.

:author: Shay Hill
:created: 2026-10-19
"""

from __future__ import annotations

import dataclasses
import math
from enum import Enum
from typing import TYPE_CHECKING, Literal

from image_algebra.base_image import Image, Polygon, render_border
from image_algebra.color import Color
from image_algebra.compare import images_equal
from image_algebra.exceptions import ValidationError
from image_algebra.geometry import (
    find_height,
    find_width,
    rotate_vertices,
    to_non_negative,
    translate_vertices,
)
from image_algebra.globs import PINHOLE_RADIUS, PINHOLE_STROKES
from image_algebra.shapes import EllipseImage

if TYPE_CHECKING:
    from image_algebra.type_hints import Surface, Vertex, Vertices

FlipAxis = Literal["horizontal", "vertical"]


# ===================================================================================
#   Anchors
# ===================================================================================


class XPlace(str, Enum):
    """Horizontal alignment point of an image."""

    LEFT = "left"
    MIDDLE = "middle"
    PINHOLE = "pinhole"
    RIGHT = "right"

    @classmethod
    def parse(cls, value: XPlace | str) -> XPlace:
        """Accept an XPlace or its name in any case. "center" means middle.

        :raise ValidationError: if the name is not an x-place
        """
        if isinstance(value, XPlace):
            return value
        name = {"center": "middle"}.get(value.lower(), value.lower())
        try:
            return cls(name)
        except ValueError:
            msg = f"Unknown x-place {value!r}"
            raise ValidationError(msg) from None


class YPlace(str, Enum):
    """Vertical alignment point of an image."""

    TOP = "top"
    CENTER = "center"
    PINHOLE = "pinhole"
    BASELINE = "baseline"
    BOTTOM = "bottom"

    @classmethod
    def parse(cls, value: YPlace | str) -> YPlace:
        """Accept a YPlace or its name in any case. "middle" means center.

        :raise ValidationError: if the name is not a y-place
        """
        if isinstance(value, YPlace):
            return value
        name = {"middle": "center"}.get(value.lower(), value.lower())
        try:
            return cls(name)
        except ValueError:
            msg = f"Unknown y-place {value!r}"
            raise ValidationError(msg) from None


def _x_anchor(image: Image, place: XPlace) -> float:
    """Distance from the image's left edge to its x-place."""
    if place is XPlace.LEFT:
        return 0
    if place is XPlace.MIDDLE:
        return image.exact_width / 2
    if place is XPlace.PINHOLE:
        return image.pinhole_x
    return image.exact_width


def _y_anchor(image: Image, place: YPlace) -> float:
    """Distance from the image's top edge to its y-place."""
    if place is YPlace.TOP:
        return 0
    if place is YPlace.CENTER:
        return image.exact_height / 2
    if place is YPlace.PINHOLE:
        return image.pinhole_y
    if place is YPlace.BASELINE:
        return image.alpha_baseline
    return image.exact_height


# ===================================================================================
#   Base for images with children
# ===================================================================================


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class _Composite(Image):
    """An image whose outline is derived from its children."""

    hull: Vertices

    @property
    def vertices(self) -> Vertices:
        return self.hull


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class _Wrapper(_Composite):
    """A transform or decoration around a single child."""

    child: Image

    def _transformed_polygon(self) -> Polygon | None:
        """The child's polygon carried through this transform, if it has one."""
        polygon = self.child.polygon()
        if polygon is None:
            return None
        return Polygon(polygon.style, polygon.color, self.hull)


# ===================================================================================
#   Overlay
# ===================================================================================


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class OverlayImage(_Composite):
    """Two images aligned on anchor points, the first drawn over the second."""

    first: Image
    second: Image
    first_at: Vertex
    second_at: Vertex

    def render(self, surface: Surface) -> None:
        layers = ((self.second, self.second_at), (self.first, self.first_at))
        for image, (x, y) in layers:
            surface.save()
            surface.translate(x, y)
            image.render(surface)
            surface.restore()

    def same_as(self, other: Image) -> bool:
        return (
            type(other) is OverlayImage
            and (self.first_at, self.second_at) == (other.first_at, other.second_at)
            and images_equal(self.first, other.first)
            and images_equal(self.second, other.second)
        )


def new_overlay(
    first: Image,
    x_place1: XPlace,
    y_place1: YPlace,
    offset_x: float,
    offset_y: float,
    second: Image,
    x_place2: XPlace,
    y_place2: YPlace,
) -> OverlayImage:
    """Align an anchor of the first image with an anchor of the second.

    :param first: the image on top
    :param x_place1: horizontal anchor on the first image
    :param y_place1: vertical anchor on the first image
    :param offset_x: move the second image right by this much
    :param offset_y: move the second image down by this much
    :param second: the image underneath
    :param x_place2: horizontal anchor on the second image
    :param y_place2: vertical anchor on the second image
    :return: an OverlayImage whose pinhole is the first image's pinhole
    """
    x1, y1 = -_x_anchor(first, x_place1), -_y_anchor(first, y_place1)
    x2, y2 = -_x_anchor(second, x_place2), -_y_anchor(second, y_place2)

    shift_x = max(first.exact_width, second.exact_width)
    shift_y = max(first.exact_height, second.exact_height)
    x1, y1 = x1 + shift_x, y1 + shift_y
    x2, y2 = x2 + shift_x + offset_x, y2 + shift_y + offset_y

    min_x, min_y = min(x1, x2), min(y1, y2)
    x1, y1, x2, y2 = x1 - min_x, y1 - min_y, x2 - min_x, y2 - min_y

    hull = (
        *translate_vertices(first.vertices, x1, y1),
        *translate_vertices(second.vertices, x2, y2),
    )
    if first.baseline:
        baseline = y1 + first.baseline
    elif second.baseline:
        baseline = y2 + second.baseline
    else:
        baseline = 0
    return OverlayImage(
        raw_width=find_width(hull),
        raw_height=find_height(hull),
        pinhole=(first.pinhole_x + x1, first.pinhole_y + y1),
        baseline=baseline,
        hull=hull,
        first=first,
        second=second,
        first_at=(x1, y1),
        second_at=(x2, y2),
        aria_text=f"an overlay: first image is {first.aria_text}, second image is"
        + f" {second.aria_text}",
    )


# ===================================================================================
#   Rotate, scale, crop, flip
# ===================================================================================


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class RotateImage(_Wrapper):
    """A child turned about its origin, then moved back into view."""

    angle: float
    shift: Vertex

    def polygon(self) -> Polygon | None:
        return self._transformed_polygon()

    def render(self, surface: Surface) -> None:
        surface.save()
        surface.translate(*self.shift)
        surface.rotate(math.radians(self.angle))
        self.child.render(surface)
        surface.restore()

    def same_as(self, other: Image) -> bool:
        return (
            type(other) is RotateImage
            and math.isclose(self.angle, other.angle)
            and images_equal(self.child, other.child)
        )


def new_rotate(angle: float, child: Image) -> RotateImage:
    """Rotate an image clockwise (y-down) by angle degrees.

    :param angle: degrees. Positive turns clockwise on screen.
    :param child: the image to rotate. A circle is never turned.
    :return: a RotateImage sized to the rotated outline
    """
    if isinstance(child, EllipseImage) and child.is_circle:
        angle = 0
    rotated = rotate_vertices(child.vertices, angle)
    hull, shift = to_non_negative(rotated)
    ((px, py),) = rotate_vertices([(child.pinhole_x, child.pinhole_y)], angle)
    return RotateImage(
        raw_width=find_width(hull),
        raw_height=find_height(hull),
        pinhole=(px + shift[0], py + shift[1]),
        hull=hull,
        child=child,
        angle=angle,
        shift=shift,
        aria_text=f"Rotated image, {-angle:g} degrees: {child.aria_text}",
    )


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class ScaleImage(_Wrapper):
    """A child stretched along each axis. Negative factors also mirror."""

    x_factor: float
    y_factor: float

    def polygon(self) -> Polygon | None:
        return self._transformed_polygon()

    def render(self, surface: Surface) -> None:
        surface.save()
        surface.translate(
            self.exact_width if self.x_factor < 0 else 0,
            self.exact_height if self.y_factor < 0 else 0,
        )
        surface.scale(self.x_factor, self.y_factor)
        self.child.render(surface)
        surface.restore()

    def same_as(self, other: Image) -> bool:
        return (
            type(other) is ScaleImage
            and (self.x_factor, self.y_factor) == (other.x_factor, other.y_factor)
            and images_equal(self.child, other.child)
        )


def new_scale(x_factor: float, y_factor: float, child: Image) -> ScaleImage:
    """Scale an image along x and y.

    :param x_factor: horizontal factor. Negative mirrors left to right.
    :param y_factor: vertical factor. Negative mirrors top to bottom.
    :param child: the image to scale
    :return: a ScaleImage
    """
    width = child.exact_width * abs(x_factor)
    height = child.exact_height * abs(y_factor)
    dx = width if x_factor < 0 else 0
    dy = height if y_factor < 0 else 0
    hull = tuple((x * x_factor + dx, y * y_factor + dy) for x, y in child.vertices)
    if x_factor * y_factor < 0:
        hull = hull[::-1]
    baseline = child.baseline * y_factor + dy if child.baseline else 0
    if x_factor == y_factor:
        description = f"Scaled image, by {x_factor:g}"
    else:
        description = (
            f"Scaled image, horizontally by {x_factor:g} and vertically by"
            + f" {y_factor:g}"
        )
    return ScaleImage(
        raw_width=width,
        raw_height=height,
        pinhole=(child.pinhole_x * x_factor + dx, child.pinhole_y * y_factor + dy),
        baseline=baseline,
        hull=hull,
        child=child,
        x_factor=x_factor,
        y_factor=y_factor,
        aria_text=f"{description}: {child.aria_text}",
    )


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class CropImage(_Wrapper):
    """The part of a child inside a rectangle."""

    left: float
    top: float

    def render(self, surface: Surface) -> None:
        surface.save()
        surface.begin_path()
        surface.rect(0, 0, self.exact_width, self.exact_height)
        surface.clip()
        surface.translate(-self.left, -self.top)
        self.child.render(surface)
        surface.restore()

    def same_as(self, other: Image) -> bool:
        return (
            type(other) is CropImage
            and (self.left, self.top) == (other.left, other.top)
            and (self.raw_width, self.raw_height) == (other.raw_width, other.raw_height)
            and images_equal(self.child, other.child)
        )


def new_crop(
    x: float, y: float, width: float, height: float, child: Image
) -> CropImage:
    """Cut a rectangle out of an image.

    :param x: left edge of the rectangle in the child's coordinates
    :param y: top edge of the rectangle
    :param width: rectangle width
    :param height: rectangle height
    :param child: the image to crop
    :return: a CropImage. The child's pinhole is kept if it falls inside the
        rectangle, else the pinhole is the rectangle's center.
    """
    px, py = child.pinhole_x, child.pinhole_y
    pinhole: Vertex | None = None
    if x <= px <= x + width and y <= py <= y + height:
        pinhole = (px - x, py - y)
    w, h = width, height
    return CropImage(
        raw_width=width,
        raw_height=height,
        pinhole=pinhole,
        hull=((0, 0), (w, 0), (w, h), (0, h)),
        child=child,
        left=x,
        top=y,
        aria_text=f"Cropped image, from {x:g}, {y:g} to {x + width:g},"
        + f" {y + height:g}: {child.aria_text}",
    )


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class FlipImage(_Wrapper):
    """A child mirrored left to right or top to bottom."""

    axis: FlipAxis

    def polygon(self) -> Polygon | None:
        return self._transformed_polygon()

    def render(self, surface: Surface) -> None:
        surface.save()
        if self.axis == "horizontal":
            surface.translate(self.exact_width, 0)
            surface.scale(-1, 1)
        else:
            surface.translate(0, self.exact_height)
            surface.scale(1, -1)
        self.child.render(surface)
        surface.restore()

    def same_as(self, other: Image) -> bool:
        return (
            type(other) is FlipImage
            and self.axis == other.axis
            and images_equal(self.child, other.child)
        )


def new_flip(child: Image, axis: FlipAxis) -> FlipImage:
    """Mirror an image.

    :param child: the image to mirror
    :param axis: "horizontal" swaps left and right, "vertical" swaps top and bottom
    :return: a FlipImage. The outline is reversed to keep its winding.
    """
    w, h = child.exact_width, child.exact_height
    if axis == "horizontal":
        hull = tuple((w - x, y) for x, y in child.vertices)[::-1]
        pinhole = (w - child.pinhole_x, child.pinhole_y)
        baseline = child.baseline
    else:
        hull = tuple((x, h - y) for x, y in child.vertices)[::-1]
        pinhole = (child.pinhole_x, h - child.pinhole_y)
        baseline = 0
    return FlipImage(
        raw_width=w,
        raw_height=h,
        pinhole=pinhole,
        baseline=baseline,
        hull=hull,
        child=child,
        axis=axis,
        aria_text=f"{axis.capitalize()}ly flipped image: {child.aria_text}",
    )


# ===================================================================================
#   Decorations
# ===================================================================================


def _pass_through(child: Image) -> dict[str, object]:
    """Geometry fields copied unchanged from a child."""
    return {
        "raw_width": child.exact_width,
        "raw_height": child.exact_height,
        "pinhole": (child.pinhole_x, child.pinhole_y),
        "baseline": child.baseline,
        "hull": child.vertices,
        "child": child,
    }


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class FrameImage(_Wrapper):
    """A child with a black border drawn around its bounding box."""

    def render(self, surface: Surface) -> None:
        surface.save()
        self.child.render(surface)
        render_border(surface, self.exact_width, self.exact_height)
        surface.restore()

    def same_as(self, other: Image) -> bool:
        return type(other) is FrameImage and images_equal(self.child, other.child)


def new_frame(child: Image) -> FrameImage:
    """Draw a border around an image."""
    return FrameImage(
        **_pass_through(child), aria_text=f"Framed image: {child.aria_text}"
    )


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class PinholeImage(_Wrapper):
    """A child with a crosshair drawn on its pinhole."""

    def render(self, surface: Surface) -> None:
        self.child.render(surface)
        x, y = self.pinhole_x, self.pinhole_y
        surface.save()
        for width, rgb in PINHOLE_STROKES:
            surface.line_width = width
            surface.begin_path()
            surface.move_to(x - PINHOLE_RADIUS, y)
            surface.line_to(x + PINHOLE_RADIUS, y)
            surface.move_to(x, y - PINHOLE_RADIUS)
            surface.line_to(x, y + PINHOLE_RADIUS)
            surface.stroke(Color(*rgb))
        surface.restore()

    def same_as(self, other: Image) -> bool:
        return (
            type(other) is PinholeImage
            and (self.pinhole_x, self.pinhole_y) == (other.pinhole_x, other.pinhole_y)
            and images_equal(self.child, other.child)
        )


def new_pinhole_mark(child: Image) -> PinholeImage:
    """Mark the pinhole of an image with a crosshair."""
    return PinholeImage(
        **_pass_through(child), aria_text=f"Pinhole image: {child.aria_text}"
    )
