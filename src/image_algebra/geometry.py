"""Points, vertex lists, and the trigonometry behind the shape constructors.

Coordinates are y-down (screen convention). Angles passed to public functions are
degrees.

:author: Shay Hill
:created: 2026-10-19
"""

from __future__ import annotations

import dataclasses
import math
from typing import TYPE_CHECKING

import svg_ultralight as su

from image_algebra.globs import VERTEX_TOLERANCE

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from image_algebra.type_hints import Vertex, Vertices


# ===================================================================================
#   Points
# ===================================================================================


@dataclasses.dataclass(frozen=True)
class PolarPoint:
    """A point given by distance from the origin and angle in degrees."""

    r: float
    theta: float

    def to_cartesian(self) -> Vertex:
        """Convert to (x, y)."""
        rad = math.radians(self.theta)
        return self.r * math.cos(rad), self.r * math.sin(rad)


def to_cartesian(point: PolarPoint | Sequence[float]) -> Vertex:
    """Convert a polar point or an (x, y) pair to an (x, y) tuple."""
    if isinstance(point, PolarPoint):
        return point.to_cartesian()
    x, y = point
    return float(x), float(y)


def round_half_up(value: float) -> int:
    """Round to the nearest int with halves going up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


# ===================================================================================
#   Vertex lists
# ===================================================================================


def vertices_bbox(vertices: Iterable[Vertex]) -> su.BoundingBox:
    """Return the axis-aligned bounding box of a vertex list.

    :param vertices: any number of (x, y) points. An empty list has a zero box at
        the origin.
    :return: svg_ultralight BoundingBox around the points
    """
    points = list(vertices) or [(0.0, 0.0)]
    xs = [x for x, _ in points]
    ys = [y for _, y in points]
    return su.BoundingBox(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))


def find_width(vertices: Iterable[Vertex]) -> float:
    """Horizontal extent of a vertex list."""
    return vertices_bbox(vertices).width


def find_height(vertices: Iterable[Vertex]) -> float:
    """Vertical extent of a vertex list."""
    return vertices_bbox(vertices).height


def translate_vertices(vertices: Iterable[Vertex], dx: float, dy: float) -> Vertices:
    """Move every vertex by (dx, dy)."""
    return tuple((x + dx, y + dy) for x, y in vertices)


def to_non_negative(vertices: Sequence[Vertex]) -> tuple[Vertices, Vertex]:
    """Translate a vertex list so its minimum x and y are zero.

    :param vertices: (x, y) points
    :return: the translated points and the (dx, dy) translation that was applied
    """
    bbox = vertices_bbox(vertices)
    delta = (-bbox.x, -bbox.y)
    return translate_vertices(vertices, *delta), delta


def centroid(vertices: Sequence[Vertex]) -> Vertex:
    """Arithmetic mean of a vertex list."""
    count = len(vertices) or 1
    return (
        sum(x for x, _ in vertices) / count,
        sum(y for _, y in vertices) / count,
    )


def rotate_vertices(vertices: Iterable[Vertex], degrees: float) -> Vertices:
    """Rotate vertices about the origin."""
    rad = math.radians(degrees)
    cos, sin = math.cos(rad), math.sin(rad)
    return tuple((x * cos - y * sin, x * sin + y * cos) for x, y in vertices)


def _vertex_close(a: Vertex, b: Vertex) -> bool:
    return all(
        math.isclose(p, q, abs_tol=VERTEX_TOLERANCE) for p, q in zip(a, b, strict=True)
    )


def vertex_loops_equal(loop_a: Sequence[Vertex], loop_b: Sequence[Vertex]) -> bool:
    """Compare two closed loops, ignoring which vertex each starts on.

    Loop b matches if it is a contiguous run of loop a doubled end-to-end. A loop
    and its mirror image do not match.
    """
    if len(loop_a) != len(loop_b):
        return False
    if not loop_a:
        return True
    doubled = [*loop_a, *loop_a]
    count = len(loop_a)
    return any(
        all(_vertex_close(doubled[start + i], loop_b[i]) for i in range(count))
        for start in range(count)
    )


# ===================================================================================
#   Trigonometry for the triangle solvers
# ===================================================================================


def excess(side_a: float, side_b: float, side_c: float) -> float:
    """Return a^2 + b^2 - c^2, the law-of-cosines numerator."""
    return side_a**2 + side_b**2 - side_c**2


def cos_rel(side_a: float, side_b: float, angle_c: float) -> float:
    """Square of the side opposite angle C (degrees) between sides a and b."""
    return side_a**2 + side_b**2 - 2 * side_a * side_b * math.cos(math.radians(angle_c))


def sides_dont_fit(side_a: float, side_b: float, side_c: float) -> bool:
    """True if any two sides are together shorter than the third."""
    return (
        side_a + side_c < side_b
        or side_b + side_c < side_a
        or side_a + side_b < side_c
    )


def canonicalize_angle(angle: float) -> float:
    """Map an angle in degrees into [0, 360)."""
    return angle % 360
