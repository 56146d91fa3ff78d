"""Test vertex helpers and the triangle trigonometry.

:author: Shay Hill
:created: 2026-10-19
"""

import pytest

from image_algebra.geometry import (
    PolarPoint,
    canonicalize_angle,
    centroid,
    find_height,
    find_width,
    rotate_vertices,
    round_half_up,
    sides_dont_fit,
    to_cartesian,
    to_non_negative,
    vertex_loops_equal,
)

TRIANGLE = ((0, 0), (1, 0), (0, 1))


class TestPoints:
    def test_polar(self):
        """Polar angles are degrees from the positive x axis."""
        assert to_cartesian(PolarPoint(2, 90)) == pytest.approx((0, 2))

    def test_pair(self):
        """Pairs pass through as floats."""
        assert to_cartesian([3, 4]) == (3.0, 4.0)

    @pytest.mark.parametrize(
        ("value", "expect"), [(2.5, 3), (-2.5, -2), (2.4, 2), (-0.6, -1)]
    )
    def test_round_half_up(self, value: float, expect: int):
        """Halves go toward positive infinity."""
        assert round_half_up(value) == expect

    def test_canonicalize_angle(self):
        """Angles land in [0, 360)."""
        assert canonicalize_angle(-90) == 270
        assert canonicalize_angle(360) == 0
        assert canonicalize_angle(45) == 45


class TestVertices:
    def test_to_non_negative(self):
        """The smallest x and y become zero."""
        vertices, delta = to_non_negative([(-1, 2), (3, -4)])
        assert vertices == ((0, 6), (4, 0))
        assert delta == (1, 4)

    def test_extent(self):
        """Width and height are the bounding box sides."""
        points = [(-1, 2), (3, -4)]
        assert find_width(points) == 4
        assert find_height(points) == 6

    def test_empty_extent(self):
        """No vertices, no size."""
        assert find_width([]) == 0

    def test_centroid(self):
        """Centroid is the mean of the vertices."""
        assert centroid([(0, 0), (4, 0), (4, 2), (0, 2)]) == (2, 1)

    def test_rotate(self):
        """Positive degrees turn x toward y."""
        ((x, y),) = rotate_vertices([(1, 0)], 90)
        assert (x, y) == pytest.approx((0, 1))


class TestLoops:
    def test_same_loop_any_start(self):
        """A loop matches itself started at any vertex."""
        rotated = (TRIANGLE[1], TRIANGLE[2], TRIANGLE[0])
        assert vertex_loops_equal(TRIANGLE, rotated)

    def test_reversed_loop(self):
        """Reversing the direction is a different loop."""
        assert not vertex_loops_equal(TRIANGLE, TRIANGLE[::-1])

    def test_length_mismatch(self):
        """Loops of different lengths never match."""
        assert not vertex_loops_equal(TRIANGLE, TRIANGLE[:2])

    def test_tolerance(self):
        """Float noise does not break a match."""
        noisy = ((1e-9, 0), (1, -1e-9), (0, 1))
        assert vertex_loops_equal(TRIANGLE, noisy)


class TestTriangles:
    def test_sides_fit(self):
        """A 3-4-5 triangle closes."""
        assert not sides_dont_fit(3, 4, 5)

    def test_sides_dont_fit(self):
        """A long side cannot be spanned by two short ones."""
        assert sides_dont_fit(1, 1, 10)
