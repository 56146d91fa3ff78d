"""Test scenes and placing images on them.

:author: Shay Hill
:created: 2026-10-19
"""

import pytest

from image_algebra import make_image as mi
from image_algebra.color import TRANSPARENT, Color
from image_algebra.scene import SceneImage, new_scene

RED = Color(255, 0, 0)


def _square(side: float = 10):
    return mi.rectangle(side, side, "solid", "red")


class TestScene:
    def test_add_centers(self):
        """Add centers the image on the given point."""
        scene = new_scene(100, 100).add(_square(), 50, 50)
        ((child, x, y),) = scene.children
        assert (x, y) == (45, 45)
        assert child.width == 10

    def test_add_does_not_mutate(self):
        """Adding returns a new scene."""
        scene = new_scene(100, 100)
        _ = scene.add(_square(), 50, 50)
        assert scene.children == ()

    def test_description(self):
        """Scenes describe their size and each child."""
        scene = new_scene(100, 100).add(_square(), 50, 50)
        assert scene.aria_text == (
            "Scene that is 100 by 100. Child 1: a solid red square of size 10,"
            + " positioned at 45, 45."
        )

    def test_pixels(self):
        """Children are drawn on a transparent background."""
        scene = new_scene(100, 100).add(_square(), 50, 50)
        assert mi.color_at_position(scene, 50, 50) == RED
        assert mi.color_at_position(scene, 5, 5).a == 0

    def test_clipped(self):
        """A child hanging off the edge is cut off, not grown into."""
        scene = new_scene(20, 20).add(_square(), 0, 0)
        assert (scene.width, scene.height) == (20, 20)
        assert mi.color_at_position(scene, 2, 2) == RED

    def test_background(self):
        """A scene can have a background color."""
        scene = mi.empty_color_scene(10, 10, "blue")
        assert mi.color_at_position(scene, 5, 5) == mi.color_named("blue")

    def test_border(self):
        """An empty scene has a black border."""
        scene = mi.empty_scene(100, 100)
        assert mi.color_at_position(scene, 50, 0) == Color(0, 0, 0)
        assert mi.color_at_position(scene, 50, 50) == TRANSPARENT

    def test_border_far_edges(self):
        """The right and bottom border lines land on the last column and row."""
        scene = mi.empty_scene(100, 100)
        assert mi.color_at_position(scene, 99, 50) == Color(0, 0, 0)
        assert mi.color_at_position(scene, 50, 99) == Color(0, 0, 0)
        assert mi.color_at_position(scene, 98, 50) == TRANSPARENT

    def test_equal_scenes(self):
        """Scenes with equal children at the same places are equal."""
        scene_a = mi.empty_scene(50, 50)
        scene_b = mi.empty_scene(50, 50)
        assert mi.images_equal(
            mi.place_image(_square(), 10, 10, scene_a),
            mi.place_image(_square(), 10, 10, scene_b),
        )
        assert not mi.images_equal(
            mi.place_image(_square(), 10, 10, scene_a),
            mi.place_image(_square(), 20, 10, scene_b),
        )


class TestPlacement:
    def test_place_image(self):
        """Place centers the picture on (x, y) from the top-left."""
        scene = mi.place_image(_square(), 20, 30, mi.empty_scene(100, 100))
        _, x, y = scene.children[0]
        assert (x, y) == (15, 25)

    def test_translate_alias(self):
        """Translate is place_image."""
        assert mi.translate is mi.place_image

    def test_put_image(self):
        """Put measures y up from the bottom."""
        scene = mi.put_image(_square(), 20, 30, mi.empty_scene(100, 100))
        _, x, y = scene.children[0]
        assert (x, y) == (15, 65)

    def test_place_on_non_scene(self):
        """A background that is not a scene becomes the first child."""
        background = mi.rectangle(40, 40, "solid", "blue")
        scene = mi.place_image(_square(), 0, 0, background)
        assert isinstance(scene, SceneImage)
        assert (scene.width, scene.height) == (40, 40)
        assert len(scene.children) == 2
        assert scene.children[0] == (background, 0, 0)

    @pytest.mark.parametrize(
        ("place_x", "place_y", "expect"),
        [
            ("left", "top", (0, 0)),
            ("center", "middle", (-5, -5)),
            ("right", "bottom", (-10, -10)),
        ],
    )
    def test_place_image_align(self, place_x: str, place_y: str, expect):
        """The named corner or center lands on (x, y)."""
        scene = mi.place_image_align(
            _square(), 0, 0, place_x, place_y, mi.empty_scene(100, 100)
        )
        _, x, y = scene.children[0]
        assert (x, y) == expect


class TestLines:
    def test_add_line_inside(self):
        """A line inside the image keeps the image size."""
        img = mi.add_line(_square(20), 0, 0, 10, 10, "blue")
        assert (img.width, img.height) == (20, 20)

    def test_add_line_grows(self):
        """A line past the edge grows the image."""
        img = mi.add_line(_square(10), 0, 0, 20, 20, "blue")
        assert (img.width, img.height) == (20, 20)

    def test_add_line_negative(self):
        """A line starting left of the image grows it to the left."""
        img = mi.add_line(_square(10), -5, -5, 5, 5, "blue")
        assert (img.width, img.height) == (15, 15)
        assert img.second_at == (5, 5)

    def test_scene_line(self):
        """A scene line keeps the image size and adds a child."""
        scene = mi.scene_line(_square(10), 0, 0, 5, 5, "blue")
        assert (scene.width, scene.height) == (10, 10)
        assert len(scene.children) == 2
        _, x, y = scene.children[1]
        assert (x, y) == (0, 0)

    def test_scene_line_clipped(self):
        """A scene line past the edge is cut off."""
        scene = mi.scene_line(_square(10), 0, 0, 30, 30, "blue")
        assert (scene.width, scene.height) == (10, 10)
