"""Test naming colors for descriptions.

:author: Shay Hill
:created: 2026-10-19
"""

from image_algebra.color import OUTLINE, SOLID, Color, fade
from image_algebra.colordb import ColorDB
from image_algebra.colornames import (
    color_to_spoken_string,
    get_namer,
    style_descriptor,
    with_article,
)

RED = Color(255, 0, 0)


class TestColorNamer:
    def test_exact_match(self):
        """A catalog color is named by its own name."""
        namer = get_namer()
        assert namer.get_colorname(RED) == "red"
        assert namer.get_colorname(Color(0, 0, 255)) == "blue"
        assert namer.get_colorname(Color(255, 255, 255)) == "white"

    def test_alias_not_preferred(self):
        """Equal colors are named by the entry registered first."""
        assert get_namer().get_colorname(Color(190, 190, 190)) == "gray"

    def test_alpha_ignored(self):
        """Names depend only on rgb."""
        namer = get_namer()
        assert namer.get_colorname(Color(255, 0, 0, 0.1)) == "red"

    def test_custom_catalog(self):
        """A namer for a custom catalog only uses its names."""
        color_db = ColorDB([("dark", Color(0, 0, 0)), ("light", Color(255, 255, 255))])
        namer = get_namer(color_db)
        assert namer.get_colorname(Color(40, 30, 20)) == "dark"
        assert namer.get_colorname(Color(220, 230, 240)) == "light"

    def test_namer_reused(self):
        """Each catalog builds its Lab table once."""
        color_db = ColorDB([("dark", Color(0, 0, 0))])
        assert get_namer(color_db) is get_namer(color_db)
        assert get_namer() is get_namer()

    def test_spoken_string_custom_catalog(self):
        """Descriptions use the catalog they are given."""
        color_db = ColorDB([("ink", Color(1, 2, 3))])
        assert color_to_spoken_string(RED, SOLID, color_db) == "solid ink"

    def test_deterministic(self):
        """The same color always gets the same name."""
        color = Color(12, 200, 99)
        assert get_namer().get_colorname(color) == get_namer().get_colorname(color)


class TestDescriptions:
    def test_style_descriptor(self):
        """Each fill mode has a word."""
        assert style_descriptor(RED, SOLID) == "solid"
        assert style_descriptor(RED, OUTLINE) == "outline"
        assert style_descriptor(RED, fade(0.5)) == "translucent"
        assert style_descriptor(RED, fade(1)) == "solid"

    def test_transparent(self):
        """Nothing showing is transparent, whatever the mode."""
        assert style_descriptor(RED, fade(0)) == "transparent"
        assert style_descriptor(Color(0, 0, 0, 0), SOLID) == "transparent"

    def test_spoken_string(self):
        """Style then name."""
        assert color_to_spoken_string(RED, SOLID) == "solid red"
        assert color_to_spoken_string(Color(0, 0, 0, 0), SOLID) == "transparent black"

    def test_with_article(self):
        """Vowels take "an"."""
        assert with_article("outline red circle") == "an outline red circle"
        assert with_article("solid red circle") == "a solid red circle"
