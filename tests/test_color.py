"""Test colors, fill modes, and the color catalog.

:author: Shay Hill
:created: 2026-10-19
"""

import pytest

from image_algebra.color import (
    OUTLINE,
    SOLID,
    TRANSPARENT,
    Color,
    fade,
    to_fill_mode,
)
from image_algebra.colordb import ColorDB, default_color_db, read_color_db
from image_algebra.exceptions import ValidationError


class TestColor:
    def test_channels_clamped(self):
        """Out-of-range channels are clamped, not rejected."""
        assert Color(300, -5, 10.6, 2) == Color(255, 0, 11, 1.0)

    def test_from_hex(self):
        """Hex strings with or without a hash read the same."""
        assert Color.from_hex("#ff8000").rgb == (255, 128, 0)
        assert Color.from_hex("ff8000") == Color.from_hex("#ff8000")

    def test_hex(self):
        """Alpha does not appear in the hex string."""
        assert Color(255, 0, 0, 0.5).hex == "#ff0000"

    def test_key(self):
        """Key is the exact rgba value as text."""
        assert Color(255, 0, 0).key == "255, 0, 0, 1"
        assert TRANSPARENT.key == "0, 0, 0, 0"

    def test_rgba8(self):
        """Alpha is scaled to 0..255 for Pillow."""
        assert Color(1, 2, 3, 1).rgba8 == (1, 2, 3, 255)


class TestFillMode:
    def test_str(self):
        """Fade modes print their multiplier."""
        assert str(SOLID) == "solid"
        assert str(OUTLINE) == "outline"
        assert str(fade(0.5)) == "fade 0.5"

    def test_float(self):
        """Solid and outline count as full alpha."""
        assert float(SOLID) == 1.0
        assert float(fade(0.25)) == 0.25

    def test_apply_fade(self):
        """Fade multiplies the color's alpha."""
        assert fade(0.5).apply(Color(255, 0, 0, 0.5)).a == 0.25

    @pytest.mark.parametrize("bad", [-0.1, 1.5])
    def test_fade_out_of_range(self, bad: float):
        """Fade outside [0, 1] is rejected."""
        with pytest.raises(ValidationError):
            _ = fade(bad)

    def test_to_fill_mode_names(self):
        """Mode names are case-insensitive."""
        assert to_fill_mode("Outline") is OUTLINE
        assert to_fill_mode(" SOLID ") is SOLID

    def test_to_fill_mode_number(self):
        """A number becomes a fade."""
        assert to_fill_mode(0.25) == fade(0.25)
        assert to_fill_mode(1) == fade(1)

    @pytest.mark.parametrize("bad", ["dotted", True, None])
    def test_to_fill_mode_rejects(self, bad: object):
        """Anything else is a validation error."""
        with pytest.raises(ValidationError):
            _ = to_fill_mode(bad)  # type: ignore[arg-type]


class TestColorDB:
    def test_case_insensitive(self):
        """Names are found in any case."""
        color_db = ColorDB().put("Red", Color(255, 0, 0))
        assert color_db.get("RED") == Color(255, 0, 0)
        assert "red" in color_db
        assert color_db.get("blue") is None

    def test_first_name_wins(self):
        """A later alias does not replace the reverse lookup."""
        gray = Color(190, 190, 190)
        color_db = ColorDB([("gray", gray), ("grey", gray)])
        assert color_db.color_name(gray) == "gray"
        assert color_db.get("grey") == gray

    def test_put_returns_new_catalog(self):
        """Adding a name leaves the original catalog unchanged."""
        color_db = ColorDB([("ink", Color(1, 2, 3))])
        extended = color_db.put("brand", Color(10, 20, 30))
        assert "brand" in extended
        assert "ink" in extended
        assert "brand" not in color_db
        assert len(color_db) == 1

    def test_put_replaces_color(self):
        """Putting a known name gives it the new color in the new catalog."""
        color_db = ColorDB([("ink", Color(1, 2, 3))])
        extended = color_db.put("INK", Color(4, 5, 6))
        assert extended.get("ink") == Color(4, 5, 6)
        assert color_db.get("ink") == Color(1, 2, 3)

    def test_empty_catalog(self):
        """An empty catalog is still a catalog."""
        color_db = ColorDB()
        assert len(color_db) == 0
        with pytest.raises(ValidationError):
            _ = color_db.resolve("red")

    def test_resolve_passes_colors_through(self):
        """A Color argument is returned as is."""
        color = Color(1, 2, 3)
        assert ColorDB().resolve(color) is color

    def test_read_csv(self, tmp_path):
        """Catalogs are read in file order with optional alpha."""
        csv_path = tmp_path / "colors.csv"
        _ = csv_path.write_text("name,hex,alpha\nink,#010203,1\nfog,#ffffff,0.5\n")
        color_db = read_color_db(csv_path)
        assert list(color_db.items()) == [
            ("ink", Color(1, 2, 3)),
            ("fog", Color(255, 255, 255, 0.5)),
        ]

    def test_bundled_catalog(self):
        """The bundled catalog has the common names and their aliases."""
        color_db = default_color_db()
        assert color_db.get("red") == Color(255, 0, 0)
        assert color_db.get("Grey") == Color(190, 190, 190)
        assert color_db.get("transparent") == TRANSPARENT
        assert color_db.color_name(Color(190, 190, 190)) == "gray"

    def test_bundled_catalog_is_shared(self):
        """The bundled catalog is read once."""
        assert default_color_db() is default_color_db()

    def test_bundled_catalog_not_changed_by_put(self):
        """Extending the bundled catalog does not affect later lookups."""
        _ = default_color_db().put("brand", Color(10, 20, 30))
        assert "brand" not in default_color_db()
