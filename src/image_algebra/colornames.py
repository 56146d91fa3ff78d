"""Name a color for accessibility text.

Every catalog color is converted once to CIE Lab (D65). A color is named by the
catalog entry closest to it by Euclidean distance in Lab space. Ties go to the entry
registered first, because ``min`` keeps the first minimum it sees.

:author: Shay Hill
:created: 2026-10-19
"""

from __future__ import annotations

import functools as ft
from typing import TYPE_CHECKING

from basic_colormath import get_euclidean, rgb_to_lab

from image_algebra.colordb import default_color_db
from image_algebra.globs import NAMER_CACHE_SIZE

if TYPE_CHECKING:
    from image_algebra.color import Color, FillMode
    from image_algebra.colordb import ColorDB

_Lab = tuple[float, float, float]


class ColorNamer:
    """Nearest-name lookup against a fixed catalog."""

    def __init__(self, color_db: ColorDB) -> None:
        """Cache the Lab value of every catalog entry.

        :param color_db: the catalog to name colors from
        """
        self._labs: list[tuple[str, _Lab]] = [
            (name, rgb_to_lab(color.rgb)) for name, color in color_db.items()
        ]

    def get_colorname(self, color: Color) -> str:
        """Get the closest (by Lab Euclidean) catalog name for a color.

        :param color: any color. Alpha is ignored.
        :return: the lower-case name of the closest catalog color
        """
        lab = rgb_to_lab(color.rgb)
        distance_from_color = ft.partial(get_euclidean, lab)
        name, _ = min(self._labs, key=lambda x: distance_from_color(x[1]))
        return name


@ft.lru_cache(maxsize=NAMER_CACHE_SIZE)
def _namer_for(color_db: ColorDB) -> ColorNamer:
    return ColorNamer(color_db)


def get_namer(color_db: ColorDB | None = None) -> ColorNamer:
    """Return the namer for a catalog, or for the bundled catalog.

    Catalogs never change, so each one's Lab table is built once and reused.
    """
    return _namer_for(default_color_db() if color_db is None else color_db)


def style_descriptor(color: Color, style: FillMode) -> str:
    """Describe how a color is painted.

    :return: "transparent" if nothing shows, "translucent" for a fractional fade,
        otherwise "solid" or "outline"
    """
    if style.apply(color).a == 0:
        return "transparent"
    if style.kind == "fade":
        return "solid" if float(style.n).is_integer() else "translucent"
    return str(style)


def color_to_spoken_string(
    color: Color, style: FillMode, color_db: ColorDB | None = None
) -> str:
    """Describe a painted color in words, e.g. "solid red" or "outline navy".

    :param color: the color to describe
    :param style: the fill mode it is painted with
    :param color_db: catalog to name the color from. Defaults to the bundled one.
    :return: style descriptor followed by the nearest color name
    """
    name = get_namer(color_db).get_colorname(color)
    return f"{style_descriptor(color, style)} {name}"


def with_article(phrase: str) -> str:
    """Prefix "a" or "an" to a phrase."""
    article = "an" if phrase[:1].lower() in set("aeiou") else "a"
    return f"{article} {phrase}"
