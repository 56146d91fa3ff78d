"""A name <-> color catalog.

Names are case-insensitive (stored upper-cased). The reverse map from an exact RGBA
value to a name keeps the first name registered for that value, so aliases
registered later ("grey" after "gray") never shadow the original.

:author: Shay Hill
:created: 2026-10-19
"""

from __future__ import annotations

import csv
import functools as ft
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from image_algebra.color import Color
from image_algebra.exceptions import ValidationError
from image_algebra.globs import COLORS_CSV

if TYPE_CHECKING:
    import os
    from collections.abc import Iterable, Iterator, Mapping


class ColorDB:
    """Immutable case-insensitive color catalog with first-wins reverse lookup.

    ``put`` returns a new catalog and leaves this one as it was, so a catalog can be
    shared freely once built.
    """

    def __init__(self, entries: Iterable[tuple[str, Color]] = ()) -> None:
        """Register entries in order.

        :param entries: (name, color) pairs. A repeated name keeps its first
            position and takes the later color.
        """
        colors: dict[str, Color] = {}
        names: dict[str, str] = {}
        for name, color in entries:
            colors[name.upper()] = color
            _ = names.setdefault(color.key, name)
        self._colors: Mapping[str, Color] = MappingProxyType(colors)
        self._names: Mapping[str, str] = MappingProxyType(names)

    def __len__(self) -> int:
        return len(self._colors)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.upper() in self._colors

    def put(self, name: str, color: Color) -> ColorDB:
        """Return a new catalog with a color registered under a name.

        :param name: any case; stored upper-cased
        :param color: the color value
        :return: a new ColorDB. This one is unchanged.
        """
        return ColorDB([*self._colors.items(), (name, color)])

    def get(self, name: str) -> Color | None:
        """Look up a color by name, ignoring case."""
        return self._colors.get(name.upper())

    def color_name(self, color: Color) -> str | None:
        """Return the first name registered for this exact color, lower-cased."""
        name = self._names.get(color.key)
        return None if name is None else name.lower()

    def items(self) -> Iterator[tuple[str, Color]]:
        """Yield (lower-case name, color) in registration order."""
        for name, color in self._colors.items():
            yield name.lower(), color

    def resolve(self, color: Color | str) -> Color:
        """Pass a Color through or look up a color name.

        :param color: a Color or a color name
        :return: a Color
        :raise ValidationError: if the name is unknown
        """
        if isinstance(color, Color):
            return color
        found = self.get(color)
        if found is None:
            msg = f"Unknown color name {color}"
            raise ValidationError(msg)
        return found


def read_color_db(path: str | os.PathLike[str] = COLORS_CSV) -> ColorDB:
    """Read a catalog from a csv file with columns name, hex, alpha.

    :param path: path to the csv file. The header row is skipped.
    :return: a new ColorDB with entries in file order
    """
    with Path(path).open(encoding="utf-8", newline="") as namefile:
        return ColorDB(
            (row["name"], Color.from_hex(row["hex"], float(row.get("alpha") or 1)))
            for row in csv.DictReader(namefile)
        )


@ft.cache
def default_color_db() -> ColorDB:
    """The bundled catalog. Read once, then shared."""
    return read_color_db()
