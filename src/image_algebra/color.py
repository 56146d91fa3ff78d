"""Color values and fill modes.

A Color is a clamped RGBA value. Red, green, and blue are ints in [0, 255]. Alpha is
a float in [0, 1]. Out-of-range channels are clamped, never rejected.

A FillMode is one of Solid, Outline, or Fade(n), where n is an alpha multiplier
applied to the color when filling.

:author: Shay Hill
:created: 2026-10-19
"""

from __future__ import annotations

import dataclasses
from typing import Literal

from basic_colormath import hex_to_rgb, rgb_to_hex

from image_algebra.exceptions import ValidationError

_FillKind = Literal["solid", "outline", "fade"]


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


@dataclasses.dataclass(frozen=True)
class Color:
    """An immutable, clamped RGBA color."""

    r: int
    g: int
    b: int
    a: float = 1.0

    def __post_init__(self) -> None:
        """Clamp channels into range."""
        for channel in ("r", "g", "b"):
            value = round(_clamp(getattr(self, channel), 0, 255))
            object.__setattr__(self, channel, value)
        object.__setattr__(self, "a", float(_clamp(self.a, 0, 1)))

    @classmethod
    def from_hex(cls, hex_: str, alpha: float = 1.0) -> Color:
        """Create a color from a hex string like "#ff8000" or "ff8000"."""
        r, g, b = hex_to_rgb(hex_)
        return cls(r, g, b, alpha)

    @property
    def rgb(self) -> tuple[int, int, int]:
        """Red, green, and blue as a tuple."""
        return self.r, self.g, self.b

    @property
    def rgba8(self) -> tuple[int, int, int, int]:
        """All four channels as 8-bit ints, as Pillow expects them."""
        return self.r, self.g, self.b, round(self.a * 255)

    @property
    def hex(self) -> str:
        """The rgb part of the color as "#rrggbb"."""
        return rgb_to_hex(self.rgb)

    @property
    def key(self) -> str:
        """The canonical "r, g, b, a" string used for reverse name lookup."""
        return f"{self.r}, {self.g}, {self.b}, {self.a:g}"

    def with_alpha(self, alpha: float) -> Color:
        """Return a copy of the color with a new alpha."""
        return dataclasses.replace(self, a=alpha)


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
TRANSPARENT = Color(0, 0, 0, 0)


@dataclasses.dataclass(frozen=True)
class FillMode:
    """How a shape is painted: filled, outlined, or filled at reduced alpha."""

    kind: _FillKind
    n: float = 1.0

    def __str__(self) -> str:
        if self.kind == "fade":
            return f"fade {self.n:g}"
        return self.kind

    def __float__(self) -> float:
        return float(self.n)

    @property
    def is_outline(self) -> bool:
        """True if the shape is stroked rather than filled."""
        return self.kind == "outline"

    @property
    def alpha(self) -> float:
        """Alpha multiplier applied to the color when painting."""
        return self.n if self.kind == "fade" else 1.0

    def apply(self, color: Color) -> Color:
        """Return the color actually painted under this mode."""
        if self.kind != "fade":
            return color
        return color.with_alpha(color.a * self.n)


SOLID = FillMode("solid")
OUTLINE = FillMode("outline")


def fade(n: float) -> FillMode:
    """Create a Fade fill mode.

    :param n: alpha multiplier in [0, 1]
    :return: a FillMode of kind "fade"
    :raise ValidationError: if n is outside [0, 1]
    """
    if not 0 <= n <= 1:
        msg = f"Fade value must be between 0 and 1, got {n}"
        raise ValidationError(msg)
    return FillMode("fade", float(n))


def to_fill_mode(mode: FillMode | str | float) -> FillMode:
    """Coerce a mode name, an alpha multiplier, or a FillMode to a FillMode.

    :param mode: "solid", "outline" (any case), a number in [0, 1], or a FillMode
    :return: a FillMode
    :raise ValidationError: if the mode is not recognized
    """
    if isinstance(mode, FillMode):
        return mode
    if isinstance(mode, str):
        name = mode.strip().lower()
        if name == "solid":
            return SOLID
        if name == "outline":
            return OUTLINE
        msg = f"Unknown fill mode {mode!r}"
        raise ValidationError(msg)
    if isinstance(mode, bool) or not isinstance(mode, int | float):
        msg = f"Fill mode must be a string, a number, or a FillMode, got {mode!r}"
        raise ValidationError(msg)
    return fade(mode)
