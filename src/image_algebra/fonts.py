"""Font descriptions and Pillow-backed text measurement.

:author: Shay Hill
:created: 2026-10-19
"""

from __future__ import annotations

import dataclasses
import functools as ft
import logging
import warnings
from enum import Enum

from PIL import ImageFont

from image_algebra.globs import DEFAULT_FONT_FACE, DEFAULT_FONT_SIZE
from image_algebra.type_hints import TextMetrics

_LOGGER = logging.getLogger(__name__)

_PilFont = ImageFont.FreeTypeFont | ImageFont.ImageFont


class FontStyle(str, Enum):
    """Slant of a font. "slant" is drawn as oblique."""

    NORMAL = "normal"
    ITALIC = "italic"
    SLANT = "slant"

    @property
    def css(self) -> str:
        """The css font-style keyword."""
        return "oblique" if self is FontStyle.SLANT else self.value


class FontWeight(str, Enum):
    """Weight of a font. "light" is drawn as lighter."""

    NORMAL = "normal"
    BOLD = "bold"
    LIGHT = "light"

    @property
    def css(self) -> str:
        """The css font-weight keyword."""
        return "lighter" if self is FontWeight.LIGHT else self.value


class FontFamily(str, Enum):
    """Generic font family, used only as a fallback hint."""

    DEFAULT = "default"
    DECORATIVE = "decorative"
    ROMAN = "roman"
    SCRIPT = "script"
    SWISS = "swiss"
    MODERN = "modern"
    SYMBOL = "symbol"
    SYSTEM = "system"


@dataclasses.dataclass(frozen=True)
class FontSpec:
    """Everything needed to pick and size a font."""

    size: float = DEFAULT_FONT_SIZE
    face: str = DEFAULT_FONT_FACE
    family: FontFamily = FontFamily.DEFAULT
    style: FontStyle = FontStyle.NORMAL
    weight: FontWeight = FontWeight.NORMAL

    @property
    def css(self) -> str:
        """A css font shorthand, e.g. 'italic bold 12px "Arial"'."""
        font = f'{self.style.css} {self.weight.css} {self.size:g}px "{self.face}"'
        if self.family is not FontFamily.DEFAULT:
            font += f", {self.family.value}"
        return font


def _face_candidates(font: FontSpec) -> list[str]:
    """File names Pillow may find for a face, most specific first."""
    base = font.face.replace(" ", "").lower()
    suffix = {
        (FontWeight.BOLD, FontStyle.NORMAL): "bd",
        (FontWeight.BOLD, FontStyle.ITALIC): "bi",
        (FontWeight.BOLD, FontStyle.SLANT): "bi",
        (FontWeight.NORMAL, FontStyle.ITALIC): "i",
        (FontWeight.NORMAL, FontStyle.SLANT): "i",
    }.get((font.weight, font.style), "")
    candidates = [f"{base}{suffix}.ttf", f"{base}.ttf", font.face]
    return list(dict.fromkeys(candidates))


@ft.cache
def load_font(font: FontSpec) -> _PilFont:
    """Load a Pillow font for a FontSpec.

    :param font: face, size, style, and weight
    :return: a truetype font if the face is installed, else Pillow's default font at
        the requested size
    """
    size = max(1, round(font.size))
    for candidate in _face_candidates(font):
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            _LOGGER.debug("font file %s not found", candidate)
    msg = f"Font face {font.face!r} not found. Using Pillow's default font."
    warnings.warn(msg, stacklevel=2)
    return ImageFont.load_default(size)


def measure_text(text: str, font: FontSpec) -> TextMetrics:
    """Measure text with Pillow.

    :param text: the string to set
    :param font: the font to set it in
    :return: advance width, line height (ascent + descent), and ascent
    """
    pil_font = load_font(font)
    if isinstance(pil_font, ImageFont.FreeTypeFont):
        ascent, descent = pil_font.getmetrics()
        return TextMetrics(pil_font.getlength(text), ascent + descent, ascent)
    left, top, right, bottom = pil_font.getbbox(text)
    return TextMetrics(right - left, bottom, bottom)
