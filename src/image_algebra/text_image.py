"""Text as an image.

Text has no polygon. Its size comes from a text measurer, Pillow's by default, and
its pinhole sits on the baseline halfway across.

:author: Shay Hill
:created: 2026-10-19
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

from image_algebra.base_image import Image
from image_algebra.color import SOLID
from image_algebra.colornames import color_to_spoken_string
from image_algebra.fonts import FontSpec, measure_text

if TYPE_CHECKING:
    from image_algebra.color import Color
    from image_algebra.colordb import ColorDB
    from image_algebra.type_hints import Surface, TextMeasurer


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class TextImage(Image):
    """A single line of text."""

    text: str
    font: FontSpec
    underline: bool = False

    def render(self, surface: Surface) -> None:
        surface.save()
        surface.fill_text(self.text, 0, self.alpha_baseline, self.font, self.color)
        if self.underline:
            surface.begin_path()
            surface.move_to(0, self.font.size)
            surface.line_to(self.exact_width, self.font.size)
            surface.stroke(self.color)
        surface.restore()

    def same_as(self, other: Image) -> bool:
        return (
            type(other) is TextImage
            and self.text == other.text
            and self.font == other.font
            and self.underline == other.underline
            and self.color == other.color
        )


def new_text(
    text: str,
    color: Color,
    font: FontSpec | None = None,
    *,
    underline: bool = False,
    measure: TextMeasurer = measure_text,
    color_db: ColorDB | None = None,
) -> TextImage:
    """Create an image of a line of text.

    :param text: the string to set
    :param color: text color
    :param font: face, size, style, and weight. Defaults to 12px Arial.
    :param underline: draw a line under the text
    :param measure: measures the text. Pass a stand-in to avoid font lookups.
    :param color_db: catalog the description names the color from
    :return: a TextImage sized to its text
    """
    font = font or FontSpec()
    metrics = measure(text, font)
    spoken = color_to_spoken_string(color, SOLID, color_db)
    return TextImage(
        raw_width=metrics.width,
        raw_height=metrics.height,
        pinhole=(metrics.width / 2, metrics.ascent),
        baseline=metrics.ascent,
        style=SOLID,
        color=color,
        aria_text=f"the string {text}, colored {spoken} of size {font.size:g}",
        text=text,
        font=font,
        underline=underline,
    )
