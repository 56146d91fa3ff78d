"""Move pixels between Pillow images, color lists, and svg image elements.

:author: Shay Hill
:created: 2026-10-19
"""

from __future__ import annotations

import base64
import io
from typing import TYPE_CHECKING

import svg_ultralight as su
from lxml import etree
from PIL import Image
from svg_ultralight import NSMAP

from image_algebra.color import Color
from image_algebra.exceptions import ValidationError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from lxml.etree import _Element as EtreeElement  # type: ignore
    from PIL.Image import Image as ImageType


def get_svg_embedded_image_str(image: ImageType) -> str:
    """Return the string you'll need to embed an image in an svg.

    :param image: PIL.Image instance
    :return: argument for xlink:href
    """
    in_mem_file = io.BytesIO()
    image.save(in_mem_file, format="PNG")
    _ = in_mem_file.seek(0)
    img_bytes = in_mem_file.read()
    base64_encoded_result_bytes = base64.b64encode(img_bytes)
    base64_encoded_result_str = base64_encoded_result_bytes.decode("ascii")
    return "data:image/png;base64," + base64_encoded_result_str


def new_image_elem(image: ImageType, **attributes: str | float) -> EtreeElement:
    """Create an svg image element with the pixels embedded as a png.

    :param image: PIL.Image instance
    :param attributes: extra attributes (x, y, transform, clip_path, ...)
    :return: an etree image element the size of the image
    """
    svg_image = su.new_element(
        "image", width=image.width, height=image.height, **attributes
    )
    svg_image.set(
        etree.QName(NSMAP["xlink"], "href"), get_svg_embedded_image_str(image)
    )
    return svg_image


def colors_to_pil(colors: Sequence[Color], width: int, height: int) -> ImageType:
    """Build an RGBA image from colors listed row by row.

    :param colors: exactly width * height colors, top row first
    :param width: image width in pixels
    :param height: image height in pixels
    :return: PIL.Image instance in RGBA mode
    :raise ValidationError: if the number of colors does not fill the image
    """
    if len(colors) != width * height:
        msg = (
            "The color list does not have the right number of elements: expected"
            + f" {width * height}, got {len(colors)}"
        )
        raise ValidationError(msg)
    image = Image.new("RGBA", (width, height))
    image.putdata([c.rgba8 for c in colors])
    return image


def pil_to_colors(image: ImageType) -> list[Color]:
    """List the colors of an image row by row, top row first."""
    rgba = image.convert("RGBA")
    return [Color(r, g, b, a / 255) for r, g, b, a in rgba.getdata()]
