"""Decide whether two images are equal, and measure how different they are.

Equality tries three things in order. Images of different sizes are never equal.
Images built from the same parameters and equal children are equal. Two plain
polygons are equal when style, color, and vertex loop match, whatever vertex the
loops start on. Everything else is drawn and compared pixel by pixel.

Drawing can fail, for instance when a file-backed image cannot be read. Such a
failure makes ``images_equal`` False and ``images_difference`` a string. It never
raises.

:author: Shay Hill
:created: 2026-10-19
"""

from __future__ import annotations

import hashlib
import itertools as it
import logging
import math
import warnings
from typing import TYPE_CHECKING

from PIL import Image as PilImage
from PIL import ImageChops, ImageStat

from image_algebra.exceptions import ImageAlgebraError
from image_algebra.geometry import vertex_loops_equal
from image_algebra.globs import EQUALITY_TILE
from image_algebra.surface import PilSurface

if TYPE_CHECKING:
    from collections.abc import Iterator

    from PIL.Image import Image as ImageType

    from image_algebra.base_image import Image

_LOGGER = logging.getLogger(__name__)

# what drawing or reading pixels can raise, including Pillow and aggdraw errors and
# RecursionError from deep nesting. Interrupts and interpreter exits propagate.
_RENDER_FAILURES = (
    ImageAlgebraError,
    OSError,
    ValueError,
    TypeError,
    ArithmeticError,
    RuntimeError,
    MemoryError,
    PilImage.DecompressionBombError,
)


def _render_pixels(image: Image, *, equality_test: bool) -> ImageType:
    """Draw an image onto a fresh Pillow surface of its own size."""
    surface = PilSurface(image.width, image.height, equality_test=equality_test)
    image.render(surface)
    return surface.image


def _tiles(width: int, height: int, size: int) -> Iterator[tuple[int, int, int, int]]:
    """Yield (left, top, right, bottom) boxes covering a width x height area."""
    for top, left in it.product(range(0, height, size), range(0, width, size)):
        yield left, top, min(left + size, width), min(top + size, height)


def _tile_hashes(pixels: ImageType) -> list[str]:
    """Hash each tile of an image's RGBA bytes."""
    return [
        hashlib.md5(pixels.crop(box).tobytes(), usedforsecurity=False).hexdigest()
        for box in _tiles(pixels.width, pixels.height, EQUALITY_TILE)
    ]


def pixels_equal(image_a: Image, image_b: Image) -> bool:
    """Draw both images and compare their pixels.

    :return: True if every tile hash matches. False if they differ or if either
        image fails to draw.
    """
    _LOGGER.debug(
        "comparing %s and %s by pixels", type(image_a).__name__, type(image_b).__name__
    )
    try:
        pixels_a = _render_pixels(image_a, equality_test=True)
        pixels_b = _render_pixels(image_b, equality_test=True)
        return _tile_hashes(pixels_a) == _tile_hashes(pixels_b)
    except _RENDER_FAILURES as e:
        msg = f"Could not compare images: {e}"
        warnings.warn(msg, RuntimeWarning, stacklevel=2)
        return False


def images_equal(image_a: Image, image_b: Image) -> bool:
    """Whether two images look the same.

    :param image_a: any image
    :param image_b: any image
    :return: True if equal by structure, by polygon, or by pixels
    """
    if image_a is image_b:
        return True
    if (image_a.width, image_a.height) != (image_b.width, image_b.height):
        return False
    if image_a.same_as(image_b) or image_b.same_as(image_a):
        return True
    poly_a, poly_b = image_a.polygon(), image_b.polygon()
    if poly_a is not None and poly_b is not None:
        return (
            poly_a.style == poly_b.style
            and poly_a.color == poly_b.color
            and vertex_loops_equal(poly_a.vertices, poly_b.vertices)
        )
    return pixels_equal(image_a, image_b)


def _rms(pixels_a: ImageType, pixels_b: ImageType) -> float:
    """Root mean square difference over every channel of every pixel."""
    count = pixels_a.width * pixels_a.height * len(pixels_a.getbands())
    if count == 0:
        return 0.0
    diff = ImageChops.difference(pixels_a, pixels_b)
    return math.sqrt(sum(ImageStat.Stat(diff).sum2) / count)


def images_difference(image_a: Image, image_b: Image) -> float | str:
    """How different two same-size images look.

    :param image_a: any image
    :param image_b: any image
    :return: the RMS difference of all RGBA channels, 0 for identical pixels. A
        string if the images differ in size or could not be drawn.
    """
    if (image_a.width, image_a.height) != (image_b.width, image_b.height):
        size_a = f"[{image_a.width}, {image_a.height}]"
        size_b = f"[{image_b.width}, {image_b.height}]"
        return f"Cannot get difference of differently-sized images {size_a}, {size_b}"
    try:
        pixels_a = _render_pixels(image_a, equality_test=False)
        pixels_b = _render_pixels(image_b, equality_test=False)
        return _rms(pixels_a, pixels_b)
    except _RENDER_FAILURES as e:
        return f"Error: {e}"
