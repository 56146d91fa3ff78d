"""Images backed by pixels from outside the algebra: files, urls, and pixel data.

A file or video image wraps a ResourceHandle. The handle starts empty and is filled
once, possibly on a worker thread, when its source has been read. Until then the
image is zero-sized and draws nothing. A source that cannot be read leaves the
handle empty for good and issues a warning.

:author: Shay Hill
:created: 2026-10-19
"""

from __future__ import annotations

import dataclasses
import io
import logging
import warnings
from pathlib import Path
from typing import TYPE_CHECKING

import requests
from PIL import Image as PilImage

from image_algebra.base_image import Image
from image_algebra.image_ops import colors_to_pil

if TYPE_CHECKING:
    import os
    from collections.abc import Sequence
    from concurrent.futures import Executor, Future

    from PIL.Image import Image as ImageType

    from image_algebra.color import Color
    from image_algebra.type_hints import Surface

_LOGGER = logging.getLogger(__name__)

_REQUEST_SUCCESSFUL = 200

_URL_SCHEMES = ("http://", "https://")


class ResourceHandle:
    """The state of one external image or video source.

    ``width``, ``height``, ``pixels``, and ``is_loaded`` change once, from empty to
    filled, when the source has been read.
    """

    def __init__(self, src: str) -> None:
        self.src = src
        self.width = 0
        self.height = 0
        self.frame_count = 0
        self.pixels: ImageType | None = None
        self.error: str | None = None
        self.future: Future[None] | None = None
        self.is_loaded = False

    def __repr__(self) -> str:
        return f"ResourceHandle({self.src!r}, loaded={self.is_loaded})"

    def resolve(self, pixels: ImageType, frame_count: int = 1) -> None:
        """Record the pixels of a source that was read."""
        self.pixels = pixels.convert("RGBA")
        self.frame_count = frame_count
        self.width, self.height = self.pixels.size
        self.is_loaded = True

    def fail(self, error: str) -> None:
        """Record a source that could not be read. The handle stays empty."""
        self.error = error
        msg = f"Could not load {self.src}: {error}"
        warnings.warn(msg, RuntimeWarning, stacklevel=2)

    def wait(self, timeout: float | None = None) -> ResourceHandle:
        """Block until a load submitted to an executor has finished."""
        if self.future is not None:
            _ = self.future.result(timeout=timeout)
        return self


def _read_source(src: str) -> bytes:
    """Read the raw bytes of a local path or an http(s) url."""
    if not src.startswith(_URL_SCHEMES):
        return Path(src).read_bytes()
    response = requests.get(src, timeout=10)
    if response.status_code != _REQUEST_SUCCESSFUL:
        msg = f"request returned status {response.status_code}"
        raise OSError(msg)
    return response.content


def _load_into(handle: ResourceHandle) -> None:
    """Read a source and fill its handle, or record why it could not be read."""
    _LOGGER.debug("loading %s", handle.src)
    try:
        with PilImage.open(io.BytesIO(_read_source(handle.src))) as image:
            image.seek(0)
            handle.resolve(image.copy(), getattr(image, "n_frames", 1))
    except (OSError, ValueError) as e:
        handle.fail(str(e))
        return
    _LOGGER.debug("loaded %s at %d x %d", handle.src, handle.width, handle.height)


def load_resource(
    src: str | os.PathLike[str], executor: Executor | None = None
) -> ResourceHandle:
    """Start reading an image or video source.

    :param src: a file path or an http(s) url
    :param executor: read on this executor and return at once. Without one, the
        source is read before returning.
    :return: a handle that is filled when the source has been read
    """
    handle = ResourceHandle(str(src))
    if executor is None:
        _load_into(handle)
    else:
        handle.future = executor.submit(_load_into, handle)
    return handle


# ===================================================================================
#   Images
# ===================================================================================


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class FileImage(Image):
    """A bitmap read from a file or url. Zero-sized until it has loaded."""

    handle: ResourceHandle

    @property
    def src(self) -> str:
        return self.handle.src

    @property
    def is_loaded(self) -> bool:
        return self.handle.is_loaded

    @property
    def exact_width(self) -> float:
        return self.handle.width

    @property
    def exact_height(self) -> float:
        return self.handle.height

    def render(self, surface: Surface) -> None:
        if self.handle.is_loaded and self.handle.pixels is not None:
            surface.draw_image(self.handle.pixels, 0, 0)

    def same_as(self, other: Image) -> bool:
        return type(other) is FileImage and other.handle is self.handle


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class FileVideo(FileImage):
    """A video read from a file or url. Draws its current frame.

    Two videos are equal when they come from the same source, whatever frame they
    are showing.
    """

    def same_as(self, other: Image) -> bool:
        return isinstance(other, FileVideo) and other.src == self.src


def new_file_image(handle: ResourceHandle) -> FileImage:
    """Wrap a loaded or loading resource as an image."""
    return FileImage(handle=handle, aria_text=f"image file from {handle.src}")


def new_file_video(handle: ResourceHandle) -> FileVideo:
    """Wrap a loaded or loading resource as a video."""
    return FileVideo(handle=handle, aria_text=f"video file from {handle.src}")


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class ImageDataImage(Image):
    """An image made directly from pixels."""

    pixels: ImageType

    def render(self, surface: Surface) -> None:
        surface.draw_image(self.pixels, 0, 0)


def new_image_data(pixels: ImageType) -> ImageDataImage:
    """Create an image from a Pillow image. The pixels are copied."""
    pixels = pixels.convert("RGBA")
    return ImageDataImage(
        raw_width=pixels.width,
        raw_height=pixels.height,
        pixels=pixels,
        aria_text=f"image data of width {pixels.width} and height {pixels.height}",
    )


def new_image_data_from_colors(
    colors: Sequence[Color], width: int, height: int
) -> ImageDataImage:
    """Create an image from colors listed row by row.

    :raise ValidationError: if the number of colors does not fill width x height
    """
    return new_image_data(colors_to_pil(colors, width, height))
