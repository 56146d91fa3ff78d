"""Type hints shared across the project, and the protocols of external collaborators.

:author: Shay Hill
:created: 2026-10-19
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple, Protocol, TypeAlias

if TYPE_CHECKING:
    from PIL.Image import Image as ImageType

    from image_algebra.color import Color, FillMode
    from image_algebra.fonts import FontSpec

Vertex: TypeAlias = tuple[float, float]
Vertices: TypeAlias = tuple[Vertex, ...]


class TextMetrics(NamedTuple):
    """Measured size of a run of text."""

    width: float
    height: float
    ascent: float


class TextMeasurer(Protocol):
    """Measure text set in a given font."""

    def __call__(self, text: str, font: FontSpec, /) -> TextMetrics:
        """Return the width, height, and ascent of the text."""
        ...


class Surface(Protocol):
    """A drawing surface with a canvas-style path and transform API.

    Angles are radians. Coordinates are in the current user space, which
    ``translate``, ``rotate``, and ``scale`` modify until the next ``restore``.
    """

    line_width: float
    equality_test: bool

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def save(self) -> None: ...

    def restore(self) -> None: ...

    def translate(self, x: float, y: float) -> None: ...

    def rotate(self, radians: float) -> None: ...

    def scale(self, x: float, y: float) -> None: ...

    def begin_path(self) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def bezier_curve_to(
        self, cp1x: float, cp1y: float, cp2x: float, cp2y: float, x: float, y: float
    ) -> None: ...

    def arc(
        self,
        x: float,
        y: float,
        radius: float,
        start: float,
        end: float,
        anticlockwise: bool = False,
    ) -> None: ...

    def rect(self, x: float, y: float, width: float, height: float) -> None: ...

    def close_path(self) -> None: ...

    def fill(self, color: Color) -> None: ...

    def stroke(self, color: Color) -> None: ...

    def clip(self) -> None: ...

    def fill_rect(
        self, x: float, y: float, width: float, height: float, color: Color
    ) -> None: ...

    def stroke_rect(
        self, x: float, y: float, width: float, height: float, color: Color
    ) -> None: ...

    def fill_text(
        self, text: str, x: float, y: float, font: FontSpec, color: Color
    ) -> None: ...

    def draw_image(self, image: ImageType, x: float = 0, y: float = 0) -> None: ...

    def get_pixel_buffer(self, x: int, y: int, width: int, height: int) -> bytes: ...


# what the public constructors accept for a color and for a fill mode
ColorArg: TypeAlias = "Color | str"
FillArg: TypeAlias = "FillMode | str | float"
