"""A fixed-size canvas with images placed on it.

Children are kept in placement order as (image, x, y), where (x, y) is the child's
top-left corner. Anything outside the canvas is clipped.

:author: Shay Hill
:created: 2026-10-19
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

from image_algebra.base_image import Image, render_border
from image_algebra.color import TRANSPARENT, Color
from image_algebra.compare import images_equal

if TYPE_CHECKING:
    from image_algebra.type_hints import Surface

Placement = tuple[Image, float, float]


def _describe_scene(
    width: float, height: float, children: tuple[Placement, ...]
) -> str:
    """One sentence for the canvas, then one per child."""
    sentences = [f"Scene that is {width:g} by {height:g}."]
    for i, (child, x, y) in enumerate(children, start=1):
        sentences.append(f"Child {i}: {child.aria_text}, positioned at {x:g}, {y:g}.")
    return " ".join(sentences)


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class SceneImage(Image):
    """A background color, placed children, and an optional border."""

    children: tuple[Placement, ...] = ()
    with_border: bool = False

    def add(self, image: Image, x: float, y: float) -> SceneImage:
        """Return a new scene with an image centered on (x, y)."""
        placement = (image, x - image.exact_width / 2, y - image.exact_height / 2)
        children = (*self.children, placement)
        return dataclasses.replace(
            self,
            children=children,
            aria_text=_describe_scene(self.raw_width, self.raw_height, children),
        )

    def render(self, surface: Surface) -> None:
        width, height = self.exact_width, self.exact_height
        surface.save()
        surface.fill_rect(0, 0, width, height, self.color)
        surface.begin_path()
        surface.rect(0, 0, width, height)
        surface.clip()
        for child, x, y in self.children:
            surface.save()
            surface.translate(x, y)
            child.render(surface)
            surface.restore()
        surface.restore()
        if self.with_border:
            render_border(surface, width, height)

    def same_as(self, other: Image) -> bool:
        if type(other) is not SceneImage:
            return False
        if (self.with_border, self.color) != (other.with_border, other.color):
            return False
        if len(self.children) != len(other.children):
            return False
        return all(
            (x_a, y_a) == (x_b, y_b) and images_equal(a, b)
            for (a, x_a, y_a), (b, x_b, y_b) in zip(
                self.children, other.children, strict=True
            )
        )


def new_scene(
    width: float,
    height: float,
    children: tuple[Placement, ...] = (),
    *,
    with_border: bool = False,
    color: Color = TRANSPARENT,
) -> SceneImage:
    """Create a scene.

    :param width: canvas width
    :param height: canvas height
    :param children: (image, x, y) placements, (x, y) being each top-left corner
    :param with_border: outline the canvas edge in black
    :param color: background color
    :return: a SceneImage with its pinhole at the center
    """
    return SceneImage(
        raw_width=width,
        raw_height=height,
        color=color,
        children=children,
        with_border=with_border,
        aria_text=_describe_scene(width, height, children),
    )
