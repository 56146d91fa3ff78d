"""Exceptions raised while building, drawing, or querying images.

:author: Shay Hill
:created: 2026-10-19
"""


class ImageAlgebraError(Exception):
    """Base error for the image algebra."""


class ValidationError(ImageAlgebraError, ValueError):
    """Bad shape parameters, unknown color names, out-of-bounds queries."""


class RenderError(ImageAlgebraError, RuntimeError):
    """An image or surface cannot complete a drawing operation."""
