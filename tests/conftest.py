"""Shared paths and fixtures for the tests.

:author: Shay Hill
:created: 2026-10-19
"""

from pathlib import Path

import pytest

from image_algebra.fonts import FontSpec
from image_algebra.type_hints import TextMetrics

_PROJECT = Path(__file__).parent.parent

TEST_OUTPUT = _PROJECT / "tests" / "output"
TEST_OUTPUT.mkdir(parents=True, exist_ok=True)


def fake_measure(text: str, font: FontSpec) -> TextMetrics:
    """Half an em per character, ascent of one em, line height of 1.25 em."""
    return TextMetrics(len(text) * font.size / 2, font.size * 1.25, font.size)


@pytest.fixture
def measure():
    """A text measurer that needs no fonts."""
    return fake_measure
