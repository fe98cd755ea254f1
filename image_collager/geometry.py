"""Size/point value types and the derived-size arithmetic shared by layout and drawing."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

CIRCLE_DIAMETER = 0.8  # fraction of the shorter rendered side kept by the circle crop
RECTANGLE_PADDING = 1
CIRCLE_PADDING = 20


class Shape(str, Enum):
    """How every image of one collage is drawn."""

    RECTANGLE = "Rectangle"
    CIRCLE = "Circle"

    @property
    def padding(self) -> int:
        """Gap in pixels between neighbouring cells and the canvas edges."""
        return CIRCLE_PADDING if self is Shape.CIRCLE else RECTANGLE_PADDING


@dataclass(frozen=True)
class Size:
    width: int
    height: int


@dataclass(frozen=True)
class Point:
    x: int
    y: int


def column_width(target_width: int, columns: int) -> float:
    """Width available to each cell of a row with *columns* cells."""
    return math.floor(target_width / columns)


def scaled_size(original_width: int, original_height: int, width: float) -> Size:
    """Scale uniformly so the width becomes *width* (truncated, aspect ratio kept)."""
    resize_factor = width / original_width
    return Size(
        int(original_width * resize_factor),
        int(original_height * resize_factor),
    )


def circle_diameter(size: Size) -> int:
    return int(min(size.width, size.height) * CIRCLE_DIAMETER)


def footprint(size: Size, shape: Shape) -> Size:
    """Area a scaled image actually occupies on the canvas.

    Rectangles keep their scaled size; circles shrink to a square whose side
    is the crop diameter.
    """
    if shape is Shape.CIRCLE:
        d = circle_diameter(size)
        return Size(d, d)
    return size
