"""RGBA pixel buffer used as the collage destination, plus the circular mask."""

from __future__ import annotations

import numpy as np
from PIL import Image

from image_collager.geometry import Point, Size

Color = tuple[int, int, int, int]


class Canvas:
    """Mutable (H, W, 4) uint8 RGBA buffer, transparent black when created.

    Drawing tasks never receive the canvas itself; they write through
    :meth:`region`, a numpy view of their own cell.  Views of disjoint
    cells share no memory, so concurrent writers need no lock.
    """

    def __init__(self, width: int, height: int) -> None:
        self.pixels = np.zeros((height, width, 4), dtype=np.uint8)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def bounds(self) -> tuple[int, int, int, int]:
        """(x0, y0, x1, y1), exclusive on the far edges."""
        return 0, 0, self.width, self.height

    def get_pixel(self, x: int, y: int) -> Color:
        r, g, b, a = self.pixels[y, x]
        return int(r), int(g), int(b), int(a)

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        self.pixels[y, x] = color

    def region(self, point: Point, size: Size) -> np.ndarray:
        """Writable view of the rectangle at *point*, clipped to the canvas."""
        x0 = min(max(point.x, 0), self.width)
        y0 = min(max(point.y, 0), self.height)
        x1 = min(max(point.x + size.width, x0), self.width)
        y1 = min(max(point.y + size.height, y0), self.height)
        return self.pixels[y0:y1, x0:x1]

    def to_image(self) -> Image.Image:
        """Snapshot of the current buffer as a Pillow RGBA image."""
        return Image.fromarray(self.pixels.copy())


class CircleMask:
    """Alpha mask that is opaque inside a circle and transparent outside.

    Pixel ``(x, y)`` is sampled at its centre, ``(x + 0.5, y + 0.5)``.
    """

    def __init__(self, center: Point, radius: int) -> None:
        self.center = center
        self.radius = radius

    @property
    def bounds(self) -> tuple[int, int, int, int]:
        cx, cy, r = self.center.x, self.center.y, self.radius
        return cx - r, cy - r, cx + r, cy + r

    def get_pixel(self, x: int, y: int) -> int:
        xx = x - self.center.x + 0.5
        yy = y - self.center.y + 0.5
        return 255 if xx * xx + yy * yy < self.radius * self.radius else 0

    def as_array(self, width: int, height: int) -> np.ndarray:
        """(height, width) boolean array, True where the mask is opaque."""
        yy, xx = np.ogrid[:height, :width]
        dx = xx - self.center.x + 0.5
        dy = yy - self.center.y + 0.5
        return dx * dx + dy * dy < self.radius * self.radius
