"""Resampling and drawing of single cells, and the serial compositor."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

import numpy as np
from PIL import Image

from image_collager.canvas import Canvas, CircleMask
from image_collager.geometry import Point, Shape
from image_collager.layout import ImageMatrix, Placement, iter_placements

logger = logging.getLogger(__name__)

Resampler = Callable[[Image.Image, int, int], Image.Image]


def resample(image: Image.Image, width: int, height: int) -> Image.Image:
    """Resize to exactly (width, height) with a Lanczos filter, as RGBA."""
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    return image.resize((width, height), Image.LANCZOS)


def canvas_size(
    canvas_width: int,
    canvas_height: int,
    rows: int,
    max_columns: int,
    padding: int,
) -> tuple[int, int]:
    """Content size plus the gaps between cells and around the edges."""
    return (
        canvas_width + (max_columns - 1) * padding + 2 * padding,
        canvas_height + (rows - 1) * padding + 2 * padding,
    )


def _draw_opaque(region: np.ndarray, src: np.ndarray) -> None:
    h, w = region.shape[:2]
    region[...] = src[:h, :w]


def _draw_over(region: np.ndarray, src: np.ndarray, inside: np.ndarray) -> None:
    """Porter-Duff "over" on straight-alpha RGBA, only where *inside* is set."""
    h, w = region.shape[:2]
    src = src[:h, :w].astype(np.float32) / 255.0
    dst = region.astype(np.float32) / 255.0
    inside = inside[:h, :w]

    sa = src[..., 3:4]
    da = dst[..., 3:4] * (1.0 - sa)
    out_a = sa + da
    out_rgb = np.divide(
        src[..., :3] * sa + dst[..., :3] * da,
        out_a,
        out=np.zeros_like(src[..., :3]),
        where=out_a > 0,
    )
    out = np.concatenate([out_rgb, out_a], axis=-1)
    region[inside] = np.rint(out[inside] * 255.0).astype(np.uint8)


def draw_region(
    region: np.ndarray,
    placement: Placement,
    shape: Shape,
    resampler: Resampler = resample,
) -> None:
    """Resample one image to its placement size and draw it into *region*.

    *region* is the cell's own view of the canvas (see :meth:`Canvas.region`);
    nothing outside it is touched.

    Rectangles replace the destination outright.  Circles are blended over
    the destination through a centred :class:`CircleMask`; pixels outside
    the circle are left as they were.
    """
    size = placement.size
    resized = resampler(placement.image, size.width, size.height)
    src = np.asarray(resized.convert("RGBA"), dtype=np.uint8)

    if Shape(shape) is Shape.RECTANGLE:
        _draw_opaque(region, src)
        return

    h, w = src.shape[:2]
    diameter = min(size.width, w, h)
    mask = CircleMask(Point(w // 2, h // 2), diameter // 2)
    _draw_over(region, src, mask.as_array(w, h))


def draw_cell(
    canvas: Canvas,
    placement: Placement,
    shape: Shape,
    resampler: Resampler = resample,
) -> None:
    """Draw one placement onto *canvas* through its cell region."""
    draw_region(canvas.region(placement.point, placement.size), placement, shape, resampler)


def composite(
    matrix: ImageMatrix,
    shape: Shape,
    padding: int,
    target_width: int,
    canvas_width: int,
    canvas_height: int,
    resampler: Resampler = resample,
) -> Canvas:
    """Draw every cell of *matrix* in order on the calling thread."""
    max_columns = max(len(row) for row in matrix)
    canvas = Canvas(*canvas_size(canvas_width, canvas_height, len(matrix), max_columns, padding))

    t0 = time.perf_counter()
    count = 0
    for placement in iter_placements(matrix, padding, target_width, shape):
        draw_cell(canvas, placement, shape, resampler)
        count += 1
    logger.info("Drew %d cells serially  (%.2f s)", count, time.perf_counter() - t0)
    return canvas
