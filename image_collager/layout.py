"""Row/column partitioning and per-image placement.

Both the canvas size and every placement come from :func:`scaled_size`
and :func:`footprint`, so the size the canvas was allocated with and the
positions images are drawn at cannot drift apart.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from PIL import Image

from image_collager.errors import ImageNotFound, InvalidLayout
from image_collager.geometry import Point, Shape, Size, column_width, footprint, scaled_size

logger = logging.getLogger(__name__)

ImageMatrix = tuple[tuple[Image.Image, ...], ...]


@dataclass(frozen=True)
class Layout:
    """Result of partitioning one image set.

    Attributes:
        matrix:            Rows of images, tallest first.
        shape:             Drawing mode the sizes were computed for.
        target_width:      Width each row is scaled to fill.
        canvas_width:      Widest row, summed over image footprints.
        canvas_height:     Height needed to stack every row without clipping.
        max_columns:       Cell count of the longest row.
        max_column_height: Tallest column, summed positionally down the rows.
    """

    matrix: ImageMatrix
    shape: Shape
    target_width: int
    canvas_width: int
    canvas_height: int
    max_columns: int
    max_column_height: int

    @property
    def rows(self) -> int:
        return len(self.matrix)

    @property
    def padding(self) -> int:
        return self.shape.padding


@dataclass(frozen=True)
class Placement:
    row: int
    col: int
    image: Image.Image
    point: Point
    size: Size


def validate_request(rows: int, target_width: int, target_height: int | None = None) -> None:
    """Reject parameters that would divide by zero or yield negative sizes.

    *target_height* is checked for sign only; no layout computation reads it.
    """
    if rows <= 0:
        msg = f"Number of rows must be positive, got {rows}"
        raise InvalidLayout(msg)
    if target_width <= 0:
        msg = f"Target width must be positive, got {target_width}"
        raise InvalidLayout(msg)
    if target_height is not None and target_height <= 0:
        msg = f"Target height must be positive, got {target_height}"
        raise InvalidLayout(msg)


def build_matrix(images: Sequence[Image.Image], rows: int) -> ImageMatrix:
    """Sort by height (descending) and bucket into *rows* rows.

    Each row gets ``len(images) // rows`` images; the remainder goes one
    extra image at a time to the earliest rows.  Python's sort is stable,
    so equal heights keep their input order, but that order is whatever
    the loader produced and is not reproducible across runs.
    """
    if not images:
        msg = "Cannot lay out an empty image set"
        raise InvalidLayout(msg)
    if len(images) < rows:
        msg = f"{len(images)} images cannot fill {rows} rows"
        raise InvalidLayout(msg)
    for img in images:
        if img.width <= 0 or img.height <= 0:
            msg = f"Cannot lay out an empty {img.width}x{img.height} image"
            raise InvalidLayout(msg)

    ordered = sorted(images, key=lambda img: img.height, reverse=True)
    n = len(ordered)
    columns = n // rows

    matrix: list[tuple[Image.Image, ...]] = []
    added = 0
    for idx in range(rows):
        in_row = columns
        if n % rows > 0 and (rows - idx) * columns < n - added:
            in_row += 1
        matrix.append(tuple(ordered[added:added + in_row]))
        added += in_row
    return tuple(matrix)


def _row_sizes(row: Sequence[Image.Image], target_width: int, shape: Shape) -> list[Size]:
    width = column_width(target_width, len(row))
    return [footprint(scaled_size(img.width, img.height, width), shape) for img in row]


def partition(
    images: Sequence[Image.Image],
    rows: int,
    shape: Shape,
    target_width: int,
) -> Layout:
    """Bucket *images* into rows and compute the canvas size they need.

    Raises:
        InvalidLayout: on a non-positive row count or width, too few images
            for the rows, an empty source image, or an image that would
            render with a zero side.
    """
    shape = Shape(shape)
    validate_request(rows, target_width)
    matrix = build_matrix(images, rows)

    sizes = [_row_sizes(row, target_width, shape) for row in matrix]
    for r, row_sizes in enumerate(sizes):
        for c, size in enumerate(row_sizes):
            if size.width <= 0 or size.height <= 0:
                msg = (
                    f"Image at row {r}, column {c} would render as "
                    f"{size.width}x{size.height} at target width {target_width}"
                )
                raise InvalidLayout(msg)

    max_columns = max(len(row) for row in matrix)
    canvas_width = max(sum(s.width for s in row_sizes) for row_sizes in sizes)

    max_column_height = 0
    for col in range(max_columns):
        col_height = sum(row_sizes[col].height for row_sizes in sizes if len(row_sizes) > col)
        max_column_height = max(max_column_height, col_height)

    # Rows are stacked by their tallest cell, which can exceed any single column.
    stacked_height = sum(max(s.height for s in row_sizes) for row_sizes in sizes)

    layout = Layout(
        matrix=matrix,
        shape=shape,
        target_width=target_width,
        canvas_width=canvas_width,
        canvas_height=max(max_column_height, stacked_height),
        max_columns=max_columns,
        max_column_height=max_column_height,
    )
    logger.debug(
        "Partitioned %d images into %d rows (max %d columns), content %dx%d",
        len(images), rows, max_columns, layout.canvas_width, layout.canvas_height,
    )
    return layout


def iter_placements(
    matrix: ImageMatrix,
    padding: int,
    target_width: int,
    shape: Shape,
) -> Iterator[Placement]:
    """Yield every cell's top-left point and rendered size, row by row."""
    shape = Shape(shape)
    y = padding
    for r, row in enumerate(matrix):
        x = padding
        row_height = 0
        for c, (img, size) in enumerate(zip(row, _row_sizes(row, target_width, shape), strict=True)):
            yield Placement(r, c, img, Point(x, y), size)
            x += size.width + padding
            row_height = max(row_height, size.height)
        y += row_height + padding


def locate(
    image: Image.Image,
    matrix: ImageMatrix,
    padding: int,
    target_width: int,
    shape: Shape,
) -> tuple[Point, Size]:
    """Find *image* (by identity) and return its placement point and size.

    Raises:
        ImageNotFound: if *image* is not one of the matrix's cells.
    """
    for placement in iter_placements(matrix, padding, target_width, shape):
        if placement.image is image:
            return placement.point, placement.size
    msg = "Image not found in matrix"
    raise ImageNotFound(msg)
