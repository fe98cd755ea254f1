"""Concurrent compositing: one drawing task per cell on a shared canvas.

``wait=True`` joins every task before the canvas is returned.  With
``wait=False`` the canvas comes back straight after dispatch while the
tasks are still drawing; nothing signals completion, so a reader may see
a partly drawn collage.  Pass your own ``executor`` and shut it down with
``wait=True`` to synchronise out-of-band in that mode.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from concurrent.futures import Executor, Future, ThreadPoolExecutor, as_completed

from PIL import Image

from image_collager.canvas import Canvas
from image_collager.compositor import Resampler, canvas_size, draw_region, resample
from image_collager.geometry import Shape
from image_collager.layout import ImageMatrix, Layout, iter_placements, partition
from image_collager.workers import effective_workers

logger = logging.getLogger(__name__)


def _log_failure(future: Future) -> None:
    exc = future.exception()
    if exc is not None:
        logger.error("Drawing task failed: %s", exc, exc_info=exc)


def run_composite(
    matrix: ImageMatrix,
    shape: Shape,
    padding: int,
    target_width: int,
    canvas_width: int,
    canvas_height: int,
    *,
    wait: bool = True,
    workers: int = 0,
    executor: Executor | None = None,
    resampler: Resampler = resample,
) -> Canvas:
    """Dispatch one task per cell and return the shared canvas.

    Args:
        matrix:        Rows of images from :func:`~image_collager.layout.partition`.
        shape:         Drawing mode.
        padding:       Gap between cells and around the edges.
        target_width:  Width each row was scaled to.
        canvas_width:  Content width from the partitioner.
        canvas_height: Content height from the partitioner.
        wait:          Join every task before returning.
        workers:       Pool size when no *executor* is given (0 = auto).
        executor:      Caller-owned pool; it is never shut down here.
        resampler:     Image resizing collaborator.

    Returns:
        The canvas.  With ``wait=False`` it may still be being drawn.
    """
    max_columns = max(len(row) for row in matrix)
    canvas = Canvas(*canvas_size(canvas_width, canvas_height, len(matrix), max_columns, padding))

    owned = executor is None
    pool = ThreadPoolExecutor(max_workers=effective_workers(workers)) if owned else executor

    t0 = time.perf_counter()
    # Regions are cut here, so each task only ever holds its own cell.
    futures = [
        pool.submit(
            draw_region,
            canvas.region(placement.point, placement.size),
            placement, shape, resampler,
        )
        for placement in iter_placements(matrix, padding, target_width, shape)
    ]
    logger.debug("Dispatched %d drawing tasks", len(futures))

    if not wait:
        for fut in futures:
            fut.add_done_callback(_log_failure)
        if owned:
            pool.shutdown(wait=False)
        logger.warning("Returning canvas without waiting for %d drawing tasks", len(futures))
        return canvas

    try:
        for fut in as_completed(futures):
            fut.result()
    finally:
        if owned:
            pool.shutdown(wait=True, cancel_futures=True)
    logger.info("Drew %d cells in parallel  (%.2f s)", len(futures), time.perf_counter() - t0)
    return canvas


def build_collage(
    images: Sequence[Image.Image],
    rows: int,
    shape: Shape,
    target_width: int,
    *,
    wait: bool = True,
    workers: int = 0,
    executor: Executor | None = None,
    resampler: Resampler = resample,
) -> tuple[Layout, Canvas]:
    """Partition *images* and composite them concurrently."""
    t0 = time.perf_counter()
    layout = partition(images, rows, shape, target_width)
    canvas = run_composite(
        layout.matrix,
        layout.shape,
        layout.padding,
        layout.target_width,
        layout.canvas_width,
        layout.canvas_height,
        wait=wait,
        workers=workers,
        executor=executor,
        resampler=resampler,
    )
    logger.info("Making image collage took %.2f s", time.perf_counter() - t0)
    return layout, canvas
