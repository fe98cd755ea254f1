"""Concurrent loading of every decodable image under a directory."""

from __future__ import annotations

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import IO

from PIL import Image

from image_collager.workers import effective_workers
from image_collager.errors import DecodeError, TraversalError

logger = logging.getLogger(__name__)


def decode_image(path: str | Path | IO[bytes]) -> Image.Image:
    """Fully decode *path* into a detached RGBA image.

    Raises:
        DecodeError: if Pillow cannot read the file as an image.
    """
    try:
        with Image.open(path) as img:
            img.load()
            return img.convert("RGBA")
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
        msg = f"Cannot decode {path}: {exc}"
        raise DecodeError(msg) from exc


def iter_files(directory: str | Path) -> list[Path]:
    """Every regular file below *directory*, recursively.

    Raises:
        TraversalError: if the directory is missing or cannot be walked.
    """
    directory = Path(directory)
    if not directory.is_dir():
        msg = f"Specified directory with images does not exist: {directory}"
        raise TraversalError(msg)

    def _fail(err: OSError) -> None:
        msg = f"Cannot read {err.filename}: {err.strerror}"
        raise TraversalError(msg) from err

    files: list[Path] = []
    for root, _dirs, names in os.walk(directory, onerror=_fail):
        files.extend(Path(root) / name for name in names if (Path(root) / name).is_file())
    return files


def load_images(directory: str | Path, workers: int = 0) -> list[Image.Image]:
    """Decode every file under *directory* on a thread pool, one task per file.

    Files that are not images are skipped.  The result is in completion
    order, which differs from run to run.
    """
    t0 = time.perf_counter()
    files = iter_files(directory)
    images: list[Image.Image] = []

    with ThreadPoolExecutor(max_workers=effective_workers(workers)) as ex:
        futures = {ex.submit(decode_image, p): p for p in files}
        for fut in as_completed(futures):
            try:
                images.append(fut.result())
            except DecodeError as exc:
                logger.debug("Skipping %s (%s)", futures[fut].name, exc.__cause__)

    logger.info(
        "%d images read in %.2f s  (%d files skipped)",
        len(images), time.perf_counter() - t0, len(files) - len(images),
    )
    return images
