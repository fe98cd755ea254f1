"""Centralised configuration via a frozen dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from image_collager.geometry import Shape


@dataclass(frozen=True)
class CollageConfig:
    """All tuneable parameters for a collage run.

    Attributes:
        shape:     Draw images as padded rectangles or circle crops.
        rows:      Number of rows the images are spread over.
        width:     Width every row is scaled to fill.
        height:    Accepted for compatibility; no layout computation uses it.
        input_dir: Folder scanned (recursively) for source images.
        output:    Where to save the collage (None = don't save).
        show:      Open the result in the system image viewer.
        wait:      Wait for every drawing task before using the canvas.
                   False reproduces the unsynchronised fire-and-forget mode.
        workers:   Thread-pool size for loading and drawing (0 = auto).
    """

    shape: Shape = Shape.RECTANGLE
    rows: int = 2
    width: int = 1200
    height: int = 800  # unused by the layout

    input_dir: Path = field(default_factory=lambda: Path("images"))
    output: Path | None = None
    show: bool = False

    wait: bool = True
    workers: int = 0
