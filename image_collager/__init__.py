"""
Image Collager
==============

Arrange images of any size into one collage canvas, spread over a chosen
number of rows and scaled to a target width.  Two shapes:

- **Rectangle** - every image drawn whole, 1 px apart
- **Circle** - every image cropped to a circle, 20 px apart
"""

__version__ = "1.0.0"

from image_collager.canvas import Canvas, CircleMask
from image_collager.compositor import composite, draw_cell, draw_region, resample
from image_collager.config import CollageConfig
from image_collager.driver import build_collage, run_composite
from image_collager.errors import (
    CollageError,
    DecodeError,
    ImageNotFound,
    InvalidLayout,
    TraversalError,
)
from image_collager.geometry import Point, Shape, Size
from image_collager.image_source import load_images
from image_collager.layout import Layout, Placement, iter_placements, locate, partition

__all__ = [
    "Canvas",
    "CircleMask",
    "CollageConfig",
    "CollageError",
    "DecodeError",
    "ImageNotFound",
    "InvalidLayout",
    "Layout",
    "Placement",
    "Point",
    "Shape",
    "Size",
    "TraversalError",
    "build_collage",
    "composite",
    "draw_cell",
    "draw_region",
    "iter_placements",
    "load_images",
    "locate",
    "partition",
    "resample",
    "run_composite",
]
