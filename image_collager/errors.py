"""Exception hierarchy for collage builds."""

from __future__ import annotations


class CollageError(Exception):
    """Base class for every failure raised by this package."""


class InvalidLayout(CollageError, ValueError):
    """Rows, width or height would produce a zero or negative dimension."""


class ImageNotFound(CollageError, LookupError):
    """An image was looked up in a matrix it is not a member of."""


class TraversalError(CollageError, OSError):
    """The source directory could not be walked."""


class DecodeError(CollageError, OSError):
    """A single file could not be decoded as an image."""
