"""Exception types raised while building BMP images."""

from __future__ import annotations


class BmpError(ValueError):
    """Base class for invalid encoder input."""


class InvalidDimension(BmpError):
    """Width or height is not a positive integer."""


class UnsupportedDepth(BmpError):
    """Bit depth outside of 1, 4, 8, 16 and 24."""


class PixelBufferLengthMismatch(BmpError):
    """Number of pixels does not equal ``width * height``."""


class PaletteSizeMismatch(BmpError):
    """Palette cardinality does not match the bit depth."""


class PixelValueOutOfRange(BmpError):
    """Pixel value cannot be represented at the requested depth."""


class IOFailure(OSError):
    """Writing the encoded image to storage failed."""
