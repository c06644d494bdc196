"""Byte splitting and row geometry for uncompressed BMP images."""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral
from typing import Tuple

from .errors import InvalidDimension
from .palette import PALETTE_ENTRY_SIZE, required_palette_entries

FILE_HEADER_SIZE = 14
DIB_HEADER_SIZE = 40


def split_bytes(value: int) -> Tuple[int, int, int, int]:
    """Return the four little-endian bytes of the low 32 bits of ``value``."""

    value &= 0xFFFFFFFF
    return (
        value & 0xFF,
        (value >> 8) & 0xFF,
        (value >> 16) & 0xFF,
        (value >> 24) & 0xFF,
    )


def validate_depth(depth: int) -> int:
    required_palette_entries(depth)
    return int(depth)


def _validate_dimension(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral) or value <= 0:
        raise InvalidDimension(f"Image {name} must be a positive integer, got {value!r}")
    return int(value)


def row_size_base(width: int, depth: int) -> int:
    """Unpadded bytes per row: ``ceil(depth * width / 8)``."""

    return (depth * width + 7) // 8


def padded_row_size(size: int) -> int:
    """Round ``size`` up to the next multiple of four bytes."""

    return (size + 3) & ~3


@dataclass(frozen=True)
class BmpGeometry:
    """Derived sizes for one image; every field follows from width, height and depth."""

    width: int
    height: int
    depth: int
    row_size_base: int
    row_size: int
    palette_entries: int

    @property
    def row_padding(self) -> int:
        return self.row_size - self.row_size_base

    @property
    def palette_byte_size(self) -> int:
        return self.palette_entries * PALETTE_ENTRY_SIZE

    @property
    def pixel_data_byte_size(self) -> int:
        return self.row_size * self.height

    @property
    def header_byte_size(self) -> int:
        """Offset of the pixel data: both headers plus the palette."""

        return FILE_HEADER_SIZE + DIB_HEADER_SIZE + self.palette_byte_size

    @property
    def file_byte_size(self) -> int:
        return self.header_byte_size + self.pixel_data_byte_size

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


def compute_geometry(width: int, height: int, depth: int) -> BmpGeometry:
    """Validate the image shape and compute its row and file sizes."""

    width = _validate_dimension("width", width)
    height = _validate_dimension("height", height)
    depth = validate_depth(depth)

    base = row_size_base(width, depth)
    return BmpGeometry(
        width=width,
        height=height,
        depth=depth,
        row_size_base=base,
        row_size=padded_row_size(base),
        palette_entries=required_palette_entries(depth),
    )
