"""Depth specific pixel packing.

Every encoder turns a ``(height, width)`` array of source values into
``(height, row_size_base)`` packed bytes. The shared traversal in
:meth:`PixelEncoder.encode` stores the rows bottom-up and leaves the
zero-filled row padding untouched.
"""

from __future__ import annotations

from typing import Dict, Type

import numpy as np

from .errors import PixelValueOutOfRange
from .geometry import BmpGeometry, validate_depth


class PixelEncoder:
    """Base class for the per-depth row packers."""

    depth: int = 0

    @property
    def value_limit(self) -> int:
        """Exclusive upper bound for a source value."""

        return 1 << self.depth

    def validate(self, rows: np.ndarray) -> None:
        if rows.size == 0:
            return
        low = int(rows.min())
        high = int(rows.max())
        if low < 0 or high >= self.value_limit:
            bad = low if low < 0 else high
            raise PixelValueOutOfRange(
                f"Pixel value {bad} does not fit a {self.depth}-bit image "
                f"(expected 0..{self.value_limit - 1})"
            )

    def pack_rows(self, rows: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def encode(
        self,
        buffer: bytearray,
        offset: int,
        rows: np.ndarray,
        geometry: BmpGeometry,
    ) -> int:
        """Write packed rows into ``buffer`` at ``offset`` and return the end offset."""

        packed = self.pack_rows(rows)
        region = np.frombuffer(
            buffer,
            dtype=np.uint8,
            count=geometry.pixel_data_byte_size,
            offset=offset,
        ).reshape(geometry.height, geometry.row_size)
        # The last logical row is stored first.
        region[:, : geometry.row_size_base] = packed[::-1]
        return offset + geometry.pixel_data_byte_size


class MonochromeEncoder(PixelEncoder):
    """Eight pixels per byte, leftmost pixel in the most significant bit."""

    depth = 1

    def pack_rows(self, rows: np.ndarray) -> np.ndarray:
        # Rows are packed independently so unused trailing bits stay zero.
        return np.packbits(rows.astype(np.uint8), axis=1, bitorder="big")


class Nibble4Encoder(PixelEncoder):
    """Two pixels per byte, first pixel in the high nibble."""

    depth = 4

    def pack_rows(self, rows: np.ndarray) -> np.ndarray:
        height, width = rows.shape
        values = rows.astype(np.uint8)
        if width % 2:
            values = np.pad(values, ((0, 0), (0, 1)))
        pairs = values.reshape(height, -1, 2)
        return (pairs[:, :, 0] << 4) | pairs[:, :, 1]


class Indexed8Encoder(PixelEncoder):
    """One palette index per byte."""

    depth = 8

    def pack_rows(self, rows: np.ndarray) -> np.ndarray:
        return rows.astype(np.uint8)


class Packed16Encoder(PixelEncoder):
    """Each value stored as a little-endian 16-bit word."""

    depth = 16

    def pack_rows(self, rows: np.ndarray) -> np.ndarray:
        height, width = rows.shape
        words = np.ascontiguousarray(rows.astype("<u2"))
        return words.view(np.uint8).reshape(height, width * 2)


class Packed24Encoder(PixelEncoder):
    """Each value stored as three bytes: blue, green, red."""

    depth = 24

    def pack_rows(self, rows: np.ndarray) -> np.ndarray:
        height, width = rows.shape
        words = np.ascontiguousarray(rows.astype("<u4"))
        channels = words.view(np.uint8).reshape(height, width, 4)[:, :, :3]
        return channels.reshape(height, width * 3)


ENCODERS: Dict[int, Type[PixelEncoder]] = {
    encoder.depth: encoder
    for encoder in (
        MonochromeEncoder,
        Nibble4Encoder,
        Indexed8Encoder,
        Packed16Encoder,
        Packed24Encoder,
    )
}


def get_encoder(depth: int) -> PixelEncoder:
    """Return the encoder for ``depth``; unknown depths are rejected."""

    return ENCODERS[validate_depth(depth)]()
