"""Assemble complete BMP images and hand them to storage."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Protocol, Union

import numpy as np

from .encoders import get_encoder
from .errors import BmpError, IOFailure, PixelBufferLengthMismatch
from .geometry import BmpGeometry, compute_geometry
from .header import PALETTE_OFFSET, build_header
from .logs import get_logger
from .palette import Color, check_palette, normalise_palette, write_palette
from .parameters import BmpParameters

logger = get_logger("writer")

Destination = Union[str, Path]


class Storage(Protocol):
    def write(self, destination: Destination, data: bytes) -> None:
        ...


class FileStorage:
    """Write encoded images to the local filesystem."""

    def __init__(self, create_parents: bool = True) -> None:
        self.create_parents = create_parents

    def write(self, destination: Destination, data: bytes) -> None:
        path = Path(destination)
        try:
            if self.create_parents:
                path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("wb") as fh:
                fh.write(data)
        except OSError as exc:
            raise IOFailure(f"Could not write {path}: {exc}") from exc


def _pixel_rows(pixels, geometry: BmpGeometry) -> np.ndarray:
    try:
        array = np.asarray(pixels)
    except ValueError as exc:
        raise BmpError("Pixel buffer must be a regular array of integers") from exc

    if array.size != geometry.pixel_count:
        raise PixelBufferLengthMismatch(
            f"Expected {geometry.pixel_count} pixels for a "
            f"{geometry.width}x{geometry.height} image, got {array.size}"
        )
    if array.dtype.kind not in "biu":
        raise BmpError(f"Pixel values must be integers, got dtype {array.dtype}")
    return array.reshape(geometry.height, geometry.width)


def encode_bmp(
    pixels,
    width: int,
    height: int,
    depth: int,
    palette: Optional[Iterable[Color]] = (),
    parameters: Optional[BmpParameters] = None,
) -> bytes:
    """Encode a row-major pixel buffer as an uncompressed BMP image.

    ``pixels`` holds ``width * height`` values with row 0 at the top of the
    image: 0/1 for 1-bit images, palette indices for 4 and 8-bit images and
    packed ``0xRRGGBB`` (or 16-bit) colour values otherwise. Indexed depths
    require a palette of exactly 2, 16 or 256 RGB entries; packed depths
    require an empty one.

    Every input is validated before the output buffer is allocated.
    """

    geometry = compute_geometry(width, height, depth)
    encoder = get_encoder(geometry.depth)
    rows = _pixel_rows(pixels, geometry)
    colors = normalise_palette(palette)
    check_palette(colors, geometry.depth)
    encoder.validate(rows)

    logger.debug(
        "Encoding %dx%d %d-bit image: row %d+%d bytes, %d bytes total",
        geometry.width,
        geometry.height,
        geometry.depth,
        geometry.row_size_base,
        geometry.row_padding,
        geometry.file_byte_size,
    )

    buffer = build_header(geometry, parameters)
    offset = write_palette(buffer, PALETTE_OFFSET, colors, geometry.depth)
    end = encoder.encode(buffer, offset, rows, geometry)
    if end != geometry.file_byte_size:
        raise RuntimeError(f"Pixel data ended at {end}, expected {geometry.file_byte_size}")
    return bytes(buffer)


def save_bmp(
    destination: Destination,
    pixels,
    width: int,
    height: int,
    depth: int,
    palette: Optional[Iterable[Color]] = (),
    parameters: Optional[BmpParameters] = None,
    storage: Optional[Storage] = None,
) -> Destination:
    """Encode an image and write it to ``destination`` through ``storage``.

    Storage failures surface as :class:`IOFailure` and are not retried.
    """

    data = encode_bmp(pixels, width, height, depth, palette, parameters)
    (storage or FileStorage()).write(destination, data)
    logger.info("Wrote %d bytes to %s", len(data), destination)
    return destination
