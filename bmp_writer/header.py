"""BMP file header and BITMAPINFOHEADER layout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from .errors import BmpError
from .geometry import DIB_HEADER_SIZE, FILE_HEADER_SIZE, BmpGeometry, split_bytes
from .parameters import DEFAULT_PARAMS, BmpParameters

SIGNATURE = b"BM"
COLOR_PLANES = 1
COMPRESSION_NONE = 0
PALETTE_OFFSET = FILE_HEADER_SIZE + DIB_HEADER_SIZE


@dataclass(frozen=True)
class HeaderField:
    name: str
    offset: int
    size: int


# All integers little-endian. Bytes 6-9 and 48-49 are reserved and left zero.
HEADER_FIELDS = (
    HeaderField("file_size", 2, 4),
    HeaderField("pixel_data_offset", 10, 4),
    HeaderField("dib_header_size", 14, 4),
    HeaderField("width", 18, 4),
    HeaderField("height", 22, 4),
    HeaderField("color_planes", 26, 2),
    HeaderField("bits_per_pixel", 28, 2),
    HeaderField("compression", 30, 4),
    HeaderField("image_size", 34, 4),
    HeaderField("x_pixels_per_meter", 38, 4),
    HeaderField("y_pixels_per_meter", 42, 4),
    HeaderField("palette_entries", 46, 2),
    HeaderField("important_colors", 50, 4),
)

_SIGNED_FIELDS = frozenset({"width", "height", "x_pixels_per_meter", "y_pixels_per_meter"})


def header_values(geometry: BmpGeometry, parameters: BmpParameters) -> Dict[str, int]:
    return {
        "file_size": geometry.file_byte_size,
        "pixel_data_offset": geometry.header_byte_size,
        "dib_header_size": DIB_HEADER_SIZE,
        "width": geometry.width,
        "height": geometry.height,
        "color_planes": COLOR_PLANES,
        "bits_per_pixel": geometry.depth,
        "compression": COMPRESSION_NONE,
        # zero is permitted for uncompressed images
        "image_size": 0,
        "x_pixels_per_meter": parameters.pixels_per_meter,
        "y_pixels_per_meter": parameters.pixels_per_meter,
        "palette_entries": geometry.palette_entries,
        "important_colors": 0,
    }


def allocate(geometry: BmpGeometry) -> bytearray:
    """Return a zero-filled buffer large enough for the whole file."""

    return bytearray(geometry.file_byte_size)


def write_header(
    buffer: bytearray,
    geometry: BmpGeometry,
    parameters: Optional[BmpParameters] = None,
) -> int:
    """Write both headers into ``buffer`` and return the offset of the palette."""

    values = header_values(geometry, parameters or DEFAULT_PARAMS)
    buffer[0:2] = SIGNATURE
    for field in HEADER_FIELDS:
        field_bytes = split_bytes(values[field.name])[: field.size]
        buffer[field.offset : field.offset + field.size] = bytes(field_bytes)
    return PALETTE_OFFSET


def build_header(geometry: BmpGeometry, parameters: Optional[BmpParameters] = None) -> bytearray:
    buffer = allocate(geometry)
    write_header(buffer, geometry, parameters)
    return buffer


def read_header(data: bytes) -> Dict[str, int]:
    """Decode the header fields of an encoded image back into a dictionary.

    Only the fixed 54-byte header is interpreted; the palette and pixel
    data are not decoded.
    """

    if len(data) < PALETTE_OFFSET:
        raise BmpError("Data too short to contain a BMP header")
    if bytes(data[0:2]) != SIGNATURE:
        raise BmpError("Missing BMP signature")
    fields = {}
    for field in HEADER_FIELDS:
        raw = bytes(data[field.offset : field.offset + field.size])
        fields[field.name] = int.from_bytes(
            raw, "little", signed=field.name in _SIGNED_FIELDS
        )
    return fields
