"""Uncompressed Windows Bitmap encoder for 1, 4, 8, 16 and 24-bit images."""

from .encoders import (
    MonochromeEncoder,
    Nibble4Encoder,
    Indexed8Encoder,
    Packed16Encoder,
    Packed24Encoder,
    PixelEncoder,
    get_encoder,
)
from .errors import (
    BmpError,
    InvalidDimension,
    IOFailure,
    PaletteSizeMismatch,
    PixelBufferLengthMismatch,
    PixelValueOutOfRange,
    UnsupportedDepth,
)
from .geometry import BmpGeometry, compute_geometry, split_bytes
from .header import build_header, read_header
from .images import ImageData, from_pil, load_image
from .palette import required_palette_entries, write_palette
from .parameters import BmpParameters
from .writer import FileStorage, encode_bmp, save_bmp

__all__ = [
    "MonochromeEncoder",
    "Nibble4Encoder",
    "Indexed8Encoder",
    "Packed16Encoder",
    "Packed24Encoder",
    "PixelEncoder",
    "get_encoder",
    "BmpError",
    "InvalidDimension",
    "IOFailure",
    "PaletteSizeMismatch",
    "PixelBufferLengthMismatch",
    "PixelValueOutOfRange",
    "UnsupportedDepth",
    "BmpGeometry",
    "compute_geometry",
    "split_bytes",
    "build_header",
    "read_header",
    "ImageData",
    "from_pil",
    "load_image",
    "required_palette_entries",
    "write_palette",
    "BmpParameters",
    "FileStorage",
    "encode_bmp",
    "save_bmp",
]
