"""Palette sizing and serialisation for indexed BMP depths."""

from __future__ import annotations

from collections.abc import Mapping
from numbers import Integral
from typing import Iterable, Sequence, Union

import numpy as np

from .errors import BmpError, PaletteSizeMismatch, UnsupportedDepth

PALETTE_ENTRY_SIZE = 4  # R, G, B and a reserved zero byte

# depth -> palette entries
_PALETTE_ENTRIES = {1: 2, 4: 16, 8: 256, 16: 0, 24: 0}
SUPPORTED_DEPTHS = tuple(_PALETTE_ENTRIES)

Color = Union[Sequence[int], Mapping[str, int]]


def required_palette_entries(depth: int) -> int:
    """Return 2, 16 or 256 for indexed depths and 0 for packed colour."""

    if isinstance(depth, bool) or not isinstance(depth, Integral) or depth not in _PALETTE_ENTRIES:
        raise UnsupportedDepth(
            f"Unsupported bit depth {depth!r}; expected one of {SUPPORTED_DEPTHS}"
        )
    return _PALETTE_ENTRIES[int(depth)]


def _color_channels(color: Color) -> tuple[int, int, int]:
    if isinstance(color, Mapping):
        try:
            return color["R"], color["G"], color["B"]
        except KeyError as exc:
            raise BmpError(f"Palette entry {color!r} is missing channel {exc}") from exc
    if len(color) != 3:
        raise BmpError(f"Palette entry {color!r} must contain exactly three channels")
    return color[0], color[1], color[2]


def normalise_palette(palette: Iterable[Color] | np.ndarray | None) -> np.ndarray:
    """Convert palette entries into a ``uint8`` array of shape ``(n, 3)``.

    Entries may be RGB triples or mappings with ``R``, ``G`` and ``B`` keys.
    """

    if palette is None:
        return np.zeros((0, 3), dtype=np.uint8)
    if isinstance(palette, np.ndarray):
        if palette.size % 3:
            raise BmpError(f"Palette array of size {palette.size} is not a list of RGB triples")
        channels = palette.reshape(-1, 3) if palette.size else np.zeros((0, 3))
    else:
        channels = np.array([_color_channels(color) for color in palette], dtype=np.int64)
        channels = channels.reshape(-1, 3)

    if channels.size and (channels.min() < 0 or channels.max() > 255):
        raise BmpError("Palette channels must lie within 0..255")
    return channels.astype(np.uint8)


def check_palette(palette: np.ndarray, depth: int) -> None:
    expected = required_palette_entries(depth)
    if len(palette) != expected:
        raise PaletteSizeMismatch(
            f"A {depth}-bit image needs {expected} palette entries, got {len(palette)}"
        )


def write_palette(buffer: bytearray, offset: int, palette: np.ndarray, depth: int) -> int:
    """Write ``[R, G, B, 0]`` for every entry and return the offset past the table."""

    check_palette(palette, depth)
    for red, green, blue in palette:
        buffer[offset] = int(red)
        buffer[offset + 1] = int(green)
        buffer[offset + 2] = int(blue)
        buffer[offset + 3] = 0
        offset += PALETTE_ENTRY_SIZE
    return offset
