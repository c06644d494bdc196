from __future__ import annotations

import numpy as np
import pytest

from bmp_writer.errors import BmpError, PaletteSizeMismatch, UnsupportedDepth
from bmp_writer.palette import normalise_palette, required_palette_entries, write_palette


def test_required_palette_entries():
    assert [required_palette_entries(d) for d in (1, 4, 8, 16, 24)] == [2, 16, 256, 0, 0]
    with pytest.raises(UnsupportedDepth):
        required_palette_entries(32)


def test_write_palette_stores_rgb_and_reserved_byte():
    buffer = bytearray(20)
    palette = normalise_palette([(10, 20, 30), (40, 50, 60)])
    end = write_palette(buffer, 4, palette, 1)
    assert end == 12
    assert list(buffer[4:12]) == [10, 20, 30, 0, 40, 50, 60, 0]
    assert buffer[:4] == bytearray(4)
    assert buffer[12:] == bytearray(8)


def test_write_palette_rejects_wrong_cardinality():
    buffer = bytearray(100)
    with pytest.raises(PaletteSizeMismatch):
        write_palette(buffer, 0, normalise_palette([(0, 0, 0)] * 3), 1)
    with pytest.raises(PaletteSizeMismatch):
        write_palette(buffer, 0, normalise_palette([(0, 0, 0)] * 2), 24)
    assert buffer == bytearray(100)


def test_normalise_palette_accepts_channel_mappings():
    palette = normalise_palette([{"R": 1, "G": 2, "B": 3}, [4, 5, 6]])
    assert palette.dtype == np.uint8
    assert palette.tolist() == [[1, 2, 3], [4, 5, 6]]
    assert normalise_palette(None).shape == (0, 3)
    assert normalise_palette([]).shape == (0, 3)


@pytest.mark.parametrize("palette", [[(0, 0, 256)], [(-1, 0, 0)], [(1, 2)], [{"R": 1, "G": 2}]])
def test_normalise_palette_rejects_bad_entries(palette):
    with pytest.raises(BmpError):
        normalise_palette(palette)


def test_normalise_palette_rejects_ragged_array():
    with pytest.raises(BmpError):
        normalise_palette(np.zeros(4))
    assert normalise_palette(np.zeros((2, 3))).shape == (2, 3)
