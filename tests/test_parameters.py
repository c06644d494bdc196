from __future__ import annotations

import json
from pathlib import Path

import pytest

from bmp_writer.errors import BmpError
from bmp_writer.header import read_header
from bmp_writer.parameters import BmpParameters, load_parameters
from bmp_writer.writer import encode_bmp


def test_whole_float_resolution_is_accepted():
    params = BmpParameters(pixels_per_meter=7874.0)
    assert params.pixels_per_meter == 7874
    assert isinstance(params.pixels_per_meter, int)
    fields = read_header(encode_bmp([0], 1, 1, 24, parameters=params))
    assert fields["x_pixels_per_meter"] == 7874


@pytest.mark.parametrize("value", [7874.5, float("nan"), float("inf"), "7874", True, -1, 2**31])
def test_invalid_resolution_is_rejected(value):
    with pytest.raises(BmpError):
        BmpParameters(pixels_per_meter=value)


@pytest.mark.parametrize("dpi", [-5, float("nan"), "96"])
def test_invalid_dpi_is_rejected(dpi):
    with pytest.raises(BmpError):
        BmpParameters.from_dpi(dpi)


def test_params_file_with_float_resolution(tmp_path: Path):
    path = tmp_path / "params.json"
    path.write_text(json.dumps({"pixels_per_meter": 2835.0}))
    assert load_parameters(path).pixels_per_meter == 2835


def test_params_file_with_unknown_key(tmp_path: Path):
    path = tmp_path / "params.json"
    path.write_text(json.dumps({"ppm": 2835}))
    with pytest.raises(BmpError):
        load_parameters(path)
