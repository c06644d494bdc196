from __future__ import annotations

import json
from pathlib import Path

from PIL import Image

from bmp_writer.cli import main


def _write_json(path: Path, payload: dict) -> Path:
    path.write_text(json.dumps(payload))
    return path


def test_encode_json_description(tmp_path: Path):
    source = _write_json(
        tmp_path / "image.json",
        {
            "width": 2,
            "height": 1,
            "depth": 1,
            "pixels": [1, 0],
            "palette": [{"R": 0, "G": 0, "B": 0}, {"R": 255, "G": 255, "B": 255}],
        },
    )
    output = tmp_path / "image.bmp"
    assert main(["encode", str(source), str(output)]) == 0
    data = output.read_bytes()
    assert len(data) == 66
    assert data[62] == 0x80


def test_encode_png_with_dpi(tmp_path: Path):
    source = tmp_path / "image.png"
    Image.new("RGB", (3, 3), color=(255, 0, 0)).save(source)
    output = tmp_path / "image.bmp"
    assert main(["encode", str(source), str(output), "--dpi", "96"]) == 0
    data = output.read_bytes()
    assert int.from_bytes(data[38:42], "little") == 3780
    with Image.open(output) as image:
        assert image.getpixel((1, 1)) == (255, 0, 0)


def test_encode_with_params_file(tmp_path: Path):
    source = _write_json(
        tmp_path / "image.json", {"width": 1, "height": 1, "depth": 24, "pixels": [0]}
    )
    params = _write_json(tmp_path / "params.json", {"pixels_per_meter": 2835})
    output = tmp_path / "image.bmp"
    assert main(["encode", str(source), str(output), "--params", str(params)]) == 0
    assert int.from_bytes(output.read_bytes()[42:46], "little") == 2835


def test_encode_reports_invalid_input(tmp_path: Path):
    source = _write_json(
        tmp_path / "image.json", {"width": 2, "height": 1, "depth": 1, "pixels": [1, 0]}
    )
    output = tmp_path / "image.bmp"
    assert main(["encode", str(source), str(output)]) == 1
    assert not output.exists()


def test_inspect_prints_header(tmp_path: Path, capsys):
    source = _write_json(
        tmp_path / "image.json", {"width": 5, "height": 4, "depth": 24, "pixels": [0] * 20}
    )
    output = tmp_path / "image.bmp"
    assert main(["encode", str(source), str(output)]) == 0
    capsys.readouterr()

    assert main(["inspect", str(output)]) == 0
    fields = json.loads(capsys.readouterr().out)
    assert fields["width"] == 5
    assert fields["height"] == 4
    assert fields["bits_per_pixel"] == 24
    assert fields["file_size"] == 54 + 16 * 4


def test_encode_reports_negative_dpi(tmp_path: Path):
    source = _write_json(
        tmp_path / "image.json", {"width": 1, "height": 1, "depth": 24, "pixels": [0]}
    )
    output = tmp_path / "image.bmp"
    assert main(["encode", str(source), str(output), "--dpi", "-5"]) == 1
    assert not output.exists()


def test_encode_reports_unknown_params_key(tmp_path: Path):
    source = _write_json(
        tmp_path / "image.json", {"width": 1, "height": 1, "depth": 24, "pixels": [0]}
    )
    params = _write_json(tmp_path / "params.json", {"ppm": 2835})
    output = tmp_path / "image.bmp"
    assert main(["encode", str(source), str(output), "--params", str(params)]) == 1
    assert not output.exists()
