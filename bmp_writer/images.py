"""Conversion of Pillow images and JSON descriptions into encoder input."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image

from .errors import BmpError
from .palette import required_palette_entries

_REQUIRED_KEYS = ("width", "height", "depth", "pixels")


@dataclass
class ImageData:
    """Pixel buffer plus the metadata :func:`encode_bmp` needs."""

    pixels: np.ndarray
    width: int
    height: int
    depth: int
    palette: np.ndarray

    def as_kwargs(self) -> dict:
        return {
            "pixels": self.pixels,
            "width": self.width,
            "height": self.height,
            "depth": self.depth,
            "palette": self.palette,
        }


def _pad_palette(colors: np.ndarray, depth: int) -> np.ndarray:
    entries = required_palette_entries(depth)
    if len(colors) > entries:
        raise BmpError(f"Image uses {len(colors)} palette entries, a {depth}-bit BMP holds {entries}")
    padded = np.zeros((entries, 3), dtype=np.uint8)
    padded[: len(colors)] = colors
    return padded


def _pack_rgb(rgb: np.ndarray, depth: int) -> np.ndarray:
    red, green, blue = (rgb[..., i].astype(np.uint32) for i in range(3))
    if depth == 24:
        return (red << 16) | (green << 8) | blue
    if depth == 16:
        # X1R5G5B5, the layout implied by uncompressed 16-bit BMP
        return ((red >> 3) << 10) | ((green >> 3) << 5) | (blue >> 3)
    raise BmpError(f"RGB images can be written as 16 or 24-bit, not {depth}-bit")


def from_pil(image: Image.Image, depth: Optional[int] = None) -> ImageData:
    """Describe a Pillow image as encoder input without quantising it.

    ``1`` images become 1-bit, ``L`` and ``P`` images 8-bit (or the smaller
    indexed ``depth`` requested when the indices fit) and everything else is
    converted to RGB and packed as 24 or 16-bit colour.
    """

    width, height = image.size
    if image.mode == "1":
        pixels = (np.asarray(image) != 0).astype(np.uint8)
        colors = np.array([[0, 0, 0], [255, 255, 255]], dtype=np.uint8)
        depth = depth or 1
    elif image.mode in ("L", "P"):
        pixels = np.asarray(image).astype(np.uint8)
        if image.mode == "L":
            levels = np.arange(256, dtype=np.uint8)
            colors = np.stack([levels, levels, levels], axis=1)
        else:
            raw = image.getpalette() or []
            colors = np.array(raw, dtype=np.uint8).reshape(-1, 3)
            used = int(pixels.max()) + 1 if pixels.size else 0
            colors = colors[: max(used, 1)]
        depth = depth or 8
        if depth not in (1, 4, 8):
            raise BmpError(f"{image.mode} images need an indexed depth, not {depth}-bit")
        if image.mode == "L" and depth != 8:
            raise BmpError("Greyscale images can only be written as 8-bit")
    else:
        rgb = np.asarray(image.convert("RGB"))
        depth = depth or 24
        return ImageData(
            pixels=_pack_rgb(rgb, depth),
            width=width,
            height=height,
            depth=depth,
            palette=np.zeros((0, 3), dtype=np.uint8),
        )

    return ImageData(
        pixels=pixels,
        width=width,
        height=height,
        depth=depth,
        palette=_pad_palette(colors, depth),
    )


def load_json(path: Path) -> ImageData:
    with Path(path).open("r", encoding="utf-8") as fp:
        data = json.load(fp)
    missing = [key for key in _REQUIRED_KEYS if key not in data]
    if missing:
        raise BmpError(f"{path} is missing required keys: {', '.join(missing)}")
    return ImageData(
        pixels=data["pixels"],
        width=data["width"],
        height=data["height"],
        depth=data["depth"],
        palette=data.get("palette", []),
    )


def load_image(path: Path, depth: Optional[int] = None) -> ImageData:
    """Load a JSON pixel description or any image Pillow can open."""

    path = Path(path)
    if path.suffix.lower() == ".json":
        image = load_json(path)
        if depth is not None and depth != image.depth:
            raise BmpError(f"{path} describes a {image.depth}-bit image, not {depth}-bit")
        return image
    with Image.open(path) as image:
        image.load()
        return from_pil(image, depth)
