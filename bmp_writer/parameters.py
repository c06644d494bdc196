"""Parameter definitions for BMP encoding."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from numbers import Integral, Real
from pathlib import Path

from .errors import BmpError

INCHES_PER_METRE = 39.37
DEFAULT_PIXELS_PER_METER = 7874  # 200 dpi


@dataclass(frozen=True)
class BmpParameters:
    """Settings written into the DIB header that do not affect pixel layout."""

    pixels_per_meter: int = DEFAULT_PIXELS_PER_METER

    def __post_init__(self) -> None:
        value = self.pixels_per_meter
        whole = isinstance(value, Integral) or (
            isinstance(value, Real) and float(value).is_integer()
        )
        if isinstance(value, bool) or not whole:
            raise BmpError(f"pixels_per_meter must be a whole number, got {value!r}")
        if not isinstance(value, Integral):
            # JSON may load 7874 as 7874.0
            object.__setattr__(self, "pixels_per_meter", int(value))
        if self.pixels_per_meter < 0 or self.pixels_per_meter > 0x7FFFFFFF:
            raise BmpError("pixels_per_meter must fit a signed 32-bit field")

    @classmethod
    def from_dpi(cls, dpi: float) -> "BmpParameters":
        """Build parameters from a resolution in dots per inch."""

        if isinstance(dpi, bool) or not isinstance(dpi, Real) or not math.isfinite(dpi):
            raise BmpError(f"dpi must be a number, got {dpi!r}")
        return cls(pixels_per_meter=int(round(dpi * INCHES_PER_METRE)))

    @property
    def dpi(self) -> float:
        return self.pixels_per_meter / INCHES_PER_METRE


DEFAULT_PARAMS = BmpParameters()


def load_parameters(path: Path | None) -> BmpParameters:
    if path is None:
        return DEFAULT_PARAMS
    with Path(path).open("r", encoding="utf-8") as fp:
        data = json.load(fp)
    if "dpi" in data:
        return BmpParameters.from_dpi(data["dpi"])
    try:
        return BmpParameters(**data)
    except TypeError as exc:
        raise BmpError(f"Invalid parameters in {path}: {exc}") from exc
