"""Command line interface for the BMP writer."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from .errors import BmpError, IOFailure
from .header import PALETTE_OFFSET, read_header
from .images import load_image
from .logs import configure_logging, get_logger
from .parameters import BmpParameters, load_parameters
from .writer import save_bmp

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Uncompressed BMP writer")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log progress and geometry details",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    encode = commands.add_parser("encode", help="Encode an image or JSON pixel description as BMP")
    encode.add_argument(
        "image",
        type=Path,
        help=(
            "JSON file with width, height, depth, pixels and optional palette, "
            "or any image Pillow can read"
        ),
    )
    encode.add_argument("output", type=Path, help="Path of the BMP file to write")
    encode.add_argument(
        "--params",
        type=Path,
        default=None,
        help="Optional JSON file overriding the default header parameters",
    )
    encode.add_argument(
        "--dpi",
        type=float,
        default=None,
        help="Resolution stored in the header (default: 200 dpi)",
    )
    encode.add_argument(
        "--depth",
        type=int,
        default=None,
        help="Bit depth to write (1, 4, 8, 16 or 24; default depends on the input)",
    )

    inspect = commands.add_parser("inspect", help="Print the header fields of a BMP file")
    inspect.add_argument("bitmap", type=Path, help="BMP file to inspect")
    return parser


def _encode(args: argparse.Namespace) -> int:
    params = load_parameters(args.params)
    if args.dpi is not None:
        params = BmpParameters.from_dpi(args.dpi)
    image = load_image(args.image, args.depth)
    save_bmp(args.output, parameters=params, **image.as_kwargs())
    return 0


def _inspect(args: argparse.Namespace) -> int:
    with Path(args.bitmap).open("rb") as fh:
        fields = read_header(fh.read(PALETTE_OFFSET))
    print(json.dumps(fields, indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    handler = _encode if args.command == "encode" else _inspect
    try:
        return handler(args)
    except (BmpError, IOFailure) as exc:
        logger.error("%s", exc)
        return 1
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Could not read input: %s", exc)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
