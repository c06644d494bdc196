"""Command line entry point for the BMP writer."""

from __future__ import annotations

from bmp_writer.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
