from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from ..codec import DecodeError, DecodeSettings, ImageDescriptor
from ..source import decode_file


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="bmpplanes: decode an uncompressed 8/24-bit BMP into red, green and blue planes."
    )
    parser.add_argument("path", help="BMP file to decode")
    parser.add_argument("--little-endian", action="store_true", help="Read header integers little-endian")
    parser.add_argument(
        "--legacy-depth",
        type=int,
        nargs="?",
        const=24,
        choices=(8, 24),
        metavar="BPP",
        help="Require a zero depth marker and assume this depth (default: 24)",
    )
    parser.add_argument("--export", metavar="PATH", help="Write the decoded planes as an RGB image (e.g. out.png)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _resolve_settings(args: argparse.Namespace) -> DecodeSettings:
    settings = DecodeSettings()
    if args.little_endian:
        settings.byte_order = "little"
    if args.legacy_depth is not None:
        settings.legacy_depth_marker = True
        settings.assumed_bits_per_pixel = args.legacy_depth
    return settings


def _format_field(name: str, value: object) -> str:
    if name == "magic" and isinstance(value, bytes):
        return value.decode("ascii", errors="replace")
    if isinstance(value, bytes):
        return "0x" + value.hex()
    return str(value)


def describe(descriptor: ImageDescriptor) -> List[str]:
    lines = [f"{name}: {_format_field(name, value)}" for name, value in descriptor.header_fields().items()]
    lines.append(f"palette_entries: {len(descriptor.palette)}")
    lines.append(f"plane_shape: {descriptor.shape[0]}x{descriptor.shape[1]}")
    return lines


def export_preview(descriptor: ImageDescriptor, path: str) -> None:
    from ..rendering import save_preview

    save_preview(descriptor, path)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
        logging.getLogger("bmpplanes").setLevel(logging.DEBUG)
    try:
        descriptor = decode_file(args.path, _resolve_settings(args))
        for line in describe(descriptor):
            print(line)
        if args.export:
            export_preview(descriptor, args.export)
    except (DecodeError, OSError, ValueError) as exc:
        print(str(exc), file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
