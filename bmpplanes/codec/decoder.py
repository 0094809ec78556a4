from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Optional, Tuple

import numpy as np

from .errors import (
    InvalidGeometry,
    InvalidMagic,
    InvalidPlanesField,
    UnknownPaletteIndex,
    UnsupportedCompression,
    UnsupportedFormat,
    UnsupportedHeaderVariant,
)
from .fields import read_s32, read_u16, read_u32, require
from .types import Color, ImageDescriptor

logger = logging.getLogger(__name__)

MAGIC = b"BM"
HEADER_END = 54
PALETTE_OFFSET = 54
PALETTE_ENTRY_SIZE = 4
INFO_HEADER_SIZE = 40
PLANES_VALUE = 1
UNCOMPRESSED = 0
SUPPORTED_DEPTHS = (8, 24)
BYTE_ORDERS = ("big", "little")


@dataclass
class DecodeSettings:
    byte_order: str = "big"
    legacy_depth_marker: bool = False
    assumed_bits_per_pixel: int = 24

    def validate(self) -> None:
        """Validate settings before decoding."""
        if self.byte_order not in BYTE_ORDERS:
            raise ValueError(f"byte_order must be one of {BYTE_ORDERS}, got '{self.byte_order}'")
        if self.assumed_bits_per_pixel not in SUPPORTED_DEPTHS:
            raise ValueError(f"assumed_bits_per_pixel must be 8 or 24, got {self.assumed_bits_per_pixel}")


@dataclass(frozen=True)
class _Header:
    file_size: int
    pixel_array_offset: int
    dib_header_size: int
    width: int
    height: int
    planes_constant: bytes
    bits_per_pixel: int
    compression: int
    image_size_raw: int
    color_count: int


def row_padding(width: int, bits_per_pixel: int) -> int:
    """Return the filler bytes skipped after each pixel row."""
    if bits_per_pixel == 24:
        return width % 4
    return 4 - width % 4


def decode(data: bytes, settings: Optional[DecodeSettings] = None) -> ImageDescriptor:
    """Decode a BMP buffer into header fields, palette and colour planes."""
    settings = settings or DecodeSettings()
    settings.validate()
    data = bytes(data)
    header = _parse_headers(data, settings)
    palette: Dict[int, Color] = {}
    if header.bits_per_pixel == 8:
        palette = _parse_palette(data, header.color_count)
    red, green, blue = _parse_pixel_array(data, header, palette)
    return ImageDescriptor(
        magic=MAGIC,
        file_size=header.file_size,
        pixel_array_offset=header.pixel_array_offset,
        dib_header_size=header.dib_header_size,
        width=header.width,
        height=header.height,
        planes_constant=header.planes_constant,
        bits_per_pixel=header.bits_per_pixel,
        compression=header.compression,
        image_size_raw=header.image_size_raw,
        color_count=header.color_count,
        palette=MappingProxyType(palette),
        red_plane=red,
        green_plane=green,
        blue_plane=blue,
    )


def _parse_headers(data: bytes, settings: DecodeSettings) -> _Header:
    order = settings.byte_order
    require(data, len(MAGIC), "file header")
    if data[0:2] != MAGIC:
        raise InvalidMagic(f"Expected magic {MAGIC!r}, got {data[0:2]!r}")
    require(data, HEADER_END, "header")

    file_size = read_u32(data, 2, order)
    pixel_array_offset = read_u32(data, 10, order)

    dib_header_size = read_u32(data, 14, order)
    if dib_header_size != INFO_HEADER_SIZE:
        raise UnsupportedHeaderVariant(f"DIB header size must be {INFO_HEADER_SIZE}, got {dib_header_size}")

    width = read_s32(data, 18, order)
    height = read_s32(data, 22, order)
    if width < 0 or height < 0:
        raise InvalidGeometry(f"Width and height must be non-negative, got {width}x{height}")

    planes = read_u16(data, 26, order)
    if planes != PLANES_VALUE:
        raise InvalidPlanesField(f"Planes field must be {PLANES_VALUE}, got {planes}")

    bits_per_pixel = _parse_depth(read_u16(data, 28, order), settings)

    compression = read_u32(data, 30, order)
    if compression != UNCOMPRESSED:
        raise UnsupportedCompression(f"Compression must be {UNCOMPRESSED}, got {compression}")

    image_size_raw = read_u32(data, 34, order)
    color_count = read_u32(data, 46, order)
    if color_count == 0:
        color_count = 2**bits_per_pixel

    header = _Header(
        file_size=file_size,
        pixel_array_offset=pixel_array_offset,
        dib_header_size=dib_header_size,
        width=width,
        height=height,
        planes_constant=data[26:28],
        bits_per_pixel=bits_per_pixel,
        compression=compression,
        image_size_raw=image_size_raw,
        color_count=color_count,
    )
    logger.debug("Parsed BMP header: %s", header)
    return header


def _parse_depth(marker: int, settings: DecodeSettings) -> int:
    # Legacy files carry a zero marker here and no depth of their own.
    if settings.legacy_depth_marker:
        if marker != 0:
            raise UnsupportedFormat(f"Depth marker must be 0 in legacy mode, got {marker}")
        return settings.assumed_bits_per_pixel
    if marker not in SUPPORTED_DEPTHS:
        raise UnsupportedFormat(f"Bits per pixel must be 8 or 24, got {marker}")
    return marker & 0xFF


def _parse_palette(data: bytes, color_count: int) -> Dict[int, Color]:
    """Read ``[R, G, B, key]`` entries; later keys overwrite earlier ones."""
    end = PALETTE_OFFSET + color_count * PALETTE_ENTRY_SIZE
    require(data, end, "palette")
    palette: Dict[int, Color] = {}
    for pos in range(PALETTE_OFFSET, end, PALETTE_ENTRY_SIZE):
        red, green, blue, key = data[pos : pos + PALETTE_ENTRY_SIZE]
        palette[key] = Color(red, green, blue)
    logger.debug("Parsed %d palette entries into %d keys", color_count, len(palette))
    return palette


def _parse_pixel_array(
    data: bytes, header: _Header, palette: Dict[int, Color]
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    width, height = header.width, header.height
    bytes_per_pixel = header.bits_per_pixel // 8
    row_bytes = width * bytes_per_pixel
    if width == 0 or height == 0:
        empty = np.zeros((height, width), dtype=np.uint8)
        return empty, empty.copy(), empty.copy()

    stride = row_bytes + row_padding(width, header.bits_per_pixel)
    start = header.pixel_array_offset
    require(data, start + (height - 1) * stride + row_bytes, "pixel array")

    raw = np.frombuffer(data, dtype=np.uint8)
    rows = np.empty((height, row_bytes), dtype=np.uint8)
    for row in range(height):
        offset = start + row * stride
        rows[row] = raw[offset : offset + row_bytes]

    if bytes_per_pixel == 3:
        pixels = rows.reshape(height, width, 3)
    else:
        pixels = _lookup_palette(rows, palette)
    return pixels[..., 0].copy(), pixels[..., 1].copy(), pixels[..., 2].copy()


def _lookup_palette(keys: np.ndarray, palette: Dict[int, Color]) -> np.ndarray:
    table = np.zeros((256, 3), dtype=np.uint8)
    known = np.zeros(256, dtype=bool)
    for key, color in palette.items():
        table[key] = color.as_tuple()
        known[key] = True
    missing = ~known[keys]
    if missing.any():
        row, col = (int(i) for i in np.argwhere(missing)[0])
        raise UnknownPaletteIndex(f"Pixel ({row}, {col}) uses index {int(keys[row, col])} missing from palette")
    return table[keys]
