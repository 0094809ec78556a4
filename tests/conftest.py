"""Shared fixtures: build BMP buffers in memory."""

from typing import Optional, Sequence, Tuple

import pytest

PaletteEntry = Tuple[int, int, int, int]


def build_bmp(
    width: int,
    height: int,
    bits_per_pixel: int = 24,
    pixels: bytes = b"",
    palette: Sequence[PaletteEntry] = (),
    color_count: int = 0,
    byte_order: str = "big",
    magic: bytes = b"BM",
    dib_header_size: int = 40,
    planes: int = 1,
    depth_marker: Optional[int] = None,
    compression: int = 0,
    image_size: int = 0,
    pixel_offset: Optional[int] = None,
    file_size: Optional[int] = None,
) -> bytes:
    """Return a BITMAPINFOHEADER BMP with integers in ``byte_order``."""

    def u16(value: int) -> bytes:
        return value.to_bytes(2, byte_order)

    def u32(value: int) -> bytes:
        return value.to_bytes(4, byte_order)

    def s32(value: int) -> bytes:
        return value.to_bytes(4, byte_order, signed=True)

    palette_bytes = b"".join(bytes(entry) for entry in palette)
    if pixel_offset is None:
        pixel_offset = 54 + len(palette_bytes)
    if file_size is None:
        file_size = pixel_offset + len(pixels)
    if depth_marker is None:
        depth_marker = bits_per_pixel

    header = (
        magic
        + u32(file_size)
        + b"\x00" * 4
        + u32(pixel_offset)
        + u32(dib_header_size)
        + s32(width)
        + s32(height)
        + u16(planes)
        + u16(depth_marker)
        + u32(compression)
        + u32(image_size)
        + b"\x00" * 8
        + u32(color_count)
        + b"\x00" * 4
    )
    assert len(header) == 54
    body = header + palette_bytes
    body += b"\x00" * (pixel_offset - len(body))
    return body + pixels


@pytest.fixture
def make_bmp():
    return build_bmp


@pytest.fixture
def minimal_24bit():
    """2x2 24-bit image: two 3-byte pixels plus 2 padding bytes per row."""
    pixels = bytes([1, 2, 3, 4, 5, 6, 0xAA, 0xAA, 7, 8, 9, 10, 11, 12, 0xAA, 0xAA])
    return build_bmp(2, 2, 24, pixels=pixels, image_size=16)


@pytest.fixture
def grayscale_palette():
    """256 entries in index order, key i -> (i, 255 - i, i // 2)."""
    return [(i, 255 - i, i // 2, i) for i in range(256)]
