from __future__ import annotations

from .errors import TruncatedData


def require(data: bytes, end: int, region: str) -> None:
    """Raise TruncatedData unless ``data`` covers ``[0, end)``."""
    if len(data) < end:
        raise TruncatedData(region, end, len(data))


def read_uint(data: bytes, offset: int, size: int, byte_order: str) -> int:
    return int.from_bytes(data[offset : offset + size], byte_order, signed=False)


def read_int(data: bytes, offset: int, size: int, byte_order: str) -> int:
    return int.from_bytes(data[offset : offset + size], byte_order, signed=True)


def read_u16(data: bytes, offset: int, byte_order: str) -> int:
    return read_uint(data, offset, 2, byte_order)


def read_u32(data: bytes, offset: int, byte_order: str) -> int:
    return read_uint(data, offset, 4, byte_order)


def read_s32(data: bytes, offset: int, byte_order: str) -> int:
    return read_int(data, offset, 4, byte_order)
