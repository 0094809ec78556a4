from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

import numpy as np

CHANNELS = ("red", "green", "blue")


@dataclass(frozen=True)
class Color:
    """One palette entry, each channel 0-255."""

    red: int
    green: int
    blue: int

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.red, self.green, self.blue)


@dataclass(frozen=True, eq=False)
class ImageDescriptor:
    """Decoded BMP: header fields, palette and one plane per colour channel.

    Built once by the decoder. The palette is a read-only mapping and the
    planes are read-only ``uint8`` arrays of shape ``(height, width)``.
    """

    magic: bytes
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
    palette: Mapping[int, Color]
    red_plane: np.ndarray
    green_plane: np.ndarray
    blue_plane: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "palette", MappingProxyType(dict(self.palette)))
        for name in CHANNELS:
            plane = np.asarray(self.plane(name))
            if plane.shape != self.shape:
                raise ValueError(f"{name} plane shape {plane.shape} does not match {self.shape}")
            object.__setattr__(self, f"{name}_plane", _frozen_copy(plane))

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.height, self.width)

    @property
    def is_indexed(self) -> bool:
        return self.bits_per_pixel == 8

    def plane(self, channel: str) -> np.ndarray:
        if channel not in CHANNELS:
            raise KeyError(f"Unknown channel '{channel}'")
        return getattr(self, f"{channel}_plane")

    def pixel(self, row: int, col: int) -> Color:
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"Pixel ({row}, {col}) outside {self.height}x{self.width} image")
        return Color(
            int(self.red_plane[row, col]),
            int(self.green_plane[row, col]),
            int(self.blue_plane[row, col]),
        )

    def header_fields(self) -> Dict[str, Any]:
        """Return the scalar header fields in file order."""
        return {
            "magic": self.magic,
            "file_size": self.file_size,
            "pixel_array_offset": self.pixel_array_offset,
            "dib_header_size": self.dib_header_size,
            "width": self.width,
            "height": self.height,
            "planes_constant": self.planes_constant,
            "bits_per_pixel": self.bits_per_pixel,
            "compression": self.compression,
            "image_size_raw": self.image_size_raw,
            "color_count": self.color_count,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ImageDescriptor):
            return NotImplemented
        if self.header_fields() != other.header_fields():
            return False
        if dict(self.palette) != dict(other.palette):
            return False
        return all(np.array_equal(self.plane(name), other.plane(name)) for name in CHANNELS)

    __hash__ = None  # type: ignore[assignment]


def _frozen_copy(plane: np.ndarray) -> np.ndarray:
    """Return a private uint8 copy backed by ``bytes``, so it can never be made writable."""
    if plane.size == 0:
        empty = np.zeros(plane.shape, dtype=np.uint8)
        empty.flags.writeable = False
        return empty
    data = np.ascontiguousarray(plane, dtype=np.uint8).tobytes()
    return np.frombuffer(data, dtype=np.uint8).reshape(plane.shape)
