from .decoder import DecodeSettings, decode, row_padding
from .errors import (
    DecodeError,
    InvalidGeometry,
    InvalidMagic,
    InvalidPlanesField,
    TruncatedData,
    UnknownPaletteIndex,
    UnsupportedCompression,
    UnsupportedFormat,
    UnsupportedHeaderVariant,
)
from .types import CHANNELS, Color, ImageDescriptor

__all__ = [
    "CHANNELS",
    "Color",
    "decode",
    "DecodeError",
    "DecodeSettings",
    "ImageDescriptor",
    "InvalidGeometry",
    "InvalidMagic",
    "InvalidPlanesField",
    "row_padding",
    "TruncatedData",
    "UnknownPaletteIndex",
    "UnsupportedCompression",
    "UnsupportedFormat",
    "UnsupportedHeaderVariant",
]
