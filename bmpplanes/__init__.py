from .codec import (
    Color,
    DecodeError,
    DecodeSettings,
    ImageDescriptor,
    InvalidGeometry,
    InvalidMagic,
    InvalidPlanesField,
    TruncatedData,
    UnknownPaletteIndex,
    UnsupportedCompression,
    UnsupportedFormat,
    UnsupportedHeaderVariant,
    decode,
    row_padding,
)
from .source import decode_file, load_bytes

__version__ = "0.1.0"

__all__ = [
    "Color",
    "decode",
    "decode_file",
    "DecodeError",
    "DecodeSettings",
    "ImageDescriptor",
    "InvalidGeometry",
    "InvalidMagic",
    "InvalidPlanesField",
    "load_bytes",
    "row_padding",
    "TruncatedData",
    "UnknownPaletteIndex",
    "UnsupportedCompression",
    "UnsupportedFormat",
    "UnsupportedHeaderVariant",
]
