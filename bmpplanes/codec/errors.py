from __future__ import annotations


class DecodeError(ValueError):
    """Raised when a buffer violates the BMP structure the decoder expects."""


class InvalidMagic(DecodeError):
    pass


class UnsupportedHeaderVariant(DecodeError):
    pass


class InvalidPlanesField(DecodeError):
    pass


class UnsupportedFormat(DecodeError):
    pass


class UnsupportedCompression(DecodeError):
    pass


class InvalidGeometry(DecodeError):
    pass


class UnknownPaletteIndex(DecodeError):
    pass


class TruncatedData(DecodeError):
    """Buffer ends before a region the header points at."""

    def __init__(self, region: str, required: int, available: int) -> None:
        super().__init__(f"Truncated {region}: need {required} bytes, got {available}")
        self.region = region
        self.required = required
        self.available = available
