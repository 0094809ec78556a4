from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

from .codec import DecodeSettings, ImageDescriptor, decode

PathLike = Union[str, "os.PathLike[str]"]


def load_bytes(path: PathLike) -> bytes:
    """Read a whole file; OS errors propagate unchanged."""
    return Path(path).read_bytes()


def decode_file(path: PathLike, settings: Optional[DecodeSettings] = None) -> ImageDescriptor:
    return decode(load_bytes(path), settings)
