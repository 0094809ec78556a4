from __future__ import annotations

import numpy as np
from PIL import Image

from ..codec import ImageDescriptor


def planes_to_image(descriptor: ImageDescriptor) -> Image.Image:
    """Stack the red, green and blue planes into an RGB Pillow image."""
    if descriptor.width == 0 or descriptor.height == 0:
        raise ValueError("Cannot render an image with zero width or height")
    pixels = np.dstack((descriptor.red_plane, descriptor.green_plane, descriptor.blue_plane))
    return Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8))


def save_preview(descriptor: ImageDescriptor, path: str) -> None:
    planes_to_image(descriptor).save(path)
