from .image import planes_to_image, save_preview

__all__ = ["planes_to_image", "save_preview"]
