"""Image Engine - filters, filter registry and the pyvips image service.

Usage:
    from image_resizer.image_engine import VipsImageService, default_registry

    service = VipsImageService()
    registry = default_registry()
    image = service.load("in.png")
    image = service.apply_filter(image, registry.resolve("scale2x"), 0, 0, mode, mode)
"""

from .codec import VipsImageService
from .filters import ImageFilter, KernelFilter, OutOfBoundsMode
from .pixel_art import PixelArtFilter
from .registry import FilterRegistry, default_registry
from .service import ImageService

__all__ = [
    "FilterRegistry",
    "ImageFilter",
    "ImageService",
    "KernelFilter",
    "OutOfBoundsMode",
    "PixelArtFilter",
    "VipsImageService",
    "default_registry",
]
