"""Filter operations applied by the RESIZE directive.

Every filter receives a pyvips image, the requested target size (0 meaning
auto on that axis) and an out-of-bounds mode per axis, and returns a new
image. The source image is never modified.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from image_resizer.logger import get_logger

_logger = get_logger("filters")

# Largest kernel support radius we resample with (lanczos3).
KERNEL_MARGIN = 3


class OutOfBoundsMode(Enum):
    """How pixels outside the source image are sampled."""

    CONSTANT_EXTENSION = ("copy", "edge")
    MIRROR = ("mirror", "symmetric")
    WRAP = ("repeat", "wrap")

    def __init__(self, vips_extend: str, numpy_mode: str):
        self.vips_extend = vips_extend
        self.numpy_mode = numpy_mode


def resolve_target_size(natural_width: int, natural_height: int, width: int, height: int) -> tuple[int, int]:
    """Resolve a requested size against the filter's natural output size.

    Both axes 0 keep the natural size; one axis 0 follows the natural aspect
    ratio from the other.
    """
    if width <= 0 and height <= 0:
        return natural_width, natural_height
    if width <= 0:
        width = max(1, round(natural_width * height / natural_height))
    elif height <= 0:
        height = max(1, round(natural_height * width / natural_width))
    return width, height


def pad_image(image: Any, margin_x: int, margin_y: int, x_mode: OutOfBoundsMode, y_mode: OutOfBoundsMode) -> Any:
    """Extend a pyvips image by a margin on each axis using that axis' mode."""
    if margin_x > 0:
        image = image.embed(
            margin_x, 0, image.width + 2 * margin_x, image.height, extend=x_mode.vips_extend
        )
    if margin_y > 0:
        image = image.embed(
            0, margin_y, image.width, image.height + 2 * margin_y, extend=y_mode.vips_extend
        )
    return image


def fit_exact(image: Any, width: int, height: int, left: int = 0, top: int = 0) -> Any:
    """Crop (and, for rounding shortfalls, edge-extend) an image to exactly width x height."""
    left = max(0, min(left, image.width - width))
    top = max(0, min(top, image.height - height))
    crop_w = min(width, image.width - left)
    crop_h = min(height, image.height - top)
    if (left, top, crop_w, crop_h) != (0, 0, image.width, image.height):
        image = image.crop(left, top, crop_w, crop_h)
    if image.width != width or image.height != height:
        image = image.embed(0, 0, width, height, extend="copy")
    return image


class ImageFilter(ABC):
    """A named image transform held by the filter registry."""

    name: str
    scale: int = 1

    @abstractmethod
    def apply(self, image: Any, width: int, height: int, x_mode: OutOfBoundsMode, y_mode: OutOfBoundsMode) -> Any:
        """Return a new image filtered and resized to (width, height)."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class KernelFilter(ImageFilter):
    """Resample directly to the target size with one of libvips' kernels."""

    def __init__(self, name: str, kernel: str):
        self.name = name
        self.kernel = kernel

    def apply(self, image: Any, width: int, height: int, x_mode: OutOfBoundsMode, y_mode: OutOfBoundsMode) -> Any:
        target_w, target_h = resolve_target_size(image.width, image.height, width, height)
        hscale = target_w / image.width
        vscale = target_h / image.height
        _logger.debug(
            "%s: %dx%d -> %dx%d (kernel=%s)", self.name, image.width, image.height, target_w, target_h, self.kernel
        )
        padded = pad_image(image, KERNEL_MARGIN, KERNEL_MARGIN, x_mode, y_mode)
        resized = padded.resize(hscale, vscale=vscale, kernel=self.kernel)
        return fit_exact(
            resized, target_w, target_h, left=round(KERNEL_MARGIN * hscale), top=round(KERNEL_MARGIN * vscale)
        )


KERNEL_FILTERS: tuple[KernelFilter, ...] = (
    KernelFilter("Pixel", "nearest"),
    KernelFilter("Bilinear", "linear"),
    KernelFilter("Bicubic", "cubic"),
    KernelFilter("Mitchell", "mitchell"),
    KernelFilter("Lanczos2", "lanczos2"),
    KernelFilter("Lanczos3", "lanczos3"),
)
