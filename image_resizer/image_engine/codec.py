"""pyvips-backed image service.

Decoding, encoding and filter application for the directive interpreter.
Loaded images are normalized to in-memory 8-bit sRGB so filters can share a
single pixel layout.
"""

from __future__ import annotations

import contextlib
from pathlib import Path
from typing import Any

from image_resizer.errors import ImageIOError
from image_resizer.logger import get_logger

from .filters import ImageFilter, OutOfBoundsMode
from .service import ImageService

_logger = get_logger("codec")

# mime type -> (saver operation, suffixes libvips reports for it)
ENCODERS: dict[str, tuple[str, tuple[str, ...]]] = {
    "image/jpeg": ("jpegsave", (".jpg", ".jpeg", ".jpe")),
    "image/png": ("pngsave", (".png",)),
    "image/webp": ("webpsave", (".webp",)),
    "image/tiff": ("tiffsave", (".tif", ".tiff")),
}

_pyvips: Any | None = None


def _get_pyvips_module() -> Any:
    global _pyvips
    if _pyvips is None:
        import pyvips  # type: ignore

        _pyvips = pyvips
    return _pyvips


class VipsImageService(ImageService):
    def __init__(self, cache_max: int = 0):
        pyvips = _get_pyvips_module()
        # Keep the operation cache from holding on to released images
        pyvips.cache_set_max(cache_max)
        if cache_max == 0:
            pyvips.cache_set_max_mem(0)
            pyvips.cache_set_max_files(0)
        self._suffixes: set[str] | None = None

    def load(self, path: str) -> Any:
        pyvips = _get_pyvips_module()
        if not Path(path).is_file():
            raise ImageIOError(path, "file not found")
        try:
            image = pyvips.Image.new_from_file(path, access="random")
            image = image.copy_memory()
        except pyvips.Error as exc:
            raise ImageIOError(path, str(exc).strip() or "cannot decode") from exc

        with contextlib.suppress(pyvips.Error):
            image = image.colourspace("srgb")
        if image.format != "uchar":
            image = image.cast("uchar")
        _logger.debug("loaded %s: %dx%d bands=%d", path, image.width, image.height, image.bands)
        return image

    def apply_filter(
        self,
        image: Any,
        image_filter: ImageFilter,
        width: int,
        height: int,
        x_mode: OutOfBoundsMode,
        y_mode: OutOfBoundsMode,
    ) -> Any:
        result = image_filter.apply(image, width, height, x_mode, y_mode)
        # Materialize so the source image can be released right away
        return result.copy_memory()

    def save(self, image: Any, path: str) -> None:
        pyvips = _get_pyvips_module()
        try:
            image.write_to_file(path)
        except pyvips.Error as exc:
            raise ImageIOError(path, str(exc).strip() or "cannot encode") from exc
        _logger.debug("saved %s", path)

    def _saver_suffixes(self) -> set[str]:
        if self._suffixes is None:
            pyvips = _get_pyvips_module()
            self._suffixes = {s.lower() for s in pyvips.base.get_suffixes()}
        return self._suffixes

    def has_encoder(self, mime_type: str) -> bool:
        entry = ENCODERS.get(mime_type)
        if entry is None:
            return False
        return any(suffix in self._saver_suffixes() for suffix in entry[1])

    def save_with_quality(self, image: Any, path: str, mime_type: str, quality: int) -> None:
        pyvips = _get_pyvips_module()
        entry = ENCODERS.get(mime_type)
        if entry is None:
            raise ImageIOError(path, f"no saver for {mime_type}")
        saver, _ = entry
        try:
            getattr(image, saver)(path, Q=quality)
        except pyvips.Error as exc:
            raise ImageIOError(path, str(exc).strip() or "cannot encode") from exc
        _logger.debug("saved %s (%s, Q=%d)", path, mime_type, quality)
