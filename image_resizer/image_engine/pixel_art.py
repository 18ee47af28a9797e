"""Pixel-art scalers (Scale2x, Scale3x, Eagle2x) on numpy arrays.

The scalers look at the 3x3 neighbourhood of every source pixel, named

    A B C
    D E F
    G H I

and expand E into a 2x2 or 3x3 block. Out-of-bounds neighbours come from a
1 px border added with the requested mode per axis.
"""

from __future__ import annotations

import contextlib
from collections.abc import Callable
from typing import Any

import numpy as np

from image_resizer.logger import get_logger

from .filters import ImageFilter, OutOfBoundsMode, fit_exact, resolve_target_size

_logger = get_logger("pixel_art")

_pyvips: Any | None = None


def _get_pyvips_module() -> Any:
    global _pyvips
    if _pyvips is None:
        import pyvips  # type: ignore

        _pyvips = pyvips
    return _pyvips


def vips_to_array(image: Any) -> np.ndarray:
    """Copy a uchar pyvips image into an (height, width, bands) uint8 array."""
    if image.format != "uchar":
        image = image.cast("uchar")
    mem = image.write_to_memory()
    array = np.frombuffer(mem, dtype=np.uint8).reshape(image.height, image.width, image.bands)
    return array.copy()


def array_to_vips(array: np.ndarray) -> Any:
    pyvips = _get_pyvips_module()
    height, width, bands = array.shape
    data = np.ascontiguousarray(array, dtype=np.uint8).tobytes()
    image = pyvips.Image.new_from_memory(data, width, height, bands, "uchar")
    with contextlib.suppress(Exception):
        image = image.copy(interpretation="srgb" if bands >= 3 else "b-w")
    return image


def pad_array(array: np.ndarray, margin: int, x_mode: OutOfBoundsMode, y_mode: OutOfBoundsMode) -> np.ndarray:
    array = np.pad(array, ((margin, margin), (0, 0), (0, 0)), mode=y_mode.numpy_mode)
    return np.pad(array, ((0, 0), (margin, margin), (0, 0)), mode=x_mode.numpy_mode)


def _neighbours(padded: np.ndarray) -> dict[str, np.ndarray]:
    return {
        "A": padded[:-2, :-2],
        "B": padded[:-2, 1:-1],
        "C": padded[:-2, 2:],
        "D": padded[1:-1, :-2],
        "E": padded[1:-1, 1:-1],
        "F": padded[1:-1, 2:],
        "G": padded[2:, :-2],
        "H": padded[2:, 1:-1],
        "I": padded[2:, 2:],
    }


def _eq(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.all(a == b, axis=-1)


def _pick(mask: np.ndarray, value: np.ndarray, fallback: np.ndarray) -> np.ndarray:
    return np.where(mask[..., None], value, fallback)


def _assemble(blocks: list[np.ndarray], factor: int) -> np.ndarray:
    height, width, bands = blocks[0].shape
    out = np.empty((height * factor, width * factor, bands), dtype=blocks[0].dtype)
    for index, block in enumerate(blocks):
        row, col = divmod(index, factor)
        out[row::factor, col::factor] = block
    return out


def scale2x(padded: np.ndarray) -> np.ndarray:
    n = _neighbours(padded)
    B, D, E, F, H = n["B"], n["D"], n["E"], n["F"], n["H"]
    db, bf, dh, hf = _eq(D, B), _eq(B, F), _eq(D, H), _eq(H, F)
    return _assemble(
        [
            _pick(db & ~bf & ~dh, D, E),
            _pick(bf & ~db & ~hf, F, E),
            _pick(dh & ~db & ~hf, D, E),
            _pick(hf & ~dh & ~bf, F, E),
        ],
        2,
    )


def scale3x(padded: np.ndarray) -> np.ndarray:
    n = _neighbours(padded)
    A, B, C, D, E, F, G, H, I = (n[k] for k in "ABCDEFGHI")  # noqa: E741
    db, bf, dh, hf = _eq(D, B), _eq(B, F), _eq(D, H), _eq(H, F)
    top_left = db & ~bf & ~dh
    top_right = bf & ~db & ~hf
    bottom_left = dh & ~db & ~hf
    bottom_right = hf & ~dh & ~bf
    return _assemble(
        [
            _pick(top_left, D, E),
            _pick((top_left & ~_eq(E, C)) | (top_right & ~_eq(E, A)), B, E),
            _pick(top_right, F, E),
            _pick((top_left & ~_eq(E, G)) | (bottom_left & ~_eq(E, A)), D, E),
            E,
            _pick((top_right & ~_eq(E, I)) | (bottom_right & ~_eq(E, C)), F, E),
            _pick(bottom_left, D, E),
            _pick((bottom_right & ~_eq(E, G)) | (bottom_left & ~_eq(E, I)), H, E),
            _pick(bottom_right, F, E),
        ],
        3,
    )


def eagle2x(padded: np.ndarray) -> np.ndarray:
    n = _neighbours(padded)
    A, B, C, D, E, F, G, H, I = (n[k] for k in "ABCDEFGHI")  # noqa: E741
    return _assemble(
        [
            _pick(_eq(A, B) & _eq(A, D), A, E),
            _pick(_eq(C, B) & _eq(C, F), C, E),
            _pick(_eq(G, D) & _eq(G, H), G, E),
            _pick(_eq(I, F) & _eq(I, H), I, E),
        ],
        2,
    )


class PixelArtFilter(ImageFilter):
    """Neighbourhood scaler with a fixed integer factor.

    When the requested size differs from the natural (factor x source) size the
    scaled result is resampled once more with the nearest kernel.
    """

    def __init__(self, name: str, scale: int, scaler: Callable[[np.ndarray], np.ndarray]):
        self.name = name
        self.scale = scale
        self._scaler = scaler

    def apply(self, image: Any, width: int, height: int, x_mode: OutOfBoundsMode, y_mode: OutOfBoundsMode) -> Any:
        natural_w, natural_h = image.width * self.scale, image.height * self.scale
        target_w, target_h = resolve_target_size(natural_w, natural_h, width, height)
        _logger.debug("%s: %dx%d -> %dx%d", self.name, image.width, image.height, target_w, target_h)

        padded = pad_array(vips_to_array(image), 1, x_mode, y_mode)
        result = array_to_vips(self._scaler(padded))
        if (target_w, target_h) != (natural_w, natural_h):
            result = result.resize(target_w / natural_w, vscale=target_h / natural_h, kernel="nearest")
            if result.width != target_w or result.height != target_h:
                result = fit_exact(result, target_w, target_h)
        return result


PIXEL_ART_FILTERS: tuple[PixelArtFilter, ...] = (
    PixelArtFilter("Scale2x", 2, scale2x),
    PixelArtFilter("Scale3x", 3, scale3x),
    PixelArtFilter("Eagle2x", 2, eagle2x),
)
