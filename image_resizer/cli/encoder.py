"""Output encoder selection for the SAVE directive.

JPEG targets go through the JPEG encoder at maximum quality; every other
extension goes through the service's generic save.
"""

from __future__ import annotations

import os
from typing import Any

from image_resizer.errors import EncodingCapabilityError, StateError
from image_resizer.image_engine.service import ImageService
from image_resizer.logger import get_logger
from image_resizer.notify import NO_JPEG_SUPPORT, NOTHING_TO_SAVE, Notifier

_logger = get_logger("encoder")

JPEG_EXTENSIONS = (".JPG", ".JPEG")
JPEG_MIME = "image/jpeg"
JPEG_QUALITY = 100


def _extension(path: str) -> str:
    # Everything from the last dot of the file name, so ".jpg" alone counts too.
    name = os.path.basename(path)
    pos = name.rfind(".")
    return name[pos:].upper() if pos >= 0 else ""


def _encode(path: str, image: Any, service: ImageService) -> None:
    if image is None:
        raise StateError("There is no image loaded that could be saved.")

    extension = _extension(path)
    if extension not in JPEG_EXTENSIONS:
        service.save(image, path)
        return

    if not service.has_encoder(JPEG_MIME):
        raise EncodingCapabilityError(JPEG_MIME)
    _logger.debug("jpeg encode: %s (quality=%d)", path, JPEG_QUALITY)
    service.save_with_quality(image, path, JPEG_MIME, JPEG_QUALITY)


def save_image(path: str, image: Any, service: ImageService, notifier: Notifier) -> bool:
    """Save image to path; False after notifying the user when it cannot be saved.

    I/O failures from the service are not handled here and propagate.
    """
    try:
        _encode(path, image, service)
    except StateError as exc:
        notifier.error(NOTHING_TO_SAVE, str(exc))
        return False
    except EncodingCapabilityError as exc:
        notifier.error(NO_JPEG_SUPPORT, str(exc))
        return False
    return True
