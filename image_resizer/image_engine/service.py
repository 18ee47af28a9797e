from abc import ABC, abstractmethod
from typing import Any

from .filters import ImageFilter, OutOfBoundsMode


class ImageService(ABC):
    """Codec and transform backend used by the directive interpreter.

    Images are opaque handles to the interpreter; only the service and the
    filters look inside them.
    """

    @abstractmethod
    def load(self, path: str) -> Any:
        """Decode the file at path.

        Raises:
            ImageIOError: the file is missing or cannot be decoded.
        """

    @abstractmethod
    def apply_filter(
        self,
        image: Any,
        image_filter: ImageFilter,
        width: int,
        height: int,
        x_mode: OutOfBoundsMode,
        y_mode: OutOfBoundsMode,
    ) -> Any:
        """Return a new image; width/height of 0 mean auto on that axis."""

    @abstractmethod
    def save(self, image: Any, path: str) -> None:
        """Write image with the format inferred from the path's extension.

        Raises:
            ImageIOError: the encoder failed.
        """

    @abstractmethod
    def has_encoder(self, mime_type: str) -> bool:
        """Whether an encoder for mime_type is available."""

    @abstractmethod
    def save_with_quality(self, image: Any, path: str, mime_type: str, quality: int) -> None:
        """Write image with the encoder for mime_type at the given quality.

        Raises:
            ImageIOError: the encoder failed.
        """
