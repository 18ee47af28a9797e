"""Error types raised by the interpreter and the image engine."""

from __future__ import annotations


class ImageResizerError(Exception):
    """Base class for all project errors."""


class UsageError(ImageResizerError):
    """Missing operands or a malformed operand; the help transcript is shown."""


class StateError(ImageResizerError):
    """The directive needs an image in the buffer but the buffer is empty."""


class ResolutionError(ImageResizerError):
    """A filter name has no match in the registry."""

    def __init__(self, name: str):
        super().__init__(f"Unknown filter: {name}")
        self.name = name


class EncodingCapabilityError(ImageResizerError):
    """No encoder is available for the requested mime type."""

    def __init__(self, mime_type: str):
        super().__init__(f"No encoder available for {mime_type}")
        self.mime_type = mime_type


class ImageIOError(ImageResizerError):
    """Loading or saving an image failed at the image service boundary."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
