"""Pytest configuration and shared fakes.

Interpreter tests run against an in-memory image service so they need neither
libvips nor real image files. Tests that exercise the pyvips service guard
themselves with ``pytest.importorskip("pyvips")``.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Any

import pytest

from image_resizer.cli import Dispatcher
from image_resizer.errors import ImageIOError
from image_resizer.image_engine.filters import ImageFilter, OutOfBoundsMode
from image_resizer.image_engine.metrics import metrics
from image_resizer.image_engine.registry import FilterRegistry
from image_resizer.image_engine.service import ImageService
from image_resizer.notify import Notifier


@dataclass(frozen=True)
class FakeImage:
    source: str
    width: int = 4
    height: int = 4
    history: tuple[str, ...] = ()


class FakeFilter(ImageFilter):
    def __init__(self, name: str, scale: int = 1):
        self.name = name
        self.scale = scale

    def apply(self, image: Any, width: int, height: int, x_mode: OutOfBoundsMode, y_mode: OutOfBoundsMode) -> Any:
        w = width or image.width * self.scale
        h = height or image.height * self.scale
        return FakeImage(image.source, w, h, (*image.history, self.name))


@dataclass
class FakeImageService(ImageService):
    files: dict[str, tuple[int, int]] = field(default_factory=dict)
    jpeg_available: bool = True
    loads: list[str] = field(default_factory=list)
    applied: list[tuple[FakeImage, str, int, int, OutOfBoundsMode, OutOfBoundsMode]] = field(default_factory=list)
    saved: list[tuple[str, FakeImage]] = field(default_factory=list)
    quality_saved: list[tuple[str, FakeImage, str, int]] = field(default_factory=list)

    def load(self, path: str) -> Any:
        self.loads.append(path)
        if path not in self.files:
            raise ImageIOError(path, "file not found")
        width, height = self.files[path]
        return FakeImage(path, width, height)

    def apply_filter(self, image, image_filter, width, height, x_mode, y_mode) -> Any:
        self.applied.append((image, image_filter.name, width, height, x_mode, y_mode))
        return image_filter.apply(image, width, height, x_mode, y_mode)

    def save(self, image: Any, path: str) -> None:
        self.saved.append((path, image))

    def has_encoder(self, mime_type: str) -> bool:
        return self.jpeg_available and mime_type == "image/jpeg"

    def save_with_quality(self, image: Any, path: str, mime_type: str, quality: int) -> None:
        self.quality_saved.append((path, image, mime_type, quality))


class RecordingNotifier(Notifier):
    def __init__(self) -> None:
        self.errors: list[tuple[str, str]] = []

    def error(self, title: str, message: str) -> None:
        self.errors.append((title, message))

    @property
    def titles(self) -> list[str]:
        return [title for title, _ in self.errors]


@pytest.fixture(autouse=True)
def _reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def service() -> FakeImageService:
    return FakeImageService(files={"in.bmp": (4, 3), "a.bmp": (2, 2), "b.bmp": (5, 7)})


@pytest.fixture
def registry() -> FilterRegistry:
    return FilterRegistry([FakeFilter("Pixel"), FakeFilter("Scale2x", scale=2), FakeFilter("Bilinear")])


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def out() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def dispatcher(service, registry, notifier, out) -> Dispatcher:
    return Dispatcher(service=service, registry=registry, notifier=notifier, program_name="image-resizer", out=out)
