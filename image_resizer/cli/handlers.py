"""Directive handlers.

Each handler gets the token stream positioned after its command word, the
current buffer image (or None) and the shared context. It returns either
``Continue(image)`` with the new buffer value or ``Halt(code)``.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TextIO

from image_resizer.errors import ResolutionError, UsageError
from image_resizer.image_engine.filters import OutOfBoundsMode
from image_resizer.image_engine.metrics import metrics
from image_resizer.image_engine.registry import FilterRegistry
from image_resizer.image_engine.service import ImageService
from image_resizer.logger import get_logger
from image_resizer.notify import NOTHING_TO_RESIZE, UNKNOWN_FILTER, Notifier

from .encoder import save_image
from .help_text import show_help
from .operands import DimensionSpec, FilterSpec
from .tokenizer import TokenStream

_logger = get_logger("handlers")

EXIT_OK = 0
EXIT_UNKNOWN_DIRECTIVE = 1
EXIT_FAILURE = 2

# Out-of-bounds sampling used by every RESIZE, on both axes.
RESIZE_EDGE_MODE = OutOfBoundsMode.CONSTANT_EXTENSION


@dataclass(frozen=True)
class Continue:
    image: Any | None


@dataclass(frozen=True)
class Halt:
    code: int


Step = Continue | Halt


@dataclass
class DirectiveContext:
    service: ImageService
    registry: FilterRegistry
    notifier: Notifier
    program_name: str = "image-resizer"
    out: TextIO | None = None

    @property
    def stdout(self) -> TextIO:
        return self.out or sys.stdout

    def show_help(self) -> None:
        show_help(self.program_name, self.registry.names(), self.stdout)

    def usage_failure(self) -> Halt:
        self.show_help()
        return Halt(EXIT_FAILURE)

    def echo(self, line: str) -> None:
        self.stdout.write(line + "\n")
        self.stdout.flush()


Handler = Callable[[TokenStream, Any, DirectiveContext], Step]


def handle_load(tokens: TokenStream, image: Any, ctx: DirectiveContext) -> Step:
    if tokens.remaining < 1:
        return ctx.usage_failure()
    path = tokens.take()
    if path is None:
        return ctx.usage_failure()
    # Load failures propagate; the previous image is dropped only on success.
    return Continue(ctx.service.load(path))


def handle_resize(tokens: TokenStream, image: Any, ctx: DirectiveContext) -> Step:
    if tokens.remaining < 2:
        return ctx.usage_failure()
    dims_token = tokens.take() or ""
    filter_token = tokens.take() or ""
    try:
        dims = DimensionSpec.parse(dims_token)
    except UsageError as exc:
        _logger.debug("resize rejected: %s", exc)
        return ctx.usage_failure()
    spec = FilterSpec.parse(filter_token)

    if image is None:
        ctx.notifier.error(NOTHING_TO_RESIZE, "There is no image loaded that could be resized.")
        return Halt(EXIT_FAILURE)

    ctx.echo(f"{dims.width} {dims.height} {spec.repeat} {spec.name}")

    image_filter = ctx.registry.resolve(spec.name)
    if image_filter is None:
        ctx.notifier.error(UNKNOWN_FILTER, str(ResolutionError(spec.name)))
        return Halt(EXIT_FAILURE)

    for _ in range(spec.repeat):
        with metrics.timed("resize.filter_duration"):
            image = ctx.service.apply_filter(
                image, image_filter, dims.width, dims.height, RESIZE_EDGE_MODE, RESIZE_EDGE_MODE
            )
        metrics.inc("resize.filter_applied")
    return Continue(image)


def handle_save(tokens: TokenStream, image: Any, ctx: DirectiveContext) -> Step:
    if tokens.remaining < 1:
        return ctx.usage_failure()
    path = tokens.take()
    if path is None:
        return ctx.usage_failure()
    if not save_image(path, image, ctx.service, ctx.notifier):
        return Halt(EXIT_FAILURE)
    return Continue(image)


def handle_exit(tokens: TokenStream, image: Any, ctx: DirectiveContext) -> Step:
    dropped = tokens.discard()
    if dropped:
        _logger.debug("exit: %d token(s) ignored", dropped)
    return Halt(EXIT_OK)


HANDLERS: dict[str, Handler] = {
    "/LOAD": handle_load,
    "/RESIZE": handle_resize,
    "/SAVE": handle_save,
    "/EXIT": handle_exit,
}
