from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TextIO

from image_resizer.image_engine.registry import FilterRegistry
from image_resizer.image_engine.service import ImageService
from image_resizer.logger import get_logger
from image_resizer.notify import Notifier

from .handlers import EXIT_OK, EXIT_UNKNOWN_DIRECTIVE, HANDLERS, DirectiveContext, Halt, Handler
from .tokenizer import TokenStream

_logger = get_logger("dispatcher")


class Dispatcher:
    """Runs a directive stream against a single image buffer.

    The buffer starts empty and lives only for one ``run``. Handlers hand the
    new buffer value back in ``Continue``; the first ``Halt`` ends the run.
    """

    def __init__(
        self,
        service: ImageService,
        registry: FilterRegistry,
        notifier: Notifier,
        program_name: str = "image-resizer",
        out: TextIO | None = None,
    ):
        self.context = DirectiveContext(
            service=service, registry=registry, notifier=notifier, program_name=program_name, out=out
        )
        self._handlers: dict[str, Handler] = dict(HANDLERS)

    def run(self, tokens: Sequence[str | None]) -> int:
        stream = TokenStream(tokens)
        image: Any | None = None
        while stream:
            command = stream.next_command()
            handler = self._handlers.get(command)
            if handler is None:
                _logger.warning("unknown directive: %s", command)
                self.context.show_help()
                return EXIT_UNKNOWN_DIRECTIVE

            _logger.debug("directive %s (%d token(s) left)", command, stream.remaining)
            step = handler(stream, image, self.context)
            if isinstance(step, Halt):
                _logger.debug("halt after %s: code=%d", command, step.code)
                return step.code
            image = step.image
        return EXIT_OK
