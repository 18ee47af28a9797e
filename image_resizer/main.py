import argparse
import os
import sys

from image_resizer.cli import EXIT_FAILURE, Dispatcher
from image_resizer.errors import ImageIOError
from image_resizer.image_engine import VipsImageService, default_registry
from image_resizer.logger import get_logger, setup_logger
from image_resizer.notify import IO_FAILURE, build_notifier
from image_resizer.settings_manager import SettingsManager, default_settings_path

# --- CLI options ---------------------------------------------------------------
# Our own options are parsed first, reflected in environment variables
# (IMAGE_RESIZER_LOG_LEVEL, IMAGE_RESIZER_LOG_CATS) and removed, so that only
# directive tokens reach the interpreter.


def split_options(args: list[str]) -> tuple[argparse.Namespace, list[str]]:
    parser = argparse.ArgumentParser(prog="image-resizer", add_help=False, allow_abbrev=False)
    parser.add_argument("--log-level", help="Set log level")
    parser.add_argument("--log-cats", help="Set log categories")
    parser.add_argument("--settings", help="Path to the settings JSON file")
    return parser.parse_known_args(args)


def _apply_logging_options(options: argparse.Namespace) -> None:
    if options.log_level:
        os.environ["IMAGE_RESIZER_LOG_LEVEL"] = options.log_level
    if options.log_cats:
        os.environ["IMAGE_RESIZER_LOG_CATS"] = options.log_cats
    setup_logger()


def run(argv: list[str] | None = None) -> int:
    """Application entrypoint (packaging-friendly)."""
    if argv is None:
        argv = sys.argv

    options, tokens = split_options(argv[1:])
    _apply_logging_options(options)
    logger = get_logger("main")

    settings = SettingsManager(options.settings or default_settings_path())
    notifier = build_notifier(settings.error_output)
    dispatcher = Dispatcher(
        service=VipsImageService(cache_max=settings.vips_cache_max),
        registry=default_registry(),
        notifier=notifier,
        program_name=settings.program_name,
    )

    try:
        code = dispatcher.run(tokens)
    except ImageIOError as exc:
        # The run is aborted at the failing directive; later ones are not processed.
        logger.error("aborted: %s", exc)
        notifier.error(IO_FAILURE, str(exc))
        return EXIT_FAILURE
    logger.debug("exit code %d", code)
    return code


if __name__ == "__main__":
    sys.exit(run())
