"""User-visible error reporting.

The interpreter reports state, lookup and capability errors through a
Notifier. The console notifier is the default; the dialog notifier shows a
Qt message box for runs started from a desktop shortcut.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Any, TextIO

from .logger import get_logger

_logger = get_logger("notify")

# Titles shown with each error kind
NOTHING_TO_RESIZE = "Nothing to resize"
NOTHING_TO_SAVE = "Nothing to save"
UNKNOWN_FILTER = "Unknown filter"
NO_JPEG_SUPPORT = "No JPEG support"
IO_FAILURE = "Image I/O failed"


class Notifier(ABC):
    @abstractmethod
    def error(self, title: str, message: str) -> None:
        pass


class ConsoleNotifier(Notifier):
    def __init__(self, stream: TextIO | None = None):
        self._stream = stream

    def error(self, title: str, message: str) -> None:
        # The message itself goes to the stream; the log only keeps a trace.
        _logger.debug("%s: %s", title, message)
        stream = self._stream or sys.stderr
        stream.write(f"{title}: {message}\n")
        stream.flush()


def _qt_widgets() -> Any:
    from PySide6 import QtWidgets

    return QtWidgets


class DialogNotifier(Notifier):
    """Show errors in a modal QMessageBox, creating a QApplication if needed."""

    def __init__(self) -> None:
        self._app: Any | None = None

    def error(self, title: str, message: str) -> None:
        qt = _qt_widgets()
        _logger.error("%s: %s", title, message)
        if qt.QApplication.instance() is None:
            # Keep a strong ref so it isn't GC'd while the box is open.
            self._app = qt.QApplication([])
        qt.QMessageBox.critical(None, title, message)


def build_notifier(error_output: str) -> Notifier:
    if error_output == "dialog":
        return DialogNotifier()
    return ConsoleNotifier()
