"""Directive interpreter: ``/LOAD``, ``/RESIZE``, ``/SAVE`` and ``/EXIT``."""

from .dispatcher import Dispatcher
from .handlers import EXIT_FAILURE, EXIT_OK, EXIT_UNKNOWN_DIRECTIVE, Continue, Halt

__all__ = ["EXIT_FAILURE", "EXIT_OK", "EXIT_UNKNOWN_DIRECTIVE", "Continue", "Dispatcher", "Halt"]
