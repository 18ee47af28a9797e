"""Batch image resizer driven by /LOAD, /RESIZE, /SAVE and /EXIT directives."""

__version__ = "1.0.0"
