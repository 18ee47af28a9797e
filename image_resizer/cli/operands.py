"""Parsers for RESIZE operands: ``<W>x<H>`` and ``<name>[(<repeat>)]``."""

from __future__ import annotations

import re
from dataclasses import dataclass

from image_resizer.errors import UsageError

_INT_RE = re.compile(r"^\s*[+-]?[0-9]+\s*$")


def parse_int(text: str) -> int | None:
    """Parse a plain decimal integer; None for anything else."""
    if not _INT_RE.match(text):
        return None
    return int(text)


@dataclass(frozen=True)
class DimensionSpec:
    width: int
    height: int

    @classmethod
    def parse(cls, token: str) -> DimensionSpec:
        """Parse ``<width>x<height>``; 0 on an axis means auto.

        Raises:
            UsageError: no separator after the first character, a part that is
                not an integer, or a negative size.
        """
        token = token.strip()
        pos = token.lower().find("x")
        if pos <= 0:
            raise UsageError(f"invalid dimensions: {token!r}")
        width = parse_int(token[:pos])
        height = parse_int(token[pos + 1 :])
        if width is None or height is None:
            raise UsageError(f"invalid dimensions: {token!r}")
        if width < 0 or height < 0:
            raise UsageError(f"negative dimensions: {token!r}")
        return cls(width, height)


@dataclass(frozen=True)
class FilterSpec:
    name: str
    repeat: int = 1

    @classmethod
    def parse(cls, token: str) -> FilterSpec:
        # A malformed or non-positive repeat count falls back to 1 rather than failing.
        token = token.strip()
        pos = token.find("(")
        if pos > 0 and token.endswith(")"):
            repeat = parse_int(token[pos + 1 : -1])
            if repeat is None or repeat < 1:
                repeat = 1
            return cls(token[:pos], repeat)
        return cls(token, 1)
