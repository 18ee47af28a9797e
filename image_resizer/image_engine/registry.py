"""Registry of named filter operations.

Lookup is case-insensitive. The lookup table is built once, in declared order,
so when two filters share a name (ignoring case) the first one registered wins.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .filters import KERNEL_FILTERS, ImageFilter
from .pixel_art import PIXEL_ART_FILTERS


class FilterRegistry:
    def __init__(self, filters: Iterable[ImageFilter]):
        self._filters: tuple[ImageFilter, ...] = tuple(filters)
        self._by_key: dict[str, ImageFilter] = {}
        for image_filter in self._filters:
            self._by_key.setdefault(image_filter.name.upper(), image_filter)

    def __iter__(self) -> Iterator[ImageFilter]:
        return iter(self._filters)

    def __len__(self) -> int:
        return len(self._filters)

    def names(self) -> list[str]:
        """Registered names in registry order (duplicates included)."""
        return [f.name for f in self._filters]

    def resolve(self, name: str) -> ImageFilter | None:
        return self._by_key.get(name.upper())


def default_registry() -> FilterRegistry:
    return FilterRegistry([*KERNEL_FILTERS, *PIXEL_ART_FILTERS])
