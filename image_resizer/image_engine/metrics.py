"""In-process counters and timings for the resize pipeline.

Usage:
    from image_resizer.image_engine.metrics import metrics
    with metrics.timed("resize.filter_duration"):
        ...
    metrics.inc("resize.filter_applied")
    metrics.count("resize.filter_applied")
"""

from __future__ import annotations

import time
from collections import Counter, defaultdict
from contextlib import contextmanager
from typing import Any


class PipelineMetrics:
    def __init__(self) -> None:
        self.counters: Counter[str] = Counter()
        self.timings: defaultdict[str, list[float]] = defaultdict(list)

    def inc(self, key: str, amount: int = 1) -> None:
        self.counters[key] += amount

    def count(self, key: str) -> int:
        return self.counters[key]

    @contextmanager
    def timed(self, key: str):
        start = time.perf_counter()
        try:
            yield
        finally:
            self.timings[key].append(time.perf_counter() - start)

    def snapshot(self) -> dict[str, Any]:
        return {"counters": dict(self.counters), "timings": {k: list(v) for k, v in self.timings.items()}}

    def reset(self) -> None:
        self.counters.clear()
        self.timings.clear()


metrics = PipelineMetrics()
