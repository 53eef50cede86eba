"""Lightweight in-process metrics for development and tests.

Components record counters and timings here so benchmarks and tests can
observe how often the energy pass runs and how long it takes.

Usage:
    from autocrop.metrics import metrics
    metrics.inc("bounds.calls")
    with metrics.timed("bounds.duration"):
        ...
    snapshot = metrics.snapshot()
    metrics.summary("bounds.duration")  # {"count": ..., "mean": ..., "best": ...}
"""

from __future__ import annotations

import time
from collections import defaultdict
from contextlib import contextmanager
from threading import RLock
from typing import Any


class _Metrics:
    def __init__(self) -> None:
        self._counters: dict[str, int] = defaultdict(int)
        self._timings: dict[str, list[float]] = defaultdict(list)
        self._lock = RLock()

    def inc(self, key: str, amount: int = 1) -> None:
        with self._lock:
            self._counters[key] += int(amount)

    def timed(self, key: str):
        @contextmanager
        def _ctx():
            start = time.perf_counter()
            try:
                yield
            finally:
                elapsed = time.perf_counter() - start
                with self._lock:
                    self._timings[key].append(elapsed)

        return _ctx()

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            return {
                "counters": dict(self._counters),
                "timings": {k: list(v) for k, v in self._timings.items()},
            }

    def summary(self, key: str) -> dict[str, float] | None:
        """Count, mean and best of one timing series; None if nothing was recorded."""
        with self._lock:
            samples = list(self._timings.get(key, ()))
        if not samples:
            return None
        return {"count": len(samples), "mean": sum(samples) / len(samples), "best": min(samples)}

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()
            self._timings.clear()


metrics = _Metrics()
