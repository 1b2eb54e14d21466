"""Per-stage timing for the recognizer.

Attach a profiler to a ``Recognizer`` to record how long normalization
and matching take. Useful when embedding recognition in an interactive
loop with a latency budget.
"""

from __future__ import annotations

import threading
import time
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator


@dataclass
class StageStats:
    """Timing statistics for a single recognizer stage."""
    name: str
    avg_ms: float
    min_ms: float
    max_ms: float
    p95_ms: float
    call_count: int


class PipelineProfiler:
    """Rolling-window stage timings.

    Usage:
        profiler = PipelineProfiler()
        recognizer = Recognizer(library, profiler=profiler)
        recognizer.recognize(points)
        print(profiler.summary())
    """

    STAGES = ["normalization", "matching", "total"]

    def __init__(self, window_size: int = 120):
        self._window_size = window_size
        self._timings: dict[str, deque[float]] = {
            s: deque(maxlen=window_size) for s in self.STAGES
        }
        self._counts: dict[str, int] = {s: 0 for s in self.STAGES}
        self._enabled = True
        self._lock = threading.Lock()

    @contextmanager
    def stage(self, name: str) -> Iterator[None]:
        """Time the enclosed block under ``name``."""
        if not self._enabled:
            yield
            return

        t0 = time.perf_counter()
        yield
        elapsed_ms = (time.perf_counter() - t0) * 1000.0

        with self._lock:
            if name not in self._timings:
                self._timings[name] = deque(maxlen=self._window_size)
                self._counts[name] = 0
            self._timings[name].append(elapsed_ms)
            self._counts[name] += 1

    def get_stage_stats(self, name: str) -> StageStats | None:
        with self._lock:
            timings = sorted(self._timings.get(name, ()))
            count = self._counts.get(name, 0)
        if not timings:
            return None

        n = len(timings)
        return StageStats(
            name=name,
            avg_ms=sum(timings) / n,
            min_ms=timings[0],
            max_ms=timings[-1],
            p95_ms=timings[int(n * 0.95)] if n >= 2 else timings[-1],
            call_count=count,
        )

    def summary(self) -> dict[str, dict]:
        """Stats for every stage that has data, rounded for display."""
        with self._lock:
            names = list(self._timings)
        result = {}
        for name in names:
            stats = self.get_stage_stats(name)
            if stats and stats.call_count > 0:
                result[name] = {
                    "avg_ms": round(stats.avg_ms, 3),
                    "min_ms": round(stats.min_ms, 3),
                    "max_ms": round(stats.max_ms, 3),
                    "p95_ms": round(stats.p95_ms, 3),
                    "calls": stats.call_count,
                }
        return result

    def reset(self):
        with self._lock:
            for d in self._timings.values():
                d.clear()
            for k in self._counts:
                self._counts[k] = 0

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool):
        self._enabled = value
