"""Observability: classifier fallback counters, turn timers and summary logging."""

import time
from contextlib import contextmanager
from typing import Any

import structlog

logger = structlog.get_logger().bind(source="observability")


class Metrics:
    """Dict-based metrics collector for counters and timers."""

    def __init__(self):
        self._counters: dict[str, int] = {}
        self._timers: dict[str, list[float]] = {}

    def counter(self, name: str, value: int = 1):
        self._counters[name] = self._counters.get(name, 0) + value

    def count(self, name: str) -> int:
        return self._counters.get(name, 0)

    def fallback(self, task: str, reason: str):
        """Count a classifier falling back to rules, keyed by task and reason."""
        self.counter(f"fallback.{task}.{reason}")

    @contextmanager
    def timer(self, name: str):
        """Time the enclosed block and store its duration in seconds."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self._timers.setdefault(name, []).append(time.perf_counter() - start)

    def summary(self) -> dict[str, Any]:
        timer_summary = {}
        for name, durations in self._timers.items():
            if durations:
                timer_summary[name] = {
                    "count": len(durations),
                    "total": sum(durations),
                    "avg": sum(durations) / len(durations),
                    "max": max(durations),
                }
            else:
                timer_summary[name] = {"count": 0}

        return {
            "counters": dict(self._counters),
            "timers": timer_summary,
        }

    def reset(self):
        self._counters.clear()
        self._timers.clear()


# Module-level singleton
metrics = Metrics()


def log_run_summary(collector: Metrics | None = None):
    """Log the metrics summary via structlog (on chat exit)."""
    summary = (collector or metrics).summary()
    logger.info("run_summary", **summary)
