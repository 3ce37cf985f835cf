"""Command dispatch metrics.

Counts how often each command ran and how long its handler took in total.
The session owns one collector, copies the numbers into its summary and
logs them when it terminates.

Usage:
    collector = MetricsCollector()

    with collector.measure("add"):
        handle_add()

    collector.call_counts()  # {'add': 1}
"""

import logging
import time
from collections import defaultdict
from collections.abc import Iterator
from contextlib import contextmanager

from pydantic import BaseModel, PrivateAttr

logger = logging.getLogger(__name__)


class CommandMetrics(BaseModel):
    """Totals for one command keyword."""

    call_count: int = 0
    total_duration_ms: float = 0.0


class MetricsCollector(BaseModel):
    """Per-command totals for a session."""

    _metrics: dict[str, CommandMetrics] = PrivateAttr(
        default_factory=lambda: defaultdict(CommandMetrics)
    )

    def record(self, name: str, duration_ms: float) -> None:
        metrics = self._metrics[name]
        metrics.call_count += 1
        metrics.total_duration_ms += duration_ms

    @contextmanager
    def measure(self, name: str) -> Iterator[None]:
        """Time the enclosed block and record it under ``name``, even if it raises."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.record(name, (time.perf_counter() - start) * 1000)

    def call_counts(self) -> dict[str, int]:
        return {name: m.call_count for name, m in self._metrics.items()}

    def durations_ms(self) -> dict[str, float]:
        """Total handler time per command, rounded to 0.01ms."""
        return {
            name: round(m.total_duration_ms, 2) for name, m in self._metrics.items()
        }

    def log_summary(self, level: int = logging.INFO) -> None:
        """Log one line with the count and total time of every command."""
        breakdown = ", ".join(
            f"{name}={m.call_count} ({m.total_duration_ms:.1f}ms)"
            for name, m in sorted(self._metrics.items())
        )
        logger.log(
            level,
            "Command Metrics: %d commands [%s]",
            sum(m.call_count for m in self._metrics.values()),
            breakdown or "none",
        )
