"""Reusable building blocks for the session loop.

Modules:
- collection: Ordered, duplicate-permitting item collection
- metrics: Per-command call counts and timings
- stop: Cooperative stop signal for the ``loop`` command
"""

from itemloop.lib.collection import ItemCollection
from itemloop.lib.metrics import CommandMetrics, MetricsCollector
from itemloop.lib.stop import StopSignal

__all__ = [
    "CommandMetrics",
    "ItemCollection",
    "MetricsCollector",
    "StopSignal",
]
