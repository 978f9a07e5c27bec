"""
Metric emission for the reporting agent.

- MetricsClient: the gauge/timing interface the agent sends to
- GatedMetricsClient: drops observations once the agent has stopped
- MemoryStatsReporter: memory statistics and their deltas
- AllocationLatencyProber: allocation latency and its delta
"""

from .latency_prober import AllocationLatencyProber
from .memory_reporter import MemoryStatsReporter
from .metrics_client import (
    GatedMetricsClient,
    LoggingMetricsClient,
    MetricsClient,
    create_statsd_client,
)

__all__ = [
    "AllocationLatencyProber",
    "GatedMetricsClient",
    "LoggingMetricsClient",
    "MemoryStatsReporter",
    "MetricsClient",
    "create_statsd_client",
]
