"""
Data models for the reporting agent.

Configuration Models:
- Agent settings (prefix, interval, debug, latency probe parameters)
- Statsd transport settings

Snapshot Models:
- Runtime memory snapshots and their deltas
- Metric field ordering used for emission
"""

# Configuration models
from .config import AgentConfig, AppConfig, StatsdConfig

# Snapshot models
from .snapshot import (
    DELTA_SUFFIX,
    MemorySnapshot,
    compute_latency_delta,
    compute_memory_delta,
    gauge_fields,
    timing_fields,
)

__all__ = [
    # Configuration
    "AgentConfig",
    "AppConfig",
    "StatsdConfig",
    # Snapshots
    "DELTA_SUFFIX",
    "MemorySnapshot",
    "compute_latency_delta",
    "compute_memory_delta",
    "gauge_fields",
    "timing_fields",
]
