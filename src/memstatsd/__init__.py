"""
memstatsd: runtime memory statistics reporting agent.

This package periodically samples the interpreter's memory-management
statistics (allocation counters, heap occupancy, garbage collection pauses,
allocation latency) and sends them to a statsd collector as gauges and
timings, both as absolute values and as deltas since the previous sample.

The package is organized into specialized modules:
- config: Configuration loading and validation
- models: Snapshot and configuration data structures
- validation: Input validation and error handling
- collectors: Runtime statistics providers
- reporting: Metric emission (memory stats, allocation latency)
- scheduling: Periodic task execution
- cli: Command-line entry point

Usage:
    From command line:
        memstatsd --config conf/config.toml

    Programmatically:
        import statsd
        from memstatsd import MemStatsAgent
        agent = MemStatsAgent("myservice.", statsd.StatsClient())
        agent.start(10)
"""

# Main interfaces
from .agent import MemStatsAgent
from .config import get_config, clear_config_cache, set_config_path
from .cli import main_cli

# Model classes for external use
from .models import (
    AgentConfig,
    AppConfig,
    MemorySnapshot,
    StatsdConfig,
    compute_latency_delta,
    compute_memory_delta,
)

# Providers and emitters
from .collectors import AbstractStatsProvider, GcPauseTracker, RuntimeStatsProvider
from .reporting import (
    AllocationLatencyProber,
    LoggingMetricsClient,
    MemoryStatsReporter,
    MetricsClient,
    create_statsd_client,
)

# Validation utilities
from .validation import ValidationError

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "MemStatsAgent",
    "get_config",
    "clear_config_cache",
    "set_config_path",
    "main_cli",
    # Models
    "AgentConfig",
    "AppConfig",
    "MemorySnapshot",
    "StatsdConfig",
    "compute_latency_delta",
    "compute_memory_delta",
    # Providers and emitters
    "AbstractStatsProvider",
    "GcPauseTracker",
    "RuntimeStatsProvider",
    "AllocationLatencyProber",
    "LoggingMetricsClient",
    "MemoryStatsReporter",
    "MetricsClient",
    "create_statsd_client",
    # Validation
    "ValidationError",
]
