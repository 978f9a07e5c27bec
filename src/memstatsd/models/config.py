"""
Configuration data models.

This module contains the configuration structures for the reporting agent and
the statsd transport, loaded from `config.toml`.
"""

from dataclasses import dataclass, field


@dataclass
class AgentConfig:
    """
    Configuration for the reporting agent, loaded from the `[agent]` table.
    """

    # String prepended to every metric name (e.g. "myservice.").
    prefix: str = "memstatsd."
    # Tick period shared by both periodic tasks, in seconds.
    interval_seconds: float = 10.0
    # Log a timestamped trace line on every tick.
    debug: bool = False

    # [agent.latency]
    # Fixed sleep inside the allocation-latency probe, in milliseconds.
    latency_wait_ms: float = 100.0
    # Size of each of the two probe allocations, in bytes.
    latency_size_bytes: int = 10 * 1024

    # Time to wait for a task thread to finish when stopping, in seconds.
    stop_timeout: float = 5.0


@dataclass
class StatsdConfig:
    """
    Connection settings for the statsd collector, loaded from `[statsd]`.
    """

    host: str = "localhost"
    port: int = 8125
    # Client-side prefix applied by the statsd client itself.
    prefix: str = ""
    max_udp_size: int = 512
    ipv6: bool = False


@dataclass
class AppConfig:
    """
    The root configuration object that aggregates all loaded settings.
    """

    agent: AgentConfig = field(default_factory=AgentConfig)
    statsd: StatsdConfig = field(default_factory=StatsdConfig)
