"""
Metrics client interface and implementations.

The reporting agent sends observations through anything that provides
`gauge(name, value)` and `timing(name, delta)`. A `statsd.StatsClient`
satisfies this interface directly; `LoggingMetricsClient` is a sink for
running without a collector.
"""

import logging
import threading
from datetime import timedelta
from typing import Optional, Protocol, runtime_checkable

import statsd

logger = logging.getLogger(__name__)


@runtime_checkable
class MetricsClient(Protocol):
    """Destination for gauge and timing observations."""

    def gauge(self, name: str, value: int) -> None:
        ...

    def timing(self, name: str, delta: timedelta) -> None:
        ...


class LoggingMetricsClient:
    """Writes every observation to the log instead of a collector."""

    def __init__(self, level: int = logging.INFO):
        self.level = level

    def gauge(self, name: str, value: int) -> None:
        logger.log(self.level, f"gauge {name} = {value}")

    def timing(self, name: str, delta: timedelta) -> None:
        logger.log(self.level, f"timing {name} = {delta.total_seconds() * 1000:.3f}ms")


class GatedMetricsClient:
    """
    Forwards observations to a client only while the gate is open.

    Each forwarded call holds the gate's lock, so once `close` returns no call
    is in flight and every later call is dropped.
    """

    def __init__(self, client: MetricsClient):
        self.client = client
        self._lock = threading.Lock()
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> None:
        with self._lock:
            self._open = True

    def close(self) -> None:
        """Close the gate, waiting for an in-flight call to return."""
        with self._lock:
            self._open = False

    def gauge(self, name: str, value: int) -> None:
        with self._lock:
            if self._open:
                self.client.gauge(name, value)
            else:
                logger.debug(f"Dropped gauge {name}: gate closed")

    def timing(self, name: str, delta: timedelta) -> None:
        with self._lock:
            if self._open:
                self.client.timing(name, delta)
            else:
                logger.debug(f"Dropped timing {name}: gate closed")


def create_statsd_client(
    host: str = "localhost",
    port: int = 8125,
    prefix: Optional[str] = None,
    max_udp_size: int = 512,
    ipv6: bool = False,
) -> statsd.StatsClient:
    """
    Create a UDP statsd client.

    Args:
        host: Collector host name.
        port: Collector UDP port.
        prefix: Client-side prefix prepended by the statsd library itself.
        max_udp_size: Maximum datagram size used for pipelined sends.
        ipv6: Resolve the host as IPv6.

    Returns:
        A statsd.StatsClient, which drops datagrams it cannot send.
    """
    logger.info(f"Creating statsd client for {host}:{port} (prefix={prefix!r})")
    return statsd.StatsClient(
        host=host,
        port=port,
        prefix=prefix or None,
        maxudpsize=max_udp_size,
        ipv6=ipv6,
    )
