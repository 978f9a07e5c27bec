"""
The memory statistics reporting agent.

MemStatsAgent ties the memory-stats reporter and the allocation-latency
prober to a metric prefix and a metrics client, and runs each of them as an
independent periodic task.
"""

import logging
import threading
from datetime import datetime, timedelta
from typing import List, Optional, Union

from .collectors.base import AbstractStatsProvider
from .collectors.runtime_stats import RuntimeStatsProvider
from .models.config import AgentConfig
from .reporting.latency_prober import DEFAULT_SIZE, DEFAULT_WAIT, AllocationLatencyProber
from .reporting.memory_reporter import MemoryStatsReporter
from .reporting.metrics_client import GatedMetricsClient, MetricsClient
from .scheduling.periodic import PeriodicTask
from .validation import validate_interval

logger = logging.getLogger(__name__)


class MemStatsAgent:
    """
    Periodically reports runtime memory statistics to a metrics client.

    Each agent owns its own reporter and prober, and therefore its own
    "previous" baselines; several agents in one process do not interfere.

    Usage:
        agent = MemStatsAgent("myservice.", statsd_client)
        agent.start(10)
        ...
        agent.stop()
    """

    def __init__(
        self,
        prefix: str,
        client: MetricsClient,
        debug: bool = False,
        provider: Optional[AbstractStatsProvider] = None,
        latency_wait: timedelta = DEFAULT_WAIT,
        latency_size: int = DEFAULT_SIZE,
        stop_timeout: float = 5.0,
    ):
        """
        Args:
            prefix: String prepended to every metric name.
            client: Destination for gauges and timings.
            debug: Log a timestamped trace line on every tick. Metrics are
                   unaffected.
            provider: Source of memory statistics, defaults to the running
                      interpreter.
            latency_wait: Fixed sleep inside the allocation-latency probe.
            latency_size: Size of each probe allocation in bytes.
            stop_timeout: Seconds to wait for each task thread on stop.
        """
        self.prefix = prefix
        self.client = client
        self.debug = debug
        self.provider = provider or RuntimeStatsProvider()
        self.stop_timeout = stop_timeout

        self._gate = GatedMetricsClient(client)
        self.reporter = MemoryStatsReporter(prefix, self._gate, self.provider)
        self.prober = AllocationLatencyProber(
            prefix, self._gate, wait=latency_wait, size=latency_size
        )

        self._tasks: List[PeriodicTask] = []
        self._lock = threading.Lock()
        self.interval: Optional[float] = None

    @classmethod
    def from_config(
        cls,
        config: AgentConfig,
        client: MetricsClient,
        provider: Optional[AbstractStatsProvider] = None,
    ) -> "MemStatsAgent":
        """Build an agent from an `[agent]` configuration section."""
        return cls(
            prefix=config.prefix,
            client=client,
            debug=config.debug,
            provider=provider,
            latency_wait=timedelta(milliseconds=config.latency_wait_ms),
            latency_size=config.latency_size_bytes,
            stop_timeout=config.stop_timeout,
        )

    @property
    def running(self) -> bool:
        return bool(self._tasks)

    def start(self, interval: Union[float, int, timedelta]) -> None:
        """
        Schedule both periodic tasks and return immediately.

        Args:
            interval: Tick period in seconds or as a timedelta.

        Raises:
            ValidationError: If the interval is not positive.
            RuntimeError: If the agent is already running.
        """
        seconds = validate_interval(interval, field_name="interval")

        with self._lock:
            if self._tasks:
                raise RuntimeError("MemStatsAgent is already running")

            self.provider.start()
            self._gate.open()
            self.interval = seconds
            self._tasks = [
                PeriodicTask("mem_stats", self._push_mem_stats, seconds, self.stop_timeout),
                PeriodicTask("alloc_latency", self._push_alloc_latency, seconds, self.stop_timeout),
            ]
            for task in self._tasks:
                task.start()

        logger.info(
            f"MemStatsAgent started with prefix '{self.prefix}' and interval {seconds}s"
        )

    def stop(self) -> None:
        """
        Stop both tasks. No metrics are emitted after this returns.

        The emission gate is closed before the task threads are joined. If a
        client call is in progress, stop waits for that call to return, but
        not for the rest of the tick, however long the join takes.

        Calling stop on an agent that is not running does nothing.
        """
        with self._lock:
            tasks, self._tasks = self._tasks, []
            if not tasks:
                return

            # Signal every task first so neither waits on the other's join.
            for task in tasks:
                task.stop_event.set()
            self._gate.close()
            for task in tasks:
                task.stop()
            self.provider.stop()

        logger.info("MemStatsAgent stopped")

    def __enter__(self) -> "MemStatsAgent":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

    def _trace(self, what: str) -> None:
        if self.debug:
            logger.info(f"{what} @ {datetime.now().isoformat()}")

    def _push_mem_stats(self, cancelled: threading.Event) -> None:
        if self.reporter.push(cancelled):
            self._trace("push_mem_stats")

    def _push_alloc_latency(self, cancelled: threading.Event) -> None:
        if self.prober.push(cancelled):
            self._trace("push_alloc_latency")
