"""
Allocation-latency prober.

Measures how much longer than expected a short sleep bracketed by two small
allocations takes. The figure is dominated by scheduling jitter and GC pauses
that coincide with the sleep rather than by allocation cost, so it is a rough
responsiveness signal, reported raw without smoothing or clamping.
"""

import logging
import threading
import time
from datetime import timedelta
from typing import Optional

from ..models.snapshot import DELTA_SUFFIX, compute_latency_delta
from .metrics_client import MetricsClient

logger = logging.getLogger(__name__)

DEFAULT_WAIT = timedelta(milliseconds=100)
DEFAULT_SIZE = 10 * 1024

LATENCY_SUFFIX = "alloc_latency"


class AllocationLatencyProber:
    """
    Emits the allocation latency and its delta as two timings per tick.

    Attributes:
        wait: Fixed sleep performed between the two allocations. It is
              independent of the reporting interval.
        size: Size in bytes of each allocation.
    """

    def __init__(
        self,
        prefix: str,
        client: MetricsClient,
        wait: timedelta = DEFAULT_WAIT,
        size: int = DEFAULT_SIZE,
    ):
        self.prefix = prefix
        self.client = client
        self.wait = wait
        self.size = size
        self._previous: Optional[timedelta] = None

    @property
    def previous(self) -> Optional[timedelta]:
        return self._previous

    def measure(self) -> timedelta:
        """Return elapsed time around allocate/sleep/allocate, minus the sleep."""
        start = time.perf_counter()
        first = bytearray(self.size)
        time.sleep(self.wait.total_seconds())
        second = bytearray(self.size)
        elapsed = time.perf_counter() - start
        del first, second
        return timedelta(seconds=elapsed) - self.wait

    def push(self, cancelled: Optional[threading.Event] = None) -> bool:
        """
        Run one probing tick.

        Returns:
            True if both timings were emitted, False if `cancelled` was set
            while measuring or between the two timings.
        """
        latency = self.measure()
        if cancelled is not None and cancelled.is_set():
            logger.debug("Allocation latency tick cancelled before emission")
            return False

        delta = compute_latency_delta(latency, self._previous)
        self._previous = latency

        self.client.timing(self.prefix + LATENCY_SUFFIX, latency)
        if cancelled is not None and cancelled.is_set():
            logger.debug("Allocation latency tick cancelled during emission")
            return False
        self.client.timing(self.prefix + LATENCY_SUFFIX + DELTA_SUFFIX, delta)
        return True
