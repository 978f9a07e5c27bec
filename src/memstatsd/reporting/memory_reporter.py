"""
Memory-stats reporter.

On each tick the reporter reads the runtime counters, computes the delta
against the previous reading and sends both to the metrics client as gauges
(byte and object counts) and timings (GC pause).
"""

import logging
import threading
from typing import Optional, Tuple

from ..collectors.base import AbstractStatsProvider
from ..models.snapshot import (
    DELTA_SUFFIX,
    MemorySnapshot,
    compute_memory_delta,
    gauge_fields,
    timing_fields,
)
from .metrics_client import MetricsClient

logger = logging.getLogger(__name__)


class MemoryStatsReporter:
    """
    Samples memory statistics and emits them with their deltas.

    Emission order per tick is fixed: every absolute gauge, the GC pause
    timing, every delta gauge, then the GC pause delta timing.

    The reporter owns the "previous snapshot" baseline. It is only touched by
    `push`, which the agent runs from a single task thread.
    """

    def __init__(
        self,
        prefix: str,
        client: MetricsClient,
        provider: AbstractStatsProvider,
    ):
        self.prefix = prefix
        self.client = client
        self.provider = provider
        self._previous: Optional[MemorySnapshot] = None

    @property
    def previous(self) -> Optional[MemorySnapshot]:
        """The baseline the next delta will be computed against."""
        return self._previous

    def _capture(self) -> Tuple[MemorySnapshot, MemorySnapshot]:
        """Read the current statistics and their delta against the baseline."""
        latest = self.provider.read_snapshot()
        return latest, compute_memory_delta(latest, self._previous)

    def push(self, cancelled: Optional[threading.Event] = None) -> bool:
        """
        Run one reporting tick.

        Args:
            cancelled: If given and set by the time the statistics have been
                       read, the tick is abandoned without updating the
                       baseline or emitting anything. If it becomes set while
                       emitting, the remaining metrics are not sent.

        Returns:
            True if every metric was emitted, False if the tick was abandoned.
        """
        latest, delta = self._capture()
        if _is_set(cancelled):
            logger.debug("Memory stats tick cancelled before emission")
            return False

        self._previous = latest
        return self.emit(latest, delta, cancelled)

    def emit(
        self,
        latest: MemorySnapshot,
        delta: MemorySnapshot,
        cancelled: Optional[threading.Event] = None,
    ) -> bool:
        """Send one snapshot and its delta to the metrics client."""
        return (
            self._emit_record(latest, "", cancelled)
            and self._emit_record(delta, DELTA_SUFFIX, cancelled)
        )

    def _emit_record(
        self,
        record: MemorySnapshot,
        marker: str,
        cancelled: Optional[threading.Event],
    ) -> bool:
        for attr, suffix in gauge_fields():
            if _is_set(cancelled):
                logger.debug("Memory stats tick cancelled during emission")
                return False
            self.client.gauge(self.prefix + suffix + marker, int(getattr(record, attr)))
        for attr, suffix in timing_fields():
            if _is_set(cancelled):
                logger.debug("Memory stats tick cancelled during emission")
                return False
            self.client.timing(self.prefix + suffix + marker, getattr(record, attr))
        return True


def _is_set(event: Optional[threading.Event]) -> bool:
    return event is not None and event.is_set()
