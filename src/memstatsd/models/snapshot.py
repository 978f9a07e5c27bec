"""
Memory snapshot data structures and delta computation.

This module provides:
- MemorySnapshot: An immutable record of the runtime memory counters captured
  at one point in time. The same shape is used for deltas.
- compute_memory_delta / compute_latency_delta: Field-wise differences between
  two consecutive readings, defined as zero when no previous reading exists.
- gauge_fields / timing_fields: The ordered (attribute, metric suffix) pairs
  that drive metric emission.
"""

from dataclasses import dataclass, fields
from datetime import timedelta
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class MemorySnapshot:
    """
    Runtime memory-management counters captured at a single point in time.

    Field order is significant: it is the order in which gauges are emitted
    (general counters, heap counters, GC counters, then thread count).

    Attributes:
        alloc: Bytes allocated and still in use.
        sys: Bytes obtained from the operating system.
        lookups: Number of pointer lookups (always 0 on CPython).
        mallocs: Cumulative count of allocated objects.
        frees: Cumulative count of freed objects.
        heap_alloc: Heap bytes allocated and still in use.
        heap_sys: Heap bytes obtained from the operating system.
        heap_idle: Heap bytes held but not in use.
        heap_inuse: Heap bytes in use.
        heap_released: Bytes of address space not backed by resident memory.
        heap_objects: Number of live allocated objects.
        num_gc: Number of completed garbage collection cycles.
        pause_gc: Duration of the most recent garbage collection pause.
        num_threads: Number of live threads.
    """

    # General stats
    alloc: int = 0
    sys: int = 0
    lookups: int = 0
    mallocs: int = 0
    frees: int = 0

    # Heap stats
    heap_alloc: int = 0
    heap_sys: int = 0
    heap_idle: int = 0
    heap_inuse: int = 0
    heap_released: int = 0
    heap_objects: int = 0

    # GC stats
    num_gc: int = 0
    pause_gc: timedelta = timedelta(0)

    # Misc
    num_threads: int = 0

    @classmethod
    def zero(cls) -> "MemorySnapshot":
        """Return the all-zero record used as the first-tick delta."""
        return cls()


# Suffixes are part of the published metric names; dashboards depend on them.
_GAUGE_FIELDS: List[Tuple[str, str]] = [
    ("alloc", "alloc"),
    ("sys", "sys"),
    ("lookups", "lookups"),
    ("mallocs", "mallocs"),
    ("frees", "frees"),
    ("heap_alloc", "heap_alloc"),
    ("heap_sys", "heap_sys"),
    ("heap_idle", "heap_idle"),
    ("heap_inuse", "heap_inuse"),
    ("heap_released", "heap_released"),
    ("heap_objects", "heap_objects"),
    ("num_gc", "num_gc"),
    ("num_threads", "num_goroutine"),
]

_TIMING_FIELDS: List[Tuple[str, str]] = [
    ("pause_gc", "pause_gc"),
]

DELTA_SUFFIX = ".delta"


def gauge_fields() -> List[Tuple[str, str]]:
    """Return the ordered (attribute, suffix) pairs emitted as gauges."""
    return list(_GAUGE_FIELDS)


def timing_fields() -> List[Tuple[str, str]]:
    """Return the ordered (attribute, suffix) pairs emitted as timings."""
    return list(_TIMING_FIELDS)


def compute_memory_delta(
    current: MemorySnapshot, previous: Optional[MemorySnapshot]
) -> MemorySnapshot:
    """
    Compute the field-wise difference ``current - previous``.

    Differences are signed; gauge-like fields such as ``heap_idle`` may
    shrink between samples and produce negative values.

    Args:
        current: The snapshot just captured.
        previous: The snapshot from the previous tick, or None if this is the
                  first tick.

    Returns:
        A MemorySnapshot holding the differences, or the zero record when
        there is no previous snapshot.
    """
    if previous is None:
        return MemorySnapshot.zero()

    return MemorySnapshot(
        **{
            f.name: getattr(current, f.name) - getattr(previous, f.name)
            for f in fields(MemorySnapshot)
        }
    )


def compute_latency_delta(
    current: timedelta, previous: Optional[timedelta]
) -> timedelta:
    """Return ``current - previous``, or zero when there is no previous value."""
    if previous is None:
        return timedelta(0)
    return current - previous
