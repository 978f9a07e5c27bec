"""
Runtime statistics provider for the current Python process.

This module provides the RuntimeStatsProvider class, which assembles a
MemorySnapshot from the interpreter's own counters (`gc`, `sys`,
`tracemalloc`, `threading`) and the process memory figures reported by the
`psutil` library.
"""

import gc
import logging
import sys
import threading
import tracemalloc
from typing import Optional, Tuple

import psutil

from ..models.snapshot import MemorySnapshot
from .base import AbstractStatsProvider
from .gc_pause import GcPauseTracker

logger = logging.getLogger(__name__)


class RuntimeStatsProvider(AbstractStatsProvider):
    """
    Reads memory-management statistics of the running interpreter.

    Process-level byte counts come from `psutil.Process.memory_info()`:
    `sys` is the virtual memory size, `heap_sys` the resident set, and
    `heap_inuse` the resident set minus shared pages where the platform
    reports them. Object and collection counters come from the `gc` module.
    When `tracemalloc` is tracing, `alloc` reports the traced bytes instead
    of the resident set.

    Attributes:
        process: The psutil.Process being inspected (the current process).
        gc_tracker: Tracker supplying the most recent GC pause duration.
    """

    def __init__(
        self,
        process: Optional[psutil.Process] = None,
        gc_tracker: Optional[GcPauseTracker] = None,
    ):
        self.process = process or psutil.Process()
        self.gc_tracker = gc_tracker or GcPauseTracker()
        # Last good (vms, rss, inuse) triple, reused if psutil cannot be read.
        self._last_memory: Tuple[int, int, int] = (0, 0, 0)
        logger.info(
            f"Initializing {self.__class__.__name__} for PID {self.process.pid}"
        )

    def start(self) -> None:
        """Install the GC pause hook."""
        self.gc_tracker.install()
        super().start()

    def stop(self) -> None:
        """Remove the GC pause hook."""
        self.gc_tracker.uninstall()
        super().stop()

    def _read_process_memory(self) -> Tuple[int, int, int]:
        try:
            mem_info = self.process.memory_info()
        except psutil.Error as e:
            logger.warning(
                f"Could not read memory info for PID {self.process.pid}: {e}. "
                "Reusing previous values."
            )
            return self._last_memory

        rss = int(mem_info.rss)
        vms = int(mem_info.vms)
        shared = int(getattr(mem_info, "shared", 0))
        inuse = max(rss - shared, 0)
        self._last_memory = (vms, rss, inuse)
        return self._last_memory

    def read_snapshot(self) -> MemorySnapshot:
        vms, rss, inuse = self._read_process_memory()

        if tracemalloc.is_tracing():
            alloc, _peak = tracemalloc.get_traced_memory()
        else:
            alloc = rss

        gc_stats = gc.get_stats()
        num_gc = sum(gen["collections"] for gen in gc_stats)
        frees = sum(gen["collected"] for gen in gc_stats)
        heap_objects = sys.getallocatedblocks()

        snapshot = MemorySnapshot(
            alloc=int(alloc),
            sys=vms,
            lookups=0,
            mallocs=heap_objects + frees,
            frees=frees,
            heap_alloc=int(alloc),
            heap_sys=rss,
            heap_idle=max(rss - inuse, 0),
            heap_inuse=inuse,
            heap_released=max(vms - rss, 0),
            heap_objects=heap_objects,
            num_gc=num_gc,
            pause_gc=self.gc_tracker.last_pause,
            num_threads=threading.active_count(),
        )
        logger.debug(
            f"Read snapshot: alloc={snapshot.alloc}, heap_inuse={snapshot.heap_inuse}, "
            f"num_gc={snapshot.num_gc}"
        )
        return snapshot
