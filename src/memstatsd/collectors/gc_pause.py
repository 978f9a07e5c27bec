"""
Garbage collection pause tracking.

CPython does not keep a history of collection pauses, so this module times
each collection through `gc.callbacks` and remembers the most recent one.
"""

import gc
import logging
import threading
import time
from datetime import timedelta
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class GcPauseTracker:
    """
    Records the duration of the most recent garbage collection.

    The tracker registers a callback that the interpreter invokes with
    phase "start" before a collection and "stop" after it. Elapsed time
    between the two is the pause. Both phases update state under the same
    lock that `last_pause` reads with.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._started_at: Optional[float] = None
        self._last_pause = timedelta(0)
        self._installed = False

    @property
    def installed(self) -> bool:
        return self._installed

    @property
    def last_pause(self) -> timedelta:
        """Duration of the most recent collection, zero before the first one."""
        with self._lock:
            return self._last_pause

    def install(self) -> None:
        """Register the callback with the interpreter. Installing twice is a no-op."""
        if self._installed:
            return
        gc.callbacks.append(self._on_gc)
        self._installed = True
        logger.debug("GC pause tracker installed")

    def uninstall(self) -> None:
        """Remove the callback from the interpreter."""
        if not self._installed:
            return
        try:
            gc.callbacks.remove(self._on_gc)
        except ValueError:
            logger.warning("GC pause tracker callback was already removed")
        self._installed = False
        with self._lock:
            self._started_at = None
        logger.debug("GC pause tracker uninstalled")

    def _on_gc(self, phase: str, info: Dict[str, Any]) -> None:
        # Runs inside the collector; must not allocate much or raise.
        now = time.perf_counter()
        with self._lock:
            if phase == "start":
                self._started_at = now
            elif phase == "stop" and self._started_at is not None:
                self._last_pause = timedelta(seconds=now - self._started_at)
                self._started_at = None
