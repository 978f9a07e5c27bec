"""
Fixed-interval task execution on a dedicated thread.
"""

import logging
import threading
import time
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class PeriodicTask:
    """
    Runs an action every `interval` seconds on its own daemon thread.

    The action is called with the task's stop event so it can abandon a tick
    once cancellation has been requested. Ticks start at a fixed rate and run
    one after another on the same thread: a tick that takes longer than the
    interval causes the slots it overran to be skipped, never run concurrently.

    Design notes:
    - The first tick fires one interval after `start`, not immediately.
    - An exception raised by the action is logged and the loop continues.
    - `stop` sets the event and joins the thread.
    """

    def __init__(
        self,
        name: str,
        action: Callable[[threading.Event], Any],
        interval: float,
        stop_timeout: float = 5.0,
    ):
        """
        Initialize the periodic task.

        Args:
            name: Name used for the thread and in log messages
            action: Callable invoked on each tick with the stop event
            interval: Seconds between the start times of consecutive ticks
            stop_timeout: Seconds to wait for the thread when stopping
        """
        self.name = name
        self.action = action
        self.interval = interval
        self.stop_timeout = stop_timeout

        self.stop_event = threading.Event()
        self.thread: Optional[threading.Thread] = None
        self.running = False

        self.tick_count = 0
        self.error_count = 0

        logger.debug(f"PeriodicTask {name} initialized with interval {interval}s")

    def start(self) -> None:
        """Start the task thread."""
        if self.running:
            logger.warning(f"PeriodicTask {self.name} already running")
            return

        self.running = True
        self.stop_event.clear()
        self.thread = threading.Thread(
            target=self.run_loop,
            name=f"PeriodicTask-{self.name}",
            daemon=True
        )
        self.thread.start()
        logger.info(f"PeriodicTask {self.name} started (interval {self.interval}s)")

    def stop(self, timeout: Optional[float] = None) -> bool:
        """
        Stop the task and wait for its thread to exit.

        Args:
            timeout: Seconds to wait, defaults to `stop_timeout`

        Returns:
            True if the thread has exited, False if it was still running
            when the timeout expired.
        """
        if not self.running:
            return True

        logger.info(f"Stopping PeriodicTask {self.name}...")
        self.running = False
        self.stop_event.set()

        if self.thread and self.thread.is_alive():
            if self.thread is threading.current_thread():
                # Stopped from inside its own action; the loop exits after this tick.
                return True
            self.thread.join(timeout=self.stop_timeout if timeout is None else timeout)
            if self.thread.is_alive():
                logger.warning(
                    f"PeriodicTask {self.name} did not stop within timeout"
                )
                return False
        logger.info(
            f"PeriodicTask {self.name} stopped after {self.tick_count} ticks "
            f"({self.error_count} failed)"
        )
        return True

    def run_loop(self) -> None:
        """
        Run the action on a fixed-rate schedule until stopped.

        Tick times are anchored to the start time, so the action's own
        duration does not shift later ticks. If a tick overruns one or more
        slots, those slots are skipped and the next tick runs on the following
        slot boundary.
        """
        logger.debug(f"PeriodicTask {self.name} loop started")

        next_tick = time.monotonic() + self.interval
        while not self.stop_event.wait(max(0.0, next_tick - time.monotonic())):
            try:
                self.action(self.stop_event)
                self.tick_count += 1
            except Exception as e:
                self.error_count += 1
                logger.error(
                    f"Error in PeriodicTask {self.name} tick: {e}",
                    exc_info=True
                )

            next_tick += self.interval
            now = time.monotonic()
            if now > next_tick:
                missed = int((now - next_tick) // self.interval) + 1
                next_tick += missed * self.interval
                logger.warning(
                    f"PeriodicTask {self.name} tick overran its interval, "
                    f"skipping {missed} tick(s)"
                )

        logger.debug(f"PeriodicTask {self.name} loop finished")
