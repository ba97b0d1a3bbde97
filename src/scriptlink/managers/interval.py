"""
Interval scheduling for buttons that re-run a script periodically.

Each key owns at most one interval. Every tick hands the callback to a
worker thread, and a tick that arrives while the previous run for the same
key is still in progress is skipped.
"""

import logging
import threading
import time
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class ScheduledInterval:
    """
    A single repeating timer with a single-flight guard.

    Attributes:
        key_index: Zero-based key the interval belongs to
        delay: Seconds between ticks
        callback: Called on a worker thread for every tick that isn't skipped
    """

    def __init__(self, key_index: int, delay: float, callback: Callable[[], None]):
        self.key_index = key_index
        self.delay = delay
        self.callback = callback
        self.skipped_runs = 0

        self._stop_event = threading.Event()
        self._busy = threading.Lock()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_busy(self) -> bool:
        """True while a callback run is in progress."""
        return self._busy.locked()

    @property
    def is_active(self) -> bool:
        return self._thread is not None and not self._stop_event.is_set()

    def start(self) -> None:
        self._thread = threading.Thread(
            target=self._timer_loop, daemon=True, name=f"Interval-{self.key_index + 1}"
        )
        self._thread.start()

    def stop(self) -> None:
        """Stop ticking. A run already in progress is allowed to finish."""
        self._stop_event.set()
        if self._thread and self._thread is not threading.current_thread():
            self._thread.join(timeout=1)
        self._thread = None

    def tick(self) -> bool:
        """
        Start a callback run unless one is already in progress.

        Returns:
            True if a run was started, False if the tick was skipped
        """
        if not self._busy.acquire(blocking=False):
            self.skipped_runs += 1
            logger.warning(
                f"Interval script for button {self.key_index + 1} takes longer to run "
                f"than interval allows. Skipping this run."
            )
            return False

        worker = threading.Thread(
            target=self._run_callback, daemon=True, name=f"IntervalRun-{self.key_index + 1}"
        )
        worker.start()
        return True

    def _timer_loop(self) -> None:
        while not self._stop_event.wait(self.delay):
            self.tick()

    def _run_callback(self) -> None:
        logger.info(f"running interval for button {self.key_index + 1}")
        start_time = time.monotonic()
        try:
            self.callback()
        except Exception as e:
            logger.error(
                f"Interval run for button {self.key_index + 1} failed: {e}", exc_info=True
            )
        finally:
            self._busy.release()

        elapsed_ms = (time.monotonic() - start_time) * 1000
        logger.debug(f"Interval run for button {self.key_index + 1} took {elapsed_ms:.0f}ms")


class IntervalManager:
    """
    Manages the repeating intervals of all buttons.

    Responsibilities:
    - One interval per key, replaced when the key's settings change
    - Stopping intervals when buttons disappear or on shutdown
    """

    def __init__(self):
        self.intervals: Dict[int, ScheduledInterval] = {}
        self._lock = threading.Lock()

    def start(self, key_index: int, delay: float, callback: Callable[[], None]) -> ScheduledInterval:
        """
        Start (or restart) the interval for a key.

        Args:
            key_index: Zero-based key index
            delay: Seconds between runs, must be positive
            callback: Function to call on every tick

        Raises:
            ValueError: If delay is not positive
        """
        if delay <= 0:
            raise ValueError(f"Interval delay must be positive, got {delay}")

        interval = ScheduledInterval(key_index, delay, callback)
        # Swap and start together so a concurrent start can't orphan a timer
        with self._lock:
            previous = self.intervals.pop(key_index, None)
            self.intervals[key_index] = interval
            interval.start()

        if previous:
            previous.stop()
            logger.info(f"Replaced interval for button {key_index + 1}")

        logger.info(f"Started {delay}s interval for button {key_index + 1}")
        return interval

    def clear(self, key_index: int) -> bool:
        """
        Stop the interval for a key.

        Returns:
            True if an interval was running, False otherwise
        """
        with self._lock:
            interval = self.intervals.pop(key_index, None)

        if not interval:
            return False

        interval.stop()
        logger.info(f"Cleared interval for button {key_index + 1}")
        return True

    def clear_all(self) -> int:
        """Stop every interval and return how many were running."""
        with self._lock:
            intervals = list(self.intervals.values())
            self.intervals.clear()

        logger.info(f"clearing intervals (found {len(intervals)} running)")
        for interval in intervals:
            interval.stop()
        return len(intervals)

    def is_running(self, key_index: int) -> bool:
        with self._lock:
            return key_index in self.intervals

    def active_keys(self) -> List[int]:
        with self._lock:
            return sorted(self.intervals)
