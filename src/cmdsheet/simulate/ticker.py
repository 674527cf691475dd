"""A cancellable repeating timer running on a daemon thread."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class Ticker:
    """Call ``callback`` every ``interval`` seconds until told to stop.

    The worker stops when :meth:`cancel` is called, when ``max_ticks``
    callbacks have run, or when the callback returns ``False``. Once
    :meth:`cancel` has returned, the callback is guaranteed not to run
    again, so a torn-down view never receives another row.

    Args:
        interval: Seconds between ticks. The first tick happens after one
            interval, like a browser ``setInterval``.
        callback: Called with the 1-based tick number.
        max_ticks: Optional upper bound on the number of ticks.
    """

    def __init__(
        self,
        interval: float,
        callback: Callable[[int], Optional[bool]],
        max_ticks: Optional[int] = None,
    ) -> None:
        self._interval = max(0.0, interval)
        self._callback = callback
        self._max_ticks = max_ticks
        self._ticks = 0
        self._stopped = threading.Event()
        self._lock = threading.RLock()
        self._thread: Optional[threading.Thread] = None

    @property
    def ticks(self) -> int:
        """Number of callbacks run so far."""
        return self._ticks

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> "Ticker":
        """Start the worker thread. Starting twice is an error."""
        if self._thread is not None:
            raise RuntimeError("Ticker already started")
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()
        return self

    def cancel(self) -> None:
        """Stop ticking. Safe to call more than once, and from the callback."""
        with self._lock:
            self._stopped.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for the worker to finish on its own."""
        if self._thread is not None:
            self._thread.join(timeout)

    def _run(self) -> None:
        while not self._stopped.wait(self._interval):
            with self._lock:
                if self._stopped.is_set():
                    break
                self._ticks += 1
                keep_going = self._callback(self._ticks)
            if keep_going is False:
                break
            if self._max_ticks is not None and self._ticks >= self._max_ticks:
                break
        self._stopped.set()
        logger.debug("Ticker stopped after %d tick(s)", self._ticks)
