"""
Repeating-callback schedulers.

A scheduler holds at most one callback. Calling ``every`` again replaces the
previous schedule instead of adding a second one.
"""

import logging
import threading
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class Scheduler(Protocol):
    def every(self, interval_seconds: float, fn: Callable[[], None]) -> None:
        ...

    def cancel(self) -> None:
        ...


class ThreadScheduler:
    """Runs ``fn`` every ``interval_seconds`` on a daemon worker thread."""

    def __init__(self, name: str = "text-cycle-timer"):
        self._name = name
        self._thread: Optional[threading.Thread] = None
        self._stop: Optional[threading.Event] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def every(self, interval_seconds: float, fn: Callable[[], None]) -> None:
        if interval_seconds <= 0:
            raise ValueError(f"interval must be positive, got {interval_seconds}")

        self.cancel()
        stop = threading.Event()
        thread = threading.Thread(
            target=self._run,
            args=(interval_seconds, fn, stop),
            name=self._name,
            daemon=True,
        )
        self._stop = stop
        self._thread = thread
        thread.start()

    def cancel(self) -> None:
        if self._stop is not None:
            self._stop.set()
        thread = self._thread
        self._thread = None
        self._stop = None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=1.0)

    def _run(self, interval_seconds, fn, stop):
        while not stop.wait(interval_seconds):
            try:
                fn()
            except Exception:
                logger.exception("Scheduled callback failed")
