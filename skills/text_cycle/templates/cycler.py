"""
Timer-driven text cycling for a single text source.

The cycler owns the rotation state and a scheduler, and pushes text through an
``apply(source_name, text) -> bool`` sink. The sink returns False when the source
does not exist; that update is skipped and the rotation state is left alone.
"""

import logging
import threading
from typing import Callable, Iterable, Optional

from skills.text_cycle.templates.rotator import Rotator
from skills.text_cycle.templates.scheduler import Scheduler

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 30
MIN_INTERVAL_SECONDS = 5
MAX_INTERVAL_SECONDS = 3600
DEFAULT_TEXT_LIST = "First message\nSecond message\nAnother one!"

ApplyFn = Callable[[str, str], bool]


def validate_interval(interval) -> int:
    try:
        value = int(interval)
    except (TypeError, ValueError):
        logger.warning(f"Interval {interval!r} invalid; defaulting to {DEFAULT_INTERVAL_SECONDS} s.")
        return DEFAULT_INTERVAL_SECONDS

    if value < 1:
        logger.warning(f"Interval {value} invalid; defaulting to {DEFAULT_INTERVAL_SECONDS} s.")
        return DEFAULT_INTERVAL_SECONDS
    return value


class TextCycler:
    def __init__(self, apply: ApplyFn, scheduler: Scheduler):
        self._apply = apply
        self._scheduler = scheduler
        self._rotator = Rotator()
        self._lock = threading.Lock()
        self.source_name = ""
        self.interval = DEFAULT_INTERVAL_SECONDS

    @property
    def rotator(self) -> Rotator:
        return self._rotator

    def configure(self, source_name: str, items: Iterable[str], interval) -> None:
        """Apply new settings: reset the rotation, reschedule, show the first item."""
        self._scheduler.cancel()

        with self._lock:
            self.source_name = source_name or ""
            self.interval = validate_interval(interval)
            self._rotator.set_items(items)
            has_items = len(self._rotator) > 0

        self._scheduler.every(self.interval, self.tick)
        logger.debug(
            f"Configured source '{self.source_name}' with {len(self._rotator)} item(s) every {self.interval} s"
        )

        if has_items:
            self.cycle_now()

    def tick(self) -> None:
        self.cycle_now()

    def cycle_now(self) -> Optional[str]:
        """Apply the current item immediately and advance. Timer schedule is untouched."""
        with self._lock:
            if not self.source_name:
                logger.debug("No text source selected; skipping update.")
                return None
            if not len(self._rotator):
                logger.debug("Text list is empty; skipping update.")
                return None

            source_name = self.source_name
            text = self._rotator.step(lambda value: self._apply(source_name, value))

        if text is None:
            logger.warning(f"Source '{source_name}' not found.")
        return text

    def stop(self) -> None:
        self._scheduler.cancel()
