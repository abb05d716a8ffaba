"""
Logging setup and gesture event logging.
"""

import logging
import logging.handlers
import os
from typing import Optional

from ..core.events import EventBus, Events
from ..core.types import GestureType


def setup_logging(level="INFO", log_file=None, max_size_mb=10, backup_count=3):
    """Configure console (and optional rotating file) logging."""
    console_format = "%(asctime)s  %(levelname)-5s  %(message)s"
    file_format = "%(asctime)s [%(levelname)-7s] %(name)-25s | %(message)s"
    date_format = "%H:%M:%S"

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    root_logger.handlers.clear()

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(console_format, datefmt=date_format))
    root_logger.addHandler(console)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(file_format, datefmt=date_format))
        root_logger.addHandler(file_handler)

    return root_logger


class GestureLogger:
    """Records fired gestures and slot activations from the event bus."""

    def __init__(self, max_history: int = 500):
        self.logger = logging.getLogger("gesture_events")
        self._history = []
        self._max_history = max_history

    def bind(self, bus: EventBus) -> None:
        bus.subscribe(Events.GESTURE_DETECTED, self.log_gesture)
        bus.subscribe(Events.SLOT_ACTIVATED, self.log_activation)

    def log_gesture(self, gesture: GestureType, timestamp: Optional[float] = None, **_):
        """Log a recognized gesture event."""
        self._record({"timestamp": timestamp, "gesture": gesture.value})
        self.logger.info("Gesture: %-12s | t=%s", gesture.value,
                         f"{timestamp:.3f}" if timestamp is not None else "N/A")

    def log_activation(self, slot_id: int, **_):
        """Log a slot activation."""
        self._record({"activation": slot_id})
        self.logger.info("Activated slot %d", slot_id)

    def _record(self, entry: dict) -> None:
        self._history.append(entry)
        if len(self._history) > self._max_history:
            self._history = self._history[-self._max_history:]

    def get_history(self, last_n=None):
        """Get recent history entries."""
        if last_n:
            return self._history[-last_n:]
        return self._history.copy()

    @property
    def total_gestures(self):
        return sum(1 for entry in self._history if "gesture" in entry)
