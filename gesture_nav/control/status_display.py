"""
Transient status line for the last recognized gesture.

Shows a label and color for each gesture and falls back to the idle text
after a fixed delay. A newer gesture supersedes the pending reset.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.events import EventBus, Events
from ..core.types import GestureType
from .scheduler import TaskScheduler

logger = logging.getLogger(__name__)

STATUS_TASK = "status"

IDLE_MESSAGE = "Swipe: None"
IDLE_COLOR = (0, 0, 0)

# Label and BGR color per gesture
STATUS_LABELS = {
    GestureType.SWIPE_LEFT: ("<- LEFT SWIPE", (107, 107, 255)),
    GestureType.SWIPE_RIGHT: ("RIGHT SWIPE ->", (196, 205, 78)),
    GestureType.SWIPE_UP: ("^ UP SWIPE", (209, 183, 69)),
    GestureType.SWIPE_DOWN: ("v DOWN SWIPE", (180, 206, 150)),
    GestureType.PUSH: ("PUSH GESTURE", (66, 140, 255)),
    GestureType.PULL: ("PULL GESTURE", (231, 92, 108)),
}


@dataclass
class StatusConfig:
    reset_delay: float = 2.0

    @classmethod
    def from_dict(cls, config: dict) -> "StatusConfig":
        return cls(reset_delay=config.get("reset_delay", 2.0))


class StatusDisplay:
    """Holds the current status message and schedules its reset."""

    def __init__(self, scheduler: TaskScheduler, config: Optional[StatusConfig] = None):
        self.config = config or StatusConfig()
        self._scheduler = scheduler
        self._bus: Optional[EventBus] = None
        self._message = IDLE_MESSAGE
        self._color: Tuple[int, int, int] = IDLE_COLOR

    def bind(self, bus: EventBus) -> None:
        self._bus = bus
        bus.subscribe(Events.GESTURE_DETECTED, self._on_gesture_event)

    def _on_gesture_event(self, gesture: GestureType, timestamp: float, **_):
        self.show(gesture, timestamp)

    def show(self, gesture: GestureType, now: float) -> None:
        """Display the gesture's label until the reset delay elapses."""
        if gesture not in STATUS_LABELS:
            return
        self._message, self._color = STATUS_LABELS[gesture]
        logger.info("Status: %s", self._message)
        self._scheduler.schedule(STATUS_TASK, self.config.reset_delay, self.reset, now)
        if self._bus is not None:
            self._bus.emit(Events.STATUS_CHANGED, message=self._message)

    def reset(self) -> None:
        self._message = IDLE_MESSAGE
        self._color = IDLE_COLOR

    @property
    def message(self) -> str:
        return self._message

    @property
    def color(self) -> Tuple[int, int, int]:
        return self._color

    @property
    def is_idle(self) -> bool:
        return self._message == IDLE_MESSAGE
