"""Selection control, status display and cooperative timers."""
from .scheduler import ScheduledTask, TaskScheduler
from .selection_controller import (
    CallbackSlot,
    SelectionConfig,
    SelectionController,
    Slot,
    SlotRegistry,
    neighbor,
)
from .status_display import StatusConfig, StatusDisplay

__all__ = [
    "ScheduledTask",
    "TaskScheduler",
    "CallbackSlot",
    "SelectionConfig",
    "SelectionController",
    "Slot",
    "SlotRegistry",
    "neighbor",
    "StatusConfig",
    "StatusDisplay",
]
