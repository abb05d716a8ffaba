"""
Lightweight event bus for decoupled communication between the engine
and its consumers.

The gesture engine publishes, the selection controller and status display
subscribe. Each bus is an ordinary object: create one per engine so that
independent engines (e.g. in tests) never see each other's events.

Usage:
    bus = EventBus()
    bus.subscribe(Events.GESTURE_DETECTED, my_handler)
    bus.emit(Events.GESTURE_DETECTED, gesture=GestureType.PUSH, timestamp=1.2)
"""

import logging
from collections import defaultdict
from typing import Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)


class EventBus:
    """Synchronous publish/subscribe event bus with priority ordering.

    Listeners run on the emitting thread, in descending priority, before
    emit() returns.
    """

    def __init__(self, max_history: int = 100):
        self._listeners: Dict[str, List[Tuple[int, Callable]]] = defaultdict(list)
        self._event_history: List[dict] = []
        self._max_history = max_history
        self._enabled = True

    def subscribe(self, event_name: str, callback: Callable, priority: int = 0):
        """Register a listener for an event.

        Args:
            event_name: Event to listen for
            callback: Function to call. Receives **kwargs from emit().
            priority: Higher priority callbacks run first (default 0)
        """
        self._listeners[event_name].append((priority, callback))
        self._listeners[event_name].sort(key=lambda x: -x[0])
        logger.debug("Subscribed to '%s': %s (priority=%d)",
                     event_name, getattr(callback, "__name__", callback), priority)

    def unsubscribe(self, event_name: str, callback: Callable):
        """Remove a listener for an event."""
        self._listeners[event_name] = [
            (p, cb) for p, cb in self._listeners[event_name] if cb is not callback
        ]

    def emit(self, event_name: str, **kwargs):
        """Emit an event to all registered listeners.

        A listener that raises is logged and skipped; the remaining
        listeners still run.
        """
        if not self._enabled:
            return

        listeners = list(self._listeners.get(event_name, []))

        self._event_history.append({"event": event_name, "data": dict(kwargs)})
        if len(self._event_history) > self._max_history:
            self._event_history = self._event_history[-self._max_history:]

        for _, callback in listeners:
            try:
                callback(**kwargs)
            except Exception as e:
                logger.error("Event handler error [%s -> %s]: %s",
                             event_name, getattr(callback, "__name__", callback), e)

    def set_enabled(self, enabled: bool):
        self._enabled = enabled

    def clear(self, event_name: str = None):
        """Remove all listeners, optionally for a specific event."""
        if event_name:
            self._listeners.pop(event_name, None)
        else:
            self._listeners.clear()

    @property
    def registered_events(self) -> list:
        """List all events with registered listeners."""
        return [name for name, cbs in self._listeners.items() if cbs]

    @property
    def listener_count(self) -> int:
        """Total number of registered listeners."""
        return sum(len(cbs) for cbs in self._listeners.values())

    def get_history(self, last_n: int = 10) -> list:
        """Get recent event history."""
        return self._event_history[-last_n:]


# =============================================================================
# Standard Event Names (constants to avoid typos)
# =============================================================================

class Events:
    """Standard event names used throughout the system."""

    # Recognition
    GESTURE_DETECTED = "gesture_detected"
    HAND_MOVED = "hand_moved"
    HAND_LOST = "hand_lost"

    # Selection
    SELECTION_CHANGED = "selection_changed"
    SLOT_ACTIVATED = "slot_activated"
    PULL_REQUESTED = "pull_requested"

    # Status
    STATUS_CHANGED = "status_changed"
