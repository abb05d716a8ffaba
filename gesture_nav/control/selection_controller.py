"""
Selection Controller
=====================

Maps gesture events onto a two-column grid of selectable slots:

    1   2
    3   4
    5   6

Odd ids are the left column, even ids the right column, rows step by 2.
Swipes move the highlight to a neighbour, a push pulses the highlighted
slot and activates it after a short settle delay, a pull is reported to
observers. Edge-of-grid moves are no-ops.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Mapping, Optional

from ..core.events import EventBus, Events
from ..core.types import GestureType
from .scheduler import TaskScheduler

logger = logging.getLogger(__name__)

INACTIVITY_TASK = "inactivity"
ACTIVATION_TASK = "activation"


@dataclass
class SelectionConfig:
    """Selection timing configuration (seconds)."""
    activation_delay: float = 0.8
    pulse_duration: float = 0.8
    inactivity_timeout: float = 2.0

    def __post_init__(self):
        for name in ("activation_delay", "pulse_duration", "inactivity_timeout"):
            if getattr(self, name) < 0:
                raise ValueError(f"selection.{name} must be >= 0, got {getattr(self, name)}")

    @classmethod
    def from_dict(cls, config: dict) -> "SelectionConfig":
        return cls(
            activation_delay=config.get("activation_delay", 0.8),
            pulse_duration=config.get("pulse_duration", 0.8),
            inactivity_timeout=config.get("inactivity_timeout", 2.0),
        )


class Slot(ABC):
    """A selectable element on the selection surface."""

    @abstractmethod
    def add_highlight(self) -> None:
        """Show the highlight marker."""

    @abstractmethod
    def remove_highlight(self) -> None:
        """Hide the highlight marker."""

    @abstractmethod
    def add_pulse(self) -> None:
        """Show the transient selected-pulse marker."""

    @abstractmethod
    def remove_pulse(self) -> None:
        """Hide the selected-pulse marker."""

    @abstractmethod
    def activate(self) -> None:
        """Run the slot's bound command."""


class CallbackSlot(Slot):
    """Slot that tracks its markers as flags and runs a callable on activation."""

    def __init__(self, label: str = "", action: Optional[Callable[[], None]] = None):
        self.label = label
        self.action = action
        self.highlighted = False
        self.pulsing = False
        self.activations = 0

    def add_highlight(self) -> None:
        self.highlighted = True

    def remove_highlight(self) -> None:
        self.highlighted = False

    def add_pulse(self) -> None:
        self.pulsing = True

    def remove_pulse(self) -> None:
        self.pulsing = False

    def activate(self) -> None:
        self.activations += 1
        if self.action is not None:
            self.action()

    def __repr__(self) -> str:
        return f"CallbackSlot({self.label!r}, highlighted={self.highlighted})"


class SlotRegistry:
    """Ordered map from positive integer id to slot handle."""

    def __init__(self, slots: Optional[Mapping[int, Slot]] = None):
        slots = slots or {}
        for slot_id in slots:
            if not isinstance(slot_id, int) or slot_id < 1:
                raise ValueError(f"slot ids must be positive integers, got {slot_id!r}")
        self._slots: Dict[int, Slot] = dict(sorted(slots.items()))

    def get(self, slot_id: Optional[int]) -> Optional[Slot]:
        if slot_id is None:
            return None
        return self._slots.get(slot_id)

    def first_id(self) -> Optional[int]:
        return next(iter(self._slots), None)

    @property
    def ids(self) -> List[int]:
        return list(self._slots)

    def __contains__(self, slot_id: int) -> bool:
        return slot_id in self._slots

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[int]:
        return iter(self._slots)


def neighbor(slot_id: int, gesture: GestureType, slot_count: int) -> Optional[int]:
    """
    Grid-adjacency rule for a swipe.

    Returns:
        The candidate id, or None when the move would leave the grid or
        cross a column boundary.
    """
    if gesture is GestureType.SWIPE_LEFT:
        candidate = slot_id - 1
        valid = candidate >= 1 and candidate % 2 == 1
    elif gesture is GestureType.SWIPE_RIGHT:
        candidate = slot_id + 1
        valid = candidate <= slot_count and candidate % 2 == 0
    elif gesture is GestureType.SWIPE_UP:
        candidate = slot_id - 2
        valid = candidate >= 1
    elif gesture is GestureType.SWIPE_DOWN:
        candidate = slot_id + 2
        valid = candidate <= slot_count
    else:
        return None
    return candidate if valid else None


class SelectionController:
    """
    Owns the selection state and reacts to gestures.

    Example:
        >>> scheduler = TaskScheduler()
        >>> controller = SelectionController(scheduler)
        >>> controller.bind(engine.bus)
        >>> controller.attach({1: CallbackSlot("Start"), 2: CallbackSlot("Exit")}, now=0.0)
        >>> controller.highlighted_id
        1
    """

    def __init__(self, scheduler: TaskScheduler,
                 config: Optional[SelectionConfig] = None,
                 bus: Optional[EventBus] = None):
        self.config = config or SelectionConfig()
        self._scheduler = scheduler
        self._bus = bus
        self._registry = SlotRegistry()
        self._highlighted: Optional[int] = None

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------

    def bind(self, bus: EventBus) -> None:
        """Subscribe to gesture and motion events, and publish on ``bus``."""
        self._bus = bus
        bus.subscribe(Events.GESTURE_DETECTED, self._on_gesture_event)
        bus.subscribe(Events.HAND_MOVED, self._on_motion_event)

    def _on_gesture_event(self, gesture: GestureType, timestamp: float, **_):
        self.handle(gesture, timestamp)

    def _on_motion_event(self, timestamp: float, **_):
        self.on_activity(timestamp)

    def _emit(self, event_name: str, **kwargs) -> None:
        if self._bus is not None:
            self._bus.emit(event_name, **kwargs)

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------

    def attach(self, slots: Mapping[int, Slot], now: float) -> None:
        """Register the surface's slots and set the initial highlight."""
        if self._highlighted is not None:
            self._clear_highlight()
        self._registry = SlotRegistry(slots)
        self._set_highlight(self._initial_id())
        self._arm_inactivity(now)
        logger.info("Attached %d slot(s), highlighted=%s",
                    len(self._registry), self._highlighted)

    def update_slots(self, slots: Mapping[int, Slot], now: float) -> None:
        """Replace the slots after an external change to the surface."""
        current = self._highlighted
        if current is not None:
            self._clear_highlight()
        self._registry = SlotRegistry(slots)
        self._set_highlight(current if current in self._registry else self._initial_id())
        self._arm_inactivity(now)

    def _initial_id(self) -> Optional[int]:
        if 1 in self._registry:
            return 1
        return self._registry.first_id()

    # ------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------

    def handle(self, gesture: GestureType, now: float) -> None:
        """Dispatch one gesture event."""
        if gesture.is_swipe:
            self.navigate(gesture)
        elif gesture is GestureType.PUSH:
            self.push(now)
        elif gesture is GestureType.PULL:
            self.pull()

    def navigate(self, gesture: GestureType) -> bool:
        """Move the highlight for a swipe. Returns False if the move was a no-op."""
        if self._highlighted is None:
            return False
        candidate = neighbor(self._highlighted, gesture, self.slot_count)
        if candidate is None or candidate not in self._registry:
            logger.debug("%s from slot %d: no valid neighbour", gesture.value, self._highlighted)
            return False

        previous = self._highlighted
        self._clear_highlight()
        self._set_highlight(candidate)
        logger.info("Selection moved %d -> %d (%s)", previous, candidate, gesture.value)
        self._emit(Events.SELECTION_CHANGED, previous=previous, current=candidate)
        return True

    def push(self, now: float) -> bool:
        """Pulse the highlighted slot and activate it after the settle delay."""
        slot_id = self._highlighted
        slot = self._registry.get(slot_id)
        if slot is None:
            return False

        slot.add_pulse()
        self._scheduler.schedule(f"pulse:{slot_id}", self.config.pulse_duration,
                                 slot.remove_pulse, now)
        self._scheduler.schedule(ACTIVATION_TASK, self.config.activation_delay,
                                 lambda: self._activate(slot_id, slot), now)
        return True

    def _activate(self, slot_id: int, slot: Slot) -> None:
        slot.activate()
        logger.info("Slot %d activated", slot_id)
        self._emit(Events.SLOT_ACTIVATED, slot_id=slot_id)

    def pull(self) -> None:
        """Report a pull to observers. No state change."""
        self._emit(Events.PULL_REQUESTED, slot_id=self._highlighted)

    # ------------------------------------------------------------------
    # Inactivity
    # ------------------------------------------------------------------

    def on_activity(self, now: float) -> None:
        """Hand motion seen: restore a cleared highlight and re-arm the timer."""
        if self._highlighted is None:
            self._set_highlight(self._initial_id())
        self._arm_inactivity(now)

    def _arm_inactivity(self, now: float) -> None:
        self._scheduler.schedule(INACTIVITY_TASK, self.config.inactivity_timeout,
                                 self._on_inactivity, now)

    def _on_inactivity(self) -> None:
        # A single-slot page has nothing to navigate between
        if self.slot_count == 1 and self._highlighted is not None:
            logger.debug("Inactivity timeout: clearing highlight on slot %d", self._highlighted)
            self._clear_highlight()

    # ------------------------------------------------------------------
    # Highlight bookkeeping
    # ------------------------------------------------------------------

    def _set_highlight(self, slot_id: Optional[int]) -> None:
        slot = self._registry.get(slot_id)
        if slot is None:
            self._highlighted = None
            return
        slot.add_highlight()
        self._highlighted = slot_id

    def _clear_highlight(self) -> None:
        slot = self._registry.get(self._highlighted)
        if slot is not None:
            slot.remove_highlight()
        self._highlighted = None

    @property
    def highlighted_id(self) -> Optional[int]:
        return self._highlighted

    def slot(self, slot_id: int) -> Optional[Slot]:
        return self._registry.get(slot_id)

    @property
    def highlighted_slot(self) -> Optional[Slot]:
        return self._registry.get(self._highlighted)

    @property
    def slot_count(self) -> int:
        return len(self._registry)

    @property
    def slot_ids(self) -> List[int]:
        return self._registry.ids
