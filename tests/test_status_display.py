"""
Tests for Status Display
=========================
"""

import pytest

from gesture_nav.control.scheduler import TaskScheduler
from gesture_nav.control.status_display import (
    IDLE_MESSAGE,
    STATUS_LABELS,
    StatusConfig,
    StatusDisplay,
)
from gesture_nav.core.events import EventBus, Events
from gesture_nav.core.types import GestureType


class TestStatusDisplay:
    """Test suite for the transient gesture status line."""

    @pytest.fixture
    def scheduler(self):
        return TaskScheduler()

    @pytest.fixture
    def status(self, scheduler):
        return StatusDisplay(scheduler)

    def test_starts_idle(self, status):
        assert status.is_idle
        assert status.message == IDLE_MESSAGE

    def test_every_gesture_has_a_label(self):
        for gesture in GestureType:
            if gesture is not GestureType.NONE:
                assert gesture in STATUS_LABELS

    def test_show_and_reset(self, status, scheduler):
        status.show(GestureType.PUSH, now=0.0)

        assert status.message == "PUSH GESTURE"
        assert status.color == STATUS_LABELS[GestureType.PUSH][1]

        scheduler.run_pending(1.9)
        assert not status.is_idle

        scheduler.run_pending(2.0)
        assert status.is_idle

    def test_newer_gesture_supersedes_reset(self, status, scheduler):
        status.show(GestureType.SWIPE_LEFT, now=0.0)
        status.show(GestureType.SWIPE_RIGHT, now=1.5)

        scheduler.run_pending(2.1)
        assert status.message == "RIGHT SWIPE ->"

        scheduler.run_pending(3.5)
        assert status.is_idle

    def test_none_is_ignored(self, status, scheduler):
        status.show(GestureType.NONE, now=0.0)

        assert status.is_idle
        assert len(scheduler) == 0

    def test_bound_to_bus(self, scheduler):
        bus = EventBus()
        status = StatusDisplay(scheduler, StatusConfig(reset_delay=0.5))
        status.bind(bus)
        messages = []
        bus.subscribe(Events.STATUS_CHANGED, lambda message: messages.append(message))

        bus.emit(Events.GESTURE_DETECTED, gesture=GestureType.SWIPE_UP, timestamp=1.0)

        assert messages == ["^ UP SWIPE"]
        scheduler.run_pending(1.5)
        assert status.is_idle


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
