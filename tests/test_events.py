"""
Tests for Event Bus
====================
"""

import pytest

from gesture_nav.core.events import EventBus, Events


class TestEventBus:
    """Test suite for synchronous pub/sub."""

    @pytest.fixture
    def bus(self):
        return EventBus(max_history=5)

    def test_emit_reaches_subscriber(self, bus):
        received = []
        bus.subscribe(Events.HAND_LOST, lambda timestamp: received.append(timestamp))

        bus.emit(Events.HAND_LOST, timestamp=1.25)

        assert received == [1.25]

    def test_priority_order(self, bus):
        order = []
        bus.subscribe("evt", lambda: order.append("low"), priority=0)
        bus.subscribe("evt", lambda: order.append("high"), priority=10)

        bus.emit("evt")

        assert order == ["high", "low"]

    def test_failing_listener_does_not_stop_others(self, bus):
        received = []

        def broken():
            raise RuntimeError("listener failure")

        bus.subscribe("evt", broken, priority=1)
        bus.subscribe("evt", lambda: received.append(True))

        bus.emit("evt")

        assert received == [True]

    def test_unsubscribe(self, bus):
        received = []

        def listener():
            received.append(True)

        bus.subscribe("evt", listener)
        bus.unsubscribe("evt", listener)
        bus.emit("evt")

        assert received == []
        assert bus.listener_count == 0

    def test_disabled_bus_is_silent(self, bus):
        received = []
        bus.subscribe("evt", lambda: received.append(True))

        bus.set_enabled(False)
        bus.emit("evt")

        assert received == []
        assert bus.get_history() == []

    def test_history_is_bounded(self, bus):
        for i in range(8):
            bus.emit("evt", index=i)

        history = bus.get_history(last_n=10)

        assert len(history) == 5
        assert history[-1] == {"event": "evt", "data": {"index": 7}}

    def test_buses_are_independent(self):
        first, second = EventBus(), EventBus()
        received = []
        second.subscribe("evt", lambda: received.append(True))

        first.emit("evt")

        assert received == []

    def test_clear(self, bus):
        bus.subscribe("a", lambda: None)
        bus.subscribe("b", lambda: None)

        bus.clear("a")
        assert bus.registered_events == ["b"]

        bus.clear()
        assert bus.listener_count == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
