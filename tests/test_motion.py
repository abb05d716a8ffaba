"""
Tests for Motion Tracker
=========================
"""

import pytest

from gesture_nav.core.types import Sample
from gesture_nav.recognition.motion import MotionConfig, MotionTracker


def sample(t, x=0.0, y=0.0):
    return Sample(x=x, y=y, z=0.0, timestamp=t)


class TestMotionTracker:
    """Test suite for instantaneous velocity readings."""

    @pytest.fixture
    def tracker(self):
        return MotionTracker()

    def test_first_sample_has_no_reading(self, tracker):
        assert tracker.update(sample(0.0)) is None
        assert tracker.last_reading is None

    def test_velocity(self, tracker):
        tracker.update(sample(0.0, x=100, y=100))
        reading = tracker.update(sample(0.1, x=110, y=94))

        assert reading.vx == pytest.approx(100.0)
        assert reading.vy == pytest.approx(-60.0)
        assert reading.dt == pytest.approx(0.1)
        assert reading.speed == pytest.approx((100.0 ** 2 + 60.0 ** 2) ** 0.5)

    def test_non_advancing_timestamp(self, tracker):
        tracker.update(sample(1.0))

        assert tracker.update(sample(1.0, x=50)) is None

    @pytest.mark.parametrize("dx,expected", [(10, "right"), (-10, "left"), (2, "stationary")])
    def test_direction(self, tracker, dx, expected):
        tracker.update(sample(0.0, x=100))
        tracker.update(sample(0.1, x=100 + dx))

        assert tracker.direction() == expected

    def test_direction_without_reading(self, tracker):
        assert tracker.direction() == "stationary"

    def test_custom_tolerance(self):
        tracker = MotionTracker(MotionConfig(stationary_tolerance=200.0))
        tracker.update(sample(0.0, x=100))
        tracker.update(sample(0.1, x=110))

        assert tracker.direction() == "stationary"

    def test_reset(self, tracker):
        tracker.update(sample(0.0))
        tracker.update(sample(0.1, x=10))

        tracker.reset()

        assert tracker.last_reading is None
        assert tracker.update(sample(0.2)) is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
