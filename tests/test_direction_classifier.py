"""
Tests for Direction Classifier
===============================
"""

import pytest

from gesture_nav.core.types import GestureType, Sample
from gesture_nav.recognition.direction_classifier import (
    DepthConfig,
    DirectionClassifier,
    SwipeConfig,
    Verdict,
    consistent_direction,
)


def planar(points):
    """Build samples from (t, x, y) tuples."""
    return [Sample(x=x, y=y, z=0.0, timestamp=t) for t, x, y in points]


def depth(points):
    """Build samples from (t, z) tuples."""
    return [Sample(x=320.0, y=240.0, z=z, timestamp=t) for t, z in points]


class TestConsistentDirection:
    """Test suite for the per-step consistency helper."""

    def test_all_positive(self):
        assert consistent_direction([0, 10, 20, 30], 3) == 1

    def test_all_negative(self):
        assert consistent_direction([30, 20, 10, 0], 3) == -1

    def test_disagreement(self):
        """Any opposing significant step rejects the sequence."""
        assert consistent_direction([0, 10, 0, 10, 0], 3) is None

    def test_sub_noise_steps_ignored(self):
        """Small back-steps below the noise floor do not count."""
        assert consistent_direction([0, 10, 8, 20], 3) == 1

    def test_no_significant_step(self):
        """A sequence that never exceeds the noise floor has no direction."""
        assert consistent_direction([0, 1, 2, 3], 3) is None

    def test_step_equal_to_noise_floor_is_ignored(self):
        assert consistent_direction([0, 3, 6], 3) is None


class TestSwipeClassification:
    """Test suite for planar swipe classification."""

    @pytest.fixture
    def classifier(self):
        return DirectionClassifier()

    def test_positive_dx_is_left_swipe(self, classifier):
        """Mirrored convention: x increasing on screen fires a left swipe."""
        samples = planar([(0.0, 100, 200), (0.2, 140, 200), (0.4, 180, 200)])

        result = classifier.classify_swipe(samples)

        assert result.is_gesture
        assert result.gesture == GestureType.SWIPE_LEFT
        assert result.displacement == pytest.approx(80)
        assert result.elapsed == pytest.approx(0.4)
        assert result.speed == pytest.approx(200)

    def test_negative_dx_is_right_swipe(self, classifier):
        samples = planar([(0.0, 180, 200), (0.2, 140, 200), (0.4, 100, 200)])

        assert classifier.classify_swipe(samples).gesture == GestureType.SWIPE_RIGHT

    def test_positive_dy_is_down_swipe(self, classifier):
        samples = planar([(0.0, 300, 100), (0.1, 302, 140), (0.2, 301, 180)])

        assert classifier.classify_swipe(samples).gesture == GestureType.SWIPE_DOWN

    def test_negative_dy_is_up_swipe(self, classifier):
        samples = planar([(0.0, 300, 180), (0.1, 300, 140), (0.2, 300, 100)])

        assert classifier.classify_swipe(samples).gesture == GestureType.SWIPE_UP

    def test_too_few_samples(self, classifier):
        samples = planar([(0.0, 100, 200), (0.2, 200, 200)])

        assert classifier.classify_swipe(samples).verdict == Verdict.INSUFFICIENT_DATA

    def test_non_positive_elapsed(self, classifier):
        """Identical timestamps cannot yield a speed."""
        samples = planar([(1.0, 100, 200), (1.0, 150, 200), (1.0, 200, 200)])

        assert classifier.classify_swipe(samples).verdict == Verdict.INSUFFICIENT_DATA

    def test_diagonal_is_rejected(self, classifier):
        """dx=60, dy=50 over 300 ms: neither axis dominates."""
        samples = planar([(0.0, 0, 0), (0.15, 30, 25), (0.3, 60, 50)])

        result = classifier.classify_swipe(samples)

        assert result.verdict == Verdict.NONE
        assert result.gesture == GestureType.NONE

    def test_alternating_steps_are_rejected(self, classifier):
        """Net displacement above threshold but shaky back-and-forth steps."""
        samples = planar([
            (0.00, 0, 200), (0.05, 40, 200), (0.10, 30, 200),
            (0.15, 70, 200), (0.20, 60, 200), (0.25, 100, 200),
        ])

        assert classifier.classify_swipe(samples).verdict == Verdict.NONE

    def test_jitter_below_noise_floor_is_tolerated(self, classifier):
        samples = planar([
            (0.0, 0, 200), (0.1, 30, 200), (0.2, 28, 200), (0.3, 60, 200), (0.4, 90, 200),
        ])

        assert classifier.classify_swipe(samples).gesture == GestureType.SWIPE_LEFT

    def test_displacement_at_threshold_does_not_fire(self, classifier):
        samples = planar([(0.0, 0, 200), (0.1, 25, 200), (0.2, 50, 200)])

        assert classifier.classify_swipe(samples).verdict == Verdict.NONE

    def test_slow_motion_does_not_fire(self, classifier):
        """60 px over 2.5 s is 24 px/s, below the speed threshold."""
        samples = planar([(0.0, 0, 200), (1.25, 30, 200), (2.5, 60, 200)])

        result = classifier.classify_swipe(samples)

        assert result.verdict == Verdict.NONE
        assert result.speed == pytest.approx(24)

    def test_custom_thresholds(self):
        classifier = DirectionClassifier(swipe=SwipeConfig(displacement_threshold=10))
        samples = planar([(0.0, 0, 200), (0.1, 10, 200), (0.2, 20, 200)])

        assert classifier.classify_swipe(samples).gesture == GestureType.SWIPE_LEFT

    def test_input_is_not_mutated(self, classifier):
        samples = planar([(0.0, 100, 200), (0.2, 140, 200), (0.4, 180, 200)])
        before = list(samples)

        classifier.classify_swipe(samples)

        assert samples == before


class TestDepthClassification:
    """Test suite for push/pull classification."""

    @pytest.fixture
    def classifier(self):
        return DirectionClassifier()

    def test_push_toward_sensor(self, classifier):
        """z 0.10 -> 0.05 over 600 ms is a push."""
        samples = depth([(i * 0.1, 0.10 - i * 0.05 / 6) for i in range(7)])

        result = classifier.classify_depth(samples)

        assert result.gesture == GestureType.PUSH
        assert result.speed == pytest.approx(0.05 / 0.6)

    def test_pull_away_from_sensor(self, classifier):
        samples = depth([(i * 0.1, 0.05 + i * 0.05 / 6) for i in range(7)])

        assert classifier.classify_depth(samples).gesture == GestureType.PULL

    def test_needs_five_samples(self, classifier):
        samples = depth([(i * 0.1, 0.10 - i * 0.02) for i in range(4)])

        assert classifier.classify_depth(samples).verdict == Verdict.INSUFFICIENT_DATA

    def test_small_displacement_is_none(self, classifier):
        samples = depth([(i * 0.1, 0.10 - i * 0.0025) for i in range(5)])

        assert classifier.classify_depth(samples).verdict == Verdict.NONE

    def test_inconsistent_depth_is_rejected(self, classifier):
        samples = depth([
            (0.0, 0.10), (0.1, 0.08), (0.2, 0.09), (0.3, 0.06), (0.4, 0.07), (0.5, 0.04),
        ])

        assert classifier.classify_depth(samples).verdict == Verdict.NONE

    def test_slow_depth_drift_is_none(self, classifier):
        """0.03 over 1.0 s is 0.03 units/s, below the speed threshold."""
        samples = depth([(i * 0.25, 0.10 - i * 0.0075) for i in range(5)])

        assert classifier.classify_depth(samples).verdict == Verdict.NONE


class TestFamilyConfig:
    """Test suite for config validation."""

    def test_defaults(self):
        swipe, depth_cfg = SwipeConfig(), DepthConfig()

        assert (swipe.capacity, swipe.time_window, swipe.cooldown) == (10, 0.8, 1.0)
        assert (depth_cfg.capacity, depth_cfg.time_window, depth_cfg.cooldown) == (15, 1.0, 1.5)

    def test_from_dict_partial(self):
        config = SwipeConfig.from_dict({"speed_threshold": 45})

        assert config.speed_threshold == 45
        assert config.displacement_threshold == 50.0

    @pytest.mark.parametrize("kwargs", [
        {"capacity": 0}, {"time_window": 0}, {"cooldown": -1},
        {"min_samples": 1}, {"dominance_ratio": 1.5},
    ])
    def test_invalid_swipe_config(self, kwargs):
        with pytest.raises(ValueError):
            SwipeConfig(**kwargs)

    def test_invalid_depth_config(self):
        with pytest.raises(ValueError):
            DepthConfig(activity_frames=1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
