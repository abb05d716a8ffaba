"""
Tests for Sample Buffer
========================
"""

import random

import pytest

from gesture_nav.core.types import Sample
from gesture_nav.recognition.sample_buffer import SampleBuffer


def make_sample(t: float, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> Sample:
    return Sample(x=x, y=y, z=z, timestamp=t)


class TestSampleBuffer:
    """Test suite for the sliding sample window."""

    @pytest.fixture
    def buffer(self):
        """Planar-sized buffer."""
        return SampleBuffer(capacity=10, time_window=0.8, name="planar")

    def test_empty_accessors(self, buffer):
        """Empty buffer has no oldest/newest entry."""
        assert buffer.size() == 0
        assert buffer.oldest() is None
        assert buffer.newest() is None
        assert buffer.span == 0.0

    def test_push_and_accessors(self, buffer):
        """Oldest and newest track the ends of the window."""
        buffer.push(make_sample(0.0, x=1))
        buffer.push(make_sample(0.1, x=2))
        buffer.push(make_sample(0.2, x=3))

        assert len(buffer) == 3
        assert buffer.oldest().x == 1
        assert buffer.newest().x == 3
        assert [s.x for s in buffer] == [1, 2, 3]

    def test_trims_to_capacity(self, buffer):
        """Oldest entries are dropped once capacity is exceeded."""
        for i in range(12):
            buffer.push(make_sample(i * 0.01, x=i))

        assert buffer.size() == 10
        assert buffer.oldest().x == 2
        assert buffer.newest().x == 11

    def test_prunes_by_time(self, buffer):
        """Entries older than the window relative to the newest are removed."""
        buffer.push(make_sample(0.0, x=0))
        buffer.push(make_sample(0.5, x=1))
        buffer.push(make_sample(1.0, x=2))

        assert [s.x for s in buffer] == [1, 2]

    def test_entry_exactly_at_window_edge_is_kept(self):
        """Pruning removes only entries strictly older than the window."""
        buffer = SampleBuffer(capacity=5, time_window=0.5)
        buffer.push(make_sample(0.0))
        buffer.push(make_sample(0.5))

        assert buffer.size() == 2
        assert buffer.span == 0.5

    def test_gap_empties_all_but_newest(self, buffer):
        """A long gap between samples leaves only the newest one."""
        for i in range(5):
            buffer.push(make_sample(i * 0.1))
        buffer.push(make_sample(10.0, x=99))

        assert buffer.size() == 1
        assert buffer.newest().x == 99

    def test_rejects_out_of_order_sample(self, buffer):
        """An older timestamp does not enter the buffer."""
        assert buffer.push(make_sample(0.5))
        assert not buffer.push(make_sample(0.4))
        assert buffer.size() == 1

    def test_rejects_duplicate_timestamp(self, buffer):
        """Ordering is strict: equal timestamps are rejected."""
        buffer.push(make_sample(0.5, x=1))
        assert not buffer.push(make_sample(0.5, x=2))
        assert buffer.newest().x == 1

    def test_clear(self, buffer):
        """Clear empties the buffer and allows any timestamp again."""
        buffer.push(make_sample(1.0))
        buffer.clear()

        assert buffer.size() == 0
        assert buffer.push(make_sample(0.1))

    def test_samples_snapshot_is_a_copy(self, buffer):
        """Mutating the snapshot does not touch the buffer."""
        buffer.push(make_sample(0.0))
        snapshot = buffer.samples
        snapshot.clear()

        assert buffer.size() == 1

    def test_window_invariant_holds_for_irregular_stream(self):
        """Every entry stays within the window and size within capacity."""
        rng = random.Random(7)
        buffer = SampleBuffer(capacity=15, time_window=1.0)
        t = 0.0

        for _ in range(500):
            t += rng.choice([0.005, 0.033, 0.05, 0.2, 0.7, 1.3])
            buffer.push(make_sample(t, z=rng.uniform(-0.1, 0.1)))

            newest = buffer.newest()
            assert buffer.size() <= buffer.capacity
            assert all(newest.timestamp - s.timestamp <= buffer.time_window for s in buffer)
            stamps = [s.timestamp for s in buffer]
            assert stamps == sorted(set(stamps))

    @pytest.mark.parametrize("capacity,window", [(0, 0.8), (10, 0.0), (10, -1.0)])
    def test_invalid_configuration(self, capacity, window):
        """Non-positive capacity or window is rejected."""
        with pytest.raises(ValueError):
            SampleBuffer(capacity=capacity, time_window=window)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
