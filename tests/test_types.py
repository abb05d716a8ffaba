"""
Tests for Domain Types
=======================
"""

import dataclasses

import pytest

from gesture_nav.core.types import GestureFamily, GestureType, Sample


class TestGestureType:
    """Test suite for gesture enum helpers."""

    @pytest.mark.parametrize("gesture", [
        GestureType.SWIPE_LEFT, GestureType.SWIPE_RIGHT,
        GestureType.SWIPE_UP, GestureType.SWIPE_DOWN,
    ])
    def test_swipes(self, gesture):
        assert gesture.family is GestureFamily.SWIPE
        assert gesture.is_swipe and not gesture.is_depth

    @pytest.mark.parametrize("gesture", [GestureType.PUSH, GestureType.PULL])
    def test_depth(self, gesture):
        assert gesture.family is GestureFamily.DEPTH
        assert gesture.is_depth and not gesture.is_swipe

    def test_none_has_no_family(self):
        assert GestureType.NONE.family is None

    def test_from_string(self):
        assert GestureType.from_string("push") is GestureType.PUSH
        assert GestureType.from_string("wave") is GestureType.NONE


class TestSample:
    def test_is_immutable(self):
        sample = Sample(x=1.0, y=2.0, z=-0.1, timestamp=0.5)

        with pytest.raises(dataclasses.FrozenInstanceError):
            sample.x = 5.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
