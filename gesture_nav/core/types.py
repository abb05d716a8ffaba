"""
Shared domain types for the gesture navigation system.

Centralizes the sample and gesture definitions used across recognition,
control and detection so that modules never import each other just for
a type.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# =============================================================================
# Samples
# =============================================================================

@dataclass(frozen=True)
class Sample:
    """One hand-centroid observation.

    x and y are in output-surface pixels, z is normalized depth
    (smaller is closer to the sensor), timestamp is in seconds.
    """
    x: float
    y: float
    z: float
    timestamp: float


# =============================================================================
# Gesture Types
# =============================================================================

class GestureFamily(str, Enum):
    """The two mutually-prioritized gesture categories."""
    SWIPE = "swipe"
    DEPTH = "depth"


class GestureType(str, Enum):
    """All gestures the engine can emit."""
    NONE = "none"
    SWIPE_LEFT = "swipe_left"
    SWIPE_RIGHT = "swipe_right"
    SWIPE_UP = "swipe_up"
    SWIPE_DOWN = "swipe_down"
    PUSH = "push"
    PULL = "pull"

    @classmethod
    def from_string(cls, name: str) -> "GestureType":
        """Convert a string gesture name to GestureType, safely."""
        try:
            return cls(name)
        except ValueError:
            return cls.NONE

    @property
    def family(self) -> Optional[GestureFamily]:
        return _GESTURE_FAMILY.get(self)

    @property
    def is_swipe(self) -> bool:
        return self.family is GestureFamily.SWIPE

    @property
    def is_depth(self) -> bool:
        return self.family is GestureFamily.DEPTH


_GESTURE_FAMILY = {
    GestureType.SWIPE_LEFT: GestureFamily.SWIPE,
    GestureType.SWIPE_RIGHT: GestureFamily.SWIPE,
    GestureType.SWIPE_UP: GestureFamily.SWIPE,
    GestureType.SWIPE_DOWN: GestureFamily.SWIPE,
    GestureType.PUSH: GestureFamily.DEPTH,
    GestureType.PULL: GestureFamily.DEPTH,
}
