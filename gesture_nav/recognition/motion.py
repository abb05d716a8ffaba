"""
Per-frame hand velocity readout.

Computes the instantaneous planar velocity between consecutive centroid
samples. The reading feeds the on-screen speed display and counts as hand
activity for the selection controller's inactivity timer.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from ..core.types import Sample

logger = logging.getLogger(__name__)


@dataclass
class MotionConfig:
    """Motion readout configuration."""
    stationary_tolerance: float = 30.0    # px/s on the x axis

    @classmethod
    def from_dict(cls, config: dict) -> "MotionConfig":
        return cls(stationary_tolerance=config.get("stationary_tolerance", 30.0))


@dataclass(frozen=True)
class MotionReading:
    """Instantaneous velocity between two consecutive samples."""
    vx: float   # px/s
    vy: float   # px/s
    dt: float   # s

    @property
    def speed(self) -> float:
        return math.hypot(self.vx, self.vy)


class MotionTracker:
    """Tracks the previous sample and derives a velocity for each new one."""

    def __init__(self, config: Optional[MotionConfig] = None):
        self.config = config or MotionConfig()
        self._previous: Optional[Sample] = None
        self._last_reading: Optional[MotionReading] = None

    def update(self, sample: Sample) -> Optional[MotionReading]:
        """
        Record a sample and return its velocity reading.

        Returns:
            None for the first sample after start or hand loss, or when
            the timestamp did not advance.
        """
        previous = self._previous
        self._previous = sample

        if previous is None:
            self._last_reading = None
            return None

        dt = sample.timestamp - previous.timestamp
        if dt <= 0:
            return None

        self._last_reading = MotionReading(
            vx=(sample.x - previous.x) / dt,
            vy=(sample.y - previous.y) / dt,
            dt=dt,
        )
        return self._last_reading

    def direction(self, reading: Optional[MotionReading] = None) -> str:
        """Screen-space movement label: "left", "right" or "stationary"."""
        reading = reading or self._last_reading
        if reading is None:
            return "stationary"
        tolerance = self.config.stationary_tolerance
        if reading.vx > tolerance:
            return "right"
        if reading.vx < -tolerance:
            return "left"
        return "stationary"

    @property
    def last_reading(self) -> Optional[MotionReading]:
        return self._last_reading

    def reset(self) -> None:
        self._previous = None
        self._last_reading = None
