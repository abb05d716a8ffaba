"""
Direction Classifier
=====================

Decides whether a window of samples is a real, direction-consistent gesture
or just noise and incidental drift.

The same gate sequence serves both gesture families, parameterized by axis
and thresholds:

    1. minimum sample count
    2. net displacement and elapsed time (elapsed <= 0 is insufficient data)
    3. displacement threshold (and axis dominance for swipes)
    4. average speed
    5. per-step direction consistency above a noise floor

Sign mapping follows the mirrored camera view: a positive screen-space
dx is a *left* swipe. Toward the sensor (negative dz) is a push.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from ..core.types import GestureType, Sample

logger = logging.getLogger(__name__)


@dataclass
class SwipeConfig:
    """Swipe (planar) family configuration. Distances in px, times in s."""
    capacity: int = 10
    time_window: float = 0.8
    min_samples: int = 3
    displacement_threshold: float = 50.0
    speed_threshold: float = 30.0         # px/s
    noise_floor: float = 3.0              # px per step
    dominance_ratio: float = 0.7          # off-axis must stay below ratio * on-axis
    cooldown: float = 1.0

    def __post_init__(self):
        _validate_family(self, "swipe")
        if not 0 < self.dominance_ratio < 1:
            raise ValueError(f"swipe.dominance_ratio must be in (0, 1), got {self.dominance_ratio}")

    @classmethod
    def from_dict(cls, config: dict) -> "SwipeConfig":
        """Create config from dictionary (YAML parsed)."""
        return cls(
            capacity=config.get("capacity", 10),
            time_window=config.get("time_window", 0.8),
            min_samples=config.get("min_samples", 3),
            displacement_threshold=config.get("displacement_threshold", 50.0),
            speed_threshold=config.get("speed_threshold", 30.0),
            noise_floor=config.get("noise_floor", 3.0),
            dominance_ratio=config.get("dominance_ratio", 0.7),
            cooldown=config.get("cooldown", 1.0),
        )


@dataclass
class DepthConfig:
    """Push/pull (depth) family configuration. Depth in normalized units."""
    capacity: int = 15
    time_window: float = 1.0
    min_samples: int = 5
    displacement_threshold: float = 0.02
    speed_threshold: float = 0.05         # units/s
    noise_floor: float = 0.005            # units per step
    cooldown: float = 1.5
    activity_frames: int = 5              # frames inspected for push-in-progress
    activity_threshold: float = 0.01      # summed |dz| over those frames

    def __post_init__(self):
        _validate_family(self, "depth")
        if self.activity_frames < 2:
            raise ValueError(f"depth.activity_frames must be >= 2, got {self.activity_frames}")

    @classmethod
    def from_dict(cls, config: dict) -> "DepthConfig":
        """Create config from dictionary (YAML parsed)."""
        return cls(
            capacity=config.get("capacity", 15),
            time_window=config.get("time_window", 1.0),
            min_samples=config.get("min_samples", 5),
            displacement_threshold=config.get("displacement_threshold", 0.02),
            speed_threshold=config.get("speed_threshold", 0.05),
            noise_floor=config.get("noise_floor", 0.005),
            cooldown=config.get("cooldown", 1.5),
            activity_frames=config.get("activity_frames", 5),
            activity_threshold=config.get("activity_threshold", 0.01),
        )


def _validate_family(config, section: str) -> None:
    if config.capacity < 1:
        raise ValueError(f"{section}.capacity must be >= 1, got {config.capacity}")
    if config.min_samples < 2:
        raise ValueError(f"{section}.min_samples must be >= 2, got {config.min_samples}")
    for field_name in ("time_window", "cooldown"):
        if getattr(config, field_name) <= 0:
            raise ValueError(f"{section}.{field_name} must be > 0, got {getattr(config, field_name)}")
    for field_name in ("displacement_threshold", "speed_threshold", "noise_floor"):
        if getattr(config, field_name) < 0:
            raise ValueError(f"{section}.{field_name} must be >= 0, got {getattr(config, field_name)}")


class Verdict(Enum):
    """Outcome category of a classification."""
    INSUFFICIENT_DATA = "insufficient_data"
    NONE = "none"
    GESTURE = "gesture"


@dataclass(frozen=True)
class Classification:
    """Result of classifying one window."""
    verdict: Verdict
    gesture: GestureType = GestureType.NONE
    displacement: float = 0.0
    elapsed: float = 0.0
    speed: float = 0.0

    @property
    def is_gesture(self) -> bool:
        return self.verdict is Verdict.GESTURE

    @classmethod
    def insufficient(cls) -> "Classification":
        return cls(verdict=Verdict.INSUFFICIENT_DATA)

    @classmethod
    def none(cls, displacement: float = 0.0, elapsed: float = 0.0,
             speed: float = 0.0) -> "Classification":
        return cls(verdict=Verdict.NONE, displacement=displacement,
                   elapsed=elapsed, speed=speed)


def consistent_direction(values: Sequence[float], noise_floor: float) -> Optional[int]:
    """
    Sign shared by every significant step in a sequence.

    Steps whose magnitude does not exceed ``noise_floor`` are ignored.

    Returns:
        +1 or -1 if all significant steps agree, None if any two disagree
        or no step rose above the noise floor.
    """
    direction = None
    for prev, curr in zip(values, values[1:]):
        delta = curr - prev
        if abs(delta) <= noise_floor:
            continue
        step = 1 if delta > 0 else -1
        if direction is not None and step != direction:
            return None
        direction = step
    return direction


class DirectionClassifier:
    """
    Threshold and consistency classifier for swipe and push/pull windows.

    Never mutates the samples it is given; the engine decides whether to
    clear a window after a firing.

    Example:
        >>> classifier = DirectionClassifier()
        >>> result = classifier.classify_swipe(planar_buffer.samples)
        >>> if result.is_gesture:
        ...     print(result.gesture)
    """

    def __init__(self, swipe: Optional[SwipeConfig] = None,
                 depth: Optional[DepthConfig] = None):
        self.swipe = swipe or SwipeConfig()
        self.depth = depth or DepthConfig()

    def classify_swipe(self, samples: Sequence[Sample]) -> Classification:
        """Classify a planar window as a swipe in one of four directions."""
        cfg = self.swipe
        if len(samples) < cfg.min_samples:
            return Classification.insufficient()

        first, last = samples[0], samples[-1]
        dx = last.x - first.x
        dy = last.y - first.y
        elapsed = last.timestamp - first.timestamp
        if elapsed <= 0:
            return Classification.insufficient()

        if abs(dx) > cfg.displacement_threshold and abs(dy) < abs(dx) * cfg.dominance_ratio:
            values = [s.x for s in samples]
            return self._evaluate(values, dx, elapsed, cfg.speed_threshold, cfg.noise_floor,
                                  GestureType.SWIPE_LEFT, GestureType.SWIPE_RIGHT)

        if abs(dy) > cfg.displacement_threshold and abs(dx) < abs(dy) * cfg.dominance_ratio:
            values = [s.y for s in samples]
            return self._evaluate(values, dy, elapsed, cfg.speed_threshold, cfg.noise_floor,
                                  GestureType.SWIPE_DOWN, GestureType.SWIPE_UP)

        return Classification.none(elapsed=elapsed)

    def classify_depth(self, samples: Sequence[Sample]) -> Classification:
        """Classify a depth window as a push (toward) or pull (away)."""
        cfg = self.depth
        if len(samples) < cfg.min_samples:
            return Classification.insufficient()

        first, last = samples[0], samples[-1]
        dz = last.z - first.z
        elapsed = last.timestamp - first.timestamp
        if elapsed <= 0:
            return Classification.insufficient()

        if abs(dz) <= cfg.displacement_threshold:
            return Classification.none(displacement=dz, elapsed=elapsed)

        values = [s.z for s in samples]
        return self._evaluate(values, dz, elapsed, cfg.speed_threshold, cfg.noise_floor,
                              GestureType.PULL, GestureType.PUSH)

    def _evaluate(
        self,
        values: Sequence[float],
        displacement: float,
        elapsed: float,
        speed_threshold: float,
        noise_floor: float,
        positive: GestureType,
        negative: GestureType,
    ) -> Classification:
        """Apply the speed and consistency gates to one axis."""
        speed = abs(displacement) / elapsed
        if speed <= speed_threshold:
            return Classification.none(displacement, elapsed, speed)

        if consistent_direction(values, noise_floor) is None:
            logger.debug("Rejected %s/%s: inconsistent or sub-noise steps (d=%.4f)",
                         positive.value, negative.value, displacement)
            return Classification.none(displacement, elapsed, speed)

        gesture = positive if displacement > 0 else negative
        return Classification(
            verdict=Verdict.GESTURE,
            gesture=gesture,
            displacement=displacement,
            elapsed=elapsed,
            speed=speed,
        )
