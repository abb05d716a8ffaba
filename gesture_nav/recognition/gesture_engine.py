"""
Gesture Engine
===============

Per-frame orchestration of the recognition pipeline:

    sample -> {planar window, depth window} -> depth classification
           -> (only if no depth activity) swipe classification
           -> cooldown check -> at most one GestureType per frame

Push/pull and swipes share the same hand. A user starting a forward push
usually shows some lateral drift too, so depth is always evaluated first and,
once depth motion is visibly underway, swipe evaluation is suppressed.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional

from ..core.events import EventBus, Events
from ..core.types import GestureFamily, GestureType, Sample
from .cooldown import CooldownGate
from .direction_classifier import DepthConfig, DirectionClassifier, SwipeConfig
from .motion import MotionConfig, MotionReading, MotionTracker
from .sample_buffer import SampleBuffer

logger = logging.getLogger(__name__)


@dataclass
class GestureEngineConfig:
    """Gesture engine configuration."""
    swipe: SwipeConfig = field(default_factory=SwipeConfig)
    depth: DepthConfig = field(default_factory=DepthConfig)
    motion: MotionConfig = field(default_factory=MotionConfig)

    @classmethod
    def from_dict(cls, config: dict) -> "GestureEngineConfig":
        """Create config from dictionary with swipe/depth/motion sections."""
        return cls(
            swipe=SwipeConfig.from_dict(config.get("swipe", {})),
            depth=DepthConfig.from_dict(config.get("depth", {})),
            motion=MotionConfig.from_dict(config.get("motion", {})),
        )


@dataclass(frozen=True)
class FrameResult:
    """What one ingest call produced."""
    gesture: Optional[GestureType] = None
    push_active: bool = False
    reading: Optional[MotionReading] = None

    @property
    def fired(self) -> bool:
        return self.gesture is not None


class GestureEngine:
    """
    Turns a jittery centroid stream into clean, mutually-exclusive gestures.

    Owns both sliding windows, the classifier and the cooldown gate; every
    instance is independent. ``ingest`` must be called from a single thread,
    once per frame with a detected hand.

    Example:
        >>> engine = GestureEngine()
        >>> engine.bus.subscribe(Events.GESTURE_DETECTED, on_gesture)
        >>>
        >>> while running:
        ...     hand = detector.detect(frame)
        ...     if hand:
        ...         result = engine.ingest(hand.to_sample(frame.timestamp))
        ...         if result.push_active:
        ...             highlight_push_in_progress()
    """

    def __init__(self, config: Optional[GestureEngineConfig] = None,
                 bus: Optional[EventBus] = None):
        self.config = config or GestureEngineConfig()
        self.bus = bus or EventBus()

        swipe, depth = self.config.swipe, self.config.depth
        self._planar = SampleBuffer(swipe.capacity, swipe.time_window, name="planar")
        self._depth = SampleBuffer(depth.capacity, depth.time_window, name="depth")
        self._classifier = DirectionClassifier(swipe, depth)
        self._cooldown = CooldownGate({
            GestureFamily.SWIPE: swipe.cooldown,
            GestureFamily.DEPTH: depth.cooldown,
        })
        self._motion = MotionTracker(self.config.motion)

        self._push_active = False
        self._last_timestamp: Optional[float] = None
        self._fired: Counter = Counter()

    def ingest(self, sample: Sample) -> FrameResult:
        """
        Process one frame's centroid sample.

        Args:
            sample: Hand centroid for this frame

        Returns:
            FrameResult with the fired gesture (or None), the push-in-progress
            flag and the instantaneous velocity reading.
        """
        now = sample.timestamp
        if self._last_timestamp is not None and now <= self._last_timestamp:
            logger.debug("Dropped sample with non-increasing timestamp %.3f", now)
            return FrameResult(push_active=self._push_active)
        self._last_timestamp = now

        # 1. Windows
        self._planar.push(sample)
        self._depth.push(sample)

        reading = self._motion.update(sample)
        if reading is not None:
            self.bus.emit(Events.HAND_MOVED, reading=reading, timestamp=now)

        # 2. Depth-in-progress signal, forced off while depth is gated
        depth_gated = self._cooldown.is_gated(GestureFamily.DEPTH, now)
        push_active = (not depth_gated and
                       self._depth_activity() > self.config.depth.activity_threshold)

        # 3. Depth has priority
        gesture = None
        if not depth_gated:
            result = self._classifier.classify_depth(self._depth.samples)
            if result.is_gesture:
                self._depth.clear()
                self._cooldown.record_fire(GestureFamily.DEPTH, now)
                push_active = False
                gesture = result.gesture

        # 4. Swipe only when depth neither fired nor is in progress
        if (gesture is None and not push_active and
                not self._cooldown.is_gated(GestureFamily.SWIPE, now)):
            result = self._classifier.classify_swipe(self._planar.samples)
            if result.is_gesture:
                self._planar.clear()
                self._cooldown.record_fire(GestureFamily.SWIPE, now)
                gesture = result.gesture

        self._push_active = push_active

        if gesture is not None:
            self._fired[gesture] += 1
            logger.info("Gesture detected: %s at t=%.3f", gesture.value, now)
            self.bus.emit(Events.GESTURE_DETECTED, gesture=gesture, timestamp=now)

        return FrameResult(gesture=gesture, push_active=push_active, reading=reading)

    def _depth_activity(self) -> float:
        """Summed |dz| over the most recent depth entries (0 if too few)."""
        n = self.config.depth.activity_frames
        recent = self._depth.samples[-n:]
        if len(recent) < n:
            return 0.0
        return sum(abs(b.z - a.z) for a, b in zip(recent, recent[1:]))

    def hand_lost(self, now: Optional[float] = None) -> None:
        """Forget the previous sample so the next velocity reading starts fresh.

        The windows are left alone; they age out as new samples arrive.
        """
        self._motion.reset()
        self._push_active = False
        self.bus.emit(Events.HAND_LOST, timestamp=now)

    def reset(self) -> None:
        """Clear windows, cooldowns and motion state."""
        self._planar.clear()
        self._depth.clear()
        self._cooldown.reset()
        self._motion.reset()
        self._push_active = False
        self._last_timestamp = None

    @property
    def is_push_active(self) -> bool:
        return self._push_active

    @property
    def planar_window(self) -> SampleBuffer:
        return self._planar

    @property
    def depth_window(self) -> SampleBuffer:
        return self._depth

    @property
    def cooldown(self) -> CooldownGate:
        return self._cooldown

    @property
    def motion(self) -> MotionTracker:
        return self._motion

    @property
    def fired_counts(self) -> dict:
        """Number of times each gesture has fired."""
        return dict(self._fired)
