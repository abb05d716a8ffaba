"""Gesture recognition module."""
from .sample_buffer import SampleBuffer
from .direction_classifier import (
    Classification,
    DepthConfig,
    DirectionClassifier,
    SwipeConfig,
    Verdict,
)
from .cooldown import CooldownGate
from .motion import MotionConfig, MotionReading, MotionTracker
from .gesture_engine import FrameResult, GestureEngine, GestureEngineConfig

__all__ = [
    "SampleBuffer",
    "Classification",
    "DepthConfig",
    "DirectionClassifier",
    "SwipeConfig",
    "Verdict",
    "CooldownGate",
    "MotionConfig",
    "MotionReading",
    "MotionTracker",
    "FrameResult",
    "GestureEngine",
    "GestureEngineConfig",
]
