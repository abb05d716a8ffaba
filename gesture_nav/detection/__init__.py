"""Hand landmark containers. The MediaPipe wrapper lives in ``hand_detector``."""
from .landmarks import HandLandmarks, Landmark

__all__ = ["HandLandmarks", "Landmark"]
