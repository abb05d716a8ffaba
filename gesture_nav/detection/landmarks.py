"""
Hand landmark containers and centroid extraction.
"""

from dataclasses import dataclass
from typing import List, NamedTuple, Tuple

import numpy as np

from ..core.types import Sample


class Landmark(NamedTuple):
    """A single landmark point with normalized coordinates."""
    x: float  # 0.0 to 1.0, normalized by image width
    y: float  # 0.0 to 1.0, normalized by image height
    z: float  # Depth relative to wrist, negative is closer to the camera

    def to_pixel(self, width: int, height: int) -> Tuple[int, int]:
        """Convert normalized coordinates to pixel coordinates."""
        return (int(self.x * width), int(self.y * height))


@dataclass
class HandLandmarks:
    """Container for one detected hand."""
    landmarks: List[Landmark]
    handedness: str  # "Left" or "Right"
    confidence: float
    image_width: int = 640
    image_height: int = 480

    def to_numpy(self) -> np.ndarray:
        """Convert landmarks to numpy array of shape (N, 3)."""
        return np.array([[lm.x, lm.y, lm.z] for lm in self.landmarks], dtype=np.float64)

    @property
    def centroid(self) -> Tuple[float, float, float]:
        """Mean (x, y, z) of all landmark points, normalized."""
        if not self.landmarks:
            raise ValueError("cannot take the centroid of an empty landmark list")
        x, y, z = self.to_numpy().mean(axis=0)
        return (float(x), float(y), float(z))

    @property
    def centroid_pixel(self) -> Tuple[int, int]:
        x, y, _ = self.centroid
        return (int(x * self.image_width), int(y * self.image_height))

    def to_sample(self, timestamp: float) -> Sample:
        """Reduce the hand to a single centroid sample in pixel space.

        x and y are scaled by the image size, z stays normalized.
        """
        x, y, z = self.centroid
        return Sample(
            x=x * self.image_width,
            y=y * self.image_height,
            z=z,
            timestamp=timestamp,
        )
