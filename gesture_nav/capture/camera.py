"""
Camera Capture Module
======================

Synchronous OpenCV capture. Frames are read on the frame-loop thread so
that ingestion and timer callbacks stay single-threaded.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional, Tuple

import cv2
import numpy as np

logger = logging.getLogger(__name__)


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    device_id: int = 0
    width: int = 640
    height: int = 480
    fps: int = 30
    flip_horizontal: bool = False

    @classmethod
    def from_dict(cls, config: dict) -> "CameraConfig":
        """Create config from dictionary (YAML parsed)."""
        return cls(
            device_id=config.get("device_id", 0),
            width=config.get("width", 640),
            height=config.get("height", 480),
            fps=config.get("fps", 30),
            flip_horizontal=config.get("flip_horizontal", False),
        )


@dataclass
class Frame:
    """Captured frame with its capture time in seconds."""
    image: np.ndarray
    timestamp: float
    frame_number: int

    @property
    def rgb(self) -> np.ndarray:
        """Convert BGR to RGB."""
        return cv2.cvtColor(self.image, cv2.COLOR_BGR2RGB)

    @property
    def timestamp_ms(self) -> int:
        return int(self.timestamp * 1000)


class Camera:
    """
    Camera capture with backend fallback.

    Example:
        >>> with Camera(CameraConfig()) as camera:
        ...     frame = camera.read()
    """

    def __init__(self, config: Optional[CameraConfig] = None):
        self.config = config or CameraConfig()
        self._cap: Optional[cv2.VideoCapture] = None
        self._frame_number = 0

    def start(self) -> bool:
        """
        Open the capture device.

        Returns:
            True if camera started successfully
        """
        logger.info("Starting camera (device=%d, %dx%d@%dfps)",
                    self.config.device_id, self.config.width, self.config.height, self.config.fps)

        for backend in (cv2.CAP_ANY, cv2.CAP_V4L2):
            self._cap = cv2.VideoCapture(self.config.device_id, backend)
            if not self._cap.isOpened():
                logger.warning("Backend %d failed, trying next...", backend)
                self._cap = None
                continue

            self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.width)
            self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.height)
            self._cap.set(cv2.CAP_PROP_FPS, self.config.fps)

            ok, image = self._cap.read()
            if ok and image is not None:
                break
            logger.warning("Can't read frames, trying next backend...")
            self._cap.release()
            self._cap = None

        if self._cap is None:
            logger.error("Failed to open camera device %d", self.config.device_id)
            return False

        logger.info("Camera initialized: %dx%d",
                    int(self._cap.get(cv2.CAP_PROP_FRAME_WIDTH)),
                    int(self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT)))
        self._frame_number = 0
        return True

    def stop(self) -> None:
        """Release the capture device."""
        if self._cap:
            self._cap.release()
            self._cap = None
        logger.info("Camera stopped")

    def read(self) -> Optional[Frame]:
        """Capture a single frame, or None if the read failed."""
        if not self._cap:
            return None

        ok, image = self._cap.read()
        if not ok or image is None:
            logger.warning("Failed to capture frame")
            return None

        if self.config.flip_horizontal:
            image = cv2.flip(image, 1)

        self._frame_number += 1
        return Frame(image=image, timestamp=time.monotonic(), frame_number=self._frame_number)

    @property
    def is_running(self) -> bool:
        return self._cap is not None

    @property
    def resolution(self) -> Tuple[int, int]:
        return (self.config.width, self.config.height)

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False
