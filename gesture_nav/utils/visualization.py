"""
Visualization Module
=====================

Debug overlays for the live navigation loop: hand skeleton, centroid dot,
position / depth / speed readouts, gesture status line and the slot grid.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import cv2
import numpy as np

from ..control.selection_controller import SelectionController
from ..control.status_display import StatusDisplay
from ..core.types import Sample
from ..detection.landmarks import HandLandmarks
from ..recognition.motion import MotionReading


@dataclass
class VisualizerConfig:
    """Visualization settings (colors are BGR)."""
    landmark_color: Tuple[int, int, int] = (0, 0, 255)
    connection_color: Tuple[int, int, int] = (0, 255, 0)
    centroid_color: Tuple[int, int, int] = (0, 0, 255)
    text_color: Tuple[int, int, int] = (255, 255, 255)
    highlight_color: Tuple[int, int, int] = (0, 215, 255)
    pulse_color: Tuple[int, int, int] = (0, 255, 0)
    font_scale: float = 0.5
    font_thickness: int = 1


class Visualizer:
    """Draws the navigation overlay onto BGR frames in place."""

    # Hand connection pairs for drawing skeleton
    HAND_CONNECTIONS = [
        (0, 1), (1, 2), (2, 3), (3, 4),
        (0, 5), (5, 6), (6, 7), (7, 8),
        (5, 9), (9, 10), (10, 11), (11, 12),
        (9, 13), (13, 14), (14, 15), (15, 16),
        (13, 17), (17, 18), (18, 19), (19, 20),
        (0, 17),
    ]

    def __init__(self, config: Optional[VisualizerConfig] = None):
        self.config = config or VisualizerConfig()
        self._font = cv2.FONT_HERSHEY_SIMPLEX

    def draw_hand(self, image: np.ndarray, hand: HandLandmarks) -> np.ndarray:
        """Draw the landmark skeleton and the centroid dot."""
        height, width = image.shape[:2]
        points = [lm.to_pixel(width, height) for lm in hand.landmarks]

        if len(points) == 21:
            for start, end in self.HAND_CONNECTIONS:
                cv2.line(image, points[start], points[end], self.config.connection_color, 2)
        for point in points:
            cv2.circle(image, point, 3, self.config.landmark_color, -1)

        x, y, _ = hand.centroid
        cv2.circle(image, (int(x * width), int(y * height)), 5, self.config.centroid_color, -1)
        return image

    def draw_readouts(
        self,
        image: np.ndarray,
        sample: Optional[Sample],
        reading: Optional[MotionReading],
        push_active: bool = False,
    ) -> np.ndarray:
        """Hand centre, depth and speed lines in the top-left corner."""
        lines = []
        if sample is not None:
            lines.append(f"Hand center: ({sample.x:.1f}, {sample.y:.1f}, {sample.z:.3f})")
            lines.append(f"Hand depth: {sample.z:.3f}")
        if reading is not None:
            lines.append(f"Hand speed: ({reading.vx:.1f}, {reading.vy:.1f}) px/s")
        else:
            lines.append("Hand speed: (0.0, 0.0) px/s")
        if push_active:
            lines.append("Push in progress")

        for i, text in enumerate(lines):
            cv2.putText(image, text, (10, 20 + i * 20), self._font,
                        self.config.font_scale, self.config.text_color,
                        self.config.font_thickness)
        return image

    def draw_status(self, image: np.ndarray, status: StatusDisplay) -> np.ndarray:
        """Status message on a colored band at the bottom of the frame."""
        height, width = image.shape[:2]
        cv2.rectangle(image, (0, height - 36), (width, height), status.color, -1)
        cv2.putText(image, status.message, (10, height - 12), self._font,
                    0.7, (255, 255, 255), 2)
        return image

    def draw_slots(
        self,
        image: np.ndarray,
        controller: SelectionController,
        labels: Sequence[str] = (),
    ) -> np.ndarray:
        """Two-column slot grid on the right side of the frame."""
        height, width = image.shape[:2]
        box_w, box_h, gap = 90, 40, 8
        origin_x = width - 2 * (box_w + gap)

        for index, slot_id in enumerate(controller.slot_ids):
            row, col = (slot_id - 1) // 2, (slot_id - 1) % 2
            x1 = origin_x + col * (box_w + gap)
            y1 = 10 + row * (box_h + gap)
            if y1 + box_h > height:
                break

            color = (90, 90, 90)
            thickness = 1
            if slot_id == controller.highlighted_id:
                color, thickness = self.config.highlight_color, 3
            if getattr(controller.slot(slot_id), "pulsing", False):
                color = self.config.pulse_color

            cv2.rectangle(image, (x1, y1), (x1 + box_w, y1 + box_h), color, thickness)
            label = labels[index] if index < len(labels) else str(slot_id)
            cv2.putText(image, label[:10], (x1 + 6, y1 + 26), self._font,
                        self.config.font_scale, self.config.text_color,
                        self.config.font_thickness)
        return image
