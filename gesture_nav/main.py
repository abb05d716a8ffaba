"""
Touchless Gesture Navigation - Main Application
=================================================

Live loop: camera -> hand landmarks -> centroid sample -> gesture engine
-> selection controller, with an OpenCV overlay.

Keyboard Controls:
  q/ESC     - Quit
  r         - Reset the gesture engine
"""

import argparse
import logging
import signal
import time
from typing import Dict, List, Optional

import cv2

from .capture.camera import Camera, CameraConfig
from .control.scheduler import TaskScheduler
from .control.selection_controller import CallbackSlot, SelectionController
from .control.status_display import StatusDisplay
from .core.events import EventBus, Events
from .detection.hand_detector import HandDetector, HandDetectorConfig
from .recognition.gesture_engine import FrameResult, GestureEngine
from .utils.config import AppConfig, load_app_config
from .utils.logger import GestureLogger, setup_logging
from .utils.visualization import Visualizer

logger = logging.getLogger(__name__)

WINDOW_NAME = "Touchless Gesture Navigation"
DEFAULT_SLOT_LABELS = ["Deposit", "Withdraw", "Balance", "Transfer", "Help", "Exit"]


def build_slots(labels: List[str]) -> Dict[int, CallbackSlot]:
    """Demo slots numbered 1..n that log when activated."""
    slots = {}
    for slot_id, label in enumerate(labels, start=1):
        slots[slot_id] = CallbackSlot(
            label=label,
            action=lambda label=label: logger.info("Command: %s", label),
        )
    return slots


class NavigationApp:
    """
    Wires the frame source, landmark tracker, engine and selection surface.

    Everything runs on the calling thread: each frame is ingested, then due
    timers run, then the overlay is drawn.
    """

    def __init__(self, config: AppConfig, slot_labels: List[str]):
        self.config = config
        self.bus = EventBus()
        self.scheduler = TaskScheduler()

        self.camera = Camera(CameraConfig.from_dict(config.camera))
        self.detector = HandDetector(HandDetectorConfig.from_dict(config.mediapipe))
        self.engine = GestureEngine(config.engine, bus=self.bus)
        self.controller = SelectionController(self.scheduler, config.selection)
        self.status = StatusDisplay(self.scheduler, config.status)
        self.gesture_logger = GestureLogger()
        self.visualizer = Visualizer()

        self.controller.bind(self.bus)
        self.status.bind(self.bus)
        self.gesture_logger.bind(self.bus)
        self.bus.subscribe(Events.PULL_REQUESTED, self._on_pull)

        self._slot_labels = slot_labels
        self._slots = build_slots(slot_labels)
        self._running = False
        self._hand_visible = False

    def start(self) -> bool:
        """Start the camera and detector, attach the slots."""
        logger.info("Starting navigation app...")
        if not self.camera.start():
            logger.error("Failed to start camera")
            return False
        if not self.detector.start():
            logger.error("Failed to start hand detector")
            self.camera.stop()
            return False

        self.controller.attach(self._slots, now=time.monotonic())
        self._running = True
        return True

    def stop(self) -> None:
        self._running = False
        self.camera.stop()
        self.detector.stop()
        cv2.destroyAllWindows()
        logger.info("Navigation app stopped (%d gestures)", self.gesture_logger.total_gestures)

    def run(self) -> None:
        if not self.start():
            return

        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

        try:
            while self._running:
                self.step()
        finally:
            self.stop()

    def step(self) -> Optional[FrameResult]:
        """Process one camera frame."""
        frame = self.camera.read()
        if frame is None:
            return None

        hands = self.detector.detect(frame.rgb, frame.timestamp_ms)
        result = None
        sample = None
        display = frame.image

        if hands:
            hand = hands[0]
            sample = hand.to_sample(frame.timestamp)
            result = self.engine.ingest(sample)
            self._hand_visible = True
            self.visualizer.draw_hand(display, hand)
        elif self._hand_visible:
            # No detection: no ingest, the windows just age
            self._hand_visible = False
            self.engine.hand_lost(frame.timestamp)

        self.scheduler.run_pending(frame.timestamp)

        self.visualizer.draw_readouts(
            display, sample,
            result.reading if result else None,
            result.push_active if result else False,
        )
        self.visualizer.draw_slots(display, self.controller, self._slot_labels)
        self.visualizer.draw_status(display, self.status)
        cv2.imshow(WINDOW_NAME, display)

        key = cv2.waitKey(1) & 0xFF
        if key in (ord("q"), 27):
            self._running = False
        elif key == ord("r"):
            self.engine.reset()
            logger.info("Gesture engine reset")

        return result

    def _on_pull(self, slot_id: Optional[int], **_):
        logger.info("Pull gesture on slot %s (no action bound)", slot_id)

    def _signal_handler(self, signum, frame) -> None:
        logger.info("Received signal %d, shutting down...", signum)
        self._running = False


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Touchless gesture navigation over a two-column slot grid",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Gestures:
  swipe left/right/up/down - move the highlight
  push toward the camera   - activate the highlighted slot
  pull away                - reported, no default action

Examples:
  gesture-nav
  gesture-nav --config config/config.yaml --slots Start Exit
        """,
    )
    parser.add_argument("--config", "-c", default="config/config.yaml",
                        help="Path to configuration file")
    parser.add_argument("--slots", "-s", nargs="*", default=None,
                        help="Slot labels, laid out two per row")
    parser.add_argument("--camera", type=int, default=None,
                        help="Camera device id (overrides config)")
    parser.add_argument("--debug", "-d", action="store_true",
                        help="Enable debug logging")
    args = parser.parse_args()

    config = load_app_config(args.config)
    setup_logging("DEBUG" if args.debug else config.log_level, config.log_file)
    if args.camera is not None:
        config.camera["device_id"] = args.camera

    labels = args.slots if args.slots is not None else DEFAULT_SLOT_LABELS
    NavigationApp(config, labels).run()


if __name__ == "__main__":
    main()
