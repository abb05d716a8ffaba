"""
Touchless Gesture Navigation
=============================

Turns a noisy stream of hand-centroid samples into discrete swipe, push and
pull gestures, and drives a two-column grid of selectable slots with them.

Modules:
    - core: Shared domain types and the event bus
    - recognition: Sliding windows, direction classifier, cooldowns, engine
    - control: Slot selection, status display, cooperative timers
    - detection: MediaPipe hand landmark detection and centroid extraction
    - capture: Camera frame acquisition
    - utils: Configuration, logging, visualization
"""

__version__ = "1.0.0"
__author__ = "HCI Team"
