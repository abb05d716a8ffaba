"""
Sample Buffer
==============

Fixed-capacity, time-windowed history of hand-centroid samples.

Two independently configured instances back the gesture engine: a planar
window for swipes and a depth window for push/pull. Pruning is driven by
sample timestamps, not by buffer position, so a variable frame rate does
not stretch or shrink the window.
"""

import logging
from collections import deque
from typing import Deque, Iterator, List, Optional

from ..core.types import Sample

logger = logging.getLogger(__name__)


class SampleBuffer:
    """
    Sliding window over the most recent samples.

    After every push, the buffer holds only samples no older than
    ``time_window`` seconds relative to the newest one, and at most
    ``capacity`` of them, strictly ordered by timestamp.

    Example:
        >>> buffer = SampleBuffer(capacity=10, time_window=0.8)
        >>> buffer.push(Sample(x=100, y=200, z=-0.05, timestamp=0.0))
        True
        >>> buffer.newest().x
        100
    """

    def __init__(self, capacity: int, time_window: float, name: str = "buffer"):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        if time_window <= 0:
            raise ValueError(f"time_window must be > 0, got {time_window}")

        self.capacity = capacity
        self.time_window = time_window
        self.name = name
        self._samples: Deque[Sample] = deque(maxlen=capacity)

    def push(self, sample: Sample) -> bool:
        """
        Append a sample, prune expired entries and trim to capacity.

        Args:
            sample: Newest observation

        Returns:
            False if the sample was rejected because it is not newer than
            the current newest entry, True otherwise.
        """
        if self._samples and sample.timestamp <= self._samples[-1].timestamp:
            logger.debug("%s: rejected out-of-order sample t=%.3f (newest t=%.3f)",
                         self.name, sample.timestamp, self._samples[-1].timestamp)
            return False

        # deque(maxlen) drops from the oldest end
        self._samples.append(sample)
        self._prune(sample.timestamp)
        return True

    def _prune(self, now: float) -> None:
        while self._samples and now - self._samples[0].timestamp > self.time_window:
            self._samples.popleft()

    def clear(self) -> None:
        """Empty the buffer."""
        self._samples.clear()

    def size(self) -> int:
        return len(self._samples)

    def oldest(self) -> Optional[Sample]:
        return self._samples[0] if self._samples else None

    def newest(self) -> Optional[Sample]:
        return self._samples[-1] if self._samples else None

    @property
    def samples(self) -> List[Sample]:
        """Snapshot of the buffer contents, oldest first."""
        return list(self._samples)

    @property
    def span(self) -> float:
        """Seconds between the oldest and newest sample (0 if < 2 samples)."""
        if len(self._samples) < 2:
            return 0.0
        return self._samples[-1].timestamp - self._samples[0].timestamp

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self._samples)

    def __repr__(self) -> str:
        return f"SampleBuffer({self.name}, {len(self._samples)}/{self.capacity}, {self.time_window}s)"
