"""
Cooperative, cancellable timers keyed by purpose.

Timed effects (push activation delay, selected-pulse removal, inactivity
clear, status reset) are deadlines polled by the frame loop on the same
thread that calls ``GestureEngine.ingest``, so a timer callback can never
overlap an ingest call. Scheduling a key that is already pending replaces
the earlier task.
"""

import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(order=True)
class ScheduledTask:
    """A callback due at ``deadline`` (seconds, same clock as samples)."""
    deadline: float
    seq: int
    key: str = field(compare=False)
    callback: Callable[[], None] = field(compare=False)


class TaskScheduler:
    """
    Keyed deadline map.

    Example:
        >>> scheduler = TaskScheduler()
        >>> scheduler.schedule("status", 2.0, reset_status, now=10.0)
        >>> scheduler.run_pending(11.0)   # nothing due
        0
        >>> scheduler.run_pending(12.0)   # reset_status() runs
        1
    """

    def __init__(self):
        self._tasks: Dict[str, ScheduledTask] = {}
        self._seq = itertools.count()

    def schedule(self, key: str, delay: float, callback: Callable[[], None],
                 now: float) -> ScheduledTask:
        """Schedule ``callback`` after ``delay`` seconds, replacing any task with this key."""
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        if key in self._tasks:
            logger.debug("Replacing pending task '%s'", key)
        task = ScheduledTask(deadline=now + delay, seq=next(self._seq),
                             key=key, callback=callback)
        self._tasks[key] = task
        return task

    def cancel(self, key: str) -> bool:
        """Cancel a pending task. Returns False if nothing was pending."""
        return self._tasks.pop(key, None) is not None

    def pending(self, key: str) -> bool:
        return key in self._tasks

    def deadline(self, key: str) -> Optional[float]:
        task = self._tasks.get(key)
        return task.deadline if task else None

    def run_pending(self, now: float) -> int:
        """
        Run every task whose deadline has passed, earliest first.

        Tasks scheduled by a callback during this call wait for the next
        call. A callback that raises is logged and does not stop the others.

        Returns:
            Number of callbacks run.
        """
        due = sorted(t for t in self._tasks.values() if t.deadline <= now)
        ran = 0
        for task in due:
            # Cancelled or replaced by an earlier callback in this batch
            if self._tasks.get(task.key) is not task:
                continue
            del self._tasks[task.key]
            try:
                task.callback()
            except Exception as e:
                logger.error("Scheduled task '%s' failed: %s", task.key, e)
            ran += 1
        return ran

    def clear(self) -> None:
        self._tasks.clear()

    def __len__(self) -> int:
        return len(self._tasks)
