"""
Per-family refractory period after a gesture fires.

A single physical swipe or push spans many frames; once it has been
reported, the same family stays gated for its cooldown so the residual
motion cannot be reported again.
"""

import logging
from typing import Dict, Optional

from ..core.types import GestureFamily

logger = logging.getLogger(__name__)


class CooldownGate:
    """Cooldown tracker keyed by gesture family.

    Times are sample timestamps in seconds, never wall-clock reads, so the
    gate behaves identically in replayed and live streams.
    """

    def __init__(self, cooldowns: Dict[GestureFamily, float]):
        for family, duration in cooldowns.items():
            if duration <= 0:
                raise ValueError(f"cooldown for {family.value} must be > 0, got {duration}")
        self._cooldowns = dict(cooldowns)
        self._last_fire: Dict[GestureFamily, float] = {}

    def is_gated(self, family: GestureFamily, now: float) -> bool:
        """True while ``now`` is inside the family's refractory period."""
        last = self._last_fire.get(family)
        if last is None:
            return False
        return (now - last) < self._cooldowns[family]

    def record_fire(self, family: GestureFamily, now: float) -> None:
        """Start the refractory period for a family."""
        self._last_fire[family] = now
        logger.debug("%s fired at %.3f, gated for %.2fs",
                     family.value, now, self._cooldowns[family])

    def remaining(self, family: GestureFamily, now: float) -> float:
        """Seconds left in the cooldown (0 if not gated)."""
        last = self._last_fire.get(family)
        if last is None:
            return 0.0
        return max(0.0, self._cooldowns[family] - (now - last))

    def last_fire(self, family: GestureFamily) -> Optional[float]:
        return self._last_fire.get(family)

    def cooldown(self, family: GestureFamily) -> float:
        return self._cooldowns[family]

    def reset(self, family: Optional[GestureFamily] = None) -> None:
        """Clear one family's cooldown, or all of them."""
        if family is None:
            self._last_fire.clear()
        else:
            self._last_fire.pop(family, None)
