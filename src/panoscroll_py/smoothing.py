"""Frame-to-frame jump dampening for scroll offsets."""
from __future__ import annotations

from typing import Optional


class JumpDamper:
    """Lets only a fraction of a large jump through.

    movement_limit: changes up to this many pixels pass untouched.
    dampening: share of an oversized jump to hold back; the closer to 1,
        the slower the transition.
    """

    def __init__(self, movement_limit: float, dampening: float) -> None:
        self.movement_limit = movement_limit
        self.dampening = dampening

    def apply(self, value: float, last: Optional[float]) -> float:
        if last is None or value == last:
            return value
        if value - self.movement_limit > last or value + self.movement_limit < last:
            return last + (value - last) * (1.0 - self.dampening)
        return value
