"""
Gravity timing.

Converts elapsed time into discrete gravity ticks. The drop interval starts
at 0.5 s and shrinks by 20 ms per level down to 0.1 s from level 20 on.
"""

from __future__ import annotations

BASE_INTERVAL = 0.5
INTERVAL_STEP = 0.02
MIN_INTERVAL = 0.1


def drop_interval(level: int) -> float:
    """Seconds between gravity drops at a level."""
    return max(MIN_INTERVAL, BASE_INTERVAL - level * INTERVAL_STEP)


class DropScheduler:
    """Accumulates frame time and raises a one-shot "drop due" flag.

    Attributes:
        level: Current level, drives the interval.
        elapsed: Time accumulated since the last drop.
    """

    def __init__(self, level: int = 0) -> None:
        self.level = level
        self.elapsed: float = 0.0
        self._drop_due: bool = False

    @property
    def interval(self) -> float:
        return drop_interval(self.level)

    def advance(self, delta_time: float) -> None:
        """Add elapsed time; raise the flag when an interval is crossed.

        Raises:
            ValueError: If delta_time is negative.
        """
        if delta_time < 0:
            raise ValueError(f"delta_time must be >= 0, got {delta_time}")
        self.elapsed += delta_time
        interval = self.interval
        if self.elapsed >= interval:
            self.elapsed -= interval
            self._drop_due = True

    def take_drop_due(self) -> bool:
        """Return True once per interval crossing, then clear the flag."""
        if self._drop_due:
            self._drop_due = False
            return True
        return False

    def reset_timer(self) -> None:
        """Zero the accumulated time and clear a pending drop.

        Used after a manual drop or a lock so gravity does not fire again
        right away.
        """
        self.elapsed = 0.0
        self._drop_due = False

    def reset(self) -> None:
        self.level = 0
        self.reset_timer()
