"""Score, line total and level progression."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

LINES_PER_LEVEL = 10

# Points per simultaneous clear. Clears above four lines score as four.
POINTS_TABLE: dict[int, int] = {
    1: 100,
    2: 300,
    3: 600,
    4: 1000,
}
MAX_TIER = max(POINTS_TABLE)


def points_for(lines_cleared: int) -> int:
    """Points awarded for clearing a number of lines at once."""
    if lines_cleared <= 0:
        return 0
    return POINTS_TABLE[min(lines_cleared, MAX_TIER)]


class ScoreKeeper:
    """Tracks score, lines and level.

    Invariant: level == lines // 10.
    """

    def __init__(self) -> None:
        self._level = 0
        self._score = 0
        self._lines = 0

    @property
    def level(self) -> int:
        return self._level

    @property
    def score(self) -> int:
        return self._score

    @property
    def lines(self) -> int:
        return self._lines

    def register_lines_cleared(self, count: int) -> int:
        """Add cleared lines, level up as needed and award points.

        Args:
            count: Lines removed by a single lock.

        Returns:
            Points earned.

        Raises:
            ValueError: If count is negative.
        """
        if count < 0:
            raise ValueError(f"Line count must be >= 0, got {count}")

        self._lines += count
        while self._lines // LINES_PER_LEVEL > self._level:
            self._level += 1
            logger.info("level up: %d", self._level)

        points = points_for(count)
        self._score += points
        return points

    def reset(self) -> None:
        self._level = 0
        self._score = 0
        self._lines = 0
