"""
Board logic for the classic 10x22 grid.

The board is a 2D numpy array (height x width) of bools, indexed
[row, col]:
  - row 0 is the floor, rows grow upward
  - rows 0-19 are the visible play area
  - rows 20-21 are the hidden buffer; any block there after a lock ends
    the game

Cells carry occupancy only. Which piece filled a cell is a rendering
concern and is not stored.
"""

from __future__ import annotations

import logging
from typing import Iterable

import numpy as np

logger = logging.getLogger(__name__)

WIDTH = 10
HEIGHT = 22
VISIBLE_HEIGHT = 20
TOP_PLAYABLE_ROW = VISIBLE_HEIGHT  # highest row scanned for full lines


class Board:
    """Occupancy grid with line clearing and the top-out check.

    Attributes:
        width: Number of columns (always 10).
        height: Number of rows including the buffer (always 22).
        grid: 2D bool array of shape (height, width).
        cleared_rows: Row indices removed by the last clear_full_lines()
            call, in removal order.
    """

    def __init__(self) -> None:
        self.width = WIDTH
        self.height = HEIGHT
        self.grid = np.zeros((self.height, self.width), dtype=bool)
        self.cleared_rows: list[int] = []

    def is_occupied(self, col: int, row: int) -> bool:
        """Check whether a cell is blocked.

        The side walls and the floor are solid: any column outside 0-9 or
        any row below 0 is occupied. Rows at or above the board height are
        the ceiling and are also reported as blocked, so a piece can never
        be placed outside the stored grid.

        Args:
            col: Column index.
            row: Row index (0 = floor).

        Returns:
            True if the cell is blocked.
        """
        if col < 0 or col >= self.width or row < 0:
            return True
        if row >= self.height:
            return True
        return bool(self.grid[row, col])

    def lock(self, cells: Iterable[tuple[int, int]]) -> None:
        """Mark the given (col, row) cells as occupied.

        All cells are validated before any of them is written.

        Raises:
            ValueError: If a cell is outside the board.
        """
        cells = list(cells)
        for col, row in cells:
            if not (0 <= col < self.width and 0 <= row < self.height):
                raise ValueError(f"Cannot lock cell ({col}, {row}) outside the board")
        for col, row in cells:
            self.grid[row, col] = True
        logger.debug("locked cells %s", sorted(cells))

    def is_line_full(self, row: int) -> bool:
        return bool(self.grid[row].all())

    def clear_full_lines(self) -> int:
        """Remove all full rows and shift everything above them down.

        Rows are scanned top-down from row 20 to row 0. After a removal the
        same index is checked again since a new row has slid into it.

        Returns:
            The number of rows removed.
        """
        self.cleared_rows = []
        row = TOP_PLAYABLE_ROW
        while row >= 0:
            if self.is_line_full(row):
                self._delete_line(row)
                self.cleared_rows.append(row)
            else:
                row -= 1
        return len(self.cleared_rows)

    def _delete_line(self, row: int) -> None:
        logger.debug("deleting line %d", row)
        self.grid[row:-1] = self.grid[row + 1:]
        self.grid[-1] = False

    def is_game_over(self) -> bool:
        """True if any cell in the two buffer rows is occupied."""
        return bool(self.grid[VISIBLE_HEIGHT:].any())

    def get_grid(self) -> np.ndarray:
        """Return a copy of the board grid."""
        return self.grid.copy()

    def visible_grid(self) -> np.ndarray:
        """Return a copy of the 20 visible rows (row 0 = floor)."""
        return self.grid[:VISIBLE_HEIGHT].copy()

    def occupied_count(self) -> int:
        return int(self.grid.sum())

    def reset(self) -> None:
        """Clear the entire board."""
        self.grid = np.zeros((self.height, self.width), dtype=bool)
        self.cleared_rows = []
