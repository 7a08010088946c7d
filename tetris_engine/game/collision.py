"""
Collision checks and the wall-kick search.

A configuration is legal when every filled cell of the mask lands on a
free board cell. Walls, floor and ceiling count as blocked (see
Board.is_occupied).
"""

from __future__ import annotations

from tetris_engine.game.board import Board
from tetris_engine.game.piece import ActivePiece, RotationDirection
from tetris_engine.game.pieces import PieceKind, piece_cells

# Kick candidates tried in order when a rotation in place is blocked:
# single steps before double steps, horizontal before vertical.
KICK_OFFSETS: tuple[tuple[int, int], ...] = (
    (1, 0), (-1, 0), (0, 1), (0, -1),
    (2, 0), (-2, 0), (0, 2), (0, -2),
)


class CollisionResolver:
    """Legality queries for an ActivePiece against a Board."""

    def __init__(self, board: Board) -> None:
        self.board = board

    def fits(self, kind: PieceKind, rotation: int, col: int, row: int) -> bool:
        """Check whether a mask placed at (col, row) overlaps nothing."""
        for dx, dy in piece_cells(kind, rotation):
            if self.board.is_occupied(col + dx, row + dy):
                return False
        return True

    def can_move(self, piece: ActivePiece, delta: tuple[int, int]) -> bool:
        """Check whether the whole piece fits after translating by delta.

        Both components are applied together: the candidate is the piece at
        (col + dx, row + dy), not two separate one-axis moves.
        """
        dx, dy = delta
        return self.fits(piece.kind, piece.rotation, piece.col + dx, piece.row + dy)

    def can_rotate(self, piece: ActivePiece, direction: RotationDirection) -> bool:
        """Check the rotated mask at the piece's current position."""
        rotation = piece.projected_rotation(direction)
        return self.fits(piece.kind, rotation, piece.col, piece.row)

    def find_kick_offset(
        self, piece: ActivePiece, direction: RotationDirection
    ) -> tuple[int, int] | None:
        """Find the first kick that makes a blocked rotation legal.

        Returns:
            The (dx, dy) offset to apply together with the rotation, or None
            when every candidate is blocked and the rotation is rejected.
        """
        rotation = piece.projected_rotation(direction)
        for dx, dy in KICK_OFFSETS:
            if self.fits(piece.kind, rotation, piece.col + dx, piece.row + dy):
                return (dx, dy)
        return None
