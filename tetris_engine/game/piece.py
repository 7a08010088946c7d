"""Active (falling) piece: kind, rotation state, and board position."""

from __future__ import annotations

import dataclasses
import enum

from tetris_engine.game.board import HEIGHT
from tetris_engine.game.pieces import NUM_ROTATIONS, PieceKind, piece_cells

# Origin of the 4x4 box for a freshly spawned piece
SPAWN_COL = 3
SPAWN_ROW = HEIGHT - 3


class RotationDirection(enum.IntEnum):
    """Rotation step applied to the rotation index."""
    LEFT = -1
    RIGHT = 1


@dataclasses.dataclass
class ActivePiece:
    """The falling piece.

    No validation happens here: the piece always reflects the move as if
    it were applied. Legality is decided by the CollisionResolver.

    Attributes:
        kind: Piece kind.
        rotation: Rotation state (0-3).
        col: Column of the mask origin (bottom-left of the 4x4 box).
        row: Row of the mask origin. May be negative.
    """

    kind: PieceKind
    rotation: int = 0
    col: int = SPAWN_COL
    row: int = SPAWN_ROW

    @classmethod
    def spawn(cls, kind: PieceKind) -> "ActivePiece":
        return cls(PieceKind(kind), 0, SPAWN_COL, SPAWN_ROW)

    def translate(self, dx: int, dy: int) -> None:
        self.col += dx
        self.row += dy

    def projected_rotation(self, direction: RotationDirection) -> int:
        """Rotation index after a rotation step, without applying it."""
        return (self.rotation + int(direction)) % NUM_ROTATIONS

    def rotate(self, direction: RotationDirection) -> None:
        self.rotation = self.projected_rotation(direction)

    def occupied_cells(self) -> frozenset[tuple[int, int]]:
        """Board (col, row) cells covered by the piece."""
        return frozenset(
            (self.col + dx, self.row + dy)
            for dx, dy in piece_cells(self.kind, self.rotation)
        )

    def copy(self) -> "ActivePiece":
        return dataclasses.replace(self)
