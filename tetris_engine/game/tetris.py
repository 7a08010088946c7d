"""
Game orchestrator: the per-step state machine.

GameSession owns the board, randomizer, score keeper, drop scheduler and the
active piece. A driver calls step(delta_time, intents) once per frame; the
session applies input, gravity, locking, line clears and scoring, and
returns a StepResult describing what a renderer needs to draw.

States:
  SPAWNING  -> a new piece enters at the spawn point on the next step
  FALLING   -> the piece responds to input and gravity
  LOCKED    -> transient while a piece is written into the board
  GAME_OVER -> terminal until reset()
"""

from __future__ import annotations

import dataclasses
import enum
import logging
from typing import Iterable

import numpy as np

from tetris_engine.game.board import Board
from tetris_engine.game.collision import CollisionResolver
from tetris_engine.game.piece import ActivePiece, RotationDirection
from tetris_engine.game.pieces import PieceKind
from tetris_engine.game.randomizer import Randomizer
from tetris_engine.game.scoring import ScoreKeeper
from tetris_engine.game.timing import DropScheduler

logger = logging.getLogger(__name__)


class GameState(enum.Enum):
    SPAWNING = "spawning"
    FALLING = "falling"
    LOCKED = "locked"
    GAME_OVER = "game_over"


class Intent(enum.IntEnum):
    """Discrete player intents consumed by step()."""
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    SOFT_DROP = 2
    ROTATE_LEFT = 3
    ROTATE_RIGHT = 4


DOWN = (0, -1)


@dataclasses.dataclass(frozen=True)
class StepResult:
    """Facts emitted by one step, for the rendering/UI layer.

    Attributes:
        state: Session state after the step.
        active_kind: Kind of the falling piece, or None between pieces.
        active_cells: Board cells covered by the falling piece.
        next_kind: Kind shown in the "next" preview.
        board: Copy of the occupancy grid (row 0 = floor).
        board_changed: True if a piece was locked this step.
        piece_moved: True if the falling piece moved, rotated or spawned.
        piece_locked: True if a piece was locked this step.
        locked_kind: Kind of the piece locked this step, or None.
        locked_cells: Cells written into the board by that lock, before
            any line clear.
        lines_cleared: Rows removed this step.
        cleared_rows: Indices of the removed rows, in removal order.
        level: Current level.
        score: Current score.
        lines: Total lines cleared.
        game_over: True once the session has topped out.
    """

    state: GameState
    active_kind: PieceKind | None
    active_cells: frozenset[tuple[int, int]]
    next_kind: PieceKind
    board: np.ndarray = dataclasses.field(compare=False)
    board_changed: bool
    piece_moved: bool
    piece_locked: bool
    locked_kind: PieceKind | None
    locked_cells: frozenset[tuple[int, int]]
    lines_cleared: int
    cleared_rows: tuple[int, ...]
    level: int
    score: int
    lines: int
    game_over: bool


class GameSession:
    """Full game state machine for the classic 10x22 board.

    Attributes:
        board: The game board.
        randomizer: 7-bag piece source.
        score_keeper: Score, lines and level.
        scheduler: Gravity timer.
        collision: Legality queries against the board.
        active_piece: The falling piece, or None between pieces.
        next_kind: The pre-fetched next piece kind.
        state: Current GameState.
    """

    def __init__(self, seed: int | None = None, randomizer: Randomizer | None = None) -> None:
        """Create a session ready to spawn its first piece.

        Args:
            seed: Seed for a new Randomizer (ignored if randomizer is given).
            randomizer: Piece source to use instead of a fresh one.
        """
        self.board = Board()
        self.randomizer = randomizer if randomizer is not None else Randomizer(seed)
        self.score_keeper = ScoreKeeper()
        self.scheduler = DropScheduler()
        self.collision = CollisionResolver(self.board)
        self.active_piece: ActivePiece | None = None
        self.next_kind: PieceKind = self.randomizer.next()
        self.state = GameState.SPAWNING

        # Per-step facts
        self._piece_moved = False
        self._piece_locked = False
        self._locked_kind: PieceKind | None = None
        self._locked_cells: frozenset[tuple[int, int]] = frozenset()
        self._cleared_rows: tuple[int, ...] = ()

    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    def reset(self) -> StepResult:
        """Clear board, score and timer and go back to SPAWNING.

        The randomizer bag and the pre-fetched next piece are kept.
        """
        self.board.reset()
        self.score_keeper.reset()
        self.scheduler.reset()
        self.active_piece = None
        self.state = GameState.SPAWNING
        self._clear_step_facts()
        logger.info("session reset")
        return self.get_state()

    def step(self, delta_time: float, intents: Iterable[Intent] = ()) -> StepResult:
        """Advance the simulation by one frame.

        Args:
            delta_time: Seconds since the previous step (>= 0).
            intents: Player intents for this frame. Rotations are applied
                every step they are present, so the input layer must emit
                them once per key press.

        Returns:
            A StepResult snapshot after the step.

        Raises:
            ValueError: If delta_time is negative.
        """
        self._clear_step_facts()
        if self.state is GameState.GAME_OVER:
            return self.get_state()

        self.scheduler.advance(delta_time)

        if self.state is GameState.SPAWNING:
            self._spawn_piece()
            if self.state is GameState.GAME_OVER:
                return self.get_state()

        self._handle_intents(frozenset(intents))
        self._apply_gravity()
        return self.get_state()

    def get_state(self) -> StepResult:
        """Return the outbound facts without stepping."""
        piece = self.active_piece
        return StepResult(
            state=self.state,
            active_kind=piece.kind if piece is not None else None,
            active_cells=piece.occupied_cells() if piece is not None else frozenset(),
            next_kind=self.next_kind,
            board=self.board.get_grid(),
            board_changed=self._piece_locked,
            piece_moved=self._piece_moved,
            piece_locked=self._piece_locked,
            locked_kind=self._locked_kind,
            locked_cells=self._locked_cells,
            lines_cleared=len(self._cleared_rows),
            cleared_rows=self._cleared_rows,
            level=self.score_keeper.level,
            score=self.score_keeper.score,
            lines=self.score_keeper.lines,
            game_over=self.game_over,
        )

    def _clear_step_facts(self) -> None:
        self._piece_moved = False
        self._piece_locked = False
        self._locked_kind = None
        self._locked_cells = frozenset()
        self._cleared_rows = ()

    def _spawn_piece(self) -> None:
        """Bring the pre-fetched piece into play and fetch the next one.

        A spawn that overlaps the board tops the session out.
        """
        piece = ActivePiece.spawn(self.next_kind)
        self.next_kind = self.randomizer.next()
        self.active_piece = piece
        self._piece_moved = True
        logger.debug("spawned %s, next %s", piece.kind.name, self.next_kind.name)

        if not self.collision.can_move(piece, (0, 0)):
            logger.info("spawn blocked, game over (score=%d)", self.score_keeper.score)
            self.state = GameState.GAME_OVER
            return
        self.state = GameState.FALLING

    def _handle_intents(self, intents: frozenset[Intent]) -> None:
        if Intent.SOFT_DROP in intents:
            if self._move(*DOWN):
                self.scheduler.reset_timer()

        left = Intent.MOVE_LEFT in intents
        right = Intent.MOVE_RIGHT in intents
        if left != right:
            self._move(-1 if left else 1, 0)

        if Intent.ROTATE_LEFT in intents:
            self._rotate(RotationDirection.LEFT)
        if Intent.ROTATE_RIGHT in intents:
            self._rotate(RotationDirection.RIGHT)

    def _move(self, dx: int, dy: int) -> bool:
        """Translate the piece if the destination is free."""
        piece = self.active_piece
        if not self.collision.can_move(piece, (dx, dy)):
            return False
        piece.translate(dx, dy)
        self._piece_moved = True
        return True

    def _rotate(self, direction: RotationDirection) -> bool:
        """Rotate in place, or with the first free kick offset."""
        piece = self.active_piece
        if self.collision.can_rotate(piece, direction):
            piece.rotate(direction)
            self._piece_moved = True
            return True

        offset = self.collision.find_kick_offset(piece, direction)
        if offset is None:
            return False
        piece.rotate(direction)
        piece.translate(*offset)
        self._piece_moved = True
        logger.debug("wall kick %s for %s", offset, piece.kind.name)
        return True

    def _apply_gravity(self) -> None:
        if not self.scheduler.take_drop_due():
            return
        if not self._move(*DOWN):
            self._lock_piece()

    def _lock_piece(self) -> None:
        """Write the piece into the board, clear lines, score, check top-out."""
        self.state = GameState.LOCKED
        piece = self.active_piece
        cells = piece.occupied_cells()
        self.board.lock(cells)
        self.active_piece = None
        self._piece_locked = True
        self._locked_kind = piece.kind
        self._locked_cells = cells

        count = self.board.clear_full_lines()
        self._cleared_rows = tuple(self.board.cleared_rows)
        self.score_keeper.register_lines_cleared(count)
        self.scheduler.level = self.score_keeper.level
        self.scheduler.reset_timer()
        if count:
            logger.debug("cleared %d line(s): %s", count, list(self._cleared_rows))

        if self.board.is_game_over():
            logger.info(
                "game over: score=%d lines=%d level=%d",
                self.score_keeper.score,
                self.score_keeper.lines,
                self.score_keeper.level,
            )
            self.state = GameState.GAME_OVER
        else:
            self.state = GameState.SPAWNING
