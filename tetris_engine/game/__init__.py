"""Game logic: pieces, board, collision, timing, scoring, and the session."""

from tetris_engine.game.pieces import PieceKind, shape_mask, display_color
from tetris_engine.game.randomizer import Randomizer
from tetris_engine.game.board import Board
from tetris_engine.game.piece import ActivePiece, RotationDirection
from tetris_engine.game.collision import CollisionResolver, KICK_OFFSETS
from tetris_engine.game.timing import DropScheduler
from tetris_engine.game.scoring import ScoreKeeper
from tetris_engine.game.tetris import GameSession, GameState, Intent, StepResult

__all__ = [
    "PieceKind",
    "shape_mask",
    "display_color",
    "Randomizer",
    "Board",
    "ActivePiece",
    "RotationDirection",
    "CollisionResolver",
    "KICK_OFFSETS",
    "DropScheduler",
    "ScoreKeeper",
    "GameSession",
    "GameState",
    "Intent",
    "StepResult",
]
