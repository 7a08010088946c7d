from __future__ import annotations

import numpy as np
import pytest

from tetris_engine.game.board import WIDTH
from tetris_engine.game.pieces import PieceKind
from tetris_engine.game.tetris import GameSession, GameState, Intent


def _session_with(kind: PieceKind, seed: int = 0) -> GameSession:
    """Session whose first spawned piece is `kind`, already spawned."""
    session = GameSession(seed=seed)
    session.next_kind = kind
    session.step(0.0)
    return session


def _drop_to_floor(session: GameSession) -> None:
    for _ in range(30):
        session.step(0.0, {Intent.SOFT_DROP})


def test_new_session_waits_to_spawn() -> None:
    session = GameSession(seed=1)
    state = session.get_state()
    assert state.state is GameState.SPAWNING
    assert state.active_kind is None
    assert state.active_cells == frozenset()
    assert isinstance(state.next_kind, PieceKind)


def test_first_step_spawns_the_previewed_piece() -> None:
    session = GameSession(seed=1)
    previewed = session.next_kind
    result = session.step(0.0)
    assert result.state is GameState.FALLING
    assert result.active_kind == previewed
    assert result.piece_moved
    assert session.active_piece.col == 3
    assert session.active_piece.row == 19


def test_o_piece_soft_drops_and_locks_on_the_floor() -> None:
    session = _session_with(PieceKind.O)
    assert session.get_state().active_cells == {(4, 20), (5, 20), (4, 21), (5, 21)}

    _drop_to_floor(session)
    assert session.active_piece.row == -1
    assert session.get_state().active_cells == {(4, 0), (5, 0), (4, 1), (5, 1)}

    result = session.step(0.5)
    assert result.piece_locked
    assert result.board_changed
    assert result.state is GameState.SPAWNING
    assert result.active_kind is None
    assert int(result.board.sum()) == 4
    assert result.board[0, 4] and result.board[0, 5] and result.board[1, 4] and result.board[1, 5]
    assert (result.lines, result.score, result.lines_cleared) == (0, 0, 0)
    assert result.locked_kind is PieceKind.O
    assert result.locked_cells == {(4, 0), (5, 0), (4, 1), (5, 1)}

    result = session.step(0.0)
    assert not result.piece_locked
    assert result.locked_kind is None
    assert result.locked_cells == frozenset()


def test_lock_clears_lines_and_scores() -> None:
    session = _session_with(PieceKind.O)
    for row in (0, 1):
        for col in range(WIDTH):
            if col not in (4, 5):
                session.board.grid[row, col] = True

    _drop_to_floor(session)
    result = session.step(0.5)
    assert result.lines_cleared == 2
    assert result.cleared_rows == (1, 0)
    assert result.score == 300
    assert result.lines == 2
    assert not result.board.any()


def test_gravity_moves_the_piece_down() -> None:
    session = _session_with(PieceKind.T)
    session.step(0.25)
    assert session.active_piece.row == 19
    session.step(0.25)
    assert session.active_piece.row == 18


def test_soft_drop_resets_the_gravity_timer() -> None:
    session = _session_with(PieceKind.O)
    session.step(0.4)
    session.step(0.0, {Intent.SOFT_DROP})
    assert session.active_piece.row == 18
    session.step(0.2)
    assert session.active_piece.row == 18


def test_conflicting_horizontal_intents_cancel() -> None:
    session = _session_with(PieceKind.O)
    result = session.step(0.0, {Intent.MOVE_LEFT, Intent.MOVE_RIGHT})
    assert session.active_piece.col == 3
    assert not result.piece_moved

    result = session.step(0.0, {Intent.MOVE_LEFT})
    assert session.active_piece.col == 2
    assert result.piece_moved


def test_movement_stops_at_the_wall() -> None:
    session = _session_with(PieceKind.O)
    for _ in range(10):
        session.step(0.0, {Intent.MOVE_RIGHT})
    # O cells sit at dx 1-2, so the origin stops at column 7
    assert session.active_piece.col == 7


def test_rotation_against_the_wall_kicks_right() -> None:
    session = _session_with(PieceKind.I)
    for _ in range(5):
        session.step(0.0, {Intent.SOFT_DROP})
    assert session.active_piece.row == 14

    session.step(0.0, {Intent.ROTATE_RIGHT})
    assert session.active_piece.rotation == 1
    for _ in range(6):
        session.step(0.0, {Intent.MOVE_LEFT})
    assert session.active_piece.col == -1

    session.step(0.0, {Intent.ROTATE_RIGHT})
    assert session.active_piece.rotation == 2
    assert session.active_piece.col == 0
    assert session.get_state().active_cells == {(0, 16), (1, 16), (2, 16), (3, 16)}


def test_rotate_left_steps_backwards() -> None:
    session = _session_with(PieceKind.T)
    session.step(0.0, {Intent.SOFT_DROP})
    session.step(0.0, {Intent.ROTATE_LEFT})
    assert session.active_piece.rotation == 3


def test_lock_in_buffer_ends_the_game_and_freezes_state() -> None:
    session = _session_with(PieceKind.O)
    session.board.grid[0:20, 4] = True
    session.board.grid[0:20, 5] = True

    result = session.step(0.5)
    assert result.piece_locked
    assert result.game_over
    assert result.state is GameState.GAME_OVER

    board_before = session.board.get_grid()
    score_before = session.score_keeper.score
    for _ in range(5):
        result = session.step(1.0, {Intent.MOVE_LEFT, Intent.SOFT_DROP, Intent.ROTATE_RIGHT})
        assert result.game_over
        assert not result.piece_locked
        assert not result.piece_moved
    assert np.array_equal(session.board.grid, board_before)
    assert session.score_keeper.score == score_before


def test_reset_leaves_game_over() -> None:
    session = _session_with(PieceKind.O)
    session.board.grid[0:20, 4] = True
    session.step(0.5)
    assert session.game_over

    next_kind = session.next_kind
    result = session.reset()
    assert result.state is GameState.SPAWNING
    assert not result.board.any()
    assert (result.score, result.lines, result.level) == (0, 0, 0)
    assert result.next_kind == next_kind

    result = session.step(0.0)
    assert result.state is GameState.FALLING
    assert result.active_kind == next_kind


def test_spawn_overlap_tops_out() -> None:
    session = GameSession(seed=3)
    session.next_kind = PieceKind.O
    session.board.grid[20, 4] = True
    result = session.step(0.0)
    assert result.game_over
    assert not result.piece_locked


def test_spawned_pieces_follow_the_bag() -> None:
    session = GameSession(seed=11)
    kinds = []
    for _ in range(7):
        session.step(0.0)
        kinds.append(session.active_piece.kind)
        session.reset()
    assert sorted(kinds) == sorted(PieceKind)


def test_negative_delta_is_rejected() -> None:
    session = GameSession(seed=0)
    with pytest.raises(ValueError):
        session.step(-1.0)


def test_level_speeds_up_gravity() -> None:
    session = _session_with(PieceKind.O)
    session.score_keeper.register_lines_cleared(10)
    session.scheduler.level = session.score_keeper.level
    session.step(0.49)
    assert session.active_piece.row == 18


def test_snapshots_compare_and_hash_by_facts() -> None:
    session = _session_with(PieceKind.T)
    first = session.get_state()
    second = session.get_state()
    assert first == second
    assert hash(first) == hash(second)
    assert first.board is not second.board

    moved = session.step(0.0, {Intent.MOVE_LEFT})
    assert moved != first
    assert len({first, second, moved}) == 2
