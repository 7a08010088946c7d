from __future__ import annotations

import pytest

pygame = pytest.importorskip("pygame")

from tetris_engine.game.pieces import PieceKind  # noqa: E402
from tetris_engine.game.tetris import GameSession, GameState, Intent  # noqa: E402
from tetris_engine.play import handle_keydown  # noqa: E402


def test_restart_works_mid_game() -> None:
    session = GameSession(seed=0)
    session.next_kind = PieceKind.O
    session.step(0.0)
    for _ in range(30):
        session.step(0.0, {Intent.SOFT_DROP})
    session.step(0.5)
    session.score_keeper.register_lines_cleared(1)
    assert session.board.occupied_count() == 4
    assert not session.game_over

    assert handle_keydown(session, pygame.K_r) is None
    assert session.state is GameState.SPAWNING
    assert session.board.occupied_count() == 0
    assert session.score_keeper.score == 0


def test_restart_after_game_over() -> None:
    session = GameSession(seed=0)
    session.state = GameState.GAME_OVER
    handle_keydown(session, pygame.K_r)
    assert not session.game_over


@pytest.mark.parametrize(
    ("key", "action"),
    [
        ("K_ESCAPE", "quit"),
        ("K_z", "rotate_left"),
        ("K_x", "rotate_right"),
        ("K_UP", "rotate_right"),
        ("K_SPACE", None),
    ],
)
def test_key_actions(key: str, action: str | None) -> None:
    session = GameSession(seed=0)
    session.step(0.0)
    assert handle_keydown(session, getattr(pygame, key)) == action
    assert session.state is GameState.FALLING
