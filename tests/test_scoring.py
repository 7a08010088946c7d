from __future__ import annotations

import pytest

from tetris_engine.game.scoring import ScoreKeeper, points_for


@pytest.mark.parametrize(
    ("lines", "points"),
    [(0, 0), (1, 100), (2, 300), (3, 600), (4, 1000), (6, 1000)],
)
def test_points_table(lines: int, points: int) -> None:
    assert points_for(lines) == points


def test_four_lines_from_six_levels_up() -> None:
    keeper = ScoreKeeper()
    keeper.register_lines_cleared(3)
    keeper.register_lines_cleared(3)
    assert (keeper.lines, keeper.level, keeper.score) == (6, 0, 1200)

    gained = keeper.register_lines_cleared(4)
    assert gained == 1000
    assert keeper.lines == 10
    assert keeper.level == 1
    assert keeper.score == 2200


def test_large_clear_raises_several_levels() -> None:
    keeper = ScoreKeeper()
    keeper.register_lines_cleared(25)
    assert keeper.level == 2
    assert keeper.score == 1000


def test_zero_lines_changes_nothing() -> None:
    keeper = ScoreKeeper()
    assert keeper.register_lines_cleared(0) == 0
    assert (keeper.lines, keeper.level, keeper.score) == (0, 0, 0)


def test_negative_count_is_rejected() -> None:
    with pytest.raises(ValueError, match="Line count"):
        ScoreKeeper().register_lines_cleared(-1)


def test_reset_zeroes_counters() -> None:
    keeper = ScoreKeeper()
    keeper.register_lines_cleared(12)
    keeper.reset()
    assert (keeper.lines, keeper.level, keeper.score) == (0, 0, 0)
