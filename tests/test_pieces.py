from __future__ import annotations

import numpy as np
import pytest

from tetris_engine.game.pieces import (
    PIECE_COLORS,
    PieceKind,
    display_color,
    piece_cells,
    shape_mask,
)


def test_every_mask_is_4x4_with_four_cells() -> None:
    for kind in PieceKind:
        for rotation in range(4):
            mask = shape_mask(kind, rotation)
            assert mask.shape == (4, 4)
            assert mask.dtype == bool
            assert int(mask.sum()) == 4


def test_masks_are_read_only() -> None:
    mask = shape_mask(PieceKind.T, 0)
    with pytest.raises(ValueError):
        mask[0, 0] = True


def test_o_piece_is_identical_in_all_rotations() -> None:
    base = shape_mask(PieceKind.O, 0)
    for rotation in range(1, 4):
        assert np.array_equal(shape_mask(PieceKind.O, rotation), base)


def test_i_piece_alternates_horizontal_and_vertical() -> None:
    assert sorted(piece_cells(PieceKind.I, 0)) == [(0, 1), (1, 1), (2, 1), (3, 1)]
    assert sorted(piece_cells(PieceKind.I, 1)) == [(1, 0), (1, 1), (1, 2), (1, 3)]
    assert sorted(piece_cells(PieceKind.I, 2)) == [(0, 2), (1, 2), (2, 2), (3, 2)]
    assert sorted(piece_cells(PieceKind.I, 3)) == [(2, 0), (2, 1), (2, 2), (2, 3)]


def test_mask_rows_are_indexed_from_the_bottom() -> None:
    # L spawn: bar on dy=1 with the hook up at the right end
    mask = shape_mask(PieceKind.L, 0)
    assert mask[1, 1] and mask[1, 2] and mask[1, 3]
    assert mask[2, 3]
    assert not mask[0].any() and not mask[3].any()


def test_rotations_are_distinct_for_asymmetric_pieces() -> None:
    for kind in (PieceKind.L, PieceKind.J, PieceKind.T):
        cells = {tuple(sorted(piece_cells(kind, r))) for r in range(4)}
        assert len(cells) == 4


@pytest.mark.parametrize("rotation", [-1, 4, 7])
def test_shape_mask_rejects_bad_rotation(rotation: int) -> None:
    with pytest.raises(ValueError, match="Rotation"):
        shape_mask(PieceKind.I, rotation)


def test_shape_mask_rejects_bad_kind() -> None:
    with pytest.raises(ValueError, match="Invalid piece kind"):
        shape_mask(7, 0)


@pytest.mark.parametrize("kind", [True, False])
def test_bool_is_not_a_piece_kind(kind: bool) -> None:
    with pytest.raises(ValueError, match="Invalid piece kind"):
        shape_mask(kind, 0)
    with pytest.raises(ValueError, match="Invalid piece kind"):
        display_color(kind)


def test_display_color_covers_every_kind() -> None:
    assert set(PIECE_COLORS) == set(PieceKind)
    assert display_color(PieceKind.I) == (77, 255, 255)
    with pytest.raises(ValueError):
        display_color(42)
