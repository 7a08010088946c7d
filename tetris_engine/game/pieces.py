"""
Tetromino definitions: the seven piece kinds and their 4 rotation states.

Every piece lives in a fixed 4x4 box. Each rotation state is a 4x4 boolean
mask; rotation order is clockwise (0 -> 1 -> 2 -> 3 -> 0).

Coordinate convention:
  - Masks are indexed [dy, dx] relative to the piece's origin, which is the
    bottom-left corner of the 4x4 box (not necessarily a filled cell).
  - dy = 0 is the lowest local row and grows upward, matching the board
    where row 0 is the floor.
  - The literal tables below are written top row first so they read like
    the piece looks on screen; they are flipped once at import.
"""

from __future__ import annotations

import enum

import numpy as np


class PieceKind(enum.IntEnum):
    """The seven piece kinds, in randomizer index order."""
    I = 0
    L = 1
    J = 2
    O = 3
    S = 4
    Z = 5
    T = 6


PIECE_SIZE = 4
NUM_ROTATIONS = 4

# =============================================================================
# Piece Colors (RGB), consumed by rendering only
# =============================================================================

COLOR_CYAN   = (77, 255, 255)   # I
COLOR_ORANGE = (255, 168, 0)    # L
COLOR_BLUE   = (51, 51, 255)    # J
COLOR_YELLOW = (255, 255, 77)   # O
COLOR_GREEN  = (77, 255, 77)    # S
COLOR_RED    = (255, 77, 77)    # Z
COLOR_PURPLE = (191, 77, 255)   # T

PIECE_COLORS: dict[PieceKind, tuple[int, int, int]] = {
    PieceKind.I: COLOR_CYAN,
    PieceKind.L: COLOR_ORANGE,
    PieceKind.J: COLOR_BLUE,
    PieceKind.O: COLOR_YELLOW,
    PieceKind.S: COLOR_GREEN,
    PieceKind.Z: COLOR_RED,
    PieceKind.T: COLOR_PURPLE,
}

# =============================================================================
# Rotation tables (top row first)
# =============================================================================

_ROTATION_TABLE: dict[PieceKind, list[list[str]]] = {
    PieceKind.I: [
        ["....",
         "....",
         "####",
         "...."],
        [".#..",
         ".#..",
         ".#..",
         ".#.."],
        ["....",
         "####",
         "....",
         "...."],
        ["..#.",
         "..#.",
         "..#.",
         "..#."],
    ],
    PieceKind.L: [
        ["....",
         "...#",
         ".###",
         "...."],
        ["....",
         "..#.",
         "..#.",
         "..##"],
        ["....",
         "....",
         ".###",
         ".#.."],
        ["....",
         ".##.",
         "..#.",
         "..#."],
    ],
    PieceKind.J: [
        ["....",
         ".#..",
         ".###",
         "...."],
        ["....",
         "..##",
         "..#.",
         "..#."],
        ["....",
         "....",
         ".###",
         "...#"],
        ["....",
         "..#.",
         "..#.",
         ".##."],
    ],
    PieceKind.O: [
        ["....",
         ".##.",
         ".##.",
         "...."],
    ] * NUM_ROTATIONS,
    PieceKind.S: [
        ["....",
         "..##",
         ".##.",
         "...."],
        ["....",
         "..#.",
         "..##",
         "...#"],
        ["....",
         "....",
         "..##",
         ".##."],
        ["....",
         ".#..",
         ".##.",
         "..#."],
    ],
    PieceKind.Z: [
        ["....",
         ".##.",
         "..##",
         "...."],
        ["....",
         "...#",
         "..##",
         "..#."],
        ["....",
         "....",
         ".##.",
         "..##"],
        ["....",
         "..#.",
         ".##.",
         ".#.."],
    ],
    PieceKind.T: [
        ["....",
         "..#.",
         ".###",
         "...."],
        ["....",
         "..#.",
         "..##",
         "..#."],
        ["....",
         "....",
         ".###",
         "..#."],
        ["....",
         "..#.",
         ".##.",
         "..#."],
    ],
}


def _build_mask(rows: list[str]) -> np.ndarray:
    mask = np.array([[ch == "#" for ch in row] for row in rows], dtype=bool)
    # Flip so that index 0 is the bottom row
    mask = np.flipud(mask).copy()
    mask.setflags(write=False)
    return mask


SHAPE_MASKS: dict[PieceKind, tuple[np.ndarray, ...]] = {
    kind: tuple(_build_mask(rows) for rows in rotations)
    for kind, rotations in _ROTATION_TABLE.items()
}

# (dx, dy) offsets of the filled cells, precomputed per (kind, rotation)
_CELL_OFFSETS: dict[PieceKind, tuple[tuple[tuple[int, int], ...], ...]] = {
    kind: tuple(
        tuple((int(dx), int(dy)) for dy, dx in np.argwhere(mask))
        for mask in masks
    )
    for kind, masks in SHAPE_MASKS.items()
}


def _coerce_kind(kind: PieceKind) -> PieceKind:
    # bool is an int subclass; True would otherwise map to L
    if isinstance(kind, bool):
        raise ValueError(f"Invalid piece kind: {kind!r}")
    try:
        return PieceKind(kind)
    except ValueError:
        raise ValueError(f"Invalid piece kind: {kind!r}") from None


def _check(kind: PieceKind, rotation: int) -> PieceKind:
    kind = _coerce_kind(kind)
    if isinstance(rotation, bool) or not isinstance(rotation, (int, np.integer)):
        raise ValueError(f"Rotation must be an int in 0-3, got {rotation!r}")
    if not 0 <= rotation < NUM_ROTATIONS:
        raise ValueError(f"Rotation must be in 0-3, got {rotation}")
    return kind


def shape_mask(kind: PieceKind, rotation: int) -> np.ndarray:
    """Return the 4x4 occupancy mask for a piece kind in a rotation state.

    Args:
        kind: Piece kind.
        rotation: Rotation state index (0-3).

    Returns:
        Read-only bool array of shape (4, 4), indexed [dy, dx].

    Raises:
        ValueError: If the kind or rotation is out of range.
    """
    kind = _check(kind, rotation)
    return SHAPE_MASKS[kind][rotation]


def piece_cells(kind: PieceKind, rotation: int) -> tuple[tuple[int, int], ...]:
    """Return the (dx, dy) offsets of the filled cells of a mask."""
    kind = _check(kind, rotation)
    return _CELL_OFFSETS[kind][rotation]


def display_color(kind: PieceKind) -> tuple[int, int, int]:
    """Return the RGB display color of a piece kind."""
    return PIECE_COLORS[_coerce_kind(kind)]
