"""
7-bag randomizer.

Every cycle of seven draws dispenses each piece kind exactly once. The bag
remembers which kinds were already dispensed; a draw that hits a used kind
is rejected and redrawn.
"""

from __future__ import annotations

import logging
import random

from tetris_engine.game.pieces import PieceKind

logger = logging.getLogger(__name__)

NUM_KINDS = len(PieceKind)


class Randomizer:
    """Shuffle-bag piece sampler.

    Attributes:
        bag: Kinds already dispensed in the current cycle.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)
        self.bag: set[PieceKind] = set()

    def next(self) -> PieceKind:
        """Dispense the next piece kind."""
        if len(self.bag) >= NUM_KINDS:
            self.bag.clear()

        kind = PieceKind(self._rng.randrange(NUM_KINDS))
        while kind in self.bag:
            kind = PieceKind(self._rng.randrange(NUM_KINDS))

        self.bag.add(kind)
        return kind

    def remaining(self) -> list[PieceKind]:
        """Kinds not yet dispensed in the current cycle, in index order."""
        if len(self.bag) >= NUM_KINDS:
            return list(PieceKind)
        return [kind for kind in PieceKind if kind not in self.bag]

    def reset(self, seed: int | None = None) -> None:
        """Empty the bag, optionally reseeding the generator."""
        self.bag.clear()
        if seed is not None:
            self._rng.seed(seed)
        logger.debug("randomizer bag reset")
