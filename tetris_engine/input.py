"""
Key-hold to intent conversion for the front end.

The engine consumes discrete intents. This module turns held keys into
repeated MoveLeft/MoveRight/SoftDrop intents at a fixed repeat interval, and
passes rotation key presses through once per press.
"""

from __future__ import annotations

from tetris_engine.game.tetris import Intent

SOFT_DROP_REPEAT = 0.05
HORIZONTAL_REPEAT = 0.085

# A fresh press starts the timer this close to the delay, so the first move
# fires almost immediately.
INITIAL_FRACTION = 0.9


class KeyRepeat:
    """Repeat timer for one held key (or key pair).

    Attributes:
        delay: Seconds between repeated firings.
        elapsed: Time accumulated since the last firing.
    """

    def __init__(self, delay: float) -> None:
        if delay <= 0:
            raise ValueError(f"Repeat delay must be > 0, got {delay}")
        self.delay = delay
        self.elapsed = delay * INITIAL_FRACTION

    def update(self, delta_time: float, held: bool) -> bool:
        """Advance the timer; return True when the key should fire."""
        if not held:
            self.release()
            return False
        self.elapsed += delta_time
        if self.elapsed > self.delay:
            self.elapsed = 0.0
            return True
        return False

    def release(self) -> None:
        self.elapsed = self.delay * INITIAL_FRACTION


class IntentMapper:
    """Builds the per-frame intent set from key state."""

    def __init__(
        self,
        soft_drop_repeat: float = SOFT_DROP_REPEAT,
        horizontal_repeat: float = HORIZONTAL_REPEAT,
    ) -> None:
        self.soft_drop = KeyRepeat(soft_drop_repeat)
        self.horizontal = KeyRepeat(horizontal_repeat)
        self._direction = 0

    def update(
        self,
        delta_time: float,
        left_held: bool = False,
        right_held: bool = False,
        down_held: bool = False,
        rotate_left_pressed: bool = False,
        rotate_right_pressed: bool = False,
    ) -> set[Intent]:
        """Return the intents for this frame.

        Left and right held together cancel each other. Changing direction
        re-arms the horizontal timer.
        """
        intents: set[Intent] = set()

        if self.soft_drop.update(delta_time, down_held):
            intents.add(Intent.SOFT_DROP)

        direction = int(right_held) - int(left_held)
        if direction != self._direction:
            self.horizontal.release()
            self._direction = direction
        if self.horizontal.update(delta_time, direction != 0):
            intents.add(Intent.MOVE_RIGHT if direction > 0 else Intent.MOVE_LEFT)

        if rotate_left_pressed:
            intents.add(Intent.ROTATE_LEFT)
        if rotate_right_pressed:
            intents.add(Intent.ROTATE_RIGHT)
        return intents
