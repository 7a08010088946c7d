"""
Manual play mode.

A human plays with the keyboard; frames are driven by the pygame clock and
fed to GameSession.step as (delta_time, intents).
"""

from __future__ import annotations

import logging
from typing import Any

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from tetris_engine.game.tetris import GameSession
from tetris_engine.input import HORIZONTAL_REPEAT, SOFT_DROP_REPEAT, IntentMapper
from tetris_engine.renderer import TetrisRenderer

logger = logging.getLogger(__name__)


def handle_keydown(session: GameSession, key: int) -> str | None:
    """Apply a single key press.

    Restart is handled here and works mid-game as well as after a top-out.

    Returns:
        "quit", "rotate_left", "rotate_right", or None when the key needs no
        further handling by the loop.
    """
    if key == pygame.K_ESCAPE:
        return "quit"
    if key == pygame.K_r:
        session.reset()
        return None
    if key == pygame.K_z:
        return "rotate_left"
    if key in (pygame.K_x, pygame.K_UP):
        return "rotate_right"
    return None


def play_manual(config: dict[str, Any]) -> None:
    """Run the game in manual (human) play mode.

    Controls:
      - Left/Right arrow: move piece
      - Down arrow: soft drop
      - Z: rotate left
      - X / Up arrow: rotate right
      - R: restart (any time)
      - Escape / close window: quit

    Args:
        config: Config dict loaded from settings.yaml.
    """
    if pygame is None:
        raise ImportError("pygame is required for play mode. Install it: pip install pygame")

    cell_size = config.get("cell_size", 30)
    fps = config.get("fps", 60)

    session = GameSession(seed=config.get("seed"))
    mapper = IntentMapper(
        soft_drop_repeat=config.get("soft_drop_repeat", SOFT_DROP_REPEAT),
        horizontal_repeat=config.get("horizontal_repeat", HORIZONTAL_REPEAT),
    )
    renderer = TetrisRenderer(cell_size=cell_size)
    # pygame must be initialized before event.get()
    renderer.render(session.get_state())
    clock = pygame.time.Clock()

    running = True
    while running:
        delta_time = clock.tick(fps) / 1000.0
        rotate_left = rotate_right = False

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                action = handle_keydown(session, event.key)
                if action == "quit":
                    running = False
                elif action == "rotate_left":
                    rotate_left = True
                elif action == "rotate_right":
                    rotate_right = True

        if not running:
            break

        keys = pygame.key.get_pressed()
        intents = mapper.update(
            delta_time,
            left_held=keys[pygame.K_LEFT],
            right_held=keys[pygame.K_RIGHT],
            down_held=keys[pygame.K_DOWN],
            rotate_left_pressed=rotate_left,
            rotate_right_pressed=rotate_right,
        )
        result = session.step(delta_time, intents)
        if result.lines_cleared:
            logger.debug("rows removed: %s", list(result.cleared_rows))
        renderer.render(result)

    renderer.close()
