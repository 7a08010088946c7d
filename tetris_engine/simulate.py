"""
Headless simulation: drive sessions with random intents and report stats.

Runs without pygame. Useful as a smoke test of the rules engine and to look
at how long random play survives.
"""

from __future__ import annotations

import random
import time
from typing import Any

import numpy as np

from tetris_engine.game.tetris import GameSession, Intent

# Rotations are rarer than moves, as they would be from a human
INTENT_WEIGHTS: dict[Intent, float] = {
    Intent.MOVE_LEFT: 0.25,
    Intent.MOVE_RIGHT: 0.25,
    Intent.SOFT_DROP: 0.3,
    Intent.ROTATE_LEFT: 0.1,
    Intent.ROTATE_RIGHT: 0.1,
}


def random_intents(rng: random.Random, p_idle: float = 0.5) -> set[Intent]:
    """Pick zero or one intent for a frame."""
    if rng.random() < p_idle:
        return set()
    kinds = list(INTENT_WEIGHTS)
    return {rng.choices(kinds, weights=[INTENT_WEIGHTS[k] for k in kinds])[0]}


def run_episode(
    session: GameSession,
    rng: random.Random,
    max_steps: int = 20000,
    step_dt: float = 1.0 / 60.0,
) -> dict[str, Any]:
    """Play one game from a fresh reset.

    Returns:
        Dict with lines, score, level, steps, pieces, game_over and the
        count of each clear size.
    """
    session.reset()
    clears = {1: 0, 2: 0, 3: 0, 4: 0}
    pieces = 0
    steps = 0
    result = session.get_state()

    while steps < max_steps and not result.game_over:
        result = session.step(step_dt, random_intents(rng))
        steps += 1
        if result.piece_locked:
            pieces += 1
        if result.lines_cleared:
            tier = min(result.lines_cleared, 4)
            clears[tier] += 1

    return {
        "lines": result.lines,
        "score": result.score,
        "level": result.level,
        "steps": steps,
        "pieces": pieces,
        "game_over": result.game_over,
        "singles": clears[1],
        "doubles": clears[2],
        "triples": clears[3],
        "tetrises": clears[4],
    }


def simulate(config: dict[str, Any]) -> list[dict[str, Any]]:
    """Run several episodes and print aggregate statistics.

    Args:
        config: Config dict; reads episodes, max_steps, step_dt and seed.

    Returns:
        Per-episode records.
    """
    num_episodes = config.get("episodes", 10)
    max_steps = config.get("max_steps", 20000)
    step_dt = config.get("step_dt", 1.0 / 60.0)
    seed = config.get("seed")

    rng = random.Random(seed)
    session = GameSession(seed=seed)

    print(f"Running {num_episodes} episodes (max {max_steps} steps, dt={step_dt:.4f}s)...\n")
    start_time = time.time()

    episodes = []
    for ep in range(num_episodes):
        record = run_episode(session, rng, max_steps=max_steps, step_dt=step_dt)
        episodes.append(record)
        print(f"  Episode {ep + 1}/{num_episodes} | "
              f"Lines: {record['lines']}, Score: {record['score']}, "
              f"Pieces: {record['pieces']}, Steps: {record['steps']}")

    elapsed = time.time() - start_time
    print(f"\nSimulation complete in {elapsed:.1f}s\n")
    print_summary(episodes)
    return episodes


def print_summary(episodes: list[dict[str, Any]]) -> None:
    if not episodes:
        print("No episodes run.")
        return

    print("=" * 70)
    print("AGGREGATE STATISTICS")
    print("=" * 70)
    print(f"\n{'Metric':<25} {'Mean':>8} {'Median':>8} {'Std':>8} {'Min':>8} {'Max':>8}")
    print("-" * 70)
    for name, key in (("Lines cleared", "lines"), ("Score", "score"),
                      ("Pieces locked", "pieces"), ("Steps survived", "steps")):
        arr = np.array([ep[key] for ep in episodes])
        print(f"{name:<25} {arr.mean():>8.1f} {np.median(arr):>8.1f} "
              f"{arr.std():>8.1f} {arr.min():>8} {arr.max():>8}")

    print("\n--- Line Clear Distribution ---")
    for label, key in (("Singles", "singles"), ("Doubles", "doubles"),
                       ("Triples", "triples"), ("Tetrises", "tetrises")):
        print(f"  {label + ':':<10} {sum(ep[key] for ep in episodes):>5}")

    topped_out = sum(1 for ep in episodes if ep["game_over"])
    print(f"\n  Games ended by top-out: {topped_out}/{len(episodes)}")
