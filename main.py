"""
Entry point for the Tetris engine.

Supports two modes:
  - play:     Play with keyboard controls (requires pygame).
  - simulate: Run headless games with random input and print statistics.

Usage:
    python main.py --mode play
    python main.py --mode simulate --episodes 20 --seed 7
    python main.py --mode play --config config/settings.yaml
"""

from __future__ import annotations

import argparse
import pathlib
import sys

import yaml

from tetris_engine.utils.logging import setup_logger


def load_config(config_path: str | pathlib.Path) -> dict:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Dict of configuration key-value pairs (empty for an empty file).

    Raises:
        FileNotFoundError: If the config file does not exist.
    """
    config_path = pathlib.Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Tetris engine: play or simulate the classic 10x22 game.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--mode",
        type=str,
        choices=["play", "simulate"],
        default="play",
        help="Run mode: 'play' (manual play) or 'simulate' (headless random play).",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config/settings.yaml",
        help="Path to the YAML configuration file.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the piece randomizer (overrides the config file).",
    )
    parser.add_argument(
        "--episodes",
        type=int,
        default=None,
        help="Number of games in 'simulate' mode (overrides the config file).",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=None,
        help="Frame rate for 'play' mode (overrides the config file).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main entry point: parse args, load config, and dispatch to the selected mode."""
    args = parse_args(argv)
    config = load_config(args.config)
    for key in ("seed", "episodes", "fps"):
        value = getattr(args, key)
        if value is not None:
            config[key] = value

    setup_logger(
        use_rich=config.get("use_rich", True),
        level=config.get("log_level", "info"),
    )

    if args.mode == "play":
        from tetris_engine.play import play_manual
        play_manual(config)

    elif args.mode == "simulate":
        from tetris_engine.simulate import simulate
        simulate(config)

    else:
        print(f"Unknown mode: {args.mode}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
