"""
Play Plane Battle with the keyboard.

Use: python -m game.plane_battle.play [--fire-mode continuous] [--seed 42]
"""

import argparse
import logging

import arcade

from .config import FIRE_MODES, GameConfig
from .window import PlaneBattleGame


def main():
    parser = argparse.ArgumentParser(description="Play Plane Battle")
    parser.add_argument(
        "--fire-mode",
        type=str,
        default="single",
        choices=list(FIRE_MODES),
        help="single: one bullet per press, continuous: auto-fire while held (default: single)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for enemy spawns (default: random)",
    )
    parser.add_argument(
        "--time-scaled",
        action="store_true",
        help="Scale movement by frame time instead of a fixed per-frame step",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = GameConfig(fire_mode=args.fire_mode, time_scaled=args.time_scaled)
    PlaneBattleGame(config, seed=args.seed)
    arcade.run()


if __name__ == "__main__":
    main()
