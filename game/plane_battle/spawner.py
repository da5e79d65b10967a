"""
Timer-driven enemy spawning with score-based difficulty
"""

from __future__ import annotations

import logging
import random
from typing import Optional, Tuple

from .config import ENEMY_VARIANTS, GameConfig
from .entities import Enemy

logger = logging.getLogger(__name__)


class EnemySpawner:
    """Creates enemies above the arena at a rate that grows with the score.

    The random source is injected so a seeded ``random.Random`` gives a
    reproducible wave of enemies.
    """

    def __init__(self, config: GameConfig, rng: random.Random):
        self.config = config
        self.rng = rng

    def spawn_interval(self, score: int) -> float:
        """Seconds until the next spawn; shrinks linearly with score down to a floor"""
        cfg = self.config
        return max(cfg.min_spawn_interval,
                   cfg.base_spawn_interval - score * cfg.spawn_interval_decay)

    def maybe_spawn(self, timer: float, dt: float, score: int) -> Tuple[float, Optional[Enemy]]:
        """Tick the countdown; returns the new timer value and an enemy if one is due"""
        timer -= dt
        if timer > 0:
            return timer, None

        enemy = self._spawn_enemy()
        timer = self.spawn_interval(score)
        logger.debug("Spawned %s enemy at x=%.1f speed=%.2f (next in %.2fs)",
                     enemy.variant, enemy.x, enemy.speed, timer)
        return timer, enemy

    def _spawn_enemy(self) -> Enemy:
        cfg = self.config
        size = cfg.enemy_size
        x = self.rng.uniform(0.0, cfg.width - size)
        speed = self.rng.uniform(cfg.enemy_speed_min, cfg.enemy_speed_max)
        variant = self.rng.choice(ENEMY_VARIANTS)
        # Starts fully above the top edge
        return Enemy(x=x, y=-size, speed=speed, size=size, variant=variant)
