"""
Gameplay constants for Plane Battle
"""

from dataclasses import dataclass
from typing import Tuple

FIRE_MODES = ("single", "continuous")

ENEMY_VARIANTS: Tuple[str, ...] = ("saucer", "dart", "brick")


@dataclass(frozen=True)
class GameConfig:
    """All tunables of the simulation. Distances are px, times are seconds."""

    # Arena
    width: float = 480.0
    height: float = 600.0

    # Player
    player_speed: float = 5.0  # px per frame
    player_size: float = 50.0
    player_bottom_margin: float = 80.0

    # Bullets
    bullet_speed: float = 7.0
    bullet_size: float = 8.0

    # Enemies
    enemy_size: float = 40.0
    enemy_speed_min: float = 1.0
    enemy_speed_max: float = 3.0

    # Spawning / difficulty
    base_spawn_interval: float = 1.0
    min_spawn_interval: float = 0.35
    spawn_interval_decay: float = 0.002  # seconds shaved off per score point

    # Scoring
    score_per_kill: int = 10

    # Fire gating: "single" = one bullet per press, "continuous" = auto-fire while held
    fire_mode: str = "single"
    fire_period: float = 0.2

    # Movement: False keeps the fixed per-frame step of the arcade original
    time_scaled: bool = False
    reference_fps: float = 60.0

    def __post_init__(self):
        for name in ("width", "height", "player_size", "bullet_size", "enemy_size",
                     "player_speed", "bullet_speed", "fire_period", "reference_fps"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        biggest = max(self.player_size, self.enemy_size, self.bullet_size)
        if biggest > self.width or biggest > self.height:
            raise ValueError(f"Arena {self.width}x{self.height} is smaller than an entity ({biggest})")
        if not 0 < self.enemy_speed_min <= self.enemy_speed_max:
            raise ValueError(
                f"Invalid enemy speed range [{self.enemy_speed_min}, {self.enemy_speed_max}]"
            )
        if not 0 < self.min_spawn_interval <= self.base_spawn_interval:
            raise ValueError(
                f"Invalid spawn intervals: min={self.min_spawn_interval}, base={self.base_spawn_interval}"
            )
        if self.spawn_interval_decay < 0:
            raise ValueError("spawn_interval_decay must be >= 0")
        if self.fire_mode not in FIRE_MODES:
            raise ValueError(f"Unknown fire_mode: {self.fire_mode!r} (expected one of {FIRE_MODES})")

    @property
    def player_start(self) -> Tuple[float, float]:
        return (self.width / 2 - self.player_size / 2,
                self.height - self.player_bottom_margin)
