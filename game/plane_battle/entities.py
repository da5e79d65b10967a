"""
Game entity dataclasses
"""

from dataclasses import dataclass

from .config import GameConfig
from .utils import Rect, clamp


@dataclass(frozen=True)
class Actions:
    """Abstract input signals for one frame"""
    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    fire: bool = False
    restart: bool = False


@dataclass
class Bullet:
    """Bullet projectile flying straight up"""
    x: float
    y: float
    speed: float = 7.0
    size: float = 8.0
    alive: bool = True

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.size, self.size)

    def advance(self, frames: float = 1.0):
        self.y -= self.speed * frames
        # Left through the top of the arena
        if self.y < 0:
            self.alive = False


@dataclass
class Enemy:
    """Enemy falling straight down"""
    x: float
    y: float
    speed: float
    size: float = 40.0
    variant: str = "saucer"  # cosmetic only
    alive: bool = True

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.size, self.size)

    def advance(self, arena_height: float, frames: float = 1.0):
        self.y += self.speed * frames
        if self.y > arena_height:
            self.alive = False


@dataclass
class Player:
    """Player plane"""
    x: float
    y: float
    speed: float = 5.0
    size: float = 50.0

    @classmethod
    def spawn(cls, config: GameConfig) -> "Player":
        x, y = config.player_start
        return cls(x=x, y=y, speed=config.player_speed, size=config.player_size)

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.size, self.size)

    def move(self, actions: Actions, width: float, height: float, frames: float = 1.0):
        """Apply directional signals, then keep the whole plane inside the arena.

        Opposing signals simply cancel out since each one adds its own step.
        """
        step = self.speed * frames
        if actions.left:
            self.x -= step
        if actions.right:
            self.x += step
        if actions.up:
            self.y -= step
        if actions.down:
            self.y += step

        self.x = clamp(self.x, 0.0, width - self.size)
        self.y = clamp(self.y, 0.0, height - self.size)

    def fire(self, bullet_speed: float = 7.0, bullet_size: float = 8.0) -> Bullet:
        """New bullet centred on the plane's nose. Caller owns rate limiting."""
        return Bullet(
            x=self.x + self.size / 2 - bullet_size / 2,
            y=self.y,
            speed=bullet_speed,
            size=bullet_size,
        )
