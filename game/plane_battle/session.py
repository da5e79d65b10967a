"""
Session state and the per-frame simulation step
------------------------------------------------
A Session owns the player, the bullets, the enemies, the score and the
phase. Drivers call ``session = session.step(dt, actions)`` once per frame and
then read the state to draw it. ``step`` returns a brand new Session when a
restart is accepted, so always keep the returned object.

Update order while active:
    1. player motion
    2. fire gating (append bullet)
    3. advance bullets, prune dead ones
    4. spawner tick (append enemy)
    5. advance enemies, prune dead ones
    6. collisions (bullet x enemy, then enemy x player)
    7. game over if the player was hit
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Dict, List, Optional

from .config import GameConfig
from .entities import Actions, Bullet, Enemy, Player
from .spawner import EnemySpawner
from .utils import overlaps

logger = logging.getLogger(__name__)


class Phase(Enum):
    ACTIVE = "active"
    GAME_OVER = "game_over"


# ----------------------------
# Fire gating
# ----------------------------

class EdgeFireGate:
    """One bullet per press of the fire signal"""

    def __init__(self):
        self._was_pressed = False

    def prime(self, pressed: bool):
        self._was_pressed = pressed

    def should_fire(self, pressed: bool, clock: float) -> bool:
        fire = pressed and not self._was_pressed
        self._was_pressed = pressed
        return fire

    def is_ready(self, clock: float) -> bool:
        return not self._was_pressed


class DutyCycleFireGate:
    """Auto-fire while held: at most one bullet per ``period`` slot of the clock"""

    def __init__(self, period: float):
        self.period = period
        self._last_slot: Optional[int] = None

    def prime(self, pressed: bool):
        pass

    def _slot(self, clock: float) -> int:
        return int(clock // self.period)

    def should_fire(self, pressed: bool, clock: float) -> bool:
        if not pressed:
            return False
        slot = self._slot(clock)
        if slot == self._last_slot:
            return False
        self._last_slot = slot
        return True

    def is_ready(self, clock: float) -> bool:
        return self._slot(clock) != self._last_slot


def make_fire_gate(config: GameConfig):
    if config.fire_mode == "continuous":
        return DutyCycleFireGate(config.fire_period)
    return EdgeFireGate()


def _empty_events() -> Dict[str, int]:
    return {"shots": 0, "kills": 0, "spawns": 0, "escaped": 0, "game_over": 0}


# ----------------------------
# Session
# ----------------------------

class Session:
    """One game from first frame to game over"""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
        high_score: int = 0,
    ):
        self.config = config if config is not None else GameConfig()
        self.rng = rng if rng is not None else random.Random()

        self.spawner = EnemySpawner(self.config, self.rng)
        self.fire_gate = make_fire_gate(self.config)

        # World state
        self.player = Player.spawn(self.config)
        self.bullets: List[Bullet] = []
        self.enemies: List[Enemy] = []

        self.score = 0
        self.high_score = high_score
        self.spawn_timer = self.config.base_spawn_interval
        self.phase = Phase.ACTIVE

        # Step state
        self.frame = 0
        self.clock = 0.0

        # What happened during the last step (for rewards / HUD)
        self.events: Dict[str, int] = _empty_events()

    @property
    def is_game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    def restart(self, fire_held: bool = False) -> "Session":
        """Build the next session, carrying the best score over"""
        high_score = max(self.high_score, self.score)
        logger.info("Restarting (final score %d, high score %d)", self.score, high_score)
        fresh = Session(self.config, self.rng, high_score=high_score)
        # The press that restarted the game must not also shoot
        fresh.fire_gate.prime(fire_held)
        return fresh

    def step(self, dt: float, actions: Actions) -> "Session":
        if self.phase is Phase.GAME_OVER:
            if actions.restart:
                return self.restart(fire_held=actions.fire)
            return self

        self.events = _empty_events()
        self.frame += 1
        self.clock += dt

        cfg = self.config
        frames = self._frames(dt)

        self.player.move(actions, cfg.width, cfg.height, frames)

        if self.fire_gate.should_fire(actions.fire, self.clock):
            self.bullets.append(self.player.fire(cfg.bullet_speed, cfg.bullet_size))
            self.events["shots"] += 1

        for b in self.bullets:
            b.advance(frames)
        self.bullets = [b for b in self.bullets if b.alive]

        self.spawn_timer, enemy = self.spawner.maybe_spawn(self.spawn_timer, dt, self.score)
        if enemy is not None:
            self.enemies.append(enemy)
            self.events["spawns"] += 1

        for e in self.enemies:
            e.advance(cfg.height, frames)
        remaining = [e for e in self.enemies if e.alive]
        self.events["escaped"] += len(self.enemies) - len(remaining)
        self.enemies = remaining

        if self.resolve_collisions():
            self.phase = Phase.GAME_OVER
            self.events["game_over"] = 1
            logger.info("Game over at frame %d with score %d", self.frame, self.score)

        return self

    def resolve_collisions(self) -> bool:
        """Bullets vs enemies, then enemies vs player.

        Returns True if a live enemy touches the player.
        """
        cfg = self.config

        for b in self.bullets:
            if not b.alive:
                continue
            for e in self.enemies:
                if not e.alive:
                    continue
                if overlaps(b.rect, e.rect):
                    b.alive = False
                    e.alive = False
                    self.score += cfg.score_per_kill
                    self.events["kills"] += 1
                    break

        # Cleanup after bullet collisions
        self.bullets = [b for b in self.bullets if b.alive]
        self.enemies = [e for e in self.enemies if e.alive]

        player_rect = self.player.rect
        for e in self.enemies:
            if overlaps(e.rect, player_rect):
                return True
        return False

    def _frames(self, dt: float) -> float:
        """How many reference frames of motion this step covers"""
        if self.config.time_scaled:
            return dt * self.config.reference_fps
        # Fixed per-frame step; a zero-length frame is a paused frame
        return 1.0 if dt > 0 else 0.0
