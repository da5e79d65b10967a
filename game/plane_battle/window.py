"""
Arcade windows: a read-only viewer for the environment and a playable game.

The simulation uses screen coordinates (y grows downward) while Arcade puts
the origin at the bottom-left, so every rectangle is flipped on the way out.
"""

import random
from typing import Optional

import arcade

from .config import GameConfig
from .entities import Actions
from .render import (BG_C, PLAYER_C, NOSE_C, BULLET_C, HUD_C, HINT_C, GAME_OVER_C,
                     ENEMY_COLORS, DEFAULT_ENEMY_C)
from .session import Session
from .utils import Rect


def _lrbt(rect: Rect, arena_height: float):
    return rect.x, rect.x + rect.w, arena_height - (rect.y + rect.h), arena_height - rect.y


def draw_session(session: Session, show_controls: bool = True):
    """Draw the current game state"""
    cfg = session.config
    h = cfg.height

    # Enemies: box with a round body
    for e in session.enemies:
        color = ENEMY_COLORS.get(e.variant, DEFAULT_ENEMY_C)
        left, right, bottom, top = _lrbt(e.rect, h)
        arcade.draw_lrbt_rectangle_filled(left, right, bottom, top, color)
        arcade.draw_circle_filled((left + right) / 2, (bottom + top) / 2, e.size / 2, color)

    for b in session.bullets:
        arcade.draw_lrbt_rectangle_filled(*_lrbt(b.rect, h), BULLET_C)

    # Player: body plus plane-shaped triangle pointing up
    left, right, bottom, top = _lrbt(session.player.rect, h)
    arcade.draw_lrbt_rectangle_filled(left, right, bottom, top, PLAYER_C)
    arcade.draw_triangle_filled((left + right) / 2, top, left, bottom, right, bottom, NOSE_C)

    # Text HUD
    arcade.draw_text(f"Score: {session.score}", 10, h - 30, HUD_C, 20)
    arcade.draw_text(f"High: {session.high_score}", cfg.width - 130, h - 30, HUD_C, 14)

    if session.is_game_over:
        arcade.draw_text("Game Over! Press SPACE to restart",
                         cfg.width / 2, h / 2, GAME_OVER_C, 20, anchor_x="center")

    if show_controls:
        arcade.draw_text("Arrow keys to move, SPACE to shoot", 10, 12, HINT_C, 12)


class PlaneBattleWindow(arcade.Window):
    """Arcade window that draws whatever session it is pointed at"""

    def __init__(self, session: Session, title: str = "Plane Battle"):
        cfg = session.config
        super().__init__(int(cfg.width), int(cfg.height), title)
        self.session = session
        self.background_color = BG_C

    def on_draw(self):
        self.clear()
        draw_session(self.session)


class PlaneBattleGame(PlaneBattleWindow):
    """Keyboard-driven game: arrows move, SPACE fires and restarts, ESC quits"""

    def __init__(self, config: Optional[GameConfig] = None, seed: Optional[int] = None):
        super().__init__(Session(config, random.Random(seed)))
        self._held = set()
        # Keys that went down since the last update; restart is edge-triggered
        self._pressed = set()

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.ESCAPE:
            self.close()
            return
        self._held.add(symbol)
        self._pressed.add(symbol)

    def on_key_release(self, symbol: int, modifiers: int):
        self._held.discard(symbol)

    def current_actions(self) -> Actions:
        held = self._held
        fire = arcade.key.SPACE in held or arcade.key.SPACE in self._pressed
        return Actions(
            left=arcade.key.LEFT in held,
            right=arcade.key.RIGHT in held,
            up=arcade.key.UP in held,
            down=arcade.key.DOWN in held,
            fire=fire,
            restart=arcade.key.SPACE in self._pressed,
        )

    def on_update(self, delta_time: float):
        self.session = self.session.step(delta_time, self.current_actions())
        self._pressed.clear()
