import random

import pytest

from game.plane_battle.config import GameConfig
from game.plane_battle.entities import Actions, Bullet, Enemy, Player


def test_player_spawn_position(config):
    player = Player.spawn(config)
    assert (player.x, player.y) == (215.0, 520.0)
    assert player.size == 50.0
    assert player.speed == 5.0


def test_player_moves_one_step_per_signal(config):
    player = Player.spawn(config)
    player.move(Actions(left=True, up=True), config.width, config.height)
    assert (player.x, player.y) == (210.0, 515.0)


def test_opposing_signals_cancel(config):
    player = Player.spawn(config)
    player.move(Actions(left=True, right=True, up=True, down=True), config.width, config.height)
    assert (player.x, player.y) == (215.0, 520.0)


def test_player_clamped_to_arena(config):
    player = Player.spawn(config)
    for _ in range(200):
        player.move(Actions(left=True, up=True), config.width, config.height)
    assert (player.x, player.y) == (0.0, 0.0)

    for _ in range(200):
        player.move(Actions(right=True, down=True), config.width, config.height)
    assert player.x == config.width - player.size
    assert player.y == config.height - player.size


def test_player_never_leaves_arena(config):
    rng = random.Random(99)
    player = Player.spawn(config)
    for _ in range(2000):
        actions = Actions(
            left=rng.random() < 0.5,
            right=rng.random() < 0.3,
            up=rng.random() < 0.5,
            down=rng.random() < 0.3,
        )
        player.move(actions, config.width, config.height)
        assert 0.0 <= player.x <= config.width - player.size
        assert 0.0 <= player.y <= config.height - player.size


def test_move_with_zero_frames_is_noop(config):
    player = Player.spawn(config)
    player.move(Actions(left=True, down=True), config.width, config.height, frames=0.0)
    assert (player.x, player.y) == (215.0, 520.0)


def test_fire_spawns_bullet_at_nose(config):
    player = Player.spawn(config)
    bullet = player.fire(config.bullet_speed, config.bullet_size)
    assert (bullet.x, bullet.y) == (215 + 25 - 4, 520)
    assert bullet.speed == 7.0
    assert bullet.size == 8.0
    assert bullet.alive
    # Firing does not move the player
    assert (player.x, player.y) == (215.0, 520.0)


def test_bullet_leaves_top_after_75_steps(config):
    bullet = Player.spawn(config).fire()
    for _ in range(74):
        bullet.advance()
    assert bullet.y == pytest.approx(2.0)
    assert bullet.alive

    bullet.advance()
    assert bullet.y == pytest.approx(-5.0)
    assert not bullet.alive


def test_enemy_dies_below_bottom():
    enemy = Enemy(x=100.0, y=-40.0, speed=2.0)
    steps = 0
    while enemy.alive:
        enemy.advance(600.0)
        steps += 1
    assert enemy.y > 600.0
    assert enemy.y - 2.0 <= 600.0
    assert steps == 321


def test_rects_follow_position():
    bullet = Bullet(x=3.0, y=4.0)
    assert tuple(bullet.rect) == (3.0, 4.0, 8.0, 8.0)
    enemy = Enemy(x=1.0, y=2.0, speed=1.5, size=40.0)
    assert tuple(enemy.rect) == (1.0, 2.0, 40.0, 40.0)


@pytest.mark.parametrize("kwargs", [
    {"width": 0},
    {"player_size": -1},
    {"enemy_speed_min": 3.0, "enemy_speed_max": 1.0},
    {"min_spawn_interval": 2.0},
    {"fire_mode": "burst"},
    {"width": 30.0},
])
def test_invalid_config_rejected(kwargs):
    with pytest.raises(ValueError):
        GameConfig(**kwargs)
