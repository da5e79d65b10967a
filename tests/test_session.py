import random

import pytest

from game.plane_battle.config import GameConfig
from game.plane_battle.entities import Actions, Bullet, Enemy
from game.plane_battle.session import (
    DutyCycleFireGate, EdgeFireGate, Phase, Session, make_fire_gate,
)

DT = 1 / 60

IDLE = Actions()
FIRE = Actions(fire=True)
RESTART = Actions(restart=True)


def _enemy_on_player(session, speed=1.0):
    p = session.player
    return Enemy(x=p.x, y=p.y, speed=speed)


def test_new_session_defaults(session, config):
    assert session.phase is Phase.ACTIVE
    assert session.score == 0
    assert session.high_score == 0
    assert session.bullets == []
    assert session.enemies == []
    assert session.spawn_timer == config.base_spawn_interval
    assert (session.player.x, session.player.y) == (215.0, 520.0)


def test_fire_appends_one_bullet(quiet_session):
    session = quiet_session.step(DT, FIRE)
    assert len(session.bullets) == 1
    bullet = session.bullets[0]
    # Fired from (236, 520) and already advanced once this frame
    assert bullet.x == 236.0
    assert bullet.y == pytest.approx(513.0)
    assert session.events["shots"] == 1


def test_bullet_pruned_after_leaving_arena(quiet_session):
    session = quiet_session.step(DT, FIRE)
    bullet = session.bullets[0]
    for _ in range(73):
        session.step(DT, IDLE)
    assert session.bullets == [bullet]

    session.step(DT, IDLE)
    assert not bullet.alive
    assert session.bullets == []


def test_enemy_pruned_after_leaving_bottom(quiet_session):
    session = quiet_session
    enemy = Enemy(x=0.0, y=-40.0, speed=2.0)
    session.enemies.append(enemy)

    for _ in range(320):
        session.step(DT, IDLE)
    assert session.enemies == [enemy]

    session.step(DT, IDLE)
    assert not enemy.alive
    assert session.enemies == []
    assert session.events["escaped"] == 1
    assert session.score == 0
    assert session.phase is Phase.ACTIVE


def test_bullet_enemy_collision_scores_once(session):
    bullet = Bullet(x=100.0, y=100.0)
    enemy = Enemy(x=96.0, y=90.0, speed=2.0)
    session.bullets.append(bullet)
    session.enemies.append(enemy)

    hit_player = session.resolve_collisions()

    assert not hit_player
    assert not bullet.alive
    assert not enemy.alive
    assert session.score == 10
    assert session.bullets == []
    assert session.enemies == []


def test_one_bullet_kills_only_one_of_stacked_enemies(session):
    first = Enemy(x=96.0, y=90.0, speed=2.0)
    second = Enemy(x=96.0, y=90.0, speed=2.0)
    session.bullets.append(Bullet(x=100.0, y=100.0))
    session.enemies.extend([first, second])

    session.resolve_collisions()

    assert session.score == 10
    assert not first.alive
    assert second.alive
    assert session.enemies == [second]


def test_one_enemy_absorbs_only_one_of_stacked_bullets(session):
    first = Bullet(x=100.0, y=100.0)
    second = Bullet(x=100.0, y=100.0)
    session.bullets.extend([first, second])
    session.enemies.append(Enemy(x=96.0, y=90.0, speed=2.0))

    session.resolve_collisions()

    assert session.score == 10
    assert not first.alive
    assert second.alive
    assert session.bullets == [second]


def test_two_pairs_score_twice(session):
    session.bullets.extend([Bullet(x=10.0, y=100.0), Bullet(x=300.0, y=100.0)])
    session.enemies.extend([Enemy(x=296.0, y=90.0, speed=1.0), Enemy(x=6.0, y=90.0, speed=1.0)])

    session.resolve_collisions()

    assert session.score == 20
    assert session.bullets == []
    assert session.enemies == []


def test_dead_entities_are_skipped(session):
    dead = Bullet(x=100.0, y=100.0, alive=False)
    enemy = Enemy(x=96.0, y=90.0, speed=2.0)
    session.bullets.append(dead)
    session.enemies.append(enemy)

    session.resolve_collisions()

    assert session.score == 0
    assert enemy.alive


def test_enemy_touching_player_ends_game(quiet_session):
    session = quiet_session
    session.enemies.append(_enemy_on_player(session))

    result = session.step(DT, IDLE)

    assert result is session
    assert session.phase is Phase.GAME_OVER
    assert session.is_game_over
    assert session.events["game_over"] == 1


def test_enemy_shot_in_same_step_does_not_end_game(quiet_session):
    session = quiet_session
    p = session.player
    # Enemy overlapping both the plane's nose and a bullet sitting on it
    session.enemies.append(Enemy(x=p.x + 5, y=p.y - 38, speed=0.5))
    session.bullets.append(Bullet(x=p.x + 21, y=p.y - 10, speed=0.1))

    session.step(DT, IDLE)

    assert session.score == 10
    assert session.phase is Phase.ACTIVE


def test_game_over_ignores_everything_but_restart(quiet_session):
    session = quiet_session
    session.score = 40
    session.enemies.append(_enemy_on_player(session))
    session.step(DT, IDLE)
    assert session.is_game_over

    frozen = (session.player.x, session.player.y, session.score,
              len(session.enemies), session.spawn_timer, session.frame)
    for actions in (IDLE, FIRE, Actions(left=True, up=True)):
        assert session.step(DT, actions) is session
    assert (session.player.x, session.player.y, session.score,
            len(session.enemies), session.spawn_timer, session.frame) == frozen
    assert session.is_game_over


def test_restart_builds_fresh_session_and_keeps_high_score(quiet_session, config):
    session = quiet_session
    session.score = 30
    session.enemies.append(_enemy_on_player(session))
    session.bullets.append(Bullet(x=10.0, y=300.0))
    session.step(DT, IDLE)

    fresh = session.step(DT, RESTART)

    assert fresh is not session
    assert fresh.phase is Phase.ACTIVE
    assert fresh.score == 0
    assert fresh.high_score == 30
    assert fresh.bullets == []
    assert fresh.enemies == []
    assert fresh.spawn_timer == config.base_spawn_interval
    assert (fresh.player.x, fresh.player.y) == (215.0, 520.0)


def test_high_score_is_max_of_previous_and_final(config, rng):
    session = Session(config, rng, high_score=50)
    session.score = 20
    session.phase = Phase.GAME_OVER
    assert session.step(DT, RESTART).high_score == 50

    session = Session(config, rng, high_score=50)
    session.score = 70
    session.phase = Phase.GAME_OVER
    assert session.step(DT, RESTART).high_score == 70


def test_high_score_not_updated_while_playing(quiet_session):
    session = quiet_session
    session.bullets.append(Bullet(x=100.0, y=100.0, speed=0.0))
    session.enemies.append(Enemy(x=96.0, y=90.0, speed=0.0))
    session.step(DT, IDLE)
    assert session.score == 10
    assert session.high_score == 0


def test_zero_dt_freezes_motion_but_checks_collisions(session):
    session.spawn_timer = 0.5
    session.bullets.append(Bullet(x=100.0, y=100.0))
    session.enemies.append(Enemy(x=96.0, y=90.0, speed=2.0))
    far = Enemy(x=400.0, y=10.0, speed=3.0)
    session.enemies.append(far)

    session.step(0.0, Actions(left=True, down=True))

    assert (session.player.x, session.player.y) == (215.0, 520.0)
    assert session.spawn_timer == 0.5
    assert session.events["spawns"] == 0
    assert far.y == 10.0
    assert session.score == 10
    assert session.enemies == [far]


def test_spawner_runs_on_session_clock(config):
    session = Session(config, random.Random(3))
    frames = 0
    while not session.enemies:
        session.step(DT, IDLE)
        frames += 1
    # Default first spawn after base_spawn_interval seconds
    assert frames == pytest.approx(config.base_spawn_interval / DT, abs=1)


def test_seeded_sessions_are_deterministic(config):
    def play(seed):
        session = Session(config, random.Random(seed))
        inputs = random.Random(0)
        trace = []
        for _ in range(600):
            actions = Actions(left=inputs.random() < 0.4, right=inputs.random() < 0.4,
                              fire=inputs.random() < 0.3)
            session = session.step(DT, actions)
            trace.append((session.score, len(session.enemies), len(session.bullets),
                          round(session.player.x, 3)))
        return trace

    assert play(11) == play(11)


def test_time_scaled_movement():
    config = GameConfig(time_scaled=True)
    session = Session(config, random.Random(0))
    session.spawn_timer = 1e9
    session.step(1 / 30, Actions(left=True))
    # Two reference frames worth of motion
    assert session.player.x == pytest.approx(205.0)


# ----------------------------
# Fire gates
# ----------------------------

def test_make_fire_gate():
    assert isinstance(make_fire_gate(GameConfig()), EdgeFireGate)
    assert isinstance(make_fire_gate(GameConfig(fire_mode="continuous")), DutyCycleFireGate)


def test_single_fire_needs_a_new_press(quiet_session):
    session = quiet_session
    for _ in range(3):
        session.step(DT, FIRE)
    assert len(session.bullets) == 1

    session.step(DT, IDLE)
    session.step(DT, FIRE)
    assert len(session.bullets) == 2


def test_continuous_fire_once_per_period():
    config = GameConfig(fire_mode="continuous", fire_period=0.2)
    session = Session(config, random.Random(0))
    session.spawn_timer = 1e9

    shots = 0
    for _ in range(50):
        session.step(DT, FIRE)
        shots += session.events["shots"]

    assert shots == 5
    assert len(session.bullets) == 5


def test_duty_cycle_gate_slots():
    gate = DutyCycleFireGate(period=0.5)
    assert gate.should_fire(True, 0.1)
    assert not gate.should_fire(True, 0.4)
    assert not gate.is_ready(0.45)
    assert gate.is_ready(0.6)
    assert not gate.should_fire(False, 0.6)
    assert gate.should_fire(True, 0.7)


def test_restart_press_does_not_fire(quiet_session):
    session = quiet_session
    session.phase = Phase.GAME_OVER
    fresh = session.step(DT, Actions(fire=True, restart=True))
    fresh.spawn_timer = 1e9

    fresh.step(DT, FIRE)
    assert fresh.bullets == []

    fresh.step(DT, IDLE)
    fresh.step(DT, FIRE)
    assert len(fresh.bullets) == 1
