"""
PlaneBattleEnv - Gymnasium wrapper around the Plane Battle session
------------------------------------------------------------------
- 1 RL agent that flies the plane and shoots straight up
- Enemies fall from the top at random speeds; touching one ends the episode
- Vector observation: plane state + spawn timer + top-K nearest enemies
- MultiDiscrete action space: [horizontal(3), vertical(3), fire(2)]
- Arcade window for "human" rendering, numpy rasterizer for "rgb_array"

Install:
    pip install -e .

Quick test:
    python -m game.plane_battle.plane_battle_env
"""

from __future__ import annotations

import math
import random
import time
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import GameConfig
from .entities import Actions
from .render import rasterize
from .session import Session
from .utils import clamp, seed_everything

DEFAULT_REWARDS = {
    "R_KILL": 1.0,     # enemy destroyed
    "R_SHOT": 0.01,    # cost per bullet (discourage spraying)
    "R_ALIVE": 0.001,  # per step survived
    "R_DEATH": 5.0,    # collision with an enemy
}


class PlaneBattleEnv(gym.Env):
    """Vertical shooter environment on top of :class:`Session`"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        obs_mode: str = "vector",
        width: float = 480.0,
        height: float = 600.0,
        dt: float = 1 / 60,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_enemies: int = 5,
        fire_mode: str = "continuous",
        fire_period: float = 0.2,
        time_scaled: bool = False,
        reward_config: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert obs_mode in ("vector",), "Only 'vector' observations are implemented."
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode: {render_mode}"
        self.render_mode = render_mode
        self.obs_mode = obs_mode

        self.config = GameConfig(
            width=width,
            height=height,
            fire_mode=fire_mode,
            fire_period=fire_period,
            time_scaled=time_scaled,
        )
        self.dt = dt
        self.max_steps = max_steps
        self.k_enemies = k_enemies

        self.rewards = dict(DEFAULT_REWARDS)
        if reward_config:
            self.rewards.update({k: v for k, v in reward_config.items() if k in DEFAULT_REWARDS})

        # Action space:
        # horizontal: 0 none, 1 left, 2 right
        # vertical: 0 none, 1 up, 2 down
        # fire: 0/1
        self.action_space = spaces.MultiDiscrete([3, 3, 2])

        # Observation space (vector)
        # Plane: pos(2) fire_ready(1) spawn_timer(1)
        # Each enemy: rel pos(2) speed(1)
        obs_dim = 2 + 1 + 1 + (self.k_enemies * 3)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None

        self.session: Session = None  # type: ignore

        # Episode counters
        self._step_count = 0
        self._kills = 0
        self._shots = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        # Enemy waves follow the env's seeded generator
        rng = random.Random(int(self.np_random.integers(0, 2**31 - 1)))
        if self.session is None:
            self.session = Session(self.config, rng)
        else:
            self.session = Session(
                self.config, rng,
                high_score=max(self.session.high_score, self.session.score),
            )

        self._step_count = 0
        self._kills = 0
        self._shots = 0

        return self._get_obs(), self._get_info()

    def step(self, action):
        horizontal, vertical, fire = int(action[0]), int(action[1]), int(action[2])
        actions = Actions(
            left=horizontal == 1,
            right=horizontal == 2,
            up=vertical == 1,
            down=vertical == 2,
            fire=fire == 1,
        )

        self.session = self.session.step(self.dt, actions)
        events = self.session.events
        self._kills += events["kills"]
        self._shots += events["shots"]

        reward = self._compute_reward(events)

        terminated = self.session.is_game_over
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        cfg = self.config
        player = self.session.player

        px = player.x / max(1e-6, cfg.width - player.size)
        py = player.y / max(1e-6, cfg.height - player.size)
        ready = 1.0 if self.session.fire_gate.is_ready(self.session.clock) else -1.0
        timer = self.session.spawn_timer / cfg.base_spawn_interval

        obs_parts = [px * 2 - 1, py * 2 - 1,  # map to [-1,1]
                     ready,
                     clamp(timer * 2 - 1, -1, 1)]

        # Enemies: top-K nearest (centre to centre)
        cx = player.x + player.size / 2
        cy = player.y + player.size / 2
        enemies_sorted = sorted(
            self.session.enemies,
            key=lambda e: math.hypot(e.x + e.size / 2 - cx, e.y + e.size / 2 - cy),
        )
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                e = enemies_sorted[i]
                dx = (e.x + e.size / 2 - cx) / cfg.width
                dy = (e.y + e.size / 2 - cy) / cfg.height
                speed = e.speed / cfg.enemy_speed_max
                obs_parts += [
                    clamp(dx, -1, 1),
                    clamp(dy, -1, 1),
                    clamp(speed * 2 - 1, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, events: Dict[str, int]) -> float:
        r = self.rewards
        reward = 0.0

        reward += r["R_KILL"] * events["kills"]
        reward -= r["R_SHOT"] * events["shots"]
        if events["game_over"]:
            reward -= r["R_DEATH"]
        else:
            reward += r["R_ALIVE"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.session.score,
            "high_score": self.session.high_score,
            "enemies_killed": self._kills,
            "shots_fired": self._shots,
            "num_enemies": len(self.session.enemies),
            "num_bullets": len(self.session.bullets),
            "game_over": self.session.is_game_over,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "rgb_array":
            return rasterize(self.session)

        if self._window is None:
            # Arcade needs a display, so only load it for human rendering
            from .window import PlaneBattleWindow
            self._window = PlaneBattleWindow(self.session, title="PlaneBattleEnv - Arcade")

        self._window.session = self.session
        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42):
    """Run a random episode for testing"""
    env = PlaneBattleEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... close the window to exit early.")

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward
        if render:
            time.sleep(1 / env.metadata["render_fps"])

    print(f"Random episode return: {total:.2f}  score: {info['score']}  steps: {info['step']}")

    env.close()
    return total, info


if __name__ == "__main__":
    run_random_episode(render=True)
