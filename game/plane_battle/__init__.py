"""Plane Battle - vertical arcade shooter simulation"""

from .config import GameConfig
from .entities import Actions, Bullet, Enemy, Player
from .session import Phase, Session
from .spawner import EnemySpawner
from .plane_battle_env import PlaneBattleEnv, run_random_episode

__all__ = [
    'GameConfig', 'Actions', 'Bullet', 'Enemy', 'Player',
    'Phase', 'Session', 'EnemySpawner',
    'PlaneBattleEnv', 'run_random_episode',
]
