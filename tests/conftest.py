import random

import pytest

from game.plane_battle.config import GameConfig
from game.plane_battle.session import Session


@pytest.fixture
def config():
    return GameConfig()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def session(config, rng):
    return Session(config, rng)


@pytest.fixture
def quiet_session(session):
    """Session whose spawner will not fire during a test"""
    session.spawn_timer = 1e9
    return session
