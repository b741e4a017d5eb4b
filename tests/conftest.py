import pytest

from game.asteroids import GameConfig, GameSession


@pytest.fixture
def config():
    return GameConfig()


@pytest.fixture
def session(config):
    return GameSession(config, seed=1234)
