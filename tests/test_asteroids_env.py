import numpy as np
import pytest
from gymnasium.utils.env_checker import check_env

from game.asteroids import AsteroidsEnv
from game.asteroids.asteroids_env import DEFAULT_REWARD_CONFIG
from game.asteroids.entities import Asteroid


@pytest.fixture
def env():
    env = AsteroidsEnv()
    yield env
    env.close()


def test_passes_gymnasium_checker(env):
    check_env(env, skip_render_check=True)


def test_reset_spawns_first_wave(env):
    obs, info = env.reset(seed=0)
    assert obs.shape == env.observation_space.shape
    assert obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    assert info["level"] == 1
    assert info["num_asteroids"] == 1
    assert info["score"] == 0


def test_seeded_resets_are_reproducible(env):
    obs_a, _ = env.reset(seed=5)
    obs_b, _ = env.reset(seed=5)
    np.testing.assert_array_equal(obs_a, obs_b)


def test_step_api(env):
    env.reset(seed=1)
    obs, reward, terminated, truncated, info = env.step(np.array([0, 0, 0]))
    assert env.observation_space.contains(obs)
    assert isinstance(reward, float)
    assert not terminated
    assert not truncated
    assert info["step"] == 1


def test_invalid_action_rejected(env):
    env.reset(seed=1)
    with pytest.raises(ValueError):
        env.step([3, 0, 0])


def test_fire_action_is_edge_triggered(env):
    env.reset(seed=2)
    for _ in range(4):
        _, _, _, _, info = env.step([0, 0, 1])
    assert info["shots_fired"] == 1
    env.step([0, 0, 0])
    _, _, _, _, info = env.step([0, 0, 1])
    assert info["shots_fired"] == 2


def test_death_terminates_with_penalty(env):
    env.reset(seed=3)
    p = env.session.player
    env.session.asteroids = [Asteroid(x=p.x, y=p.y, vx=0.0, vy=0.0, tier=2)]

    _, reward, terminated, _, info = env.step([0, 0, 0])

    assert terminated
    assert info["dead"]
    assert reward == pytest.approx(-DEFAULT_REWARD_CONFIG["R_TIME"] - DEFAULT_REWARD_CONFIG["R_DEATH"])


def test_truncates_at_max_steps():
    env = AsteroidsEnv(max_steps=3, game_config={"asteroid_scale": 0.001})
    env.reset(seed=4)
    truncated = False
    for _ in range(3):
        _, _, terminated, truncated, _ = env.step([0, 0, 0])
    assert truncated


def test_game_config_passes_through():
    env = AsteroidsEnv(game_config={"width": 640, "height": 480})
    assert env.session.config.width == 640
    obs, _ = env.reset(seed=0)
    # player centred -> normalized position (0, 0)
    assert obs[0] == pytest.approx(0.0)
    assert obs[1] == pytest.approx(0.0)


def test_unknown_render_mode_rejected():
    with pytest.raises(AssertionError):
        AsteroidsEnv(render_mode="rgb_array")
