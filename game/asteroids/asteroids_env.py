"""
AsteroidsEnv - gymnasium wrapper around GameSession
---------------------------------------------------
- Same simulation the human player gets (fixed 60 Hz ticks)
- Gymnasium API, one agent flying the ship
- MultiDiscrete action space: [rotate(3), thrust(3), fire(2)]
- Vector observation: ship state + top-K nearest asteroids
- Episode ends when the ship is destroyed

Fire is edge-triggered exactly as for a human: the agent has to release
the trigger (fire=0) before it can shoot again.

Quick test:
    python -m game.asteroids.asteroids_env
"""

from __future__ import annotations

import math
import time
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import GameConfig
from .controls import Key, InputState
from .session import GameSession, SessionSnapshot
from .utils import clamp, seed_everything

# Reward shaping defaults
DEFAULT_REWARD_CONFIG = {
    "R_SCORE": 0.01,   # per score point (tier * 25 per asteroid)
    "R_WAVE": 1.0,     # per cleared wave
    "R_SHOT": 0.005,   # per shot fired
    "R_TIME": 0.0005,  # per tick
    "R_DEATH": 5.0,
}

ROTATE_KEYS = (None, Key.A, Key.D)
THRUST_KEYS = (None, Key.W, Key.S)


class AsteroidsEnv(gym.Env):
    """Asteroids arena environment"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        game_config: Optional[Dict[str, Any]] = None,
        max_steps: int = 3600,  # 60s at 60 ticks/s
        k_asteroids: int = 6,
        reward_config: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode {render_mode!r}"
        self.render_mode = render_mode

        self.config = GameConfig.from_dict(game_config or {})
        self.max_steps = max_steps
        self.k_asteroids = k_asteroids

        self.reward_config = dict(DEFAULT_REWARD_CONFIG)
        if reward_config:
            self.reward_config.update(reward_config)

        # Action space:
        # rotate: 0 none, 1 left, 2 right
        # thrust: 0 none, 1 forward, 2 reverse
        # fire: 0/1 (trigger held)
        self.action_space = spaces.MultiDiscrete([3, 3, 2])

        # Observation space (vector)
        # Ship: pos(2) vel(2) heading cos/sin(2)
        # Each asteroid: rel pos(2) rel vel(2) tier(1)
        obs_dim = 6 + self.k_asteroids * 5
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self.session = GameSession(self.config, on_explosion=self._on_explosion)
        self._snapshot: SessionSnapshot = self.session.snapshot()

        # Arcade rendering state
        self._window = None

        self._step_count = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)
        if seed is not None:
            self.session.rng.seed(seed)

        self._step_count = 0

        self.session.reset()
        # First tick spawns wave 1
        self._snapshot = self.session.tick(InputState())

        return self._get_obs(), self._get_info()

    def step(self, action):
        action = np.asarray(action, dtype=np.int64)
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action {action!r} for {self.action_space}")

        prev = self._snapshot
        fired_before = self.session.shots_fired

        snap = self.session.tick(self._action_to_input(action))
        self._snapshot = snap

        fired = self.session.shots_fired - fired_before

        reward = self._compute_reward(prev, snap, fired)

        terminated = snap.dead
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _action_to_input(self, action) -> InputState:
        rotate, thrust, fire = int(action[0]), int(action[1]), int(action[2])
        held = {ROTATE_KEYS[rotate], THRUST_KEYS[thrust]}
        if fire:
            held.add(Key.SPACE)
        held.discard(None)
        return InputState(held=frozenset(held))

    def _get_obs(self) -> np.ndarray:
        cfg = self.config
        p = self._snapshot.player
        vmax = cfg.player_max_velocity

        obs_parts = [p.x / cfg.width * 2 - 1, p.y / cfg.height * 2 - 1,
                     clamp(p.vx / vmax, -1, 1), clamp(p.vy / vmax, -1, 1),
                     math.cos(p.angle), math.sin(p.angle)]

        # Asteroids: top-K nearest
        asteroids_sorted = sorted(
            self._snapshot.asteroids,
            key=lambda a: (a.x - p.x) ** 2 + (a.y - p.y) ** 2
        )
        for i in range(self.k_asteroids):
            if i < len(asteroids_sorted):
                a = asteroids_sorted[i]
                obs_parts += [
                    clamp((a.x - p.x) / cfg.width, -1, 1),
                    clamp((a.y - p.y) / cfg.height, -1, 1),
                    clamp((a.vx - p.vx) / (2 * vmax), -1, 1),
                    clamp((a.vy - p.vy) / (2 * vmax), -1, 1),
                    a.tier / 3.0,
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0, 0.0]

        obs = np.clip(np.array(obs_parts, dtype=np.float32), -1.0, 1.0)
        return obs

    def _compute_reward(self, prev: SessionSnapshot, snap: SessionSnapshot, fired: int) -> float:
        rc = self.reward_config
        reward = 0.0

        reward += rc["R_SCORE"] * (snap.score - prev.score)
        reward += rc["R_WAVE"] * max(0, snap.level - prev.level)
        reward -= rc["R_SHOT"] * fired
        reward -= rc["R_TIME"]

        if snap.dead:
            reward -= rc["R_DEATH"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        snap = self._snapshot
        return {
            "score": snap.score,
            "level": snap.level,
            "dead": snap.dead,
            "num_asteroids": len(snap.asteroids),
            "num_shots": len(snap.shots),
            "asteroids_destroyed": self.session.asteroids_destroyed,
            "shots_fired": self.session.shots_fired,
            "step": self._step_count,
        }

    def _on_explosion(self, x: float, y: float):
        if self._window is not None:
            self._window.play_hit()

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .window import AsteroidsWindow
            self._window = AsteroidsWindow(self.session, title="AsteroidsEnv - Arcade", interactive=False)

        self._window.draw_snapshot(self._snapshot)
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42) -> float:
    """Run a random episode for testing"""
    env = AsteroidsEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... Close the window to exit early.")

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

        if render and env._window:
            env._window.dispatch_events()
            env._window.flip()
            time.sleep(1 / env.metadata["render_fps"])

    print(f"Random episode return: {total:.2f} (score {info['score']}, level {info['level']})")

    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)
