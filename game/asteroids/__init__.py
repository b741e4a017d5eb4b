"""2D Game module - Asteroids arena simulation and environment"""

from .config import GameConfig, ConfigError, SimulationError
from .controls import Key, InputState, Intent, InputSampler, KeyTracker
from .session import GameSession, SessionSnapshot
from .asteroids_env import AsteroidsEnv, run_random_episode

__all__ = [
    'GameConfig', 'ConfigError', 'SimulationError',
    'Key', 'InputState', 'Intent', 'InputSampler', 'KeyTracker',
    'GameSession', 'SessionSnapshot',
    'AsteroidsEnv', 'run_random_episode',
]
