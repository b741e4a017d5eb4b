"""
Gameplay configuration and error types
"""

from __future__ import annotations

import math
from dataclasses import dataclass, asdict
from typing import Any, Dict


class ConfigError(ValueError):
    """Raised when a GameConfig is constructed with unusable values"""


class SimulationError(RuntimeError):
    """Raised when the simulation breaks one of its own invariants"""


@dataclass(frozen=True)
class GameConfig:
    """Arena bounds and tuning constants for one game session.

    Distances are in pixels, speeds in pixels per tick, angles in radians
    and times in milliseconds. Values are checked once here so that nothing
    can fail for configuration reasons while ticking.
    """

    # Arena
    width: float = 800.0
    height: float = 600.0
    fps: int = 60

    # Feedback
    camera_shake_duration: float = 800.0
    camera_shake_scale: float = 4.0

    # Shots
    shot_max: int = 10
    shot_velocity: float = 4.0

    # Player
    player_max_velocity: float = 2.0
    player_acceleration: float = 0.05
    player_rot_speed: float = math.pi / 60

    # Asteroids
    asteroid_scale: float = 10.0
    asteroid_rot_speed: float = 0.01
    asteroid_max_spawn_speed: float = 0.5
    asteroid_buffer_multiplier: float = 1.5
    score_per_tier: int = 25
    wave_size_factor: float = 1.2
    max_spawn_attempts: int = 10_000

    # Explosions
    explosion_radius: float = 25.0
    explosion_time: float = 500.0

    def __post_init__(self):
        positive = (
            "width", "height", "fps", "shot_velocity", "player_max_velocity",
            "player_acceleration", "player_rot_speed", "asteroid_scale",
            "explosion_radius", "explosion_time", "camera_shake_duration",
            "wave_size_factor",
        )
        for name in positive:
            value = getattr(self, name)
            if not value > 0:
                raise ConfigError(f"{name} must be positive, got {value!r}")

        non_negative = (
            "camera_shake_scale", "asteroid_rot_speed",
            "asteroid_max_spawn_speed", "asteroid_buffer_multiplier", "score_per_tier",
        )
        for name in non_negative:
            value = getattr(self, name)
            if value < 0:
                raise ConfigError(f"{name} must be non-negative, got {value!r}")

        if int(self.shot_max) != self.shot_max or self.shot_max < 1:
            raise ConfigError(f"shot_max must be a positive integer, got {self.shot_max!r}")
        if self.max_spawn_attempts < 1:
            raise ConfigError(f"max_spawn_attempts must be at least 1, got {self.max_spawn_attempts!r}")

    @property
    def tick_ms(self) -> float:
        """Duration of one fixed tick in milliseconds"""
        return 1000.0 / self.fps

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "GameConfig":
        unknown = set(values) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
