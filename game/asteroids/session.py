"""
GameSession - the asteroids simulation
--------------------------------------
- Fixed-timestep tick: input -> physics -> collisions -> spawning -> waves
- Ship with rotation, thrust and a ring buffer of shots
- Asteroids split into two smaller ones when shot
- A new, larger wave once the arena is cleared
- Playing / Dead state machine with restart

Hosts (a window, a gymnasium env, tests) call ``tick`` once per fixed step
and read the returned ``SessionSnapshot``. Nothing outside this module
mutates session state.
"""

from __future__ import annotations

import dataclasses
import logging
import math
import random
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, List, Optional, Tuple

from .config import GameConfig, SimulationError
from .controls import InputSampler, InputState, Intent
from .entities import Player, Shot, Asteroid, Explosion
from .utils import clamp, reflect, asteroid_collide

logger = logging.getLogger(__name__)

ExplosionCallback = Callable[[float, float], None]


@dataclass(frozen=True)
class SessionSnapshot:
    """Settled state after a tick. Entities are copies."""
    player: Player
    shots: Tuple[Shot, ...]
    asteroids: Tuple[Asteroid, ...]
    explosions: Tuple[Explosion, ...]
    score: int
    level: int
    dead: bool
    shake: float  # 0..1, fraction of camera_shake_duration left
    tick: int


class GameSession:
    """One game of asteroids, from reset to death and back"""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        on_explosion: Optional[ExplosionCallback] = None,
        seed: Optional[int] = None,
    ):
        self.config = config if config is not None else GameConfig()
        self.on_explosion = on_explosion
        self.rng = random.Random(seed)
        self.sampler = InputSampler(self.config)

        # World state
        self.player: Player = None  # type: ignore
        self.shots: Deque[Shot] = deque(maxlen=self.config.shot_max)
        self.asteroids: List[Asteroid] = []
        self.explosions: List[Explosion] = []

        # Session state
        self.level = 0
        self.score = 0
        self.dead = False
        self.camera_shake = 0.0
        self.tick_count = 0
        self.asteroids_destroyed = 0
        self.shots_fired = 0

        self._pending_explosions: List[Tuple[float, float]] = []

        self.reset()

    # ----------------------------
    # Public API
    # ----------------------------

    def reset(self):
        """Start over: score 0, level 0, empty arena, player centred"""
        cfg = self.config
        self.level = 0
        self.score = 0
        self.dead = False
        self.camera_shake = 0.0
        self.tick_count = 0
        self.asteroids_destroyed = 0
        self.shots_fired = 0

        self.player = Player(x=cfg.width / 2, y=cfg.height / 2)
        self.shots = deque(maxlen=cfg.shot_max)
        self.asteroids = []
        self.explosions = []
        self._pending_explosions = []
        self.sampler.reset()

        logger.debug("Session reset")

    def tick(self, input_state: Optional[InputState] = None) -> SessionSnapshot:
        """Advance the simulation by one fixed step"""
        if input_state is None:
            input_state = InputState()

        intent = self.sampler.sample(input_state, dead=self.dead)

        if self.dead:
            if not intent.restart:
                return self.snapshot()
            self.reset()
            # Keys held through the restart are not new presses
            self.sampler.reset(held=input_state.held)
            logger.info("Restarting after death")
        else:
            self._apply_intent(intent)

        self._step()
        self.tick_count += 1
        self._dispatch_explosions()
        return self.snapshot()

    def fire(self):
        """Spawn a shot at the ship along its facing; evicts the oldest past shot_max"""
        p = self.player
        self.shots.append(Shot(x=p.x, y=p.y, dx=math.cos(p.angle), dy=math.sin(p.angle)))
        self.shots_fired += 1

    def next_wave(self):
        """Bump the level and spawn floor(level * wave_size_factor) asteroids away from the player"""
        cfg = self.config
        self.level += 1
        count = math.floor(self.level * cfg.wave_size_factor)

        spawned = 0
        attempts = 0
        while spawned < count:
            if attempts >= cfg.max_spawn_attempts:
                raise SimulationError(
                    f"Could not place asteroid {spawned + 1}/{count} of wave {self.level} "
                    f"after {attempts} attempts"
                )
            attempts += 1

            tier = self.rng.randint(1, 3)
            candidate = Asteroid(
                x=self.rng.random() * cfg.width,
                y=self.rng.random() * cfg.height,
                vx=self.rng.uniform(-cfg.asteroid_max_spawn_speed, cfg.asteroid_max_spawn_speed),
                vy=self.rng.uniform(-cfg.asteroid_max_spawn_speed, cfg.asteroid_max_spawn_speed),
                tier=tier,
                rot=self.rng.random() * math.pi * 2,
            )

            buffer = tier * cfg.asteroid_scale * cfg.asteroid_buffer_multiplier
            if self._hits(candidate, self.player.x, self.player.y, buffer):
                continue

            self.asteroids.append(candidate)
            spawned += 1
            attempts = 0

        logger.info("Wave %d: %d asteroids", self.level, count)

    def snapshot(self) -> SessionSnapshot:
        copy = dataclasses.replace
        return SessionSnapshot(
            player=copy(self.player),
            shots=tuple(copy(s) for s in self.shots),
            asteroids=tuple(copy(a) for a in self.asteroids),
            explosions=tuple(copy(e) for e in self.explosions),
            score=self.score,
            level=self.level,
            dead=self.dead,
            shake=self.camera_shake / self.config.camera_shake_duration,
            tick=self.tick_count,
        )

    # ----------------------------
    # Core mechanics
    # ----------------------------

    def _apply_intent(self, intent: Intent):
        cfg = self.config
        p = self.player

        if intent.fire:
            self.fire()

        p.angle += intent.rotation

        limit = cfg.player_max_velocity
        p.vx = clamp(p.vx + math.cos(p.angle) * intent.thrust, -limit, limit)
        p.vy = clamp(p.vy + math.sin(p.angle) * intent.thrust, -limit, limit)

    def _step(self):
        self._update_player()
        self._update_asteroids()

        if self._player_collides():
            self.dead = True
            self.player.alive = False
            logger.info("Player destroyed: score %d, level %d", self.score, self.level)
            return

        self._update_shots()

        if not self.asteroids:
            self.next_wave()

        self._update_effects()

    def _update_player(self):
        p = self.player
        p.x = reflect(p.x + p.vx, self.config.width)
        p.y = reflect(p.y + p.vy, self.config.height)

    def _update_asteroids(self):
        cfg = self.config
        for a in self.asteroids:
            a.x = reflect(a.x + a.vx, cfg.width)
            a.y = reflect(a.y + a.vy, cfg.height)
            a.rot += cfg.asteroid_rot_speed / a.tier

    def _player_collides(self) -> bool:
        return any(self._hits(a, self.player.x, self.player.y) for a in self.asteroids)

    def _update_shots(self):
        cfg = self.config
        children: List[Asteroid] = []

        for shot in self.shots:
            shot.x += shot.dx * cfg.shot_velocity
            shot.y += shot.dy * cfg.shot_velocity

            # First live asteroid in list order wins
            target = next(
                (a for a in self.asteroids if a.alive and self._hits(a, shot.x, shot.y)),
                None,
            )
            if target is not None:
                self._kill(shot)
                children.extend(self._destroy_asteroid(target, shot))
                continue

            if shot.x < 0 or shot.x > cfg.width or shot.y < 0 or shot.y > cfg.height:
                self._kill(shot)

        # Cleanup after shot resolution
        self.shots = deque((s for s in self.shots if s.alive), maxlen=cfg.shot_max)
        self.asteroids = [a for a in self.asteroids if a.alive] + children

    def _destroy_asteroid(self, asteroid: Asteroid, shot: Shot) -> List[Asteroid]:
        cfg = self.config
        self._kill(asteroid)
        self.asteroids_destroyed += 1
        self.score += asteroid.tier * cfg.score_per_tier
        self._spawn_explosion(asteroid.x, asteroid.y)

        if asteroid.tier <= 1:
            return []

        travel = math.atan2(shot.dy, shot.dx)
        return [
            Asteroid(
                x=asteroid.x,
                y=asteroid.y,
                vx=math.cos(travel + offset),
                vy=math.sin(travel + offset),
                tier=asteroid.tier - 1,
                rot=self.rng.random() * math.pi * 2,
            )
            for offset in (math.pi / 2, -math.pi / 2)
        ]

    def _spawn_explosion(self, x: float, y: float):
        self.explosions.append(Explosion(x=x, y=y, radius=self.config.explosion_radius))
        self.camera_shake = self.config.camera_shake_duration
        self._pending_explosions.append((x, y))

    def _update_effects(self):
        cfg = self.config
        dt = cfg.tick_ms

        for e in self.explosions:
            e.age += dt
        self.explosions = [e for e in self.explosions if e.age <= cfg.explosion_time]

        self.camera_shake = max(0.0, self.camera_shake - dt)

    def _dispatch_explosions(self):
        pending, self._pending_explosions = self._pending_explosions, []
        if self.on_explosion is None:
            return
        for x, y in pending:
            self.on_explosion(x, y)

    # ----------------------------
    # Helpers
    # ----------------------------

    def _hits(self, asteroid: Asteroid, x: float, y: float, buffer: float = 0.0) -> bool:
        radius = asteroid.tier * self.config.asteroid_scale
        return asteroid_collide(asteroid.x, asteroid.y, radius, x, y, buffer)

    @staticmethod
    def _kill(entity):
        if not entity.alive:
            raise SimulationError(f"{type(entity).__name__} removed twice in one tick")
        entity.alive = False
