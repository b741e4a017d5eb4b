"""
Game entity dataclasses
"""

from dataclasses import dataclass


@dataclass
class Player:
    """Player ship"""
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    angle: float = 0.0  # radians, 0 faces +x
    alive: bool = True


@dataclass
class Shot:
    """Shot travelling along a unit direction at a fixed speed"""
    x: float
    y: float
    dx: float
    dy: float
    alive: bool = True


@dataclass
class Asteroid:
    """Asteroid; collision radius is tier * asteroid_scale"""
    x: float
    y: float
    vx: float
    vy: float
    tier: int = 3  # 3 largest, 1 smallest
    rot: float = 0.0
    alive: bool = True


@dataclass
class Explosion:
    """Expanding ring left behind by a destroyed asteroid"""
    x: float
    y: float
    radius: float = 25.0
    age: float = 0.0  # milliseconds
