"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import Optional, Tuple
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def reflect(x: float, bound: float) -> float:
    """Bring a coordinate that left [0, bound] back as bound - x.

    This is not a modulo wrap: a ship at bound + 5 lands on -5 and is
    reflected again on the next tick.
    """
    if x < 0 or x > bound:
        return bound - x
    return x


def heading_segment(x: float, y: float, angle: float, length: float) -> Tuple[float, float, float, float]:
    """Line from (x, y) along ``angle`` for ``length``: (x1, y1, x2, y2)"""
    return x, y, x + math.cos(angle) * length, y + math.sin(angle) * length


def asteroid_collide(ax: float, ay: float, radius: float, x: float, y: float, buffer: float = 0.0) -> bool:
    """Check if a point lies inside an asteroid's collision circle.

    ``buffer`` is added to the squared radius, not to the radius itself.
    """
    dx = ax - x
    dy = ay - y
    return (dx * dx + dy * dy) <= (radius * radius) + buffer


def generate_asteroid_shape(
    radius: float = 1.0,
    segments: int = 8,
    jitter: float = 0.5,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """Generate a jagged closed outline as an array of line segments.

    Returns shape (segments, 4): each row is (x_end, y_end, x_start, y_start),
    joining point i+1 back to point i.
    """
    if rng is None:
        rng = np.random.default_rng()
    angles = np.arange(segments) / segments * np.pi * 2
    xs = radius * np.cos(angles) + rng.random(segments) * jitter
    ys = radius * np.sin(angles) + rng.random(segments) * jitter
    points = np.stack([xs, ys], axis=1)
    return np.concatenate([np.roll(points, -1, axis=0), points], axis=1)


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
