"""
Keyboard input sampling: raw key state -> per-tick intents
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional, Set

from .config import GameConfig


class Key(Enum):
    """Keys the game reacts to, independent of the host's key codes"""
    W = "w"
    A = "a"
    S = "s"
    D = "d"
    SPACE = "space"
    R = "r"


# action -> key
DEFAULT_BINDINGS: Dict[str, Key] = {
    "thrust": Key.W,
    "reverse": Key.S,
    "rotate_left": Key.A,
    "rotate_right": Key.D,
    "fire": Key.SPACE,
    "restart": Key.R,
}


@dataclass(frozen=True)
class InputState:
    """Keys held this tick plus keys that went down since the last tick"""
    held: FrozenSet[Key] = field(default_factory=frozenset)
    pressed: FrozenSet[Key] = field(default_factory=frozenset)


@dataclass(frozen=True)
class Intent:
    """What the player asked for during one tick"""
    rotation: float = 0.0
    thrust: float = 0.0
    fire: bool = False
    restart: bool = False


class InputSampler:
    """Turns InputState into Intent.

    Fire and restart are edge-triggered. A key counts as newly pressed when
    the host reports it in ``pressed`` or when it appears in ``held`` without
    having been held on the previous sample, so a key held down for many
    ticks produces one event.
    """

    def __init__(self, config: GameConfig, bindings: Optional[Dict[str, Key]] = None):
        self.config = config
        self.bindings = dict(DEFAULT_BINDINGS)
        if bindings:
            self.bindings.update(bindings)
        self._previous_held: FrozenSet[Key] = frozenset()

    def reset(self, held: Iterable[Key] = ()):
        """Forget edge history; keys in ``held`` count as already down"""
        self._previous_held = frozenset(held)

    def sample(self, state: InputState, dead: bool = False) -> Intent:
        held = frozenset(state.held)
        edges = frozenset(state.pressed) | (held - self._previous_held)
        self._previous_held = held

        b = self.bindings
        if dead:
            return Intent(restart=b["restart"] in edges)

        thrust = 0.0
        if b["thrust"] in held:
            thrust = self.config.player_acceleration
        elif b["reverse"] in held:
            thrust = -self.config.player_acceleration

        rotation = 0.0
        if b["rotate_right"] in held:
            rotation = self.config.player_rot_speed
        elif b["rotate_left"] in held:
            rotation = -self.config.player_rot_speed

        return Intent(
            rotation=rotation,
            thrust=thrust,
            fire=b["fire"] in edges,
            restart=False,
        )


class KeyTracker:
    """Host-side key bookkeeping between ticks.

    Windows feed press/release events as they arrive; ``consume`` builds
    the InputState for the next tick and clears the presses so each one
    reaches exactly one tick.
    """

    def __init__(self):
        self.held: Set[Key] = set()
        self.pressed: Set[Key] = set()

    def press(self, key: Key):
        self.held.add(key)
        self.pressed.add(key)

    def release(self, key: Key):
        self.held.discard(key)

    def tap(self, key: Key):
        """A press with no matching hold, e.g. a mouse click"""
        self.pressed.add(key)

    def consume(self) -> InputState:
        state = InputState(held=frozenset(self.held), pressed=frozenset(self.pressed))
        self.pressed.clear()
        return state
