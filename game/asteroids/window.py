"""
Arcade host for GameSession: keyboard in, snapshot drawn, hit sound out

Play:
    asteroids
    python -m game.asteroids.window
"""

from __future__ import annotations

import argparse
import logging
import math
import random
from typing import Dict, List, Optional

import numpy as np
import arcade

from .config import GameConfig
from .controls import Key, KeyTracker
from .session import GameSession, SessionSnapshot
from .utils import generate_asteroid_shape, heading_segment

# (radius, segments, jitter) per tier
ASTEROID_SHAPE_PARAMS = {
    3: (1.0, 15, 0.7),
    2: (1.0, 10, 0.6),
    1: (1.0, 8, 0.5),
}

# Ship outline in its own frame, nose along +y before the -pi/2 turn
SHIP_OUTLINE = [(0, 6), (5, -6), (0, -3), (-5, -6)]

KEY_MAP = {
    arcade.key.W: Key.W,
    arcade.key.A: Key.A,
    arcade.key.S: Key.S,
    arcade.key.D: Key.D,
    arcade.key.SPACE: Key.SPACE,
    arcade.key.R: Key.R,
}

HIT_SOUND = ":resources:sounds/hit1.wav"

DEBUG_HEADING_LENGTH = 50.0


class AsteroidsWindow(arcade.Window):
    """Arcade window that draws session snapshots.

    With ``interactive=True`` the window owns the loop: it samples the
    keyboard and ticks the session at the config's fixed rate. Otherwise
    something else (AsteroidsEnv) ticks and hands snapshots to
    ``draw_snapshot``.
    """

    def __init__(self, session: GameSession, title: str = "Asteroids", interactive: bool = True,
                 debug: bool = False):
        cfg = session.config
        super().__init__(int(cfg.width), int(cfg.height), title)
        self.session = session
        self.interactive = interactive
        self.debug = debug
        self.tick_seconds = 1.0 / cfg.fps

        # Colors
        self.BG = arcade.color.BLACK
        self.FG = arcade.color.WHITE
        self.background_color = self.BG
        self.DEBUG_HITBOX_C = arcade.color.BLUE
        self.DEBUG_HEADING_C = arcade.color.RED

        rng = np.random.default_rng()
        self.shapes: Dict[int, np.ndarray] = {
            tier: generate_asteroid_shape(*params, rng=rng)
            for tier, params in ASTEROID_SHAPE_PARAMS.items()
        }
        self._shake_rng = random.Random()

        self.hit_sound = arcade.load_sound(HIT_SOUND)

        self.keys = KeyTracker()
        self._accumulator = 0.0
        self.snapshot: SessionSnapshot = session.snapshot()

        if interactive and session.on_explosion is None:
            session.on_explosion = lambda x, y: self.play_hit()

    # ----------------------------
    # Host loop
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        key = KEY_MAP.get(symbol)
        if key is not None:
            self.keys.press(key)

    def on_key_release(self, symbol: int, modifiers: int):
        key = KEY_MAP.get(symbol)
        if key is not None:
            self.keys.release(key)

    def on_mouse_press(self, x: int, y: int, button: int, modifiers: int):
        # A click fires once, like a tap of the fire key
        self.keys.tap(Key.SPACE)

    def on_update(self, delta_time: float):
        if not self.interactive:
            return

        self._accumulator += delta_time
        while self._accumulator >= self.tick_seconds:
            self._accumulator -= self.tick_seconds
            self.snapshot = self.session.tick(self.keys.consume())

    def on_draw(self):
        self.draw_snapshot(self.snapshot)

    def play_hit(self):
        arcade.play_sound(self.hit_sound)

    # ----------------------------
    # Drawing
    # ----------------------------

    def draw_snapshot(self, snap: SessionSnapshot):
        """Draw one settled snapshot. Reads only, never touches the session."""
        self.snapshot = snap
        self.clear()

        cfg = self.session.config
        w, h = cfg.width, cfg.height

        if snap.dead:
            arcade.draw_text("GAME OVER", w / 2, h / 2 + 10, self.FG, 50, anchor_x="center")
            arcade.draw_text(f"Score: {snap.score}", w / 2, h / 2 - 35, self.FG, 25, anchor_x="center")
            arcade.draw_text("(press R to restart)", w / 2, h / 2 - 70, self.FG, 25, anchor_x="center")
            return

        ox, oy = 0.0, 0.0
        if snap.shake > 0:
            amount = snap.shake * cfg.camera_shake_scale
            ox = self._shake_rng.random() * amount
            oy = self._shake_rng.random() * amount

        def to_screen(x: float, y: float):
            # Simulation is y-down, arcade is y-up
            return x + ox, h - (y + oy)

        # Ship
        p = snap.player
        a = p.angle - math.pi / 2
        cos_a, sin_a = math.cos(a), math.sin(a)
        points = [
            to_screen(p.x + cx * cos_a - cy * sin_a, p.y + cx * sin_a + cy * cos_a)
            for cx, cy in SHIP_OUTLINE
        ]
        arcade.draw_polygon_outline(points, self.FG)

        # Shots
        for s in snap.shots:
            sx, sy = to_screen(s.x, s.y)
            arcade.draw_circle_outline(sx, sy, 2, self.FG)

        # Asteroids
        for ast in snap.asteroids:
            self._draw_asteroid(ast, cfg.asteroid_scale, to_screen)

        # Debug overlay: collision circles and heading
        if self.debug:
            for ast in snap.asteroids:
                ax, ay = to_screen(ast.x, ast.y)
                arcade.draw_circle_outline(ax, ay, ast.tier * cfg.asteroid_scale, self.DEBUG_HITBOX_C)
            x1, y1, x2, y2 = heading_segment(p.x, p.y, p.angle, DEBUG_HEADING_LENGTH)
            arcade.draw_line(*to_screen(x1, y1), *to_screen(x2, y2), self.DEBUG_HEADING_C)

        # Explosions
        for e in snap.explosions:
            ex, ey = to_screen(e.x, e.y)
            radius = e.age / cfg.explosion_time * e.radius
            if radius > 0:
                arcade.draw_circle_outline(ex, ey, radius, self.FG)

        # HUD
        arcade.draw_text(f"Score: {snap.score}", w / 2, h - 25, self.FG, 20, anchor_x="center")

    def _draw_asteroid(self, ast, scale: float, to_screen):
        size = ast.tier * scale
        cos_r, sin_r = math.cos(ast.rot), math.sin(ast.rot)
        for x1, y1, x2, y2 in self.shapes[ast.tier]:
            ends: List[tuple] = []
            for px, py in ((x1, y1), (x2, y2)):
                px, py = px * size, py * size
                ends.append(to_screen(ast.x + px * cos_r - py * sin_r, ast.y + px * sin_r + py * cos_r))
            (sx1, sy1), (sx2, sy2) = ends
            arcade.draw_line(sx1, sy1, sx2, sy2, self.FG)


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Play asteroids (W/S thrust, A/D turn, Space or click fire, R restart)")
    parser.add_argument("--width", type=float, default=800.0, help="Arena width (default: 800)")
    parser.add_argument("--height", type=float, default=600.0, help="Arena height (default: 600)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--verbose", action="store_true", help="Log session events")
    parser.add_argument("--debug", action="store_true", help="Draw collision circles and ship heading")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    config = GameConfig(width=args.width, height=args.height)
    session = GameSession(config, seed=args.seed)
    AsteroidsWindow(session, debug=args.debug)
    arcade.run()


if __name__ == "__main__":
    main()
