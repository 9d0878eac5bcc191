# src/flappy/config.py
from __future__ import annotations
from dataclasses import dataclass

# --- Display ---
WIDTH = 960
HEIGHT = 540
FPS = 60

# --- Physics (per tick, tuned for FPS) ---
GRAVITY = 0.6               # px/tick^2 added to vy every tick
JUMP_FORCE = -9.0           # vy right after a jump (negative = up)
GAME_SPEED = 3.0            # obstacle scroll (px/tick)
GRACE_TICKS = 30            # body frozen at mid-screen after start (~0.5 s)

# --- Body ---
BODY_X = 150                # body's fixed x (obstacles scroll left)
BODY_W = 30
BODY_H = 30

# --- Obstacle generation ---
OBSTACLE_W = 75
OBSTACLE_GAP = 200          # vertical opening between top and bottom barrier
OBSTACLE_SPACING = 320      # distance between consecutive leading edges
OBSTACLE_MIN_H = 100        # minimum height of each barrier
SEED_DEFAULT = 12345

# --- Result messages (game-over panel) ---
SCORE_AMAZING = 20
SCORE_GOOD = 10

# --- Colors (RGB) ---
COLOR_BG = (144, 238, 144)
COLOR_FG = (20, 40, 20)
COLOR_BODY = (255, 0, 0)
COLOR_BODY_DEAD = (139, 0, 0)
COLOR_BARRIER = (178, 34, 34)
COLOR_BARRIER_EDGE = (47, 79, 79)
COLOR_GOLD = (255, 215, 0)


class ConfigError(ValueError):
    """Raised when the tuning values cannot produce a playable stream."""


@dataclass(frozen=True)
class SimConfig:
    """
    Everything the simulation reads besides the viewport.
    Defaults mirror the module constants; tests and the env build their own.
    """
    gravity: float = GRAVITY
    jump_force: float = JUMP_FORCE
    game_speed: float = GAME_SPEED
    grace_ticks: int = GRACE_TICKS

    body_x: float = BODY_X
    body_w: float = BODY_W
    body_h: float = BODY_H

    obstacle_w: float = OBSTACLE_W
    gap: float = OBSTACLE_GAP
    spacing: float = OBSTACLE_SPACING
    min_height: float = OBSTACLE_MIN_H

    def validate(self, screen_height: float) -> "SimConfig":
        """Fail fast on values that would make obstacle generation impossible."""
        if self.body_w <= 0 or self.body_h <= 0:
            raise ConfigError("body size must be > 0")
        if self.obstacle_w <= 0:
            raise ConfigError("obstacle width must be > 0")
        if self.gap <= 0 or self.min_height < 0:
            raise ConfigError("gap must be > 0 and min_height >= 0")
        if self.spacing <= 0 or self.game_speed <= 0:
            raise ConfigError("spacing and game_speed must be > 0")
        if self.grace_ticks < 0:
            raise ConfigError("grace_ticks must be >= 0")
        check_gap_fits(screen_height, self.gap, self.min_height)
        return self


def check_gap_fits(screen_height: float, gap: float, min_height: float) -> None:
    if gap + 2 * min_height > screen_height:
        raise ConfigError(
            f"gap ({gap}) + 2 * min_height ({min_height}) exceeds screen height ({screen_height})"
        )
