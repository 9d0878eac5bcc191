# src/flappy/body.py
from __future__ import annotations
import pygame
from dataclasses import dataclass
from .config import BODY_X, BODY_W, BODY_H, GRAVITY, JUMP_FORCE

@dataclass
class Body:
    """
    The player ball. x is fixed for the whole run: the world scrolls instead.
    y is the TOP edge (screen coordinates, +y points down).
    """
    x: float = float(BODY_X)
    y: float = 0.0
    vy: float = 0.0
    width: float = BODY_W
    height: float = BODY_H
    gravity: float = GRAVITY
    jump_force: float = JUMP_FORCE
    angle: float = 0.0     # cosmetic spin, radians

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), int(self.width), int(self.height))

    def integrate(self, screen_height: float, grace_ticks: int = 0):
        """One tick of gravity. During the grace window the body is held at mid-screen."""
        if grace_ticks > 0:
            self.vy = 0.0
            self.y = screen_height / 2
        else:
            self.vy += self.gravity
            self.y += self.vy

        # faster spin when falling, backwards when climbing hard
        self.angle += 0.1 + self.vy * 0.02

    def jump(self):
        self.vy = self.jump_force

    def is_out_of_bounds(self, screen_height: float) -> bool:
        return self.y + self.height > screen_height or self.y < 0

    def reset(self, screen_height: float):
        self.y = screen_height / 2
        self.vy = 0.0
        self.angle = 0.0
