# src/flappy/obstacle.py
from __future__ import annotations
import random
from typing import Optional
import pygame
from .body import Body
from .config import OBSTACLE_W, check_gap_fits


class Obstacle:
    """
    A brick barrier pair: solid from 0 to gap_start, open until gap_end,
    solid again down to the screen bottom.
    """
    def __init__(self,
                 spawn_x: float,
                 screen_height: float,
                 gap: float,
                 min_height: float,
                 rng: Optional[random.Random] = None,
                 width: float = OBSTACLE_W):
        check_gap_fits(screen_height, gap, min_height)
        rng = rng if rng is not None else random.Random()

        self.x = float(spawn_x)
        self.width = width
        self.gap = gap
        self.screen_height = screen_height

        lo = min_height
        hi = screen_height - gap - min_height
        self.top_height = rng.uniform(lo, hi)
        self.passed = False

    @property
    def gap_start(self) -> float:
        return self.top_height

    @property
    def gap_end(self) -> float:
        return self.top_height + self.gap

    @property
    def bottom_height(self) -> float:
        return self.screen_height - self.gap_end

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top_rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), 0, int(self.width), int(self.gap_start))

    def bottom_rect(self, screen_height: Optional[float] = None) -> pygame.Rect:
        """Bottom barrier down to the given screen bottom (the spawn height by default)."""
        h = self.screen_height if screen_height is None else screen_height
        top = int(self.gap_end)
        return pygame.Rect(int(self.x), top, int(self.width), max(0, int(h) - top))

    def advance(self, speed: float):
        self.x -= speed

    def is_off_screen(self) -> bool:
        return self.x + self.width < 0

    def collides_with(self, body: Body) -> bool:
        """AABB vs. gap: any overlap with the solid parts counts."""
        if body.right > self.x and body.left < self.right:
            if body.top < self.gap_start or body.bottom > self.gap_end:
                return True
        return False

    def __repr__(self) -> str:
        return (f"Obstacle(x={self.x:.1f}, gap=[{self.gap_start:.1f}, {self.gap_end:.1f}], "
                f"passed={self.passed})")
