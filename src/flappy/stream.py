# src/flappy/stream.py
from __future__ import annotations
import random
from typing import Callable, Iterator, List, Optional
from .body import Body
from .config import OBSTACLE_W, OBSTACLE_GAP, OBSTACLE_MIN_H
from .obstacle import Obstacle


class ObstacleStream:
    """
    Endless left-scrolling stream of obstacles.
    List order = spawn order = left-to-right screen order.
    """
    def __init__(self,
                 seed: int | None = None,
                 gap: float = OBSTACLE_GAP,
                 min_height: float = OBSTACLE_MIN_H,
                 obstacle_w: float = OBSTACLE_W):
        self.gap = gap
        self.min_height = min_height
        self.obstacle_w = obstacle_w
        self.obstacles: List[Obstacle] = []
        self.reseed(seed)

    def reseed(self, seed: int | None):
        # Keep the effective seed so a run can be reproduced
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)

    def __len__(self) -> int:
        return len(self.obstacles)

    def __iter__(self) -> Iterator[Obstacle]:
        return iter(self.obstacles)

    @property
    def last(self) -> Optional[Obstacle]:
        return self.obstacles[-1] if self.obstacles else None

    def clear(self):
        self.obstacles.clear()

    def spawn(self, screen_width: float, screen_height: float, spacing: float) -> Obstacle:
        """New obstacle one spacing behind the last one, or at the right edge if empty."""
        last = self.last
        x = last.x + spacing if last is not None else screen_width
        obstacle = Obstacle(x, screen_height, self.gap, self.min_height,
                            rng=self.rng, width=self.obstacle_w)
        self.obstacles.append(obstacle)
        return obstacle

    def spawn_if_needed(self, screen_width: float, screen_height: float,
                        spacing: float) -> Optional[Obstacle]:
        last = self.last
        if last is None or last.x < screen_width - spacing:
            return self.spawn(screen_width, screen_height, spacing)
        return None

    def tick(self, speed: float) -> int:
        """Scroll everything left, then drop what left the screen. Returns how many were dropped."""
        for obstacle in self.obstacles:
            obstacle.advance(speed)

        gone = [o for o in self.obstacles if o.is_off_screen()]
        if gone:
            self.obstacles = [o for o in self.obstacles if not o.is_off_screen()]
        return len(gone)

    def check_and_score(self, body: Body, on_pass: Callable[[], None]) -> int:
        passed_now = 0
        for obstacle in self.obstacles:
            if not obstacle.passed and body.x > obstacle.right:
                obstacle.passed = True
                on_pass()
                passed_now += 1
        return passed_now

    def check_collision(self, body: Body) -> bool:
        return any(o.collides_with(body) for o in self.obstacles)

    def next_ahead(self, body: Body) -> Optional[Obstacle]:
        """First obstacle the body has not cleared yet (may be overlapping it)."""
        for obstacle in self.obstacles:
            if obstacle.right >= body.left:
                return obstacle
        return None
