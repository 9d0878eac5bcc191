# src/flappy/clock.py
from __future__ import annotations
import enum
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple
import pygame
from .body import Body
from .config import WIDTH, HEIGHT, SimConfig
from .stream import ObstacleStream

logger = logging.getLogger(__name__)


class RunPhase(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    ENDED = "ended"


@dataclass
class RunState:
    is_running: bool = False
    score: int = 0
    elapsed_ticks: int = 0
    grace_ticks: int = 0
    end_cause: Optional[str] = None   # "obstacle" | "bounds" | None


@dataclass(frozen=True)
class Snapshot:
    """What a renderer needs for one frame. Rects are copies."""
    phase: RunPhase
    score: int
    body_rect: pygame.Rect
    body_angle: float
    barriers: Tuple[Tuple[pygame.Rect, pygame.Rect], ...]   # (top, bottom) per obstacle


class SimulationClock:
    """
    Owns the whole simulation context (config, viewport, body, stream, run state)
    and advances it one fixed step per tick:
      grace countdown -> body -> spawn -> scroll/recycle -> score -> end check
    """
    def __init__(self,
                 config: Optional[SimConfig] = None,
                 width: float = WIDTH,
                 height: float = HEIGHT,
                 seed: int | None = None):
        self.config = (config or SimConfig()).validate(height)
        self.width = width
        self.height = height

        c = self.config
        self.body = Body(x=float(c.body_x), width=c.body_w, height=c.body_h,
                         gravity=c.gravity, jump_force=c.jump_force)
        self.body.reset(height)
        self.stream = ObstacleStream(seed, gap=c.gap, min_height=c.min_height,
                                     obstacle_w=c.obstacle_w)
        self.state = RunState()
        self.phase = RunPhase.IDLE

        self._end_listeners: List[Callable[[RunState], None]] = []
        self._pass_listeners: List[Callable[[int], None]] = []
        logger.debug("simulation configured: %s (viewport %sx%s)", c, width, height)

    # -------------------- Listeners --------------------

    def on_end(self, callback: Callable[[RunState], None]):
        """callback(state) fires once per run, right after the Running -> Ended transition."""
        self._end_listeners.append(callback)

    def on_pass(self, callback: Callable[[int], None]):
        """callback(score) fires every time an obstacle is passed."""
        self._pass_listeners.append(callback)

    # -------------------- Commands --------------------

    @property
    def is_running(self) -> bool:
        return self.phase is RunPhase.RUNNING

    @property
    def final_score(self) -> int:
        return self.state.score

    def start(self, seed: int | None = None) -> bool:
        """Idle/Ended -> Running. Ignored while a run is in progress."""
        if self.phase is RunPhase.RUNNING:
            return False
        if seed is not None:
            self.stream.reseed(seed)

        self.body.reset(self.height)
        self.state = RunState(is_running=True, grace_ticks=self.config.grace_ticks)
        self.stream.clear()
        self.stream.spawn(self.width, self.height, self.config.spacing)
        self.phase = RunPhase.RUNNING
        logger.info("run started (seed=%s)", self.stream.seed)
        return True

    def jump(self) -> bool:
        if self.phase is not RunPhase.RUNNING:
            return False
        self.body.jump()
        return True

    def resize(self, width: float, height: float):
        """New viewport; read from the next tick on. Does not reset the run."""
        self.config.validate(height)
        self.width = width
        self.height = height

    def is_new_high_score(self, previous_high: int) -> bool:
        # ties count as a new high score
        return self.state.score > previous_high - 1

    # -------------------- Tick --------------------

    def tick(self) -> RunPhase:
        if self.phase is not RunPhase.RUNNING:
            return self.phase

        c = self.config
        st = self.state

        if st.grace_ticks > 0:
            st.grace_ticks -= 1
        self.body.integrate(self.height, st.grace_ticks)

        self.stream.spawn_if_needed(self.width, self.height, c.spacing)
        self.stream.tick(c.game_speed)
        self.stream.check_and_score(self.body, self._score_point)
        st.elapsed_ticks += 1

        if self.body.is_out_of_bounds(self.height):
            self._end("bounds")
        elif self.stream.check_collision(self.body):
            self._end("obstacle")
        return self.phase

    def _score_point(self):
        self.state.score += 1
        for cb in self._pass_listeners:
            cb(self.state.score)

    def _end(self, cause: str):
        self.state.is_running = False
        self.state.end_cause = cause
        self.phase = RunPhase.ENDED
        logger.info("run ended: %s, score=%d after %d ticks",
                    cause, self.state.score, self.state.elapsed_ticks)
        for cb in self._end_listeners:
            cb(self.state)

    # -------------------- Rendering --------------------

    def snapshot(self) -> Snapshot:
        return Snapshot(
            phase=self.phase,
            score=self.state.score,
            body_rect=self.body.rect,
            body_angle=self.body.angle,
            barriers=tuple((o.top_rect, o.bottom_rect(self.height)) for o in self.stream),
        )
