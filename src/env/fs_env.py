# src/env/fs_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from src.flappy.config import WIDTH, HEIGHT, FPS, COLOR_BG, SimConfig
from src.flappy.clock import SimulationClock
from src.flappy.game import draw_world
from src.env.observations import build_observation, observation_bounds


class FlappySnakeEnv(gym.Env):
    """
    Flappy Snake Gymnasium environment (vector observations).
    - One simulation tick per frame, FPS nominal.
    - Agent acts every `frame_skip` ticks (default 2) -> 30 decisions/sec.
    - Observation: shape (6,), float32 (see build_observation).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 2,
                 time_limit_seconds: Optional[float] = 60.0,
                 pass_bonus: float = 10.0,
                 config: Optional[SimConfig] = None):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.pass_bonus = float(pass_bonus)
        self.config = (config or SimConfig()).validate(HEIGHT)

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(FPS * time_limit_seconds / self.frame_skip)

        # Actions: 0 = NOOP, 1 = JUMP
        self.action_space = gym.spaces.Discrete(2)
        low, high = observation_bounds()
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        # --- Runtime state ---
        self.sim: Optional[SimulationClock] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None

        # Rendering
        self.screen = None
        self.clock = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)

        # Seeded -> reproducible obstacle layout; None -> stream picks its own seed
        stream_seed = int(seed) if seed is not None else None
        self.sim = SimulationClock(self.config, width=WIDTH, height=HEIGHT, seed=stream_seed)
        self.sim.start()

        self.timestep = 0
        self.current_seed = self.sim.stream.seed

        obs = self._get_obs()
        info = {"seed": self.current_seed, "score": 0}
        if self.render_mode == "human":
            self.render()
        return obs, info

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.sim is not None, "call reset() first"

        if action == 1:
            self.sim.jump()

        score_before = self.sim.state.score
        for _ in range(self.frame_skip):
            self.sim.tick()
            if not self.sim.is_running:
                break
        passed = self.sim.state.score - score_before

        alive = self.sim.is_running
        reward = (1.0 if alive else -1.0) + self.pass_bonus * passed

        self.timestep += 1
        terminated = not alive
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        obs = self._get_obs()
        info = {
            "score": self.sim.state.score,
            "timestep": self.timestep,
            "elapsed_ticks": self.sim.state.elapsed_ticks,
            "seed": self.current_seed,
            "death_cause": self.sim.state.end_cause,
        }

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.sim is not None
        return build_observation(self.sim.body, self.sim.stream,
                                 self.sim.width, self.sim.height,
                                 self.sim.state.grace_ticks)

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.sim is None:
            return None

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Flappy Snake — Gym Env")
                self.clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))

        self.screen.fill(COLOR_BG)
        draw_world(self.screen, self.sim.snapshot())

        if self.render_mode == "human":
            # Pump the event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            if self.clock is not None:
                self.clock.tick(self.metadata["render_fps"])
            return None

        # (H, W, 3) uint8
        arr = pygame.surfarray.array3d(self.screen)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
