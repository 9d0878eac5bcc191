# src/env/observations.py
from __future__ import annotations
from typing import Optional
import numpy as np

from src.flappy.body import Body
from src.flappy.stream import ObstacleStream

OBS_SIZE = 6
VY_NORM = 15.0   # |vy| (px/tick) mapped to 1.0; jumps are -9, long falls exceed this

def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)

def _clamp11(x: float) -> float:
    return -1.0 if x < -1.0 else (1.0 if x > 1.0 else x)

def build_observation(
    body: Body,
    stream: ObstacleStream,
    screen_width: float,
    screen_height: float,
    grace_ticks: int = 0,
) -> np.ndarray:
    """
    Returns a fixed (6,) float32 vector:
      [ y_norm, vy_norm, dx_next, gap_start, gap_end, grace ]
    - y_norm     in [0,1]  body top over (height - body height)
    - vy_norm    in [-1,1] vy / VY_NORM, clipped
    - dx_next    in [0,1]  horizontal distance from the body's right edge to the
                           next obstacle's leading edge, over screen width
                           (0 while overlapping, 1 if there is none)
    - gap_start, gap_end in [0,1] of screen height
      sentinel when no obstacle ahead: gap covers the whole screen (0, 1)
    - grace      1.0 while the start freeze is active, else 0.0
    """
    h = max(1.0, float(screen_height))
    w = max(1.0, float(screen_width))

    y_norm = _clamp01(body.y / max(1.0, h - body.height))
    vy_norm = _clamp11(body.vy / VY_NORM)

    nxt = stream.next_ahead(body)
    if nxt is None:
        dx, gs, ge = 1.0, 0.0, 1.0
    else:
        dx = _clamp01((nxt.x - body.right) / w)
        gs = _clamp01(nxt.gap_start / h)
        ge = _clamp01(nxt.gap_end / h)

    grace = 1.0 if grace_ticks > 0 else 0.0
    return np.asarray([y_norm, vy_norm, dx, gs, ge, grace], dtype=np.float32)


def observation_bounds():
    low = np.array([0.0, -1.0, 0.0, 0.0, 0.0, 0.0], dtype=np.float32)
    high = np.array([1.0, 1.0, 1.0, 1.0, 1.0, 1.0], dtype=np.float32)
    return low, high


def gap_center(obs: np.ndarray) -> Optional[float]:
    """Normalized y of the next gap's center, or None for the no-obstacle sentinel."""
    gs, ge = float(obs[3]), float(obs[4])
    if gs <= 0.0 and ge >= 1.0:
        return None
    return 0.5 * (gs + ge)
