# flapsim/env/observations.py
from __future__ import annotations
from typing import Optional

import numpy as np

from flapsim.game.config import MAX_VY
from flapsim.game.state import PipeState, Snapshot

OBS_SIZE = 5


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def _norm_vy(vy: float, vy_max: float = MAX_VY) -> float:
    """Clip vy to [-vy_max, vy_max] and scale to [-1,1]."""
    vy_max = float(max(1.0, vy_max))
    return max(-vy_max, min(float(vy), vy_max)) / vy_max


def next_pipe(snap: Snapshot) -> Optional[PipeState]:
    """Closest pipe whose right edge has not yet passed the bird's left edge."""
    bx = snap.bird.x
    ahead = [p for p in snap.pipes if p.x + p.width >= bx]
    return min(ahead, key=lambda p: p.x, default=None)


def build_observation(snap: Snapshot) -> np.ndarray:
    """
    Returns a fixed (5,) float32 vector:
      [ y_norm, vy_norm, pipe_dx_norm, gap_top_norm, gap_bottom_norm ]
    - y_norm          bird top over [0, ground_y - bird_size], clipped to [0,1]
    - vy_norm         in [-1,1]
    - pipe_dx_norm    (next pipe right edge - bird x) / width, in [0,1]
    - gap_*_norm      gap edges over screen height, in [0,1]
    Sentinel when no pipe is ahead: dx=1, gap spans the whole playfield.
    """
    cfg = snap.config
    b = snap.bird

    y_norm = _clamp01(b.y / max(1, cfg.ground_y - b.size))
    vy_norm = _norm_vy(b.vy)

    pipe = next_pipe(snap)
    if pipe is None:
        dx_norm, gap_top_norm, gap_bot_norm = 1.0, 0.0, _clamp01(cfg.ground_y / cfg.height)
    else:
        dx_norm = _clamp01((pipe.x + pipe.width - b.x) / float(cfg.width))
        gap_top_norm = _clamp01(pipe.gap_top / float(cfg.height))
        gap_bot_norm = _clamp01(pipe.gap_bottom / float(cfg.height))

    return np.asarray([y_norm, vy_norm, dx_norm, gap_top_norm, gap_bot_norm], dtype=np.float32)
