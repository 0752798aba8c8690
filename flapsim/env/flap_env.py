# flapsim/env/flap_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from flapsim.game.config import GameConfig
from flapsim.game.render import draw_snapshot
from flapsim.game.simulation import Simulation
from flapsim.env.observations import OBS_SIZE, build_observation


class FlapEnv(gym.Env):
    """
    Flappy bird Gymnasium environment (vector observations).
    - Simulation runs at the fixed tick of GameConfig (20 ms -> 50 Hz).
    - Agent acts every `frame_skip` ticks (default 2) -> 25 decisions/sec.
    - Observation: shape (5,), float32 (see observations.build_observation).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 50}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 2,
                 time_limit_seconds: Optional[float] = 60.0,
                 config: Optional[GameConfig] = None):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode {render_mode}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.cfg = (config or GameConfig()).validate()

        # Optional built-in truncation (you can also use a TimeLimit wrapper)
        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            # decisions per second = ticks per second / frame_skip
            self.time_limit_decisions = int(self.cfg.ticks_per_second * time_limit_seconds / self.frame_skip)

        # --- Gym spaces ---
        # Actions: 0 = NOOP, 1 = JUMP
        self.action_space = gym.spaces.Discrete(2)

        # Observations: (5,) float32
        # [y_norm, vy_norm, pipe_dx_norm, gap_top_norm, gap_bottom_norm]
        low = np.array([0.0, -1.0, 0.0, 0.0, 0.0], dtype=np.float32)
        high = np.ones(OBS_SIZE, dtype=np.float32)
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        # --- Runtime state ---
        self.sim: Optional[Simulation] = None
        self.timestep: int = 0                   # number of *decision* steps elapsed
        self.current_seed: Optional[int] = None

        # Rendering
        self.screen = None
        self.clock = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Seeding policy:
        # - If a seed is provided, use it directly for the pipe RNG for strict reproducibility.
        # - If not, draw one from the env's own np_random so reset() sequences stay reproducible.
        if seed is not None:
            pipe_seed = int(seed)
        else:
            pipe_seed = int(self.np_random.integers(0, 2**31 - 1))

        self.sim = Simulation(self.cfg, seed=pipe_seed)
        self.timestep = 0
        self.current_seed = pipe_seed

        obs = self._get_obs()
        info = {"seed": self.current_seed, "score": 0}
        if self.render_mode == "human":
            self.render()
        return obs, info

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.sim is not None, "Call reset() first."

        was_over = self.sim.is_over

        # Apply action once at the start of the decision step
        if action == 1:
            self.sim.jump()

        # Simulate frame_skip ticks (early exit on death)
        for _ in range(self.frame_skip):
            self.sim.step()
            if self.sim.is_over:
                break

        # Reward: +1 if alive after this decision; -1 on death (once)
        if self.sim.is_over:
            reward = 0.0 if was_over else -1.0
        else:
            reward = 1.0

        # Termination / truncation
        self.timestep += 1
        terminated = self.sim.is_over
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        obs = self._get_obs()
        info = {
            "score": self.sim.score,
            "tick": self.sim.tick,
            "timestep": self.timestep,
            "seed": self.current_seed,
            "death_cause": self.sim.death_cause,
        }

        # Optional on-screen render
        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.sim is not None
        return build_observation(self.sim.snapshot())

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.sim is None:
            return None

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((self.cfg.width, self.cfg.height))
                pygame.display.set_caption("Flappy Bird - Gym Env")
                self.clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface((self.cfg.width, self.cfg.height))

        draw_snapshot(self.screen, self.sim.snapshot())

        if self.render_mode == "human":
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            if self.clock is not None:
                self.clock.tick(self.metadata.get("render_fps", 50))
            return None

        # Return an (H, W, 3) uint8 array
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
