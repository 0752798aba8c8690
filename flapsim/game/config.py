# flapsim/game/config.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

from .errors import ConfigError

# --- Display ---
WIDTH = 800
HEIGHT = 600
FPS = 60                    # render rate of the pygame front-end

# --- Simulation timing ---
TICK_MS = 20                # fixed simulation step (ms) -> 50 ticks/s

# --- Bird ---
BIRD_SIZE = 30
BIRD_X = WIDTH // 4         # bird's fixed x (pipes scroll left)
BIRD_START_Y = HEIGHT // 2
GRAVITY = 1                 # px/tick^2, added to vy every tick
JUMP_IMPULSE = -10          # px/tick, replaces vy on jump
MAX_VY = 20                 # only used to normalize observations

# --- Pipes ---
PIPE_WIDTH = 100
PIPE_GAP = 200
PIPE_COUNT = 5
PIPE_SPACING = PIPE_WIDTH + 200
SCROLL_SPEED = 5            # px/tick
GROUND_HEIGHT = 50
SEED_DEFAULT = 12345

# --- Colors (RGB) ---
COLOR_SKY = (0, 255, 255)
COLOR_BIRD = (255, 255, 0)
COLOR_PIPE = (0, 200, 0)
COLOR_GROUND = (255, 165, 0)
COLOR_GRASS = (0, 255, 0)
COLOR_FG = (255, 255, 255)
COLOR_DANGER = (255, 86, 110)


@dataclass(frozen=True)
class GameConfig:
    """
    Playfield geometry and physics for one simulation.
    Defaults are the module constants; tests shrink or break them on purpose.
    """
    width: int = WIDTH
    height: int = HEIGHT
    ground_height: int = GROUND_HEIGHT

    bird_x: int = BIRD_X
    bird_start_y: int = BIRD_START_Y
    bird_size: int = BIRD_SIZE
    gravity: int = GRAVITY
    jump_impulse: int = JUMP_IMPULSE

    pipe_width: int = PIPE_WIDTH
    pipe_gap: int = PIPE_GAP
    pipe_count: int = PIPE_COUNT
    pipe_spacing: int = PIPE_SPACING
    scroll_speed: int = SCROLL_SPEED

    tick_ms: int = TICK_MS

    @property
    def ground_y(self) -> int:
        """y of the ground line; the bird dies when its bottom reaches it."""
        return self.height - self.ground_height

    @property
    def gap_range(self) -> Tuple[int, int]:
        """Half-open range [lo, hi) a pipe's gap_top is drawn from."""
        return 0, self.height - self.pipe_gap - self.ground_height

    @property
    def ticks_per_second(self) -> float:
        return 1000.0 / self.tick_ms

    def validate(self) -> "GameConfig":
        for name in ("width", "height", "bird_size", "pipe_width", "pipe_gap",
                     "pipe_count", "scroll_speed", "tick_ms"):
            value = getattr(self, name)
            if value <= 0:
                raise ConfigError(f"{name} must be > 0, got {value}")
        if self.ground_height < 0:
            raise ConfigError(f"ground_height must be >= 0, got {self.ground_height}")
        lo, hi = self.gap_range
        if hi <= lo:
            raise ConfigError(
                f"pipe_gap ({self.pipe_gap}) + ground_height ({self.ground_height}) "
                f"leaves no room for a gap in height {self.height}"
            )
        return self
