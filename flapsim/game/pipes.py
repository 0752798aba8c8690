# flapsim/game/pipes.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

import pygame

from .config import GameConfig
from .errors import ConfigError

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def randrange(self, start: int, stop: int) -> int:  # uniform in [start, stop)
        ...


def draw_gap_top(rng: RandomSource, cfg: GameConfig) -> int:
    """Uniform gap offset in [0, height - pipe_gap - ground_height)."""
    lo, hi = cfg.gap_range
    if hi <= lo:
        raise ConfigError(f"empty gap range [{lo}, {hi}) for pipe_gap={cfg.pipe_gap}")
    return rng.randrange(lo, hi)


@dataclass
class Pipe:
    """A top/bottom pipe pair with a single gap of `pipe_gap` px starting at gap_top."""
    x: int
    gap_top: int
    cfg: GameConfig = field(default_factory=GameConfig, repr=False)
    rng: Optional[RandomSource] = field(default=None, repr=False, compare=False)

    @classmethod
    def create(cls, x: int, rng: RandomSource, cfg: GameConfig) -> "Pipe":
        return cls(x=x, gap_top=draw_gap_top(rng, cfg), cfg=cfg, rng=rng)

    @property
    def width(self) -> int:
        return self.cfg.pipe_width

    @property
    def gap_bottom(self) -> int:
        return self.gap_top + self.cfg.pipe_gap

    def move(self):
        self.x -= self.cfg.scroll_speed

    def is_offscreen(self) -> bool:
        return self.x + self.width < 0

    def regenerate(self, at_x: int):
        """Turn this slot into a fresh pipe at `at_x` with a new random gap."""
        if self.rng is None:
            raise TypeError("pipe was built without a random source")
        self.gap_top = draw_gap_top(self.rng, self.cfg)
        self.x = at_x

    def top_rect(self) -> pygame.Rect:
        return pygame.Rect(self.x, 0, self.width, self.gap_top)

    def bottom_rect(self) -> pygame.Rect:
        cfg = self.cfg
        return pygame.Rect(
            self.x, self.gap_bottom,
            self.width, cfg.height - self.gap_top - cfg.pipe_gap - cfg.ground_height
        )


class PipeField:
    """
    Fixed-size ribbon of pipes scrolling left.
    Offscreen pipes are regenerated in their own slot at the right edge,
    so the list never changes length while it is being scanned.
    """
    def __init__(self, rng: RandomSource, cfg: Optional[GameConfig] = None):
        self.cfg = (cfg or GameConfig()).validate()
        self.rng = rng
        self.pipes: List[Pipe] = []
        self._init_start()

    def _init_start(self):
        x = self.cfg.width
        for _ in range(self.cfg.pipe_count):
            self.pipes.append(Pipe.create(x, self.rng, self.cfg))
            x += self.cfg.pipe_spacing

    def __len__(self) -> int:
        return len(self.pipes)

    def __iter__(self):
        return iter(self.pipes)

    def advance(self) -> int:
        """Scroll every pipe one tick. Returns how many pipes were recycled."""
        recycled = 0
        for i in range(len(self.pipes)):
            pipe = self.pipes[i]
            pipe.move()
            if pipe.is_offscreen():
                pipe.regenerate(self.cfg.width)
                recycled += 1
                logger.debug("pipe %d recycled, new gap_top=%d", i, pipe.gap_top)
        return recycled

    def collides_with(self, box: pygame.Rect) -> bool:
        # colliderect: shared edges and zero-area rects never count as a hit
        for pipe in self.pipes:
            if pipe.top_rect().colliderect(box) or pipe.bottom_rect().colliderect(box):
                return True
        return False
