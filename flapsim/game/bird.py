# flapsim/game/bird.py
from __future__ import annotations
import pygame
from dataclasses import dataclass, field

from .config import GameConfig


@dataclass
class Bird:
    """
    The player. Only moves vertically:
    - vy grows by `gravity` every tick (positive = down)
    - a jump replaces vy with `jump_impulse`, whatever it was
    Position is never clamped; the simulation decides what out of bounds means.
    """
    x: int
    y: int
    vy: int = 0
    cfg: GameConfig = field(default_factory=GameConfig, repr=False)

    @classmethod
    def spawn(cls, cfg: GameConfig) -> "Bird":
        return cls(x=cfg.bird_x, y=cfg.bird_start_y, vy=0, cfg=cfg)

    @property
    def size(self) -> int:
        return self.cfg.bird_size

    def apply_gravity(self):
        """Integrate one tick: move by the current velocity, then accelerate."""
        self.y += self.vy
        self.vy += self.cfg.gravity

    def jump(self):
        self.vy = self.cfg.jump_impulse

    def bounding_box(self) -> pygame.Rect:
        return pygame.Rect(self.x, self.y, self.size, self.size)
