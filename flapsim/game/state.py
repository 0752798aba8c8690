from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .config import GameConfig


class Phase(str, Enum):
    RUNNING = "running"
    OVER = "over"


@dataclass(frozen=True)
class BirdState:
    x: int
    y: int
    vy: int
    size: int


@dataclass(frozen=True)
class PipeState:
    x: int
    gap_top: int
    gap_bottom: int
    width: int


@dataclass(frozen=True)
class Snapshot:
    """Everything a renderer needs for one frame, copied out of a finished tick."""
    tick: int
    score: int
    phase: Phase
    death_cause: Optional[str]
    bird: BirdState
    pipes: tuple[PipeState, ...]
    config: GameConfig

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.OVER
