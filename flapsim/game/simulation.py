# flapsim/game/simulation.py
from __future__ import annotations
import logging
import random
import threading
from typing import Optional

from .bird import Bird
from .config import GameConfig
from .pipes import PipeField, RandomSource
from .state import BirdState, Phase, PipeState, Snapshot

logger = logging.getLogger(__name__)

JUMP = "jump"
RESTART = "restart"


class Simulation:
    """
    One bird, one pipe field, one score.

    Lifecycle:
      RUNNING --step--> RUNNING | OVER   (gravity, scroll, then collision checks)
      RUNNING --jump--> RUNNING
      OVER    --step/jump--> OVER        (no-ops)
      any     --restart--> RUNNING       (fresh bird + pipes, score = 0)

    Mutations and snapshots share one lock, so a render thread never sees a
    half-applied tick and input from another thread lands between two ticks.
    """
    def __init__(self,
                 config: Optional[GameConfig] = None,
                 seed: Optional[int] = None,
                 rng: Optional[RandomSource] = None):
        self.cfg = (config or GameConfig()).validate()

        # Injected rng wins; otherwise seed a private Random (None -> fresh seed)
        if rng is None:
            if seed is None:
                seed = random.randrange(0, 2**32 - 1)
            rng = random.Random(seed)
        self.seed = seed
        self.rng = rng

        self._lock = threading.Lock()
        self._reset_world()

    def _reset_world(self):
        self.bird = Bird.spawn(self.cfg)
        self.pipes = PipeField(self.rng, self.cfg)
        self.score = 0
        self.tick = 0
        self.phase = Phase.RUNNING
        self.death_cause: Optional[str] = None

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.OVER

    # -------------------- Commands --------------------

    def step(self):
        """Advance one tick. No-op once the game is over."""
        with self._lock:
            if self.phase is not Phase.RUNNING:
                return
            self.bird.apply_gravity()
            self.score += self.pipes.advance()
            self.tick += 1

            cause = self._death_cause()
            if cause is not None:
                self.phase = Phase.OVER
                self.death_cause = cause
                logger.info("game over (%s) score=%d tick=%d", cause, self.score, self.tick)

    def jump(self):
        with self._lock:
            if self.phase is Phase.RUNNING:
                self.bird.jump()

    def restart(self):
        """Start a fresh run. Allowed while running too (forces a reset)."""
        with self._lock:
            was = self.phase
            self._reset_world()
        logger.info("restart (was %s)", was.value)

    def handle(self, command: str):
        """Apply an input command by name; unknown commands are ignored."""
        if command == JUMP:
            self.jump()
        elif command == RESTART:
            self.restart()
        else:
            logger.debug("ignoring unknown command %r", command)

    # -------------------- Queries --------------------

    def snapshot(self) -> Snapshot:
        with self._lock:
            b = self.bird
            return Snapshot(
                tick=self.tick,
                score=self.score,
                phase=self.phase,
                death_cause=self.death_cause,
                bird=BirdState(x=b.x, y=b.y, vy=b.vy, size=b.size),
                pipes=tuple(
                    PipeState(x=p.x, gap_top=p.gap_top, gap_bottom=p.gap_bottom, width=p.width)
                    for p in self.pipes
                ),
                config=self.cfg,
            )

    def _death_cause(self) -> Optional[str]:
        """All three checks run every tick; the first hit names the cause."""
        box = self.bird.bounding_box()
        hit_pipe = self.pipes.collides_with(box)
        hit_ground = box.bottom >= self.cfg.ground_y
        hit_ceiling = box.top < 0
        if hit_pipe:
            return "pipe"
        if hit_ground:
            return "ground"
        if hit_ceiling:
            return "ceiling"
        return None
