# flapsim/game/driver.py
from __future__ import annotations
import logging
import queue
from typing import Optional

from .simulation import Simulation

logger = logging.getLogger(__name__)


class FixedStepDriver:
    """
    Runs a Simulation at a fixed tick rate from whatever wall-clock deltas the
    caller has (a pygame Clock, a timer thread, a test).

    Input commands go through a thread-safe queue and are applied between
    ticks, never during one, and none are dropped.
    """
    def __init__(self,
                 sim: Simulation,
                 tick_ms: Optional[int] = None,
                 max_ticks_per_advance: int = 5):
        assert max_ticks_per_advance >= 1, "max_ticks_per_advance must be >= 1"
        self.sim = sim
        self.tick_ms = float(tick_ms if tick_ms is not None else sim.cfg.tick_ms)
        self.max_ticks_per_advance = int(max_ticks_per_advance)
        self._commands: queue.SimpleQueue[str] = queue.SimpleQueue()
        self._accum_ms = 0.0

    def post(self, command: str):
        """Queue a command ("jump", "restart", ...). Safe from any thread."""
        self._commands.put(command)

    def _drain(self) -> int:
        n = 0
        while True:
            try:
                cmd = self._commands.get_nowait()
            except queue.Empty:
                return n
            self.sim.handle(cmd)
            n += 1

    def advance(self, elapsed_ms: float) -> int:
        """Feed elapsed wall time; returns the number of ticks actually run."""
        self._drain()
        if self.sim.is_over:
            # Nothing to catch up on; restart starts from a clean clock
            self._accum_ms = 0.0
            return 0

        self._accum_ms += max(0.0, float(elapsed_ms))
        max_accum = self.tick_ms * self.max_ticks_per_advance
        if self._accum_ms > max_accum:
            logger.debug("dropping %.1f ms of backlog", self._accum_ms - max_accum)
            self._accum_ms = max_accum

        ticks = 0
        while self._accum_ms >= self.tick_ms:
            self._drain()
            if self.sim.is_over:
                self._accum_ms = 0.0
                break
            self.sim.step()
            self._accum_ms -= self.tick_ms
            ticks += 1
        return ticks
