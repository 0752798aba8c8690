# flapsim/tests/test_driver.py
"""
Fixed-step driver: tick accounting, input ordering, stop on game over.

Usage (from repo root):
  python -m pytest flapsim/tests/test_driver.py
  python -m flapsim.tests.test_driver
"""
import threading

from flapsim.game.driver import FixedStepDriver
from flapsim.game.simulation import Simulation, JUMP, RESTART


def test_partial_intervals_do_not_tick():
    sim = Simulation(seed=1)
    d = FixedStepDriver(sim)
    assert d.advance(10) == 0 and sim.tick == 0
    assert d.advance(10) == 1 and sim.tick == 1
    assert d.advance(45) == 2 and sim.tick == 3
    assert d.advance(15) == 1 and sim.tick == 4  # 5 ms carried over


def test_input_applied_before_next_tick():
    sim = Simulation(seed=2)
    d = FixedStepDriver(sim)
    d.post(JUMP)
    assert sim.bird.vy == 0  # queued, not applied yet
    assert d.advance(40) == 2
    # jump landed before the first tick only
    assert sim.bird.y == 300 - 10 - 9
    assert sim.bird.vy == -8


def test_catch_up_is_capped():
    sim = Simulation(seed=3)
    d = FixedStepDriver(sim, max_ticks_per_advance=5)
    assert d.advance(1000) == 5
    assert d.advance(0) == 0


def test_stops_ticking_once_over_and_restarts():
    sim = Simulation(seed=4)
    d = FixedStepDriver(sim)
    ran = sum(d.advance(20) for _ in range(50))
    assert ran == 22 and sim.is_over and sim.tick == 22
    assert d.advance(100) == 0

    d.post(JUMP)       # ignored while over
    d.post(RESTART)
    assert d.advance(20) == 1
    assert not sim.is_over and sim.tick == 1 and sim.score == 0


def test_posts_from_other_threads_are_all_applied():
    sim = Simulation(seed=5)
    d = FixedStepDriver(sim)
    handled = []
    handle = sim.handle

    def recording_handle(cmd):
        handled.append(cmd)
        handle(cmd)

    sim.handle = recording_handle
    threads = [threading.Thread(target=lambda: [d.post("noop") for _ in range(100)])
               for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    d.post(JUMP)

    assert d.advance(0) == 0
    assert len(handled) == 401
    assert sim.bird.vy == -10


def test_custom_tick_length():
    sim = Simulation(seed=6)
    d = FixedStepDriver(sim, tick_ms=10)
    assert d.advance(30) == 3


def main():
    test_partial_intervals_do_not_tick()
    test_input_applied_before_next_tick()
    test_catch_up_is_capped()
    test_stops_ticking_once_over_and_restarts()
    test_posts_from_other_threads_are_all_applied()
    test_custom_tick_length()
    print("✓ driver tests passed")


if __name__ == "__main__":
    main()
