# flapsim/tests/test_flap_env.py
"""
Quick tests for FlapEnv (Gymnasium environment).

Usage (from repo root):
  python -m pytest flapsim/tests/test_flap_env.py
  python -m flapsim.tests.test_flap_env
"""

from __future__ import annotations
from typing import List, Tuple

import numpy as np
from gymnasium.utils.env_checker import check_env

from flapsim.env.flap_env import FlapEnv


def test_api_check():
    """Verify Gym API contract (spaces, step/reset signatures, types)."""
    env = FlapEnv()
    try:
        check_env(env, skip_render_check=True)
    finally:
        env.close()


def test_smoke_random_rollout():
    """Short random rollout: no crashes, obs in space, reward type, proper terminations."""
    env = FlapEnv()
    try:
        obs, info = env.reset(seed=123)
        assert env.observation_space.contains(obs), "Initial observation not in space"
        env.action_space.seed(123)
        for t in range(300):
            a = env.action_space.sample()
            obs, r, term, trunc, info = env.step(a)
            assert isinstance(r, float), "Reward must be a float"
            assert env.observation_space.contains(obs), f"Step {t}: observation out of bounds"
            if term or trunc:
                break
    finally:
        env.close()


def test_determinism():
    """Same seed + same action sequence => identical obs/reward/terminal flags."""
    def rollout(seed_val: int, action_seq: List[int]) -> List[Tuple[np.ndarray, float, bool, bool]]:
        env = FlapEnv()
        traj: List[Tuple[np.ndarray, float, bool, bool]] = []
        try:
            obs, _ = env.reset(seed=seed_val)
            for a in action_seq:
                obs, r, term, trunc, _ = env.step(int(a))
                traj.append((obs.copy(), float(r), bool(term), bool(trunc)))
                if term or trunc:
                    break
        finally:
            env.close()
        return traj

    rng = np.random.RandomState(42)
    action_seq = [int(rng.random_sample() < 0.15) for _ in range(300)]

    t1 = rollout(7, action_seq)
    t2 = rollout(7, action_seq)
    assert len(t1) == len(t2), "Determinism: trajectory length mismatch"
    for i, ((o1, r1, te1, tr1), (o2, r2, te2, tr2)) in enumerate(zip(t1, t2)):
        assert np.allclose(o1, o2), f"Determinism: obs mismatch at step {i}"
        assert (r1, te1, tr1) == (r2, te2, tr2), f"Determinism: transition mismatch at step {i}"


def test_noop_falls_to_ground():
    env = FlapEnv(frame_skip=2)
    try:
        env.reset(seed=1)
        rewards = []
        term = False
        while not term:
            _, r, term, _, info = env.step(0)
            rewards.append(r)
        # ground is hit on tick 22 -> decision step 11
        assert len(rewards) == 11
        assert rewards[:-1] == [1.0] * 10 and rewards[-1] == -1.0
        assert info["death_cause"] == "ground" and info["tick"] == 22
    finally:
        env.close()


def test_time_limit_truncates():
    env = FlapEnv(frame_skip=2, time_limit_seconds=0.1)  # 5 ticks -> 2 decisions
    try:
        env.reset(seed=1)
        _, _, term, trunc, _ = env.step(1)
        assert not term and not trunc
        _, _, term, trunc, _ = env.step(0)
        assert not term and trunc
    finally:
        env.close()


def test_rgb_array_render():
    env = FlapEnv(render_mode="rgb_array")
    try:
        env.reset(seed=3)
        frame = env.render()
        assert frame.shape == (env.cfg.height, env.cfg.width, 3)
        assert frame.dtype == np.uint8
    finally:
        env.close()


def main():
    test_api_check()
    print("✓ API check ok")
    test_smoke_random_rollout()
    print("✓ Smoke test ok")
    test_determinism()
    print("✓ Determinism ok")
    test_noop_falls_to_ground()
    test_time_limit_truncates()
    test_rgb_array_render()
    print("🎉 All env tests passed")


if __name__ == "__main__":
    main()
