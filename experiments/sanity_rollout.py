# /experiments/sanity_rollout.py
"""
Baseline rollouts on FlapEnv.

Plays a seeded random flapper and a gap-following heuristic over a list of
pipe seeds, appends one row per episode to episodes.csv, and can dump the
action (and observation) sequence of each episode as .npy files.

  python -m experiments.sanity_rollout --policies both --save-traces
  python -m experiments.sanity_rollout --policies heuristic --seeds 7,8 --save-obs --save-traces
"""

from __future__ import annotations
import argparse
import csv
from pathlib import Path
from typing import List, Tuple, Optional

import numpy as np

from flapsim.env.flap_env import FlapEnv
from flapsim.game.config import HEIGHT, GROUND_HEIGHT, BIRD_SIZE

DEFAULT_SEEDS = list(range(101, 121))
EPISODE_HEADER = [
    "env_name", "policy_name", "seed", "frame_skip",
    "episode_len_decisions", "return_sum", "score",
    "terminated", "truncated", "death_cause",
]


# ------------------------ Policies ------------------------

def random_policy_init(action_seed: int, jump_prob: float = 0.1):
    rng = np.random.RandomState(action_seed)
    def act(_obs: np.ndarray) -> int:
        return int(rng.random_sample() < jump_prob)
    return act

def tiny_heuristic_policy_init(margin: float = 0.03):
    """
    Very small rule: flap when the bird's bottom edge sinks below the next
    gap's bottom (minus a margin) and it is not already going up.
    """
    y_span = (HEIGHT - GROUND_HEIGHT - BIRD_SIZE) / float(HEIGHT)
    size_frac = BIRD_SIZE / float(HEIGHT)

    def act(obs: np.ndarray) -> int:
        y_norm, vy_norm, _dx, _gap_top, gap_bot = obs
        bird_bottom = y_norm * y_span + size_frac
        return 1 if (bird_bottom > gap_bot - margin and vy_norm >= 0.0) else 0
    return act


def make_policy(name: str, seed: int):
    """Return (policy, action_seed). The random flapper's stream is offset from the pipe seed."""
    if name == "random":
        return random_policy_init(10_000 + seed), 10_000 + seed
    if name == "heuristic":
        return tiny_heuristic_policy_init(), -1
    raise ValueError(f"Unknown policy {name!r}")


# ------------------------ Rollout core ------------------------

def ensure_dir(p: Path):
    p.mkdir(parents=True, exist_ok=True)

def write_episode_row(csv_path: Path, header: List[str], row: List):
    exists = csv_path.exists()
    with csv_path.open("a", newline="") as f:
        w = csv.writer(f)
        if not exists:
            w.writerow(header)
        w.writerow(row)

def run_one_episode(policy_name: str,
                    seed: int,
                    frame_skip: int,
                    steps_limit: int,
                    save_traces: bool,
                    save_obs: bool,
                    out_dir: Path) -> Tuple[int, float, int, bool, bool, Optional[str]]:
    """Play one episode; returns (decisions, return, score, terminated, truncated, death_cause)."""
    policy, action_seed = make_policy(policy_name, seed)
    env = FlapEnv(frame_skip=frame_skip)

    actions: List[int] = []
    obs_list: List[np.ndarray] = []

    ret_sum = 0.0
    ep_len = 0
    term = trunc = False
    info: dict = {}

    try:
        obs, info = env.reset(seed=seed)
        if save_obs:
            obs_list.append(obs.copy())

        for _ in range(steps_limit):
            a = policy(obs)
            actions.append(int(a))

            obs, r, term, trunc, info = env.step(a)
            ret_sum += float(r)
            ep_len += 1

            if save_obs:
                obs_list.append(obs.copy())

            if term or trunc:
                break
    finally:
        env.close()

    if save_traces:
        trace_dir = out_dir / "traces" / policy_name
        ensure_dir(trace_dir)
        np.save(trace_dir / f"{seed}_actions.npy", np.asarray(actions, dtype=np.int8))
        if save_obs:
            np.save(trace_dir / f"{seed}_obs.npy", np.asarray(obs_list, dtype=np.float32))

        meta_lines = [
            f"seed={seed}",
            f"frame_skip={frame_skip}",
            f"policy={policy_name}",
            f"action_rng_seed={action_seed}",
            f"steps_limit={steps_limit}",
            f"score={info.get('score', 0)}",
            f"death_cause={info.get('death_cause') or ''}",
        ]
        (trace_dir / f"{seed}_meta.txt").write_text("\n".join(meta_lines), encoding="utf-8")

    return ep_len, ret_sum, int(info.get("score", 0)), bool(term), bool(trunc), info.get("death_cause")


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", type=str, default="both",
                    choices=["random", "heuristic", "both"],
                    help="Which policy to run")
    ap.add_argument("--seeds", type=str, default="",
                    help="Comma-separated pipe seeds (default 101..120)")
    ap.add_argument("--frame-skip", type=int, default=2,
                    help="Sim ticks per decision step")
    ap.add_argument("--steps", type=int, default=5_000,
                    help="Max decisions per episode")
    ap.add_argument("--out-dir", type=str, default="experiments/runs",
                    help="Directory to store episodes.csv and traces/")
    ap.add_argument("--save-traces", action="store_true",
                    help="Save each episode's actions as .npy")
    ap.add_argument("--save-obs", action="store_true",
                    help="With --save-traces, also save observations")
    args = ap.parse_args(argv)

    out_dir = Path(args.out_dir)
    ensure_dir(out_dir)

    if args.seeds.strip():
        seeds = [int(s) for s in args.seeds.split(",") if s.strip()]
    else:
        seeds = DEFAULT_SEEDS

    episodes_csv = out_dir / "episodes.csv"
    to_run = ["random", "heuristic"] if args.policies == "both" else [args.policies]

    print(f"Running policies={to_run} on {len(seeds)} seeds (frame_skip={args.frame_skip})")
    print(f"Writing summaries to {episodes_csv} and traces under {out_dir}/traces/")

    for policy_name in to_run:
        for seed in seeds:
            ep_len, ret_sum, score, terminated, truncated, death_cause = run_one_episode(
                policy_name=policy_name,
                seed=seed,
                frame_skip=args.frame_skip,
                steps_limit=args.steps,
                save_traces=args.save_traces,
                save_obs=args.save_obs,
                out_dir=out_dir
            )

            row = [
                "FlapEnv", policy_name, seed, args.frame_skip,
                ep_len, f"{ret_sum:.1f}", score,
                int(terminated), int(truncated), (death_cause or ""),
            ]
            write_episode_row(episodes_csv, EPISODE_HEADER, row)

            print(f"[{policy_name}] seed={seed}  len={ep_len}  score={score}  "
                  f"ret={ret_sum:.1f}  term={terminated} trunc={truncated}  cause={death_cause}")

    print("✓ Sanity rollouts complete")


if __name__ == "__main__":
    main()
