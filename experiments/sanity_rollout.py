# experiments/sanity_rollout.py
"""
Baseline rollouts on UnicornEnv.

Plays a seeded random policy and a small rule-based policy over a list of
seeds, appends one summary row per episode to <out-dir>/episodes.csv and can
keep the action sequence of every episode for `experiments.replay`.

  python -m experiments.sanity_rollout --policies both --save-traces
  python -m experiments.sanity_rollout --policies heuristic --seeds 111,222 --save-traces --save-obs
  python -m experiments.sanity_rollout --level levels/lvl1.txt --policies random
"""

from __future__ import annotations
import argparse
import csv
import logging
from pathlib import Path
from typing import Callable, Dict, List, NamedTuple, Optional

import numpy as np

from unicorn_attack.env.ua_env import UnicornEnv, ACTION_NOOP, ACTION_RISE, ACTION_BOOST
from unicorn_attack.game.level import Level, load_level

logger = logging.getLogger(__name__)

Policy = Callable[[np.ndarray], int]

SIM_FPS = 60
DEFAULT_SEEDS = tuple(range(101, 121))
RANDOM_SEED_OFFSET = 10_000


def random_policy(seed: int) -> Policy:
    rng = np.random.RandomState(RANDOM_SEED_OFFSET + seed)

    def act(_obs: np.ndarray) -> int:
        # mostly NOOP so the rider touches down between rises
        return int(rng.choice(3, p=[0.85, 0.1, 0.05]))
    return act


def heuristic_policy(_seed: int) -> Policy:
    """
    Acts only while resting on a platform (dy == 0). Rises when the next
    platform starts close with its top above our feet, or when the current one
    is about to end with a gap behind it. Boosts when nothing is ahead at all.
    """
    def act(obs: np.ndarray) -> int:
        if abs(obs[0]) > 1e-6:
            return ACTION_NOOP
        cur_x, cur_w = obs[3], obs[5]
        next_x, next_top = obs[7], obs[8]
        if next_x < 0.25 and next_top > -0.05:
            return ACTION_RISE
        ends_in = cur_x + cur_w
        if ends_in < 0.15 and next_x > ends_in + 0.1:
            return ACTION_RISE
        if next_x >= 1.0 and next_top <= -1.0:
            return ACTION_BOOST
        return ACTION_NOOP
    return act


POLICIES: Dict[str, Callable[[int], Policy]] = {
    "random": random_policy,
    "heuristic": heuristic_policy,
}


class Episode(NamedTuple):
    policy: str
    seed: int
    steps: int
    ret: float
    distance: float
    terminated: bool
    truncated: bool
    death_cause: Optional[str]
    actions: np.ndarray
    observations: Optional[np.ndarray]


def run_episode(policy_name: str, seed: int, frame_skip: int = 4, max_steps: int = 10_000,
                level: Optional[Level] = None, keep_obs: bool = False) -> Episode:
    policy = POLICIES[policy_name](seed)
    env = UnicornEnv(frame_skip=frame_skip, level=level)
    actions: List[int] = []
    observations: List[np.ndarray] = []
    ret = 0.0
    term = trunc = False
    try:
        obs, info = env.reset(seed=seed)
        if keep_obs:
            observations.append(obs.copy())
        while len(actions) < max_steps and not (term or trunc):
            a = policy(obs)
            actions.append(a)
            obs, r, term, trunc, info = env.step(a)
            ret += float(r)
            if keep_obs:
                observations.append(obs.copy())
    finally:
        env.close()

    return Episode(
        policy=policy_name, seed=seed, steps=len(actions), ret=ret,
        distance=float(info["distance"]), terminated=bool(term), truncated=bool(trunc),
        death_cause=info.get("death_cause"),
        actions=np.asarray(actions, dtype=np.int8),
        observations=np.asarray(observations, dtype=np.float32) if keep_obs else None,
    )


def save_trace(ep: Episode, out_dir: Path, frame_skip: int) -> Path:
    """Writes <seed>_actions.npy, optional <seed>_obs.npy and a key=value meta file."""
    trace_dir = out_dir / "traces" / ep.policy
    trace_dir.mkdir(parents=True, exist_ok=True)
    np.save(trace_dir / f"{ep.seed}_actions.npy", ep.actions)
    if ep.observations is not None:
        np.save(trace_dir / f"{ep.seed}_obs.npy", ep.observations)
    meta = {"seed": ep.seed, "frame_skip": frame_skip, "policy": ep.policy, "steps": ep.steps}
    (trace_dir / f"{ep.seed}_meta.txt").write_text(
        "\n".join(f"{k}={v}" for k, v in meta.items()), encoding="utf-8")
    return trace_dir


CSV_FIELDS = ["level", "policy", "seed", "frame_skip", "decision_hz", "steps",
              "return", "distance", "terminated", "truncated", "death_cause"]


def append_summary(csv_path: Path, ep: Episode, level_name: str, frame_skip: int):
    new_file = not csv_path.exists()
    with csv_path.open("a", newline="") as f:
        w = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        if new_file:
            w.writeheader()
        w.writerow({
            "level": level_name, "policy": ep.policy, "seed": ep.seed,
            "frame_skip": frame_skip, "decision_hz": SIM_FPS / max(1, frame_skip),
            "steps": ep.steps, "return": f"{ep.ret:.1f}", "distance": f"{ep.distance:.1f}",
            "terminated": int(ep.terminated), "truncated": int(ep.truncated),
            "death_cause": ep.death_cause or "",
        })


def parse_seeds(text: str) -> List[int]:
    seeds = [int(s) for s in text.split(",") if s.strip()]
    return seeds or list(DEFAULT_SEEDS)


def main(argv=None):
    ap = argparse.ArgumentParser(description="Baseline rollouts on UnicornEnv")
    ap.add_argument("--policies", choices=[*POLICIES, "both"], default="both")
    ap.add_argument("--seeds", type=str, default="", help="Comma-separated seeds (default 101..120)")
    ap.add_argument("--level", type=str, default="", help="Level file; default is generated per seed")
    ap.add_argument("--frame-skip", type=int, default=4)
    ap.add_argument("--steps", type=int, default=10_000, help="Cap on decision steps per episode")
    ap.add_argument("--out-dir", type=str, default="experiments/runs")
    ap.add_argument("--save-traces", action="store_true", help="Keep action sequences for replay")
    ap.add_argument("--save-obs", action="store_true", help="Also keep per-step observations")
    ap.add_argument("--log-level", type=str, default="INFO")
    args = ap.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    csv_path = out_dir / "episodes.csv"
    level = load_level(args.level) if args.level else None
    level_name = args.level or "generated"
    policies = list(POLICIES) if args.policies == "both" else [args.policies]
    seeds = parse_seeds(args.seeds)

    logger.info("Running %s on %d seeds (frame_skip=%d, level=%s) -> %s",
                policies, len(seeds), args.frame_skip, level_name, csv_path)
    for name in policies:
        for seed in seeds:
            ep = run_episode(name, seed, frame_skip=args.frame_skip, max_steps=args.steps,
                             level=level, keep_obs=args.save_obs)
            append_summary(csv_path, ep, level_name, args.frame_skip)
            if args.save_traces:
                save_trace(ep, out_dir, args.frame_skip)
            print(f"[{name}] seed={seed} len={ep.steps} dist={ep.distance:.1f} "
                  f"ret={ep.ret:.1f} cause={ep.death_cause or '-'}")
    print("✓ Rollouts complete")


if __name__ == "__main__":
    main()
