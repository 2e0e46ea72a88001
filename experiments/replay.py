# experiments/replay.py
"""
Replay tool for UnicornEnv: quick command cheat sheet

# Typical usage (run from REPO ROOT so `unicorn_attack/...` imports work)

# Replay a HEURISTIC episode by seed (uses actions at experiments/runs/traces/heuristic/<seed>_actions.npy)
python -m experiments.replay --policy heuristic --seed 105

# Replay by pointing directly to a specific actions file
python -m experiments.replay --trace experiments/runs/traces/random/112_actions.npy --frame-skip 4

# Traces recorded on a level file must be replayed on the same file
python -m experiments.replay --policy random --seed 101 --level levels/lvl1.txt

# Controls during replay
SPACE = pause/resume
N     = single step (when paused)
R     = restart episode
ESC   = quit

# Notes
- Deterministic: same seed, level, frame_skip and action sequence -> same run.
- If you pass --trace, the script does not read meta; supply --frame-skip if different from 4.
"""

from __future__ import annotations
import argparse
from pathlib import Path
from typing import Optional, List

import numpy as np
import pygame

from unicorn_attack.env.ua_env import UnicornEnv, ACTION_NAMES
from unicorn_attack.game.level import Level, load_level

DEFAULT_OUT_DIR = "experiments/runs"

def _find_trace(out_dir: Path, policy: str, seed: int) -> Path:
    p = out_dir / "traces" / policy / f"{seed}_actions.npy"
    if not p.exists():
        raise FileNotFoundError(f"Trace not found: {p}")
    return p

def _read_meta(out_dir: Path, policy: str, seed: int) -> dict:
    meta_path = out_dir / "traces" / policy / f"{seed}_meta.txt"
    meta = {}
    if meta_path.exists():
        for line in meta_path.read_text(encoding="utf-8").splitlines():
            if "=" in line:
                k, v = line.split("=", 1)
                meta[k.strip()] = v.strip()
    return meta

def _draw_overlay(env: UnicornEnv, step_idx: int, action: Optional[int]):
    surf = pygame.display.get_surface()
    if surf is None or env.sim is None:
        return
    font = pygame.font.SysFont("jetbrainsmono", 14)

    lines: List[str] = []
    lines.append(f"Step={step_idx}  Action={ACTION_NAMES[action] if action is not None else '-'}")
    lines.append(f"Dist={env.sim.rider.x:.1f}  Cause={env.death_cause or '-'}")

    panel_w = 260
    panel_h = 18 * (len(lines) + 1)
    panel = pygame.Surface((panel_w, panel_h), pygame.SRCALPHA)
    panel.fill((10, 20, 35, 160))
    surf.blit(panel, (12, 44))

    y0 = 50
    for i, txt in enumerate(lines):
        surf.blit(font.render(txt, True, (210, 230, 255)), (20, y0 + i * 18))

    pygame.display.flip()

def replay_episode(seed: int,
                   actions: np.ndarray,
                   frame_skip: int,
                   level: Optional[Level] = None,
                   slow: bool = False):
    """
    Replays an episode deterministically with on-screen overlay.
    Controls:
      SPACE: pause/resume   N: single step when paused
      R: restart episode    ESC: quit
    """
    env = UnicornEnv(render_mode="human", frame_skip=frame_skip, level=level,
                     time_limit_seconds=None)
    env.reset(seed=seed)
    env.render()

    paused = False
    single_step = False
    step_idx = 0
    action: Optional[int] = None
    clock = pygame.time.Clock()

    try:
        running = True
        while running and step_idx < len(actions):
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_SPACE:
                        paused = not paused
                    elif event.key == pygame.K_n and paused:
                        single_step = True
                    elif event.key == pygame.K_r:
                        env.reset(seed=seed)
                        step_idx = 0
                        paused = False

            if paused and not single_step:
                env.render()
                _draw_overlay(env, step_idx, action=None)
                clock.tick(60)
                continue
            single_step = False

            action = int(actions[step_idx])
            _, _, term, trunc, _ = env.step(action)
            env.render()
            _draw_overlay(env, step_idx, action)
            step_idx += 1

            clock.tick(15 if slow else 60)

            if term or trunc:
                pygame.time.delay(600)
                break
    finally:
        env.close()

def main(argv=None):
    ap = argparse.ArgumentParser(description="Replay a recorded UnicornEnv episode with overlay.")
    ap.add_argument("--seed", type=int, help="Episode seed")
    ap.add_argument("--policy", type=str, default="random",
                    help="Trace subfolder name, e.g. random / heuristic")
    ap.add_argument("--trace", type=str, default="",
                    help="Optional explicit path to a .npy action file")
    ap.add_argument("--level", type=str, default="",
                    help="Level file the trace was recorded on (default: generated from seed)")
    ap.add_argument("--out-dir", type=str, default=DEFAULT_OUT_DIR,
                    help="Base directory where experiments/runs live")
    ap.add_argument("--frame-skip", type=int, default=-1,
                    help="Override frame_skip. If <0, use meta or default=4")
    ap.add_argument("--slow", action="store_true", help="Slow display (~15 fps) for readability")
    args = ap.parse_args(argv)

    out_dir = Path(args.out_dir)

    if args.trace:
        trace_path = Path(args.trace)
        if not trace_path.exists():
            raise FileNotFoundError(f"Trace file not found: {trace_path}")
        if args.seed is None:
            stem = trace_path.stem.split("_")[0]
            if not stem.lstrip("-").isdigit():
                raise SystemExit(f"Cannot infer seed from {trace_path.name}; pass --seed")
            args.seed = int(stem)
    else:
        if args.seed is None:
            raise SystemExit("Please provide --seed or --trace")
        trace_path = _find_trace(out_dir, args.policy, args.seed)

    actions = np.load(trace_path)
    if actions.ndim != 1:
        raise ValueError(f"Expected 1D action array, got shape {actions.shape}")

    fs = args.frame_skip
    if fs < 0:
        fs = 4
        if not args.trace:
            meta = _read_meta(out_dir, args.policy, args.seed)
            if meta.get("frame_skip", "").isdigit():
                fs = int(meta["frame_skip"])

    level = load_level(args.level) if args.level else None

    print(f"Replaying seed={args.seed}  policy={args.policy}  steps={len(actions)}  frame_skip={fs}")
    print("Controls: SPACE pause/resume | N step (when paused) | R restart | ESC quit")

    replay_episode(seed=args.seed, actions=actions, frame_skip=fs, level=level, slow=args.slow)

if __name__ == "__main__":
    main()
