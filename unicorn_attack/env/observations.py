# unicorn_attack/env/observations.py
from __future__ import annotations
from typing import List, Sequence, Tuple
import numpy as np

from unicorn_attack.game.config import RISE_SPEED, VIEWPORT_HEIGHT_UNITS
from unicorn_attack.game.level import Platform

N_PROBES = 3
LOOKAHEAD_UNITS = 20.0      # rel_x / width normalization
DY_NORM = 2.0 * RISE_SPEED
DX_NORM = 60.0
OBS_SIZE = 3 + 4 * N_PROBES
# "nothing ahead": far right, far below, no size
EMPTY_PROBE = (1.0, -1.0, 0.0, 0.0)

OBS_LOW = np.array([-1.0, -1.0, 0.0] + [-1.0, -1.0, 0.0, 0.0] * N_PROBES, dtype=np.float32)
OBS_HIGH = np.array([1.0, 1.0, 1.0] + [1.0, 1.0, 1.0, 1.0] * N_PROBES, dtype=np.float32)


def _clip(v: float, lo: float, hi: float) -> float:
    return lo if v < lo else (hi if v > hi else v)


def platforms_ahead(rider, platforms: Sequence[Platform], n: int = N_PROBES) -> List[Platform]:
    """
    The n nearest platforms not yet behind the rider (right edge >= rider.x),
    ordered by left edge; level order breaks ties.
    """
    ahead = [(p.x, i, p) for i, p in enumerate(platforms) if p.right >= rider.x]
    ahead.sort(key=lambda t: (t[0], t[1]))
    return [p for _, _, p in ahead[:n]]


def probe_features(rider, p: Platform) -> Tuple[float, float, float, float]:
    return (
        _clip((p.x - rider.x) / LOOKAHEAD_UNITS, -1.0, 1.0),
        _clip((p.y - rider.y) / VIEWPORT_HEIGHT_UNITS, -1.0, 1.0),
        _clip(p.w / LOOKAHEAD_UNITS, 0.0, 1.0),
        _clip(p.h / VIEWPORT_HEIGHT_UNITS, 0.0, 1.0),
    )


def build_observation(rider, platforms: Sequence[Platform], n_probes: int = N_PROBES) -> np.ndarray:
    """
    Returns a fixed (3 + 4*n_probes,) float32 vector:
      [ dy_norm, dx_norm, boost,
        rel_x, rel_top, w, h   (probe 1)
        ...                    (probe n) ]
    - dy_norm, dx_norm in [-1, 1]; boost in [0, 1]
    - rel_x, rel_top in [-1, 1]; w, h in [0, 1]
    - missing probes are filled with EMPTY_PROBE
    """
    feats: List[float] = [
        _clip(rider.dy / DY_NORM, -1.0, 1.0),
        _clip(rider.dx / DX_NORM, -1.0, 1.0),
        _clip(rider.boost_remaining, 0.0, 1.0),
    ]
    ahead = platforms_ahead(rider, platforms, n_probes)
    for i in range(n_probes):
        feats.extend(probe_features(rider, ahead[i]) if i < len(ahead) else EMPTY_PROBE)
    return np.asarray(feats, dtype=np.float32)
