# unicorn_attack/game/levelgen.py
from __future__ import annotations
import logging
import random
from typing import List, Optional, Tuple

from .config import (
    SPAWN_X, SPAWN_Y, RIDER_H, LEVEL_LENGTH, START_PLATFORM_W,
    SEGMENT_MIN_W, SEGMENT_MAX_W, GAP_MIN_W, GAP_MAX_W,
    TOP_MIN_Y, TOP_MAX_Y, MAX_STEP_UP, WALL_CHANCE, WALL_W, WALL_H, PLATFORM_H,
)
from .level import Level, Platform

logger = logging.getLogger(__name__)


def _half(v: float) -> float:
    """Snap to the 0.5-unit grid so saved levels stay readable."""
    return round(v * 2.0) / 2.0


class LevelGen:
    """
    Seeded producer of a finite track: a safe start platform under the spawn
    point, then segments and gaps with drifting tops and the odd wall block.
    Same seed -> same Level.
    """
    def __init__(self, seed: int | None = None, length: float = LEVEL_LENGTH):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.length = float(length)
        self.rng = random.Random(seed)
        self.platforms: List[Platform] = []
        self._last_was_gap = True   # first pick after the start platform is a segment
        self._top = _half(SPAWN_Y - RIDER_H - 1.0)
        self._x = 0.0
        self._init_start()

    def _init_start(self):
        start = Platform(_half(SPAWN_X - 2.0), self._top, START_PLATFORM_W, PLATFORM_H)
        self.platforms.append(start)
        self._x = start.right

    def _rand_w(self, lo: float, hi: float) -> float:
        return max(lo, _half(self.rng.uniform(lo, hi)))

    def _next_top(self) -> float:
        top = self._top + self.rng.uniform(-MAX_STEP_UP, MAX_STEP_UP)
        return _half(max(TOP_MIN_Y, min(TOP_MAX_Y, top)))

    def _generate_gap(self) -> float:
        self._last_was_gap = True
        return self._rand_w(GAP_MIN_W, GAP_MAX_W)

    def _generate_segment(self) -> float:
        w = self._rand_w(SEGMENT_MIN_W, SEGMENT_MAX_W)
        self._top = self._next_top()
        self.platforms.append(Platform(self._x, self._top, w, PLATFORM_H))

        # a wall needs run-up and landing room on its segment
        if w >= WALL_W + 6.0 and self.rng.random() < WALL_CHANCE:
            wx = _half(self._x + self.rng.uniform(3.0, w - WALL_W - 3.0))
            self.platforms.append(Platform(wx, self._top + WALL_H, WALL_W, WALL_H))
        self._last_was_gap = False
        return w

    def generate(self) -> Level:
        # always close on a segment so the track reaches `length`
        while self._x < self.length or self._last_was_gap:
            if not self._last_was_gap and self.rng.random() < 0.35:
                width = self._generate_gap()
            else:
                width = self._generate_segment()
            self._x += width
        level = Level(self.platforms)
        logger.info("Generated level seed=%s with %d platforms", self.seed, level.platform_count)
        return level


def generate_level(seed: Optional[int] = None,
                   length: float = LEVEL_LENGTH) -> Tuple[Level, int]:
    """Returns (level, effective_seed)."""
    gen = LevelGen(seed, length)
    return gen.generate(), gen.seed
