# unicorn_attack/game/rider.py
from __future__ import annotations
from dataclasses import dataclass
from .config import SPAWN_X, SPAWN_Y, RIDER_W, RIDER_H


@dataclass
class Rider:
    """
    Kinematic state of the rider, standardized units:
    - (x, y) is the left edge / TOP edge of the RIDER_W x RIDER_H box
    - dx, dy in units/s (dy > 0 is up)
    - boost_remaining never goes below 0
    """
    x: float = SPAWN_X
    y: float = SPAWN_Y
    dx: float = 0.0
    dy: float = 0.0
    boost_remaining: float = 0.0

    @property
    def boosting(self) -> bool:
        return self.boost_remaining > 0.0

    @property
    def right(self) -> float:
        return self.x + RIDER_W

    @property
    def bottom(self) -> float:
        return self.y - RIDER_H

    def respawn(self, x: float = SPAWN_X, y: float = SPAWN_Y):
        """Re-initialize in place (the object is kept across restarts)."""
        self.x = float(x)
        self.y = float(y)
        self.dx = 0.0
        self.dy = 0.0
        self.boost_remaining = 0.0
