# unicorn_attack/game/camera.py
"""
World -> screen transform. The rider stays at a fixed screen anchor and the
world scrolls beneath it. Pure functions, no state.
"""
from __future__ import annotations
from typing import NamedTuple

from .config import (
    SCALE, SCREEN_WIDTH, SCREEN_HEIGHT, VIEWPORT_HEIGHT_UNITS, RIDER_W, RIDER_H
)


class ScreenRect(NamedTuple):
    x: float
    y: float
    w: float
    h: float


def world_to_screen(rider_x: float, rider_y: float, x: float, y: float,
                    viewport_height_units: float = VIEWPORT_HEIGHT_UNITS,
                    scale: float = SCALE):
    """Screen position (px) of the world point (x, y)."""
    sx = (x - rider_x + 1) * scale
    sy = (rider_y + (viewport_height_units - RIDER_H) / 2 - y) * scale
    return sx, sy


def platform_to_screen(rider, platform,
                       viewport_height_units: float = VIEWPORT_HEIGHT_UNITS,
                       scale: float = SCALE) -> ScreenRect:
    sx, sy = world_to_screen(rider.x, rider.y, platform.x, platform.y,
                             viewport_height_units, scale)
    return ScreenRect(sx, sy, platform.w * scale, platform.h * scale)


def rider_anchor(scale: float = SCALE, screen_height: int = SCREEN_HEIGHT) -> ScreenRect:
    """Fixed marker rect of the rider; lines up with world_to_screen of its own top-left."""
    return ScreenRect(scale, (screen_height - RIDER_H * scale) / 2,
                      RIDER_W * scale, RIDER_H * scale)


def is_visible(rect: ScreenRect,
               screen_width: int = SCREEN_WIDTH,
               screen_height: int = SCREEN_HEIGHT) -> bool:
    return not (rect.x + rect.w < 0 or rect.x > screen_width
                or rect.y + rect.h < 0 or rect.y > screen_height)
