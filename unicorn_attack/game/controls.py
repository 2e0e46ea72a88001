# unicorn_attack/game/controls.py
from __future__ import annotations
from typing import Optional
import pygame
from pygame import K_UP, K_LEFT, K_RIGHT, K_d, K_x, K_n, K_ESCAPE

from .simulation import Intent

# key-down only; holding a key does not repeat the intent
KEYMAP = {
    K_UP: Intent.RISE,
    K_LEFT: Intent.MOVE_LEFT,
    K_RIGHT: Intent.MOVE_RIGHT,
    K_d: Intent.TOGGLE_MODE,
    K_x: Intent.BOOST,
    K_n: Intent.RESTART,
    K_ESCAPE: Intent.QUIT,
}

HELP_TEXT = "UP rise | LEFT/RIGHT move | D mode | X dash | N restart | ESC quit"


def intent_for_event(event) -> Optional[Intent]:
    if event.type == pygame.QUIT:
        return Intent.QUIT
    if event.type == pygame.KEYDOWN:
        return KEYMAP.get(event.key)
    return None
