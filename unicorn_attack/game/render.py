# unicorn_attack/game/render.py
from __future__ import annotations
import pygame

from .config import (
    SCREEN_WIDTH, SCREEN_HEIGHT,
    COLOR_BG, COLOR_RIDER, COLOR_PLAT_FILL, COLOR_PLAT_EDGE, COLOR_HUD,
    COLOR_PANEL, COLOR_PANEL_EDGE, COLOR_PANEL_TEXT,
)
from .camera import ScreenRect, platform_to_screen, rider_anchor, is_visible
from .simulation import Simulation


def _to_rect(r: ScreenRect) -> pygame.Rect:
    return pygame.Rect(int(r.x), int(r.y), int(r.w), int(r.h))


def draw_rectangle(surf: pygame.Surface, rect: pygame.Rect, outline, fill):
    """Filled box with a 1 px outline."""
    pygame.draw.rect(surf, fill, rect)
    pygame.draw.rect(surf, outline, rect, width=1)


def hud_line(sim: Simulation, fps: float) -> str:
    h = sim.hud()
    return (f"position({h.x:.2f}, {h.y:.2f}) speed({h.dx:.2f}, {h.dy:.2f}) "
            f"dash: {h.boost:.2f} fps: {fps:.0f}")


def draw_frame(screen: pygame.Surface, sim: Simulation, font: pygame.font.Font, fps: float,
               help_text: str | None = None):
    screen.fill(COLOR_BG)

    anchor = _to_rect(rider_anchor())
    draw_rectangle(screen, anchor, COLOR_RIDER, COLOR_RIDER)

    for p in sim.level:
        sr = platform_to_screen(sim.rider, p)
        if is_visible(sr):
            draw_rectangle(screen, _to_rect(sr), COLOR_PLAT_EDGE, COLOR_PLAT_FILL)

    screen.blit(font.render(hud_line(sim, fps), True, COLOR_HUD), (4, 4))
    if help_text:
        screen.blit(font.render(help_text, True, COLOR_HUD), (4, 22))
    mode = f"mode: {sim.control_mode.value}  t={sim.time:.1f}s"
    screen.blit(font.render(mode, True, COLOR_HUD), (4, SCREEN_HEIGHT - 20))

    if sim.ended:
        draw_crash_panel(screen, font)


def draw_crash_panel(screen: pygame.Surface, font: pygame.font.Font):
    w, h = 220, 70
    panel = pygame.Rect((SCREEN_WIDTH - w) // 2, (SCREEN_HEIGHT - h) // 2, w, h)
    pygame.draw.rect(screen, COLOR_PANEL, panel, border_radius=10)
    pygame.draw.rect(screen, COLOR_PANEL_EDGE, panel, width=2, border_radius=10)

    title = font.render("Crashed!", True, COLOR_PANEL_TEXT)
    screen.blit(title, (panel.centerx - title.get_width() // 2,
                        panel.centery - title.get_height() - 5))
    sub = font.render("Restart (N)  Quit (ESC)", True, COLOR_PANEL_TEXT)
    screen.blit(sub, (panel.centerx - sub.get_width() // 2, panel.centery + 5))
