# flapsim/game/render.py
from __future__ import annotations
from typing import Optional

import pygame

from .config import (
    COLOR_SKY, COLOR_BIRD, COLOR_PIPE, COLOR_GROUND, COLOR_GRASS, COLOR_FG, COLOR_DANGER
)
from .state import Snapshot


def draw_snapshot(surf: pygame.Surface, snap: Snapshot, font: Optional[pygame.font.Font] = None):
    """Paint one frame. Pure read of the snapshot; text is skipped when font is None."""
    cfg = snap.config
    surf.fill(COLOR_SKY)

    for p in snap.pipes:
        pygame.draw.rect(surf, COLOR_PIPE, pygame.Rect(p.x, 0, p.width, p.gap_top))
        pygame.draw.rect(surf, COLOR_PIPE, pygame.Rect(p.x, p.gap_bottom, p.width, cfg.ground_y - p.gap_bottom))

    b = snap.bird
    color_bird = COLOR_DANGER if snap.is_over else COLOR_BIRD
    pygame.draw.ellipse(surf, color_bird, pygame.Rect(b.x, b.y, b.size, b.size))

    # Ground with a grass strip on top
    pygame.draw.rect(surf, COLOR_GROUND, pygame.Rect(0, cfg.ground_y, cfg.width, cfg.ground_height))
    pygame.draw.rect(surf, COLOR_GRASS, pygame.Rect(0, cfg.ground_y, cfg.width, cfg.ground_height // 4))

    if font is None:
        return
    surf.blit(font.render(f"Score: {snap.score}", True, COLOR_FG), (10, 10))
    if snap.is_over:
        lines = [f"Game Over! Score: {snap.score}", "Press Enter to Restart"]
        y = cfg.height // 2 - 40
        for msg in lines:
            txt = font.render(msg, True, COLOR_FG)
            surf.blit(txt, (cfg.width // 2 - txt.get_width() // 2, y))
            y += txt.get_height() + 8
