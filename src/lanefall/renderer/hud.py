"""Heads-up display — score and combo counters plus the fading judgment text."""

from __future__ import annotations

import pygame

from lanefall.renderer.colors import HUD_TEXT, JUDGE_GOOD, JUDGE_MISS, JUDGE_PERFECT

_JUDGE_COLORS = {
    "PERFECT": JUDGE_PERFECT,
    "GOOD": JUDGE_GOOD,
    "MISS": JUDGE_MISS,
}


def render_hud(surface: pygame.Surface, score: int, combo: int, x: int = 10) -> None:
    font = pygame.font.SysFont("monospace", 20)

    lines = [
        f"Score: {score}",
        f"Combo: {combo}",
    ]

    y = 10
    for line in lines:
        text = font.render(line, True, HUD_TEXT)
        surface.blit(text, (x, y))
        y += 28


def render_judgment(surface: pygame.Surface, text: str, center: tuple[int, int], alpha: int = 255) -> None:
    """Draw a judgment word centred on ``center``."""
    font = pygame.font.SysFont("monospace", 36, bold=True)
    rendered = font.render(text, True, _JUDGE_COLORS.get(text, HUD_TEXT))
    rendered.set_alpha(alpha)
    surface.blit(rendered, (center[0] - rendered.get_width() // 2, center[1] - rendered.get_height() // 2))
