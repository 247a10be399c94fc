"""Main menu and beatmap picker view."""

from __future__ import annotations

import logging
from pathlib import Path

import pygame

from lanefall.beatmap import SAMPLE_BEATMAP, find_beatmaps, load_beatmap, validate_beatmap
from lanefall.models import ConfigurationError
from lanefall.renderer import colors as colors_mod
from lanefall.views.base import ViewAction, ViewContext

logger = logging.getLogger(__name__)


class MenuView:
    name = "menu"

    def __init__(self) -> None:
        self._context: ViewContext | None = None
        self._files: list[Path | None] = []  # None is the built-in sample
        self._selected: int = 0
        self._error: str | None = None
        self._font: pygame.font.Font | None = None
        self._title_font: pygame.font.Font | None = None

    def on_enter(self, context: ViewContext) -> None:
        self._context = context
        self._font = pygame.font.SysFont("monospace", 20)
        self._title_font = pygame.font.SysFont("monospace", 36)
        self._files = [None]
        if context.beatmaps_dir:
            self._files.extend(find_beatmaps(context.beatmaps_dir))
        self._selected = min(self._selected, len(self._files) - 1)

    def on_exit(self) -> None:
        pass

    def handle_event(self, event: pygame.event.Event) -> ViewAction | None:
        if event.type != pygame.KEYDOWN:
            return None

        if event.key == pygame.K_ESCAPE:
            return ViewAction(kind="quit")

        if event.key == pygame.K_UP:
            self._selected = max(0, self._selected - 1)
        elif event.key == pygame.K_DOWN:
            self._selected = min(len(self._files) - 1, self._selected + 1)
        elif event.key == pygame.K_RETURN:
            return self._launch()

        return None

    def _launch(self) -> ViewAction | None:
        if self._context is None:
            return None
        path = self._files[self._selected]
        lane_count = self._context.config.lane_count
        try:
            beatmap = SAMPLE_BEATMAP if path is None else load_beatmap(path, lane_count)
            validate_beatmap(beatmap, lane_count)
        except ConfigurationError as exc:
            logger.warning("Cannot start %s: %s", path or "sample", exc)
            self._error = str(exc)
            return None

        self._error = None
        return ViewAction(kind="switch", target="play", context_patch={"beatmap": beatmap})

    def update(self, dt: float) -> ViewAction | None:
        return None

    def draw(self, surface: pygame.Surface) -> None:
        if not self._font or not self._title_font:
            return

        surface.fill(colors_mod.BG)
        w, h = surface.get_size()

        title = self._title_font.render("LaneFall", True, colors_mod.JUDGE_PERFECT)
        surface.blit(title, (w // 2 - title.get_width() // 2, 30))

        header = self._font.render("Beatmaps:", True, colors_mod.HUD_TEXT)
        surface.blit(header, (40, 110))

        y = 145
        for i, path in enumerate(self._files):
            prefix = "> " if i == self._selected else "  "
            color = colors_mod.JUDGE_PERFECT if i == self._selected else colors_mod.HUD_TEXT
            label = SAMPLE_BEATMAP.title if path is None else path.stem
            text = self._font.render(f"{prefix}{label}", True, color)
            surface.blit(text, (40, y))
            y += 28
            if y > h - 120:
                break

        if self._error:
            error = self._font.render(self._error[:56], True, colors_mod.JUDGE_MISS)
            surface.blit(error, (40, h - 80))

        keys = "/".join(k.upper() for k in self._context.config.keys) if self._context else ""
        legend = self._font.render(f"Enter: start | {keys}: lanes | Esc: quit", True, (120, 120, 140))
        surface.blit(legend, (40, h - 40))
