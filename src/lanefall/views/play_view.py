"""Four-lane gameplay view."""

from __future__ import annotations

import logging

import pygame

from lanefall.beatmap import SAMPLE_BEATMAP
from lanefall.models import ConfigurationError
from lanefall.renderer import colors as colors_mod
from lanefall.renderer.playfield import PlayfieldRenderer
from lanefall.session import GameClock, GameSession
from lanefall.views.base import ViewAction, ViewContext

logger = logging.getLogger(__name__)


class PlayView:
    name = "play"

    def __init__(self) -> None:
        self._context: ViewContext | None = None
        self._session: GameSession | None = None
        self._renderer: PlayfieldRenderer | None = None
        self._error: str | None = None
        self._font: pygame.font.Font | None = None

    def on_enter(self, context: ViewContext) -> None:
        self._context = context
        self._font = pygame.font.SysFont("monospace", 20)
        self._renderer = PlayfieldRenderer(context.config)
        self._session = GameSession(
            context.beatmap if context.beatmap is not None else SAMPLE_BEATMAP,
            config=context.config,
            listener=self._renderer,
            clock=GameClock(pygame.time.get_ticks),
        )
        self._start()

    def on_exit(self) -> None:
        if self._session:
            self._session.stop()

    def _start(self) -> None:
        if self._session is None:
            return
        try:
            self._session.start()
        except ConfigurationError as exc:
            logger.error("Cannot start %r: %s", self._session.beatmap.title, exc)
            self._error = str(exc)
        else:
            self._error = None

    def handle_event(self, event: pygame.event.Event) -> ViewAction | None:
        if event.type != pygame.KEYDOWN or self._session is None:
            return None

        if event.key == pygame.K_ESCAPE:
            return ViewAction(kind="switch", target="menu")
        if event.key == pygame.K_RETURN and not self._session.running:
            self._start()
        return None

    def update(self, dt: float) -> ViewAction | None:
        session = self._session
        if session is None:
            return None

        keyboard = self._context.keyboard_input if self._context else None
        if keyboard is not None:
            while (evt := keyboard.poll()) is not None:
                if evt.is_down:
                    session.key_lane_down(evt.lane, evt.timestamp_ms)

        session.tick()
        return None

    def draw(self, surface: pygame.Surface) -> None:
        if self._renderer is None or self._font is None:
            return

        surface.fill(colors_mod.BG)
        keyboard = self._context.keyboard_input if self._context else None
        self._renderer.draw(surface, keyboard.held_lanes if keyboard else set())

        w, h = surface.get_size()
        lines: list[str] = []
        if self._error:
            lines = [self._error[:50], "Esc: menu"]
        elif self._renderer.final_score is not None:
            lines = [f"Game over! Score: {self._renderer.final_score}"]
            stats = self._session.last_stats if self._session else None
            if stats is not None:
                lines.append(f"Perfect {stats.perfect}  Good {stats.good}  Miss {stats.missed}")
                lines.append(f"Max combo {stats.max_combo}  Accuracy {stats.accuracy_pct:.1f}%")
            lines.append("Enter: retry | Esc: menu")
        y = h // 3
        for line in lines:
            rendered = self._font.render(line, True, colors_mod.HUD_TEXT)
            surface.blit(rendered, (w // 2 - rendered.get_width() // 2, y))
            y += 28
