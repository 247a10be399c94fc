"""Top-level application: initializes pygame, manages screens, and runs the game loop."""

from __future__ import annotations

import logging

import pygame

from lanefall.config import FPS, WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH, GameConfig
from lanefall.lane_input import KeyboardInput
from lanefall.models import Beatmap
from lanefall.views.base import ViewContext, ViewManager
from lanefall.views.menu_view import MenuView
from lanefall.views.play_view import PlayView

logger = logging.getLogger(__name__)


class App:
    def __init__(
        self,
        config: GameConfig | None = None,
        beatmaps_dir: str = "",
        beatmap: Beatmap | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self.config.validate()

        pygame.init()
        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
        self.clock = pygame.time.Clock()
        self._keyboard_input = KeyboardInput(self.config.keys)

        context = ViewContext(
            screen_size=(WINDOW_WIDTH, WINDOW_HEIGHT),
            config=self.config,
            keyboard_input=self._keyboard_input,
            beatmaps_dir=beatmaps_dir,
        )

        self.views = ViewManager(context)
        self.views.register(MenuView)
        self.views.register(PlayView)

        # A beatmap given up front skips the menu
        if beatmap is not None:
            self.views.push("play", beatmap=beatmap)
        else:
            self.views.push("menu")

    def run(self) -> None:
        running = True
        while running:
            dt = self.clock.tick(FPS) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                else:
                    self._keyboard_input.feed_event(event)
                    if not self.views.handle_event(event):
                        running = False
            if running:
                if not self.views.update(dt):
                    running = False
            self.views.draw(self.screen)
            pygame.display.flip()

        self._cleanup()
        pygame.quit()
        logger.debug("Shut down")

    def _cleanup(self) -> None:
        while self.views.active_view:
            self.views.pop()
        self._keyboard_input.close()
