"""Lanes, targets, and falling notes, driven by session notifications."""

from __future__ import annotations

from typing import Callable

import pygame

from lanefall.config import GameConfig, LANE_WIDTH, WINDOW_HEIGHT, WINDOW_WIDTH
from lanefall.models import RemovalReason
from lanefall.renderer import colors
from lanefall.renderer.hud import render_hud, render_judgment
from lanefall.session import NullListener

JUDGE_LINE_Y = WINDOW_HEIGHT - 100  # screen y of the judgment line centre


class PlayfieldRenderer(NullListener):
    """Keeps a picture of the session built purely from its notifications, and draws it."""

    def __init__(
        self,
        config: GameConfig,
        ticks: Callable[[], int] = pygame.time.get_ticks,
    ) -> None:
        self.config = config
        self._ticks = ticks
        self.notes: dict[int, tuple[int, float]] = {}  # note_id -> (lane, position_px)
        self.score = 0
        self.combo = 0
        self.final_score: int | None = None
        self.judgment_text: str | None = None
        self._judgment_until = 0
        self._left = (WINDOW_WIDTH - config.lane_count * LANE_WIDTH) // 2

    def on_note_spawned(self, note_id: int, lane: int) -> None:
        self.notes[note_id] = (lane, 0.0)

    def on_note_position_changed(self, note_id: int, position_px: float) -> None:
        if note_id in self.notes:
            self.notes[note_id] = (self.notes[note_id][0], position_px)

    def on_note_removed(self, note_id: int, reason: RemovalReason) -> None:
        self.notes.pop(note_id, None)

    def on_judgment_display(self, text: str, duration_ms: int = 500) -> None:
        self.judgment_text = text
        self._judgment_until = self._ticks() + duration_ms

    def on_score_changed(self, score: int) -> None:
        self.score = score
        self.final_score = None

    def on_combo_changed(self, combo: int) -> None:
        self.combo = combo

    def on_game_ended(self, final_score: int) -> None:
        self.final_score = final_score

    def visible_judgment(self) -> str | None:
        if self.judgment_text and self._ticks() < self._judgment_until:
            return self.judgment_text
        return None

    def to_screen_y(self, position_px: float) -> float:
        return JUDGE_LINE_Y - self.config.fall_distance_px + position_px

    def lane_rect(self, lane: int) -> pygame.Rect:
        return pygame.Rect(self._left + lane * LANE_WIDTH, 0, LANE_WIDTH, WINDOW_HEIGHT)

    def draw(self, surface: pygame.Surface, held_lanes: set[int]) -> None:
        cfg = self.config
        band_top = int(JUDGE_LINE_Y - cfg.band_height_px / 2)

        for lane in range(cfg.lane_count):
            rect = self.lane_rect(lane)
            pygame.draw.rect(surface, colors.LANE_BG, rect)
            pygame.draw.rect(surface, colors.LANE_BORDER, rect, width=1)
            target = pygame.Rect(rect.x + 1, band_top, rect.w - 2, int(cfg.band_height_px))
            color = colors.TARGET_ACTIVE if lane in held_lanes else colors.TARGET
            pygame.draw.rect(surface, color, target, width=0 if lane in held_lanes else 2)

        for lane, position in self.notes.values():
            rect = self.lane_rect(lane)
            top = self.to_screen_y(position) - cfg.note_height_px / 2
            note = pygame.Rect(rect.x + 6, int(top), rect.w - 12, int(cfg.note_height_px))
            pygame.draw.rect(surface, colors.NOTE, note, border_radius=4)

        render_hud(surface, self.score, self.combo)

        text = self.visible_judgment()
        if text:
            render_judgment(surface, text, (WINDOW_WIDTH // 2, WINDOW_HEIGHT // 2))
