"""Shared fixtures: a hand-driven clock and a listener that records every notification."""

from __future__ import annotations

import pytest

from lanefall.models import RemovalReason
from lanefall.session import GameClock


class ManualClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class RecordingListener:
    def __init__(self) -> None:
        self.events: list[tuple] = []

    def on_note_spawned(self, note_id: int, lane: int) -> None:
        self.events.append(("spawned", note_id, lane))

    def on_note_position_changed(self, note_id: int, position_px: float) -> None:
        self.events.append(("position", note_id, position_px))

    def on_note_removed(self, note_id: int, reason: RemovalReason) -> None:
        self.events.append(("removed", note_id, reason))

    def on_judgment_display(self, text: str, duration_ms: int = 500) -> None:
        self.events.append(("judgment", text, duration_ms))

    def on_score_changed(self, score: int) -> None:
        self.events.append(("score", score))

    def on_combo_changed(self, combo: int) -> None:
        self.events.append(("combo", combo))

    def on_game_ended(self, final_score: int) -> None:
        self.events.append(("ended", final_score))

    def of_kind(self, kind: str) -> list[tuple]:
        return [e for e in self.events if e[0] == kind]


@pytest.fixture
def manual_clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def clock(manual_clock: ManualClock) -> GameClock:
    return GameClock(manual_clock)


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()
