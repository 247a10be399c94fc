"""Tests for the playfield renderer's view of the session."""

from lanefall.config import GameConfig
from lanefall.models import Beatmap, RemovalReason
from lanefall.renderer.playfield import JUDGE_LINE_Y, PlayfieldRenderer
from lanefall.session import GameSession


class FakeTicks:
    def __init__(self) -> None:
        self.now = 0

    def __call__(self) -> int:
        return self.now


def test_tracks_notes_from_notifications():
    renderer = PlayfieldRenderer(GameConfig(), ticks=FakeTicks())
    renderer.on_note_spawned(1, 2)
    renderer.on_note_position_changed(1, 123.0)
    assert renderer.notes == {1: (2, 123.0)}
    renderer.on_note_removed(1, RemovalReason.MISS)
    assert renderer.notes == {}
    renderer.on_note_position_changed(1, 200.0)
    assert renderer.notes == {}


def test_judgment_text_expires():
    ticks = FakeTicks()
    renderer = PlayfieldRenderer(GameConfig(), ticks=ticks)
    renderer.on_judgment_display("GOOD", 500)
    ticks.now = 499
    assert renderer.visible_judgment() == "GOOD"
    ticks.now = 500
    assert renderer.visible_judgment() is None


def test_judgment_line_maps_to_screen():
    renderer = PlayfieldRenderer(GameConfig(), ticks=FakeTicks())
    assert renderer.to_screen_y(600) == JUDGE_LINE_Y
    assert renderer.lane_rect(1).x - renderer.lane_rect(0).x == 100


def test_follows_a_whole_session(clock, manual_clock):
    renderer = PlayfieldRenderer(GameConfig(), ticks=FakeTicks())
    session = GameSession(Beatmap.from_pairs([[1000, 0]]), listener=renderer, clock=clock)
    session.start()
    session.tick()
    assert list(renderer.notes) == [1]

    manual_clock.now = 1000
    session.tick()
    session.key_lane_down(0)
    assert renderer.notes == {}
    assert (renderer.score, renderer.combo) == (100, 1)
    assert renderer.visible_judgment() == "PERFECT"

    session.tick()
    assert renderer.final_score == 100
