"""Tests for hit evaluation logic."""

import pytest

from lanefall.config import GameConfig
from lanefall.judgment import JudgmentEngine, classify, window_for
from lanefall.models import HitGrade, Note
from lanefall.notes import NoteSet


def note_at(note_id, position, lane=0):
    return Note(note_id=note_id, lane=lane, spawn_time_ms=0, target_time_ms=0,
                speed_px_per_ms=1 / 3, position_px=position, positioned_at_ms=0)


@pytest.fixture
def engine():
    return JudgmentEngine(GameConfig())


def test_window_follows_config():
    window = window_for(GameConfig(fall_distance_px=400, band_height_px=60))
    assert window.judge_center == 400
    assert window.judge_top == 370
    assert window.judge_bottom == 430


def test_classify_boundaries(engine):
    assert classify(0, engine.window) == HitGrade.PERFECT
    assert classify(30, engine.window) == HitGrade.PERFECT
    assert classify(30.5, engine.window) == HitGrade.GOOD


def test_perfect_hit(engine):
    notes = NoteSet()
    notes.add([note_at(1, 600)])
    result = engine.resolve_hit(notes, lane=0, at_time_ms=0)
    assert result.grade == HitGrade.PERFECT
    assert result.points == 100
    assert engine.score == 100
    assert engine.combo == 1
    assert len(notes) == 0


def test_good_hit(engine):
    notes = NoteSet()
    notes.add([note_at(1, 565)])  # bottom edge just touching the band
    result = engine.resolve_hit(notes, lane=0, at_time_ms=0)
    assert result.grade == HitGrade.GOOD
    assert result.diff_px == pytest.approx(35)
    assert engine.score == 50


def test_good_hit_just_outside_perfect(engine):
    notes = NoteSet()
    notes.add([note_at(1, 632)])
    result = engine.resolve_hit(notes, lane=0, at_time_ms=0)
    assert result.grade == HitGrade.GOOD
    assert result.diff_px == pytest.approx(32)


def test_press_is_judged_at_press_time(engine):
    notes = NoteSet()
    notes.add([note_at(1, 500)])  # out of band at t=0, centred at t=300
    assert engine.resolve_hit(notes, lane=0, at_time_ms=0) is None
    result = engine.resolve_hit(notes, lane=0, at_time_ms=300)
    assert result.grade == HitGrade.PERFECT


def test_no_note_in_band_is_a_no_op(engine):
    notes = NoteSet()
    notes.add([note_at(1, 200)])
    assert engine.resolve_hit(notes, lane=0, at_time_ms=0) is None
    assert engine.score == 0
    assert engine.combo == 0
    assert len(notes) == 1
    assert engine.judgments == []


def test_other_lane_is_ignored(engine):
    notes = NoteSet()
    notes.add([note_at(1, 600, lane=2)])
    assert engine.resolve_hit(notes, lane=1, at_time_ms=0) is None


def test_earliest_spawned_note_in_band_wins(engine):
    notes = NoteSet()
    leading, trailing = note_at(1, 620), note_at(2, 590)
    notes.add([leading, trailing])
    result = engine.resolve_hit(notes, lane=0, at_time_ms=0)
    assert result.note_id == 1
    assert list(notes) == [trailing]


def test_double_press_scores_once(engine):
    notes = NoteSet()
    notes.add([note_at(1, 600)])
    first = engine.resolve_hit(notes, lane=0, at_time_ms=0)
    second = engine.resolve_hit(notes, lane=0, at_time_ms=0)
    assert first is not None
    assert second is None
    assert engine.score == 100
    assert engine.combo == 1


def test_miss_resets_combo_and_keeps_max(engine):
    notes = NoteSet()
    notes.add([note_at(1, 600), note_at(2, 700, lane=1)])
    engine.resolve_hit(notes, lane=0, at_time_ms=0)
    misses = engine.resolve_misses(notes, now_ms=0)
    assert [m.grade for m in misses] == [HitGrade.MISS]
    assert misses[0].points == 0
    assert engine.combo == 0
    assert engine.max_combo == 1
    assert engine.score == 100


def test_custom_score_table():
    engine = JudgmentEngine(GameConfig(perfect_points=300, good_points=10))
    notes = NoteSet()
    notes.add([note_at(1, 600), note_at(2, 565, lane=1)])
    engine.resolve_hit(notes, lane=0, at_time_ms=0)
    engine.resolve_hit(notes, lane=1, at_time_ms=0)
    assert engine.score == 310
