"""Hit evaluation — match a lane press to the closest falling note and grade it."""

from __future__ import annotations

import logging

from lanefall.config import GameConfig
from lanefall.models import HitGrade, Judgment, JudgmentWindow, Note
from lanefall.notes import NoteSet

logger = logging.getLogger(__name__)


def classify(diff_px: float, window: JudgmentWindow) -> HitGrade:
    """Grade a note already inside the band by its distance from the line centre."""
    return HitGrade.PERFECT if diff_px <= window.perfect_range else HitGrade.GOOD


def window_for(config: GameConfig) -> JudgmentWindow:
    return JudgmentWindow(
        judge_center=config.fall_distance_px,
        band_height=config.band_height_px,
        perfect_range=config.perfect_range_px,
        note_height=config.note_height_px,
    )


class JudgmentEngine:
    """Stateful evaluator that resolves presses, sweeps misses, and tracks score and combo."""

    def __init__(self, config: GameConfig) -> None:
        self.config = config
        self.window = window_for(config)
        self.score = 0
        self.combo = 0
        self.max_combo = 0
        self._judgments: list[Judgment] = []

    def find_candidate(self, notes: NoteSet, lane: int, at_time_ms: float) -> Note | None:
        """First note in the lane, in spawn order, that overlaps the judgment band."""
        for note in notes.in_lane(lane):
            if self.window.overlaps(note.position_at(at_time_ms)):
                return note
        return None

    def resolve_hit(self, notes: NoteSet, lane: int, at_time_ms: float) -> Judgment | None:
        """Judge a press in ``lane``. Returns None when nothing in the lane is in the band."""
        note = self.find_candidate(notes, lane, at_time_ms)
        if note is None:
            return None

        diff = abs(note.position_at(at_time_ms) - self.window.judge_center)
        grade = classify(diff, self.window)
        note.hit = True
        notes.remove(note)
        return self._record(note, grade, diff, at_time_ms)

    def resolve_misses(self, notes: NoteSet, now_ms: float) -> list[Judgment]:
        """Remove every note past the band and record a Miss for each, in spawn order."""
        return [
            self._record(note, HitGrade.MISS, abs(note.position_px - self.window.judge_center), now_ms)
            for note in notes.sweep_misses(self.window)
        ]

    def _record(self, note: Note, grade: HitGrade, diff: float, time_ms: float) -> Judgment:
        points = self.config.points_for(grade)
        self.score += points
        if grade == HitGrade.MISS:
            self.combo = 0
        else:
            self.combo += 1
            self.max_combo = max(self.max_combo, self.combo)

        judgment = Judgment(
            note_id=note.note_id,
            lane=note.lane,
            grade=grade,
            points=points,
            diff_px=diff,
            time_ms=time_ms,
        )
        self._judgments.append(judgment)
        logger.debug("%s lane=%d note=%d diff=%.1fpx", grade.name, note.lane, note.note_id, diff)
        return judgment

    @property
    def judgments(self) -> list[Judgment]:
        return list(self._judgments)
