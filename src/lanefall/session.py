"""Game session: runs a beatmap from start to finish and reports to a listener."""

from __future__ import annotations

import logging
import time
from typing import Callable, Protocol, runtime_checkable

from lanefall.beatmap import validate_beatmap
from lanefall.config import GameConfig
from lanefall.judgment import JudgmentEngine
from lanefall.models import (
    Beatmap,
    HitGrade,
    Judgment,
    RemovalReason,
    SessionState,
    SessionStats,
)
from lanefall.notes import NoteSet
from lanefall.spawner import NoteSpawner

logger = logging.getLogger(__name__)


@runtime_checkable
class SessionListener(Protocol):
    """Everything the session tells the outside world. Positions are in engine pixels."""

    def on_note_spawned(self, note_id: int, lane: int) -> None: ...
    def on_note_position_changed(self, note_id: int, position_px: float) -> None: ...
    def on_note_removed(self, note_id: int, reason: RemovalReason) -> None: ...
    def on_judgment_display(self, text: str, duration_ms: int = 500) -> None: ...
    def on_score_changed(self, score: int) -> None: ...
    def on_combo_changed(self, combo: int) -> None: ...
    def on_game_ended(self, final_score: int) -> None: ...


class NullListener:
    """Listener that ignores every notification; subclass and override what you need."""

    def on_note_spawned(self, note_id: int, lane: int) -> None:
        pass

    def on_note_position_changed(self, note_id: int, position_px: float) -> None:
        pass

    def on_note_removed(self, note_id: int, reason: RemovalReason) -> None:
        pass

    def on_judgment_display(self, text: str, duration_ms: int = 500) -> None:
        pass

    def on_score_changed(self, score: int) -> None:
        pass

    def on_combo_changed(self, combo: int) -> None:
        pass

    def on_game_ended(self, final_score: int) -> None:
        pass


class GameClock:
    """Elapsed milliseconds since ``reset``, read from a monotonic time source."""

    def __init__(self, source: Callable[[], float] | None = None) -> None:
        self._source = source or (lambda: time.perf_counter() * 1000.0)
        self._origin = 0.0

    def reset(self) -> None:
        self._origin = self._source()

    def elapsed_ms(self) -> float:
        return self._source() - self._origin

    def elapsed_at(self, source_ms: float) -> float:
        """Convert an earlier reading of the time source to session time."""
        return source_ms - self._origin


class GameSession:
    """Runs one beatmap at a time: IDLE -> RUNNING -> IDLE.

    ``tick`` is meant to be called once per frame and ``key_lane_down`` for
    each lane press; both are ignored unless the session is running.
    """

    def __init__(
        self,
        beatmap: Beatmap,
        config: GameConfig | None = None,
        listener: SessionListener | None = None,
        clock: GameClock | None = None,
    ) -> None:
        self.beatmap = beatmap
        self.config = config or GameConfig()
        self.listener = listener or NullListener()
        self.clock = clock or GameClock()
        self.state = SessionState.IDLE
        self.notes = NoteSet()
        self.last_stats: SessionStats | None = None
        self._spawner: NoteSpawner | None = None
        self._engine = JudgmentEngine(self.config)

    @property
    def running(self) -> bool:
        return self.state == SessionState.RUNNING

    @property
    def score(self) -> int:
        return self._engine.score

    @property
    def combo(self) -> int:
        return self._engine.combo

    @property
    def beatmap_cursor(self) -> int:
        return self._spawner.cursor if self._spawner else 0

    def start(self) -> None:
        """Reset everything and begin playing from time zero.

        Raises:
            ConfigurationError: If the config or beatmap is invalid; the
                session is left idle.
        """
        self.config.validate()
        validate_beatmap(self.beatmap, self.config.lane_count)

        if self.running:
            self.stop()
        self._discard_notes()

        self._engine = JudgmentEngine(self.config)
        self._spawner = NoteSpawner(self.beatmap, self.config)
        self.last_stats = None
        self.listener.on_score_changed(0)
        self.listener.on_combo_changed(0)

        self.clock.reset()
        self.state = SessionState.RUNNING
        logger.info("Started %r (%d notes)", self.beatmap.title, len(self.beatmap))

    def stop(self) -> None:
        """Abandon the running session without reporting a result."""
        if not self.running:
            return
        self.state = SessionState.IDLE
        self._discard_notes()
        logger.info("Stopped %r at %d/%d notes", self.beatmap.title, self.beatmap_cursor, len(self.beatmap))

    def tick(self) -> None:
        """Spawn due notes, move them, sweep misses, then check for the end of the song."""
        if not self.running or self._spawner is None:
            return
        now = self.clock.elapsed_ms()

        spawned = self._spawner.advance(now)
        self.notes.add(spawned)
        for note in spawned:
            self.listener.on_note_spawned(note.note_id, note.lane)

        self.notes.advance(now)
        for note in self.notes:
            self.listener.on_note_position_changed(note.note_id, note.position_px)

        misses = self._engine.resolve_misses(self.notes, now)
        for judgment in misses:
            self._announce(judgment)
        if misses:
            self.listener.on_combo_changed(self.combo)

        if self._spawner.exhausted and not self.notes:
            self._finish()

    def key_lane_down(self, lane: int, timestamp_ms: float | None = None) -> Judgment | None:
        """Judge a press in ``lane``. None if nothing was hit.

        ``timestamp_ms`` is the time source reading when the key went down;
        without it the press is judged at the current time.
        """
        if not self.running or not 0 <= lane < self.config.lane_count:
            return None
        at = self.clock.elapsed_ms() if timestamp_ms is None else self.clock.elapsed_at(timestamp_ms)
        judgment = self._engine.resolve_hit(self.notes, lane, at)
        if judgment is None:
            return None
        self._announce(judgment)
        self.listener.on_score_changed(self.score)
        self.listener.on_combo_changed(self.combo)
        return judgment

    def stats(self) -> SessionStats:
        """Aggregate the judgments so far."""
        judgments = self._engine.judgments
        perfect = sum(1 for j in judgments if j.grade == HitGrade.PERFECT)
        good = sum(1 for j in judgments if j.grade == HitGrade.GOOD)
        missed = sum(1 for j in judgments if j.grade == HitGrade.MISS)
        total = len(judgments)
        accuracy = ((perfect + good) / total * 100.0) if total > 0 else 0.0

        return SessionStats(
            title=self.beatmap.title,
            total_notes=total,
            perfect=perfect,
            good=good,
            missed=missed,
            max_combo=self._engine.max_combo,
            score=self.score,
            accuracy_pct=round(accuracy, 1),
            judgments=judgments,
        )

    def _announce(self, judgment: Judgment) -> None:
        reason = RemovalReason.MISS if judgment.grade == HitGrade.MISS else RemovalReason.HIT
        self.listener.on_note_removed(judgment.note_id, reason)
        self.listener.on_judgment_display(judgment.grade.name, self.config.judgment_display_ms)

    def _discard_notes(self) -> None:
        for note in self.notes.clear():
            self.listener.on_note_removed(note.note_id, RemovalReason.DISCARDED)

    def _finish(self) -> None:
        self.state = SessionState.IDLE
        self.last_stats = self.stats()
        logger.info(
            "Finished %r: score=%d max_combo=%d accuracy=%.1f%%",
            self.beatmap.title, self.score, self.last_stats.max_combo, self.last_stats.accuracy_pct,
        )
        self.listener.on_game_ended(self.score)
