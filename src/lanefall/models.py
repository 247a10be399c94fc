"""Core data models shared across the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, Sequence


class ConfigurationError(Exception):
    """Raised when a beatmap or game configuration cannot be played."""


class HitGrade(Enum):
    PERFECT = auto()
    GOOD = auto()
    MISS = auto()


class RemovalReason(Enum):
    HIT = auto()
    MISS = auto()
    DISCARDED = auto()  # session stopped or restarted


class SessionState(Enum):
    IDLE = auto()
    RUNNING = auto()


@dataclass(frozen=True)
class BeatmapEntry:
    """A single scheduled note: when it should reach the judgment line, and where."""

    time_offset_ms: int  # from session start
    lane: int


@dataclass(frozen=True)
class Beatmap:
    """Ordered, read-only schedule of note events for one session."""

    title: str = "Untitled"
    entries: tuple[BeatmapEntry, ...] = ()

    @classmethod
    def from_pairs(cls, pairs: Iterable[Sequence[int]], title: str = "Untitled") -> Beatmap:
        """Build a beatmap from ``[time_ms, lane]`` pairs. Values are kept as given; see ``validate_beatmap``."""
        return cls(title=title, entries=tuple(BeatmapEntry(t, lane) for t, lane in pairs))

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> BeatmapEntry:
        return self.entries[index]

    @property
    def duration_ms(self) -> int:
        return self.entries[-1].time_offset_ms if self.entries else 0


@dataclass
class Note:
    """An in-flight note. ``position_px`` is the centre, measured down from the spawn line."""

    note_id: int
    lane: int
    spawn_time_ms: float
    target_time_ms: int
    speed_px_per_ms: float
    position_px: float = 0.0
    positioned_at_ms: float = 0.0
    hit: bool = False

    def position_at(self, time_ms: float) -> float:
        return self.position_px + self.speed_px_per_ms * (time_ms - self.positioned_at_ms)


@dataclass(frozen=True)
class JudgmentWindow:
    """Judgment band geometry, in the same coordinates as ``Note.position_px``."""

    judge_center: float
    band_height: float
    perfect_range: float
    note_height: float

    @property
    def judge_top(self) -> float:
        return self.judge_center - self.band_height / 2

    @property
    def judge_bottom(self) -> float:
        return self.judge_center + self.band_height / 2

    def overlaps(self, note_center: float) -> bool:
        half = self.note_height / 2
        return self.judge_top <= note_center + half and note_center - half <= self.judge_bottom

    def has_passed(self, note_center: float) -> bool:
        return note_center - self.note_height / 2 > self.judge_bottom


@dataclass(frozen=True)
class Judgment:
    note_id: int
    lane: int
    grade: HitGrade
    points: int
    diff_px: float  # distance from the judgment line centre
    time_ms: float


@dataclass
class SessionStats:
    title: str = ""
    total_notes: int = 0
    perfect: int = 0
    good: int = 0
    missed: int = 0
    max_combo: int = 0
    score: int = 0
    accuracy_pct: float = 0.0
    judgments: list[Judgment] = field(default_factory=list, repr=False)
