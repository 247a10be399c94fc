"""Note spawner: releases beatmap entries as notes a fixed lookahead early."""

from __future__ import annotations

from itertools import count

from lanefall.config import GameConfig
from lanefall.models import Beatmap, Note


class NoteSpawner:
    """Emits a Note for each beatmap entry once it falls inside the lookahead window."""

    def __init__(self, beatmap: Beatmap, config: GameConfig) -> None:
        self.beatmap = beatmap
        self.lookahead_ms = config.lookahead_ms
        self.speed_px_per_ms = config.speed_px_per_ms
        self.cursor: int = 0
        self._ids = count(1)

    def advance(self, current_time_ms: float) -> list[Note]:
        """Return the notes that became due at ``current_time_ms``, in beatmap order.

        A note released late is placed where it would have been had it spawned
        exactly ``lookahead_ms`` before its entry, so its centre still reaches
        the judgment line at ``entry.time_offset_ms``.
        """
        spawned: list[Note] = []
        while self.cursor < len(self.beatmap):
            entry = self.beatmap[self.cursor]
            if entry.time_offset_ms > current_time_ms + self.lookahead_ms:
                break
            launch_time = entry.time_offset_ms - self.lookahead_ms
            spawned.append(Note(
                note_id=next(self._ids),
                lane=entry.lane,
                spawn_time_ms=current_time_ms,
                target_time_ms=entry.time_offset_ms,
                speed_px_per_ms=self.speed_px_per_ms,
                position_px=self.speed_px_per_ms * (current_time_ms - launch_time),
                positioned_at_ms=current_time_ms,
            ))
            self.cursor += 1
        return spawned

    @property
    def exhausted(self) -> bool:
        return self.cursor >= len(self.beatmap)
