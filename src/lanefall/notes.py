"""In-flight note collection: motion, per-lane lookup, and the miss sweep."""

from __future__ import annotations

from typing import Iterator

from lanefall.models import JudgmentWindow, Note


class NoteSet:
    """Owns every active note until it is hit, missed, or discarded.

    Notes are kept in spawn order, which is also the order of distance
    travelled toward the judgment line.
    """

    def __init__(self) -> None:
        self._notes: list[Note] = []

    def __len__(self) -> int:
        return len(self._notes)

    def __iter__(self) -> Iterator[Note]:
        return iter(list(self._notes))

    def __contains__(self, note: object) -> bool:
        return note in self._notes

    def add(self, notes: list[Note]) -> None:
        self._notes.extend(notes)

    def in_lane(self, lane: int) -> list[Note]:
        return [n for n in self._notes if n.lane == lane and not n.hit]

    def advance(self, now_ms: float) -> None:
        """Move every note by its own speed times the time since it was last positioned."""
        for note in self._notes:
            note.position_px = note.position_at(now_ms)
            note.positioned_at_ms = now_ms

    def sweep_misses(self, window: JudgmentWindow) -> list[Note]:
        """Remove and return notes whose top edge has left the judgment band, in spawn order."""
        missed: list[Note] = []
        remaining: list[Note] = []
        for note in self._notes:
            if window.has_passed(note.position_px):
                missed.append(note)
            else:
                remaining.append(note)
        self._notes = remaining
        return missed

    def remove(self, note: Note) -> bool:
        """Remove a note; False if it was already gone."""
        try:
            self._notes.remove(note)
        except ValueError:
            return False
        return True

    def clear(self) -> list[Note]:
        notes, self._notes = self._notes, []
        return notes
