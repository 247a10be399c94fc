"""Load and validate beatmaps from JSON charts and MIDI files."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import mido

from lanefall.config import LANE_COUNT
from lanefall.models import Beatmap, BeatmapEntry, ConfigurationError

logger = logging.getLogger(__name__)

BEATMAP_SUFFIXES = (".json", ".mid", ".midi")

SAMPLE_BEATMAP = Beatmap.from_pairs(
    [
        [1000, 0], [1500, 1], [2000, 2], [2500, 3],
        [3000, 0], [3000, 2], [3500, 1], [3500, 3],
        [4000, 0], [4250, 1], [4500, 2], [4750, 3],
        [5500, 0], [5500, 1], [5500, 2], [5500, 3],
    ],
    title="Sample",
)


class BeatmapLoadError(ConfigurationError):
    """Raised when a beatmap file cannot be read or parsed."""


def validate_beatmap(beatmap: Beatmap, lane_count: int = LANE_COUNT) -> None:
    """Check every entry before a session may run.

    Raises:
        ConfigurationError: On a negative or non-integer timestamp, a lane
            outside ``[0, lane_count)``, or a schedule that goes backwards.
    """
    previous = 0
    for index, entry in enumerate(beatmap.entries):
        t, lane = entry.time_offset_ms, entry.lane
        if not isinstance(t, int) or isinstance(t, bool):
            raise ConfigurationError(f"entry {index}: time {t!r} is not an integer")
        if not isinstance(lane, int) or isinstance(lane, bool):
            raise ConfigurationError(f"entry {index}: lane {lane!r} is not an integer")
        if t < 0:
            raise ConfigurationError(f"entry {index}: negative time {t}ms")
        if not 0 <= lane < lane_count:
            raise ConfigurationError(f"entry {index}: lane {lane} outside 0..{lane_count - 1}")
        if t < previous:
            raise ConfigurationError(
                f"entry {index}: time {t}ms comes before the previous entry at {previous}ms"
            )
        previous = t


def load_beatmap(file_path: str | Path, lane_count: int = LANE_COUNT) -> Beatmap:
    """Load a JSON chart or MIDI file and return a Beatmap.

    Args:
        file_path: Path to a .json, .mid, or .midi file.
        lane_count: Number of lanes MIDI pitches are folded into.

    Raises:
        BeatmapLoadError: If the file cannot be parsed.
    """
    path = Path(file_path)
    try:
        if path.suffix == ".json":
            beatmap = _load_json(path)
        elif path.suffix in (".mid", ".midi"):
            beatmap = _load_midi(path, lane_count)
        else:
            raise BeatmapLoadError(f"Unsupported file format: {path.suffix}")
    except BeatmapLoadError:
        raise
    except Exception as exc:
        raise BeatmapLoadError(f"Failed to load {path.name}: {exc}") from exc

    logger.info("Loaded beatmap %r with %d notes from %s", beatmap.title, len(beatmap), path)
    return beatmap


def _load_json(path: Path) -> Beatmap:
    data = json.loads(path.read_text())
    if isinstance(data, list):
        return Beatmap.from_pairs(data, title=path.stem)
    if isinstance(data, dict) and isinstance(data.get("notes"), list):
        return Beatmap.from_pairs(data["notes"], title=str(data.get("title", path.stem)))
    raise BeatmapLoadError(f"{path.name}: expected a list of [time_ms, lane] pairs")


def _load_midi(path: Path, lane_count: int) -> Beatmap:
    mid = mido.MidiFile(str(path))
    entries: list[BeatmapEntry] = []

    # Iterating the file merges tracks and converts delta ticks to seconds,
    # honouring set_tempo messages along the way.
    abs_time = 0.0
    for msg in mid:
        abs_time += msg.time
        if msg.type == "note_on" and msg.velocity > 0:
            entries.append(BeatmapEntry(round(abs_time * 1000), msg.note % lane_count))

    entries.sort(key=lambda e: (e.time_offset_ms, e.lane))
    return Beatmap(title=path.stem, entries=tuple(entries))


def find_beatmaps(directory: str | Path) -> list[Path]:
    """List loadable beatmap files in a directory, sorted by name."""
    root = Path(directory)
    if not root.is_dir():
        return []
    return sorted(p for p in root.iterdir() if p.suffix in BEATMAP_SUFFIXES)
