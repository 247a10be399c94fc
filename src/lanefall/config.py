"""Global constants and default settings."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path

from lanefall.models import ConfigurationError, HitGrade

logger = logging.getLogger(__name__)

WINDOW_WIDTH = 640
WINDOW_HEIGHT = 760
FPS = 60
WINDOW_TITLE = "LaneFall"

LANE_COUNT = 4
LANE_WIDTH = 100  # pixels

# Timing and geometry (milliseconds / pixels)
LOOKAHEAD_MS = 1800
FALL_DISTANCE_PX = 600  # spawn line to judgment line centre
PERFECT_RANGE_PX = 30
BAND_HEIGHT_PX = 50  # target element height; the Good band
NOTE_HEIGHT_PX = 20
JUDGMENT_DISPLAY_MS = 500

SCORE_TABLE = {
    HitGrade.PERFECT: 100,
    HitGrade.GOOD: 50,
    HitGrade.MISS: 0,
}

# Two left-hand and two right-hand keys
DEFAULT_KEYS = ("d", "f", "j", "k")

DEFAULT_SETTINGS_PATH = Path.home() / ".lanefall" / "settings.json"


@dataclass
class GameConfig:
    """Gameplay constants for one session. Defaults match the module constants."""

    lane_count: int = LANE_COUNT
    lookahead_ms: int = LOOKAHEAD_MS
    fall_distance_px: float = FALL_DISTANCE_PX
    perfect_range_px: float = PERFECT_RANGE_PX
    band_height_px: float = BAND_HEIGHT_PX
    note_height_px: float = NOTE_HEIGHT_PX
    judgment_display_ms: int = JUDGMENT_DISPLAY_MS
    perfect_points: int = SCORE_TABLE[HitGrade.PERFECT]
    good_points: int = SCORE_TABLE[HitGrade.GOOD]
    miss_points: int = SCORE_TABLE[HitGrade.MISS]
    keys: list[str] = field(default_factory=lambda: list(DEFAULT_KEYS))

    @property
    def speed_px_per_ms(self) -> float:
        return self.fall_distance_px / self.lookahead_ms

    def points_for(self, grade: HitGrade) -> int:
        if grade == HitGrade.PERFECT:
            return self.perfect_points
        if grade == HitGrade.GOOD:
            return self.good_points
        return self.miss_points

    def validate(self) -> None:
        """Raise ConfigurationError if any value would make the engine misbehave."""
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name != "keys" and (isinstance(value, bool) or not isinstance(value, (int, float))):
                raise ConfigurationError(f"{f.name} must be a number, got {value!r}")
        if not isinstance(self.lane_count, int) or self.lane_count < 1:
            raise ConfigurationError(f"lane_count must be at least 1, got {self.lane_count}")
        if self.lookahead_ms <= 0:
            raise ConfigurationError(f"lookahead_ms must be positive, got {self.lookahead_ms}")
        if self.fall_distance_px <= 0:
            raise ConfigurationError(f"fall_distance_px must be positive, got {self.fall_distance_px}")
        if self.band_height_px <= 0 or self.note_height_px <= 0:
            raise ConfigurationError("band_height_px and note_height_px must be positive")
        if self.perfect_range_px < 0:
            raise ConfigurationError(f"perfect_range_px must not be negative, got {self.perfect_range_px}")
        if min(self.perfect_points, self.good_points, self.miss_points) < 0:
            raise ConfigurationError("scores must not be negative")
        if not isinstance(self.keys, (list, tuple)) or len(self.keys) != self.lane_count:
            raise ConfigurationError(f"need one key per lane, got {self.keys!r} for {self.lane_count} lanes")


def load_config(path: Path = DEFAULT_SETTINGS_PATH) -> GameConfig:
    """Load gameplay overrides from the "game" object of a JSON settings file.

    Missing or unreadable files give the defaults; unknown keys are ignored.
    """
    if not path.exists():
        return GameConfig()
    try:
        data = json.loads(path.read_text())
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return GameConfig()

    game = data.get("game", {}) if isinstance(data, dict) else {}
    if not isinstance(game, dict):
        logger.warning("Ignoring non-object \"game\" settings in %s", path)
        return GameConfig()
    known = {f.name for f in fields(GameConfig)}
    overrides = {k: v for k, v in game.items() if k in known}
    for key in sorted(set(game) - known):
        logger.warning("Unknown setting %r in %s", key, path)
    return GameConfig(**overrides)
