"""Tests for game configuration."""

import json

import pytest

from lanefall.config import GameConfig, load_config
from lanefall.models import ConfigurationError, HitGrade


def test_defaults():
    config = GameConfig()
    config.validate()
    assert config.lane_count == 4
    assert config.lookahead_ms == 1800
    assert config.speed_px_per_ms == pytest.approx(600 / 1800)
    assert config.keys == ["d", "f", "j", "k"]
    assert [config.points_for(g) for g in HitGrade] == [100, 50, 0]


@pytest.mark.parametrize("overrides", [
    {"lane_count": 0, "keys": []},
    {"lookahead_ms": -1},
    {"fall_distance_px": 0},
    {"band_height_px": 0},
    {"perfect_range_px": -3},
    {"good_points": -50},
    {"keys": ["d", "f"]},
    {"lookahead_ms": "fast"},
    {"lane_count": True},
])
def test_invalid_values_rejected(overrides):
    with pytest.raises(ConfigurationError):
        GameConfig(**overrides).validate()


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "nope.json") == GameConfig()


def test_overrides_from_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"game": {"lookahead_ms": 1200, "keys": ["a", "s", "k", "l"], "bogus": 1}}))
    config = load_config(path)
    assert config.lookahead_ms == 1200
    assert config.keys == ["a", "s", "k", "l"]
    assert config.lane_count == 4


def test_unreadable_file_falls_back_to_defaults(tmp_path, caplog):
    path = tmp_path / "settings.json"
    path.write_text("{oops")
    assert load_config(path) == GameConfig()
    assert "Ignoring unreadable settings file" in caplog.text
