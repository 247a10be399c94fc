"""Tests for keyboard-to-lane input."""

import pygame
import pytest

from lanefall.lane_input import InputSource, KeyboardInput, key_codes
from lanefall.models import ConfigurationError


def key_event(kind, key):
    return pygame.event.Event(kind, key=key)


def test_default_keys_map_to_lanes():
    assert key_codes(["d", "f", "j", "k"]) == {pygame.K_d: 0, pygame.K_f: 1, pygame.K_j: 2, pygame.K_k: 3}


def test_unknown_key_rejected():
    with pytest.raises(ConfigurationError):
        key_codes(["d", "no-such-key"])


def test_press_and_release():
    keyboard = KeyboardInput(ticks=lambda: 1234)
    assert isinstance(keyboard, InputSource)
    keyboard.feed_event(key_event(pygame.KEYDOWN, pygame.K_j))
    assert keyboard.held_lanes == {2}
    keyboard.feed_event(key_event(pygame.KEYUP, pygame.K_j))
    assert keyboard.held_lanes == set()

    down, up = keyboard.poll(), keyboard.poll()
    assert (down.lane, down.is_down, down.timestamp_ms) == (2, True, 1234)
    assert (up.lane, up.is_down) == (2, False)
    assert keyboard.poll() is None


def test_repeat_while_held_is_ignored():
    keyboard = KeyboardInput()
    keyboard.feed_event(key_event(pygame.KEYDOWN, pygame.K_d))
    keyboard.feed_event(key_event(pygame.KEYDOWN, pygame.K_d))
    assert keyboard.poll().lane == 0
    assert keyboard.poll() is None


def test_unmapped_keys_ignored():
    keyboard = KeyboardInput()
    keyboard.feed_event(key_event(pygame.KEYDOWN, pygame.K_q))
    assert keyboard.poll() is None
