"""Keyboard input mapped onto lanes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol, Sequence, runtime_checkable

import pygame

from lanefall.config import DEFAULT_KEYS
from lanefall.models import ConfigurationError


@dataclass
class LaneEvent:
    lane: int
    timestamp_ms: int  # pygame.time.get_ticks() when the event was fed
    is_down: bool


@runtime_checkable
class InputSource(Protocol):
    """Common interface for anything that produces lane presses."""
    def poll(self) -> LaneEvent | None: ...
    def close(self) -> None: ...


def key_codes(keys: Sequence[str]) -> dict[int, int]:
    """Map pygame key codes to lane indices, one key name (``"d"``, ``"space"``) per lane."""
    codes: dict[int, int] = {}
    for lane, name in enumerate(keys):
        code = getattr(pygame, f"K_{name}", None)
        if code is None:
            raise ConfigurationError(f"Unknown key name: {name!r}")
        codes[code] = lane
    return codes


class KeyboardInput:
    """Turns pygame key events for the configured keys into lane events."""

    def __init__(
        self,
        keys: Sequence[str] = DEFAULT_KEYS,
        ticks: Callable[[], int] = pygame.time.get_ticks,
    ) -> None:
        self._key_to_lane = key_codes(keys)
        self._ticks = ticks
        self._events: list[LaneEvent] = []
        self._held: set[int] = set()

    @property
    def held_lanes(self) -> set[int]:
        return set(self._held)

    def feed_event(self, event: pygame.event.Event) -> None:
        """Call from the game loop for each pygame event."""
        if event.type == pygame.KEYDOWN and event.key in self._key_to_lane:
            lane = self._key_to_lane[event.key]
            if lane not in self._held:
                self._held.add(lane)
                self._events.append(LaneEvent(lane=lane, timestamp_ms=self._ticks(), is_down=True))
        elif event.type == pygame.KEYUP and event.key in self._key_to_lane:
            lane = self._key_to_lane[event.key]
            self._held.discard(lane)
            self._events.append(LaneEvent(lane=lane, timestamp_ms=self._ticks(), is_down=False))

    def poll(self) -> LaneEvent | None:
        if self._events:
            return self._events.pop(0)
        return None

    def close(self) -> None:
        self._events.clear()
        self._held.clear()
