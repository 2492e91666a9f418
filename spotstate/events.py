"""Player events emitted by the integrated player, and volume conversion."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

from .model import TrackId

_MAX_VOLUME = 65535


class PlayerEvent(ABC):
    """An event of the integrated player."""

    @abstractmethod
    def args(self) -> list[str]:
        """The event's name followed by its arguments, as strings."""


@dataclass(frozen=True)
class Changed(PlayerEvent):
    old_track_id: TrackId
    new_track_id: TrackId

    def args(self) -> list[str]:
        return ["Changed", self.old_track_id.uri(), self.new_track_id.uri()]


@dataclass(frozen=True)
class Playing(PlayerEvent):
    track_id: TrackId
    position_ms: int
    duration_ms: int

    def args(self) -> list[str]:
        return ["Playing", self.track_id.uri(), str(self.position_ms), str(self.duration_ms)]


@dataclass(frozen=True)
class Paused(PlayerEvent):
    track_id: TrackId
    position_ms: int
    duration_ms: int

    def args(self) -> list[str]:
        return ["Paused", self.track_id.uri(), str(self.position_ms), str(self.duration_ms)]


@dataclass(frozen=True)
class EndOfTrack(PlayerEvent):
    track_id: TrackId

    def args(self) -> list[str]:
        return ["EndOfTrack", self.track_id.uri()]


def percent_to_volume(percent: int) -> int:
    """Convert a 0-100 volume percentage (capped at 100) to the 0-65535 player scale."""
    if percent < 0:
        raise ValueError(f"volume percentage must not be negative: {percent}")
    value = min(percent, 100) / 100 * _MAX_VOLUME
    return math.floor(value + 0.5)