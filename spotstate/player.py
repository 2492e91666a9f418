"""Player state with buffered playback metadata."""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from datetime import timedelta
from typing import Any, Optional

from .model import (
    AlbumId,
    ArtistId,
    ContextId,
    CurrentPlayback,
    Device,
    PlaybackMetadata,
    PlaylistId,
)
from .utils import parse_uri

_CONTEXT_ID_TYPES = {"playlist": PlaylistId, "album": AlbumId, "artist": ArtistId}


@dataclass
class PlayerState:
    devices: list[Device] = field(default_factory=list)
    playback: Optional[CurrentPlayback] = None
    # time.monotonic() reading taken when ``playback`` was last refreshed
    playback_last_updated_time: Optional[float] = None
    # Applied on top of ``playback`` so user actions show up immediately.
    buffered_playback: Optional[PlaybackMetadata] = None
    queue: Optional[dict[str, Any]] = None

    def _elapsed(self) -> timedelta:
        if self.playback_last_updated_time is None:
            raise ValueError("playback has no last updated time")
        return timedelta(seconds=time.monotonic() - self.playback_last_updated_time)

    def current_playback(self) -> Optional[CurrentPlayback]:
        """The current playback, with progress and metadata estimated from buffered data."""
        if self.playback is None:
            return None
        playback = replace(self.playback)

        if playback.progress is not None and playback.is_playing:
            playback.progress = playback.progress + self._elapsed()

        buffered = self.buffered_playback
        if buffered is not None:
            playback.device_name = buffered.device_name
            playback.device_id = buffered.device_id
            playback.is_playing = buffered.is_playing
            playback.volume_percent = buffered.volume
            playback.repeat_state = buffered.repeat_state
            playback.shuffle_state = buffered.shuffle_state

        return playback

    def current_playing_track(self) -> Optional[dict[str, Any]]:
        """The raw full track object being played, if the item is a track."""
        if self.playback is None or self.playback.item is None:
            return None
        if self.playback.item_type != "track":
            return None
        return self.playback.item

    def playback_progress(self) -> Optional[timedelta]:
        if self.playback is None:
            return None
        if self.playback.progress is None:
            raise ValueError("playback has no progress")
        if self.playback.is_playing:
            return self.playback.progress + self._elapsed()
        return self.playback.progress

    def playing_context_id(self) -> Optional[ContextId]:
        if self.playback is None or self.playback.context_uri is None:
            return None
        id_type = _CONTEXT_ID_TYPES.get(self.playback.context_type or "")
        if id_type is None:
            return None
        try:
            return id_type.from_uri(parse_uri(self.playback.context_uri))
        except ValueError:
            return None