"""Build the playback description text and progress ratio shown in the playback window."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Union

from .model import PlaybackMetadata, Track
from .utils import map_join

_PLACEHOLDER = re.compile(r"\{.*?\}|\n")


@dataclass(frozen=True)
class StyledSpan:
    """A piece of text with the name of the theme style to draw it with.

    ``style`` is None for literal text taken from the format string.
    """

    text: str
    style: Optional[str] = None


def _metadata(playback: PlaybackMetadata) -> str:
    if playback.fake_track_repeat_state:
        repeat = "track (fake)"
    else:
        repeat = playback.repeat_state.value
    shuffle = "true" if playback.shuffle_state else "false"
    if playback.mute_state is not None:
        volume = f"{playback.mute_state}% (muted)"
    else:
        volume = f"{playback.volume or 0}%"
    return (
        f"repeat: {repeat} | shuffle: {shuffle} | volume: {volume} "
        f"| device: {playback.device_name}"
    )


def _expand(
    placeholder: str,
    track: Track,
    playback: PlaybackMetadata,
    play_icon: str,
    pause_icon: str,
) -> Optional[StyledSpan]:
    if placeholder == "{status}":
        icon = play_icon if playback.is_playing else pause_icon
        return StyledSpan(icon, "playback_status")
    if placeholder == "{track}":
        return StyledSpan(track.display_name(), "playback_track")
    if placeholder == "{artists}":
        return StyledSpan(map_join(track.artists, lambda a: a.name, ", "), "playback_artists")
    if placeholder == "{album}":
        return StyledSpan(track.album_info(), "playback_album")
    if placeholder == "{metadata}":
        return StyledSpan(_metadata(playback), "playback_metadata")
    return None


def construct_playback_text(
    format_str: str,
    track: Track,
    playback: PlaybackMetadata,
    play_icon: str,
    pause_icon: str,
) -> list[list[StyledSpan]]:
    """Expand a playback format string into lines of styled spans.

    Recognised placeholders are ``{status}``, ``{track}``, ``{artists}``,
    ``{album}`` and ``{metadata}``; any other ``{...}`` is dropped. Each
    newline ends a line.
    """
    lines: list[list[StyledSpan]] = []
    spans: list[StyledSpan] = []
    pos = 0
    for match in _PLACEHOLDER.finditer(format_str):
        if pos < match.start():
            spans.append(StyledSpan(format_str[pos : match.start()]))
        pos = match.end()

        token = match.group()
        if token == "\n":
            lines.append(spans)
            spans = []
            continue
        span = _expand(token, track, playback, play_icon, pause_icon)
        if span is not None:
            spans.append(span)
    if pos < len(format_str):
        spans.append(StyledSpan(format_str[pos:]))
    if spans:
        lines.append(spans)
    return lines


def _whole_seconds(value: Union[float, timedelta]) -> int:
    if isinstance(value, timedelta):
        value = value.total_seconds()
    return math.trunc(value)


def progress_ratio(
    progress_seconds: Union[float, timedelta], duration_seconds: Union[float, timedelta]
) -> float:
    """Fraction of the track played, in whole seconds, clamped to [0, 1].

    With a duration under one second the ratio is 1.0 once any progress is made
    and 0.0 otherwise.
    """
    progress = _whole_seconds(progress_seconds)
    duration = _whole_seconds(duration_seconds)
    if duration == 0:
        return 1.0 if progress > 0 else 0.0
    return min(max(progress / duration, 0.0), 1.0)