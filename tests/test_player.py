import time
from datetime import timedelta

import pytest

from spotstate.model import (
    AlbumId,
    CurrentPlayback,
    PlaybackMetadata,
    PlaylistId,
    RepeatState,
)
from spotstate.player import PlayerState


def make_playback(**kwargs):
    defaults = dict(
        device_name="speaker",
        device_id="dev1",
        volume_percent=50,
        is_playing=False,
        progress=timedelta(seconds=30),
    )
    defaults.update(kwargs)
    return CurrentPlayback(**defaults)


def test_no_playback():
    state = PlayerState()
    assert state.current_playback() is None
    assert state.playback_progress() is None
    assert state.current_playing_track() is None
    assert state.playing_context_id() is None


def test_paused_progress_unchanged():
    state = PlayerState(playback=make_playback(), playback_last_updated_time=time.monotonic() - 5)
    assert state.playback_progress() == timedelta(seconds=30)
    assert state.current_playback().progress == timedelta(seconds=30)


def test_playing_progress_advances():
    state = PlayerState(
        playback=make_playback(is_playing=True),
        playback_last_updated_time=time.monotonic() - 10,
    )
    progress = state.playback_progress()
    assert timedelta(seconds=40) <= progress < timedelta(seconds=45)
    current = state.current_playback().progress
    assert timedelta(seconds=40) <= current < timedelta(seconds=45)


def test_current_playback_does_not_mutate_stored():
    playback = make_playback(is_playing=True)
    state = PlayerState(playback=playback, playback_last_updated_time=time.monotonic() - 3)
    state.current_playback()
    assert playback.progress == timedelta(seconds=30)


def test_missing_update_time_raises_when_playing():
    state = PlayerState(playback=make_playback(is_playing=True))
    with pytest.raises(ValueError):
        state.playback_progress()


def test_buffered_metadata_overrides():
    buffered = PlaybackMetadata(
        device_name="other",
        device_id="dev2",
        volume=80,
        is_playing=False,
        repeat_state=RepeatState.CONTEXT,
        shuffle_state=True,
    )
    state = PlayerState(
        playback=make_playback(),
        playback_last_updated_time=time.monotonic(),
        buffered_playback=buffered,
    )
    current = state.current_playback()
    assert current.device_name == "other"
    assert current.device_id == "dev2"
    assert current.volume_percent == 80
    assert current.repeat_state is RepeatState.CONTEXT
    assert current.shuffle_state is True
    assert state.playback.device_name == "speaker"


def test_current_playing_track_only_for_tracks():
    item = {"name": "Song", "type": "track"}
    state = PlayerState(playback=make_playback(item=item, item_type="track"))
    assert state.current_playing_track() == item
    episode = PlayerState(playback=make_playback(item={"name": "Ep"}, item_type="episode"))
    assert episode.current_playing_track() is None


def test_playing_context_id_playlist_with_user_uri():
    state = PlayerState(
        playback=make_playback(
            context_uri="spotify:user:someone:playlist:abc123", context_type="playlist"
        )
    )
    assert state.playing_context_id() == PlaylistId("abc123")


def test_playing_context_id_album():
    state = PlayerState(
        playback=make_playback(context_uri="spotify:album:xyz9", context_type="album")
    )
    assert state.playing_context_id() == AlbumId("xyz9")


def test_playing_context_id_unsupported_or_invalid():
    show = PlayerState(playback=make_playback(context_uri="spotify:show:a1", context_type="show"))
    assert show.playing_context_id() is None
    mismatch = PlayerState(
        playback=make_playback(context_uri="spotify:album:a1", context_type="playlist")
    )
    assert mismatch.playing_context_id() is None