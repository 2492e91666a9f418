from datetime import timedelta

import pytest

from spotstate.model import Album, AlbumId, Artist, ArtistId, RepeatState, Track, TrackId
from spotstate.playback_text import StyledSpan, construct_playback_text, progress_ratio


def _track(explicit=False):
    return Track(
        id=TrackId("abc123"),
        name="Song",
        artists=[Artist(ArtistId("a1"), "Alice"), Artist(ArtistId("b2"), "Bob")],
        album=Album(id=AlbumId("al1"), release_date="2020-01-01", name="Record"),
        duration=timedelta(seconds=200),
        explicit=explicit,
    )


def _playback(**kwargs):
    from spotstate.model import PlaybackMetadata

    values = dict(
        device_name="desk",
        device_id="dev",
        volume=40,
        is_playing=True,
        repeat_state=RepeatState.CONTEXT,
        shuffle_state=False,
    )
    values.update(kwargs)
    return PlaybackMetadata(**values)


def _text(lines):
    return ["".join(s.text for s in line) for line in lines]


def test_status_uses_play_icon_when_playing():
    lines = construct_playback_text("{status}", _track(), _playback(), "P", "S")
    assert lines == [[StyledSpan("P", "playback_status")]]


def test_status_uses_pause_icon_when_paused():
    lines = construct_playback_text("{status}", _track(), _playback(is_playing=False), "P", "S")
    assert lines[0][0].text == "S"


def test_track_artists_album_and_literals():
    lines = construct_playback_text(
        "{track} by {artists} on {album}", _track(explicit=True), _playback(), "P", "S"
    )
    assert lines == [
        [
            StyledSpan("Song (E)", "playback_track"),
            StyledSpan(" by "),
            StyledSpan("Alice, Bob", "playback_artists"),
            StyledSpan(" on "),
            StyledSpan("Record", "playback_album"),
        ]
    ]


def test_newlines_split_lines():
    lines = construct_playback_text("{track}\n{album}\nend", _track(), _playback(), "P", "S")
    assert _text(lines) == ["Song", "Record", "end"]


def test_trailing_newline_leaves_no_empty_last_line():
    lines = construct_playback_text("{track}\n", _track(), _playback(), "P", "S")
    assert _text(lines) == ["Song"]


def test_unknown_placeholder_is_dropped():
    lines = construct_playback_text("a{unknown}b", _track(), _playback(), "P", "S")
    assert _text(lines) == ["ab"]


def test_metadata_text():
    lines = construct_playback_text("{metadata}", _track(), _playback(), "P", "S")
    assert lines[0][0].style == "playback_metadata"
    assert lines[0][0].text == "repeat: context | shuffle: false | volume: 40% | device: desk"


def test_metadata_muted_and_fake_repeat():
    playback = _playback(mute_state=70, fake_track_repeat_state=True, shuffle_state=True)
    text = construct_playback_text("{metadata}", _track(), playback, "P", "S")[0][0].text
    assert text.startswith("repeat: track (fake) | shuffle: true")
    assert "volume: 70% (muted)" in text


def test_metadata_missing_volume_is_zero():
    text = construct_playback_text("{metadata}", _track(), _playback(volume=None), "P", "S")[0][0].text
    assert "volume: 0%" in text


def test_empty_format_gives_no_lines():
    assert construct_playback_text("", _track(), _playback(), "P", "S") == []


@pytest.mark.parametrize(
    "progress, duration, expected",
    [(0, 200, 0.0), (200, 200, 1.0), (300, 200, 1.0), (-5, 200, 0.0), (100, 200, 0.5)],
)
def test_progress_ratio(progress, duration, expected):
    assert progress_ratio(progress, duration) == expected


def test_progress_ratio_truncates_and_accepts_timedelta():
    assert progress_ratio(timedelta(seconds=50.9), timedelta(seconds=100.5)) == progress_ratio(50, 100)


def test_progress_ratio_zero_duration():
    assert progress_ratio(5, 0) == 1.0
    assert progress_ratio(0, 0) == 0.0


def test_progress_ratio_stays_in_range():
    for p in range(-10, 300, 7):
        assert 0.0 <= progress_ratio(p, 123) <= 1.0