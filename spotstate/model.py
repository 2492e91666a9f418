"""Data model for tracks, albums, artists, playlists, contexts and playback."""

from __future__ import annotations

import html
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, ClassVar, Optional, Union

from .utils import map_join

_BASE62 = re.compile(r"[0-9A-Za-z]+")
_HTML_TAG = re.compile(r"(<.*?>|</.*?>)")


@dataclass(frozen=True)
class SpotifyId:
    """A typed Spotify identifier."""

    id: str
    kind: ClassVar[str] = ""
    base62: ClassVar[bool] = True

    def __post_init__(self) -> None:
        if not self.id or (self.base62 and not _BASE62.fullmatch(self.id)):
            raise ValueError(f"invalid {self.kind or 'spotify'} id: {self.id!r}")

    @classmethod
    def from_uri(cls, uri: str) -> "SpotifyId":
        """Parse a ``spotify:{type}:{id}`` URI of this id's type."""
        parts = uri.split(":", 2)
        if len(parts) != 3 or parts[0] != "spotify" or parts[1] != cls.kind:
            raise ValueError(f"invalid {cls.kind or 'spotify'} uri: {uri!r}")
        return cls(parts[2])

    @classmethod
    def _parse(cls, value: str) -> "SpotifyId":
        return cls.from_uri(value) if value.startswith("spotify:") else cls(value)

    def uri(self) -> str:
        return f"spotify:{self.kind}:{self.id}"

    def __str__(self) -> str:
        return self.uri()


@dataclass(frozen=True)
class TrackId(SpotifyId):
    kind: ClassVar[str] = "track"


@dataclass(frozen=True)
class AlbumId(SpotifyId):
    kind: ClassVar[str] = "album"


@dataclass(frozen=True)
class ArtistId(SpotifyId):
    kind: ClassVar[str] = "artist"


@dataclass(frozen=True)
class PlaylistId(SpotifyId):
    kind: ClassVar[str] = "playlist"


@dataclass(frozen=True)
class UserId(SpotifyId):
    kind: ClassVar[str] = "user"
    base62: ClassVar[bool] = False


@dataclass(frozen=True)
class TracksId:
    """Identifier of a generic list of tracks (top tracks, liked tracks, ...)."""

    tracks_uri: str
    kind: str

    def uri(self) -> str:
        return self.tracks_uri


USER_TOP_TRACKS_ID = TracksId("tracks:user-top-tracks", "Top Tracks")
USER_RECENTLY_PLAYED_TRACKS_ID = TracksId(
    "tracks:user-recently-played-tracks", "Recently Played Tracks"
)
USER_LIKED_TRACKS_ID = TracksId("tracks:user-liked-tracks", "Liked Tracks")

ContextId = Union[PlaylistId, AlbumId, ArtistId, TracksId]


class AlbumType(Enum):
    ALBUM = "album"
    SINGLE = "single"
    APPEARS_ON = "appears_on"
    COMPILATION = "compilation"


class RepeatState(Enum):
    OFF = "off"
    TRACK = "track"
    CONTEXT = "context"


def _album_type(value: Optional[str]) -> Optional[AlbumType]:
    if value is None:
        return None
    try:
        return AlbumType(value.lower())
    except ValueError:
        return None


def _duration_to_dict(duration: timedelta) -> dict[str, int]:
    whole = duration // timedelta(seconds=1)
    rest = duration - timedelta(seconds=whole)
    return {"secs": whole, "nanos": rest.microseconds * 1000}


def _duration_from_dict(data: dict[str, int]) -> timedelta:
    return timedelta(seconds=data["secs"], microseconds=data.get("nanos", 0) // 1000)


def _artists(data: list[dict[str, Any]]) -> list["Artist"]:
    return [a for a in (Artist.from_simplified(d) for d in data) if a is not None]


@dataclass
class Artist:
    id: ArtistId
    name: str

    @classmethod
    def from_simplified(cls, data: dict[str, Any]) -> Optional["Artist"]:
        if data.get("id") is None:
            return None
        return cls(ArtistId._parse(data["id"]), data["name"])

    @classmethod
    def from_full(cls, data: dict[str, Any]) -> "Artist":
        return cls(ArtistId._parse(data["id"]), data["name"])

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id.uri(), "name": self.name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Artist":
        return cls(ArtistId._parse(data["id"]), data["name"])

    def __str__(self) -> str:
        return self.name


@dataclass
class Album:
    id: AlbumId
    release_date: str
    name: str
    artists: list[Artist] = field(default_factory=list)
    album_type: Optional[AlbumType] = None

    @classmethod
    def from_simplified(cls, data: dict[str, Any]) -> Optional["Album"]:
        if data.get("id") is None:
            return None
        return cls(
            id=AlbumId._parse(data["id"]),
            name=data["name"],
            release_date=data.get("release_date") or "",
            artists=_artists(data.get("artists", [])),
            album_type=_album_type(data.get("album_type")),
        )

    @classmethod
    def from_full(cls, data: dict[str, Any]) -> "Album":
        return cls(
            id=AlbumId._parse(data["id"]),
            name=data["name"],
            release_date=data["release_date"],
            artists=_artists(data.get("artists", [])),
            album_type=AlbumType(data["album_type"].lower()),
        )

    def year(self) -> str:
        return self.release_date.split("-")[0]

    def album_type_name(self) -> str:
        return self.album_type.value if self.album_type else ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id.uri(),
            "release_date": self.release_date,
            "name": self.name,
            "artists": [a.to_dict() for a in self.artists],
            "album_type": self.album_type.value if self.album_type else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Album":
        album_type = data.get("album_type")
        return cls(
            id=AlbumId._parse(data["id"]),
            release_date=data["release_date"],
            name=data["name"],
            artists=[Artist.from_dict(a) for a in data.get("artists", [])],
            album_type=AlbumType(album_type) if album_type is not None else None,
        )

    def __str__(self) -> str:
        artists = map_join(self.artists, lambda a: a.name, ", ")
        return f"{self.name} • {artists} ({self.year()})"


@dataclass
class Track:
    id: TrackId
    name: str
    artists: list[Artist] = field(default_factory=list)
    album: Optional[Album] = None
    duration: timedelta = timedelta(0)
    explicit: bool = False
    added_at: int = 0

    def artists_info(self) -> str:
        return map_join(self.artists, lambda a: a.name, ", ")

    def album_info(self) -> str:
        return self.album.name if self.album else ""

    def display_name(self) -> str:
        return f"{self.name} (E)" if self.explicit else self.name

    @classmethod
    def _from_api(cls, data: dict[str, Any], album: Optional[Album]) -> Optional["Track"]:
        playable = data.get("is_playable")
        if playable is not None and not playable:
            return None
        linked = data.get("linked_from")
        raw_id = linked["id"] if linked else data.get("id")
        if raw_id is None:
            return None
        return cls(
            id=TrackId._parse(raw_id),
            name=data["name"],
            artists=_artists(data.get("artists", [])),
            album=album,
            duration=timedelta(milliseconds=data["duration_ms"]),
            explicit=bool(data.get("explicit", False)),
        )

    @classmethod
    def from_simplified(cls, data: dict[str, Any]) -> Optional["Track"]:
        return cls._from_api(data, None)

    @classmethod
    def from_full(cls, data: dict[str, Any]) -> Optional["Track"]:
        return cls._from_api(data, Album.from_simplified(data["album"]))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id.uri(),
            "name": self.name,
            "artists": [a.to_dict() for a in self.artists],
            "album": self.album.to_dict() if self.album else None,
            "duration": _duration_to_dict(self.duration),
            "explicit": self.explicit,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Track":
        album = data.get("album")
        return cls(
            id=TrackId._parse(data["id"]),
            name=data["name"],
            artists=[Artist.from_dict(a) for a in data.get("artists", [])],
            album=Album.from_dict(album) if album is not None else None,
            duration=_duration_from_dict(data["duration"]),
            explicit=data["explicit"],
        )

    def __str__(self) -> str:
        return f"{self.display_name()} • {self.artists_info()} ▎ {self.album_info()}"


@dataclass
class Playlist:
    id: PlaylistId
    collaborative: bool
    name: str
    owner: tuple[str, UserId]
    desc: str = ""
    current_folder_id: int = 0

    @classmethod
    def from_simplified(cls, data: dict[str, Any]) -> "Playlist":
        owner = data["owner"]
        return cls(
            id=PlaylistId._parse(data["id"]),
            collaborative=bool(data.get("collaborative", False)),
            name=data["name"],
            owner=(owner.get("display_name") or "", UserId._parse(owner["id"])),
        )

    @classmethod
    def from_full(cls, data: dict[str, Any]) -> "Playlist":
        playlist = cls.from_simplified(data)
        description = data.get("description") or ""
        playlist.desc = html.unescape(_HTML_TAG.sub("", description))
        return playlist

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id.uri(),
            "collaborative": self.collaborative,
            "name": self.name,
            "owner": [self.owner[0], self.owner[1].uri()],
            "desc": self.desc,
            "current_folder_id": self.current_folder_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Playlist":
        owner_name, owner_id = data["owner"]
        return cls(
            id=PlaylistId._parse(data["id"]),
            collaborative=data["collaborative"],
            name=data["name"],
            owner=(owner_name, UserId._parse(owner_id)),
            desc=data["desc"],
            current_folder_id=data.get("current_folder_id", 0),
        )

    def __str__(self) -> str:
        return f"{self.name} • {self.owner[0]}"


@dataclass
class PlaylistFolder:
    """A folder in the playlist tree; ``target_id`` is the folder it opens."""

    name: str
    current_id: int
    target_id: int

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "current_id": self.current_id, "target_id": self.target_id}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlaylistFolder":
        return cls(data["name"], data["current_id"], data["target_id"])

    def __str__(self) -> str:
        return f"{self.name}/"


PlaylistFolderItem = Union[Playlist, PlaylistFolder]


@dataclass
class PlaylistFolderNode:
    """A node of an exported playlist folder hierarchy."""

    name: Optional[str]
    node_type: str
    uri: str = ""
    children: list["PlaylistFolderNode"] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlaylistFolderNode":
        return cls(
            name=data.get("name"),
            node_type=data["type"],
            uri=data.get("uri", ""),
            children=[cls.from_dict(c) for c in data.get("children", [])],
        )


@dataclass
class Category:
    id: str
    name: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Category":
        return cls(id=data["id"], name=data["name"])

    def __str__(self) -> str:
        return self.name


@dataclass
class Device:
    id: str
    name: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Optional["Device"]:
        if data.get("id") is None:
            return None
        return cls(id=data["id"], name=data["name"])


@dataclass
class SearchResults:
    tracks: list[Track] = field(default_factory=list)
    artists: list[Artist] = field(default_factory=list)
    albums: list[Album] = field(default_factory=list)
    playlists: list[Playlist] = field(default_factory=list)


class TrackOrder(Enum):
    ADDED_AT = "added_at"
    TRACK_NAME = "track_name"
    ALBUM = "album"
    ARTISTS = "artists"
    DURATION = "duration"

    def _key(self, track: Track) -> Any:
        if self is TrackOrder.ADDED_AT:
            return track.added_at
        if self is TrackOrder.TRACK_NAME:
            return track.name
        if self is TrackOrder.ALBUM:
            return track.album_info()
        if self is TrackOrder.DURATION:
            return track.duration
        return track.artists_info()

    def compare(self, x: Track, y: Track) -> int:
        """Return -1, 0 or 1 as ``x`` sorts before, with or after ``y``."""
        a, b = self._key(x), self._key(y)
        return (a > b) - (a < b)


Item = Union[Track, Album, Artist, Playlist]
ItemId = Union[TrackId, AlbumId, ArtistId, PlaylistId]


class Context(ABC):
    """A playable context: playlist, album, artist or track list."""

    tracks: list[Track]

    @abstractmethod
    def description(self) -> str:
        """A one-line description of the context."""


@dataclass
class PlaylistContext(Context):
    playlist: Playlist
    tracks: list[Track] = field(default_factory=list)

    def description(self) -> str:
        return f"{self.playlist.name} | {self.playlist.owner[0]} | {len(self.tracks)} songs"


@dataclass
class AlbumContext(Context):
    album: Album
    tracks: list[Track] = field(default_factory=list)

    def description(self) -> str:
        return f"{self.album.name} | {self.album.release_date} | {len(self.tracks)} songs"


@dataclass
class ArtistContext(Context):
    artist: Artist
    top_tracks: list[Track] = field(default_factory=list)
    albums: list[Album] = field(default_factory=list)
    related_artists: list[Artist] = field(default_factory=list)

    @property
    def tracks(self) -> list[Track]:  # type: ignore[override]
        return self.top_tracks

    def description(self) -> str:
        return self.artist.name


@dataclass
class TracksContext(Context):
    tracks: list[Track]
    desc: str

    def description(self) -> str:
        return f"{self.desc} | {len(self.tracks)} songs"


@dataclass
class ContextPlayback:
    """Start playing a context; ``offset`` is a track URI or a position."""

    context_id: ContextId
    offset: Union[str, int, None] = None

    def uri_offset(self, uri: str, limit: int) -> "ContextPlayback":
        return ContextPlayback(self.context_id, uri)


@dataclass
class UrisPlayback:
    """Start playing a list of tracks; ``offset`` is a track URI or a position."""

    ids: list[TrackId]
    offset: Union[str, int, None] = None

    def uri_offset(self, uri: str, limit: int) -> "UrisPlayback":
        """Offset to ``uri``, keeping at most ``limit`` tracks around it."""
        if len(self.ids) < limit:
            ids = list(self.ids)
        else:
            pos = next((i for i, track_id in enumerate(self.ids) if track_id.uri() == uri), 0)
            left = max(pos - limit // 2, 0)
            ids = self.ids[left : left + limit]
        return UrisPlayback(ids, uri)


Playback = Union[ContextPlayback, UrisPlayback]


@dataclass
class CurrentPlayback:
    """The current playback as reported by the player API."""

    device_name: str
    device_id: Optional[str] = None
    volume_percent: Optional[int] = None
    is_playing: bool = False
    repeat_state: RepeatState = RepeatState.OFF
    shuffle_state: bool = False
    progress: Optional[timedelta] = None
    context_uri: Optional[str] = None
    context_type: Optional[str] = None
    item: Optional[dict[str, Any]] = None
    item_type: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "CurrentPlayback":
        device = data["device"]
        context = data.get("context") or {}
        progress_ms = data.get("progress_ms")
        item = data.get("item")
        item_type = data.get("currently_playing_type")
        if item is not None and item.get("type"):
            item_type = item["type"]
        return cls(
            device_name=device["name"],
            device_id=device.get("id"),
            volume_percent=device.get("volume_percent"),
            is_playing=bool(data.get("is_playing", False)),
            repeat_state=RepeatState(data.get("repeat_state", "off")),
            shuffle_state=bool(data.get("shuffle_state", False)),
            progress=timedelta(milliseconds=progress_ms) if progress_ms is not None else None,
            context_uri=context.get("uri"),
            context_type=context.get("type"),
            item=item,
            item_type=item_type,
        )


@dataclass
class PlaybackMetadata:
    device_name: str
    device_id: Optional[str]
    volume: Optional[int]
    is_playing: bool
    repeat_state: RepeatState
    shuffle_state: bool
    mute_state: Optional[int] = None
    # Workaround for players that cannot repeat a single track.
    fake_track_repeat_state: bool = False

    @classmethod
    def from_playback(cls, playback: CurrentPlayback) -> "PlaybackMetadata":
        return cls(
            device_name=playback.device_name,
            device_id=playback.device_id,
            volume=playback.volume_percent,
            is_playing=playback.is_playing,
            repeat_state=playback.repeat_state,
            shuffle_state=playback.shuffle_state,
        )