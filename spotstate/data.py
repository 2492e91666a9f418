"""Application data: user library, in-memory caches and file caches."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

from cachetools import TTLCache

from .model import (
    Album,
    Artist,
    Category,
    Context,
    ContextId,
    Playlist,
    PlaylistFolder,
    PlaylistFolderItem,
    PlaylistFolderNode,
    SearchResults,
    Track,
    UserId,
)

logger = logging.getLogger(__name__)

TTL_CACHE_DURATION = timedelta(hours=3)
"""Default time-to-live of the in-memory caches."""

_CACHE_CAPACITY = 64


class FileCacheKey(Enum):
    PLAYLISTS = "Playlists"
    PLAYLIST_FOLDERS = "PlaylistFolders"
    FOLLOWED_ARTISTS = "FollowedArtists"
    SAVED_ALBUMS = "SavedAlbums"
    SAVED_TRACKS = "SavedTracks"

    def file_name(self) -> str:
        return f"{self.value}_cache.json"


def _new_cache() -> TTLCache:
    return TTLCache(maxsize=_CACHE_CAPACITY, ttl=TTL_CACHE_DURATION.total_seconds())


@dataclass
class MemoryCaches:
    """Time-limited caches keyed by URI or query."""

    context: TTLCache = field(default_factory=_new_cache)
    search: TTLCache = field(default_factory=_new_cache)
    lyrics: TTLCache = field(default_factory=_new_cache)
    images: TTLCache = field(default_factory=_new_cache)


@dataclass
class BrowseData:
    categories: list[Category] = field(default_factory=list)
    category_playlists: dict[str, list[Playlist]] = field(default_factory=dict)


def _item_matches_folder(item: PlaylistFolderItem, folder_id: int) -> bool:
    if isinstance(item, Playlist):
        return item.current_folder_id == folder_id
    return item.current_id == folder_id


@dataclass
class UserData:
    """The current user's library."""

    user_id: Optional[UserId] = None
    playlists: list[PlaylistFolderItem] = field(default_factory=list)
    playlist_folder_node: Optional[PlaylistFolderNode] = None
    followed_artists: list[Artist] = field(default_factory=list)
    saved_albums: list[Album] = field(default_factory=list)
    saved_tracks: dict[str, Track] = field(default_factory=dict)

    @classmethod
    def new_from_file_caches(cls, cache_folder: Union[str, Path]) -> "UserData":
        """Build user data from whatever file caches exist in ``cache_folder``."""
        return cls(
            user_id=None,
            playlists=load_data_from_file_cache(FileCacheKey.PLAYLISTS, cache_folder) or [],
            playlist_folder_node=load_data_from_file_cache(
                FileCacheKey.PLAYLIST_FOLDERS, cache_folder
            ),
            followed_artists=load_data_from_file_cache(
                FileCacheKey.FOLLOWED_ARTISTS, cache_folder
            )
            or [],
            saved_albums=load_data_from_file_cache(FileCacheKey.SAVED_ALBUMS, cache_folder)
            or [],
            saved_tracks=load_data_from_file_cache(FileCacheKey.SAVED_TRACKS, cache_folder)
            or {},
        )

    def modifiable_playlist_items(
        self, folder_id: Optional[int] = None
    ) -> list[PlaylistFolderItem]:
        """Items the user can possibly modify, limited to ``folder_id`` if given."""
        if self.user_id is None:
            return []
        return [
            item
            for item in self.playlists
            if (folder_id is None or _item_matches_folder(item, folder_id))
            and (
                not isinstance(item, Playlist)
                or item.owner[1] == self.user_id
                or item.collaborative
            )
        ]

    def folder_playlists_items(self, folder_id: int) -> list[PlaylistFolderItem]:
        """Items located in the given folder."""
        return [item for item in self.playlists if _item_matches_folder(item, folder_id)]

    def is_liked_track(self, track: Track) -> bool:
        return track.id.uri() in self.saved_tracks


@dataclass
class AppData:
    user_data: UserData = field(default_factory=UserData)
    caches: MemoryCaches = field(default_factory=MemoryCaches)
    browse: BrowseData = field(default_factory=BrowseData)

    @classmethod
    def from_cache_folder(cls, cache_folder: Union[str, Path]) -> "AppData":
        return cls(user_data=UserData.new_from_file_caches(cache_folder))

    def context_tracks(self, context_id: ContextId) -> Optional[list[Track]]:
        """The (mutable) track list of a cached context, if cached."""
        context: Optional[Context] = self.caches.context.get(context_id.uri())
        return context.tracks if context is not None else None


def _encode_node(node: PlaylistFolderNode) -> dict[str, Any]:
    return {
        "name": node.name,
        "type": node.node_type,
        "uri": node.uri,
        "children": [_encode_node(c) for c in node.children],
    }


def _encode_item(item: PlaylistFolderItem) -> dict[str, Any]:
    if isinstance(item, Playlist):
        return {"Playlist": item.to_dict()}
    return {"Folder": item.to_dict()}


def _decode_item(raw: dict[str, Any]) -> PlaylistFolderItem:
    if len(raw) != 1:
        raise ValueError(f"invalid playlist folder item: {raw!r}")
    ((tag, value),) = raw.items()
    if tag == "Playlist":
        return Playlist.from_dict(value)
    if tag == "Folder":
        return PlaylistFolder.from_dict(value)
    raise ValueError(f"unknown playlist folder item variant: {tag!r}")


def _encode(key: FileCacheKey, data: Any) -> Any:
    if key is FileCacheKey.PLAYLISTS:
        return [_encode_item(i) for i in data]
    if key is FileCacheKey.PLAYLIST_FOLDERS:
        return _encode_node(data)
    if key is FileCacheKey.SAVED_TRACKS:
        return {uri: t.to_dict() for uri, t in data.items()}
    return [x.to_dict() for x in data]


def _decode(key: FileCacheKey, raw: Any) -> Any:
    if key is FileCacheKey.PLAYLISTS:
        return [_decode_item(i) for i in raw]
    if key is FileCacheKey.PLAYLIST_FOLDERS:
        return PlaylistFolderNode.from_dict(raw)
    if key is FileCacheKey.FOLLOWED_ARTISTS:
        return [Artist.from_dict(a) for a in raw]
    if key is FileCacheKey.SAVED_ALBUMS:
        return [Album.from_dict(a) for a in raw]
    return {uri: Track.from_dict(t) for uri, t in raw.items()}


def store_data_into_file_cache(
    key: FileCacheKey, cache_folder: Union[str, Path], data: Any
) -> None:
    """Write ``data`` as JSON into the cache file for ``key``."""
    path = Path(cache_folder) / key.file_name()
    with path.open("w", encoding="utf-8") as f:
        json.dump(_encode(key, data), f, ensure_ascii=False)


def load_data_from_file_cache(key: FileCacheKey, cache_folder: Union[str, Path]) -> Any:
    """Read the cache file for ``key``; None if it is missing or unreadable."""
    path = Path(cache_folder) / key.file_name()
    if not path.exists():
        return None
    logger.info("Loading %s data from %s...", key.value, path)
    try:
        with path.open(encoding="utf-8") as f:
            data = _decode(key, json.load(f))
    except (ValueError, KeyError, TypeError, AttributeError) as err:
        logger.error("Failed to load %s data: %s", key.value, err)
        return None
    logger.info("Successfully loaded %s data!", key.value)
    return data


# Re-exported for callers that cache search results alongside contexts.
__all__ = [
    "TTL_CACHE_DURATION",
    "FileCacheKey",
    "MemoryCaches",
    "BrowseData",
    "UserData",
    "AppData",
    "SearchResults",
    "store_data_into_file_cache",
    "load_data_from_file_cache",
]