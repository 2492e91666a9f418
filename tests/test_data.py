from datetime import timedelta

import pytest

from spotstate.data import (
    AppData,
    FileCacheKey,
    UserData,
    load_data_from_file_cache,
    store_data_into_file_cache,
)
from spotstate.model import (
    Album,
    AlbumContext,
    AlbumId,
    AlbumType,
    Artist,
    ArtistContext,
    ArtistId,
    Playlist,
    PlaylistFolder,
    PlaylistFolderNode,
    PlaylistId,
    Track,
    TrackId,
    UserId,
)


def artist(aid="ar1"):
    return Artist(ArtistId(aid), "Singer")


def album(aid="al1"):
    return Album(
        id=AlbumId(aid),
        release_date="2020-01-02",
        name="Record",
        artists=[artist()],
        album_type=AlbumType.SINGLE,
    )


def track(tid="t1"):
    return Track(
        id=TrackId(tid),
        name="Song",
        artists=[artist()],
        album=album(),
        duration=timedelta(seconds=200),
        explicit=True,
    )


def playlist(pid, owner="me", collaborative=False, folder=0):
    return Playlist(
        id=PlaylistId(pid),
        collaborative=collaborative,
        name=f"list {pid}",
        owner=(owner, UserId(owner)),
        desc="d",
        current_folder_id=folder,
    )


def test_cache_file_name_follows_key(tmp_path):
    store_data_into_file_cache(FileCacheKey.SAVED_ALBUMS, tmp_path, [album()])
    assert (tmp_path / "SavedAlbums_cache.json").exists()


@pytest.mark.parametrize(
    "key,data",
    [
        (FileCacheKey.PLAYLISTS, [playlist("p1", folder=2), PlaylistFolder("F", 0, 2)]),
        (FileCacheKey.FOLLOWED_ARTISTS, [artist("a1"), artist("a2")]),
        (FileCacheKey.SAVED_ALBUMS, [album()]),
        (FileCacheKey.SAVED_TRACKS, {track().id.uri(): track()}),
        (
            FileCacheKey.PLAYLIST_FOLDERS,
            PlaylistFolderNode(
                name="root",
                node_type="folder",
                uri="spotify:user:me:folder:x",
                children=[PlaylistFolderNode(None, "playlist", "spotify:playlist:p1")],
            ),
        ),
    ],
)
def test_store_and_load_round_trip(tmp_path, key, data):
    store_data_into_file_cache(key, tmp_path, data)
    assert load_data_from_file_cache(key, tmp_path) == data


def test_load_missing_returns_none(tmp_path):
    assert load_data_from_file_cache(FileCacheKey.PLAYLISTS, tmp_path) is None


def test_load_corrupt_returns_none(tmp_path):
    (tmp_path / "FollowedArtists_cache.json").write_text("{not json", encoding="utf-8")
    assert load_data_from_file_cache(FileCacheKey.FOLLOWED_ARTISTS, tmp_path) is None


def test_load_bad_variant_returns_none(tmp_path):
    (tmp_path / "Playlists_cache.json").write_text('[{"Other": {}}]', encoding="utf-8")
    assert load_data_from_file_cache(FileCacheKey.PLAYLISTS, tmp_path) is None


def test_new_from_empty_folder_has_defaults(tmp_path):
    data = UserData.new_from_file_caches(tmp_path)
    assert data.playlists == []
    assert data.playlist_folder_node is None
    assert data.followed_artists == []
    assert data.saved_albums == []
    assert data.saved_tracks == {}
    assert data.user_id is None


def test_new_from_file_caches_loads_stored(tmp_path):
    store_data_into_file_cache(FileCacheKey.FOLLOWED_ARTISTS, tmp_path, [artist()])
    store_data_into_file_cache(FileCacheKey.SAVED_TRACKS, tmp_path, {"k": track()})
    app = AppData.from_cache_folder(tmp_path)
    assert app.user_data.followed_artists == [artist()]
    assert app.user_data.saved_tracks == {"k": track()}


def test_modifiable_without_user_is_empty():
    data = UserData(playlists=[playlist("p1")])
    assert data.modifiable_playlist_items(None) == []


def test_modifiable_filters_owner_and_collaborative():
    mine = playlist("p1", owner="me")
    shared = playlist("p2", owner="other", collaborative=True)
    theirs = playlist("p3", owner="other")
    folder = PlaylistFolder("F", 0, 1)
    data = UserData(user_id=UserId("me"), playlists=[mine, shared, theirs, folder])
    assert data.modifiable_playlist_items(None) == [mine, shared, folder]


def test_modifiable_filters_by_folder():
    inside = playlist("p1", folder=1)
    outside = playlist("p2", folder=0)
    up = PlaylistFolder("← F", 1, 0)
    data = UserData(user_id=UserId("me"), playlists=[inside, outside, up])
    assert data.modifiable_playlist_items(1) == [inside, up]


def test_folder_playlists_items():
    a = playlist("p1", folder=0)
    b = playlist("p2", folder=1)
    f = PlaylistFolder("F", 0, 1)
    data = UserData(playlists=[a, b, f])
    assert data.folder_playlists_items(0) == [a, f]
    assert data.folder_playlists_items(1) == [b]


def test_is_liked_track():
    t = track()
    data = UserData(saved_tracks={t.id.uri(): t})
    assert data.is_liked_track(t)
    assert not data.is_liked_track(track("t2"))


def test_context_tracks_for_album_and_artist():
    app = AppData()
    t = track()
    album_ctx = AlbumContext(album=album(), tracks=[t])
    artist_ctx = ArtistContext(artist=artist(), top_tracks=[t, track("t2")])
    app.caches.context[album().id.uri()] = album_ctx
    app.caches.context[artist().id.uri()] = artist_ctx
    assert app.context_tracks(album().id) == [t]
    assert app.context_tracks(artist().id) == artist_ctx.top_tracks
    assert app.context_tracks(AlbumId("missing")) is None


def test_context_tracks_is_mutable_view():
    app = AppData()
    ctx = AlbumContext(album=album(), tracks=[track()])
    app.caches.context[album().id.uri()] = ctx
    app.context_tracks(album().id).clear()
    assert ctx.tracks == []