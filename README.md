# spotstate

The state layer of a terminal Spotify player: data models, playlist folder
handling, file and in-memory caches, player state, page and popup UI state,
a single-line text input, player events and playback text formatting.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `spotstate.model`: Spotify ids (`TrackId`, `AlbumId`, `ArtistId`,
  `PlaylistId`, `UserId`, all built on `SpotifyId` with `from_uri` and
  `uri`), `TracksId` for generic track lists (with the constants
  `USER_TOP_TRACKS_ID`, `USER_RECENTLY_PLAYED_TRACKS_ID` and
  `USER_LIKED_TRACKS_ID`), `Track`, `Album`, `Artist`, `Playlist`,
  `PlaylistFolder`, `PlaylistFolderNode`, `Category`, `Device`,
  `SearchResults`, contexts (`PlaylistContext`, `AlbumContext`,
  `ArtistContext`, `TracksContext`, each with `description()`),
  `TrackOrder` with `compare`, playback requests (`ContextPlayback`,
  `UrisPlayback`, each with `uri_offset`), `CurrentPlayback` and
  `PlaybackMetadata`. Models are built from Spotify Web API JSON
  dictionaries through `from_simplified`, `from_full` and `from_api`, and
  round-trip through `to_dict` / `from_dict`. Unplayable tracks and items
  without an id come back as `None` from the API constructors.
  `UrisPlayback.uri_offset` keeps at most `limit` track ids centred on the
  chosen track.
- `spotstate.utils`: `format_duration` (seconds or a `timedelta` as
  `m:ss`), `map_join` and `parse_uri`, which turns
  `spotify:user:{user}:{type}:{id}` into `spotify:{type}:{id}`.
- `spotstate.playlist_folders`: `structurize` lays a flat list of
  playlists out in the folder tree described by `PlaylistFolderNode`s.
  Each folder gives a folder entry in its parent and a `← name` entry
  inside it leading back; playlists no node mentions go to the root
  folder (id 0).
- `spotstate.data`: `UserData`, `AppData`, `MemoryCaches` (time-limited
  `cachetools.TTLCache`s of 64 entries living three hours), `BrowseData`,
  and the JSON file caches `store_data_into_file_cache` and
  `load_data_from_file_cache`, keyed by `FileCacheKey` and stored as
  `<Key>_cache.json` in a cache folder. Loading a missing or unreadable
  file gives `None`.
- `spotstate.player`: `PlayerState`, which estimates the current playback
  and its progress from the last refresh time and applies buffered
  playback metadata on top.
- `spotstate.line_input`: `LineInput`, a one-line editor driven by single
  characters and `EditKey` presses, reporting an `InputEffect`, with
  `segments` giving the text split around a highlighted cursor.
- `spotstate.ui_page`: page states (`LibraryPage`, `ContextPage`,
  `SearchPage`, `LyricPage`, `BrowsePage`, `QueuePage`,
  `CommandHelpPage`), focus enums that cycle with `next` / `previous`,
  `SelectionState` (with `adjust` to clamp a selection to a list length)
  and `ScrollState`.
- `spotstate.ui_popup`: popup states (`SearchPopup`, list popups,
  `PlaylistCreatePopup`) and `ActionListItem`.
- `spotstate.ui_state`: `UIState` with the page history, the current
  popup and `search_filtered_items`, which keeps items whose text holds
  every word of the search popup's query, ignoring case.
- `spotstate.events`: `PlayerEvent` (`Changed`, `Playing`, `Paused`,
  `EndOfTrack`) with `args()`, the argument list a hook command would
  receive, and `percent_to_volume`, mapping 0–100 (capped at 100) onto
  0–65535.
- `spotstate.state`: `State`, holding a `UIState`, a `PlayerState` and an
  `AppData` (read from a cache folder when one is given), each with its own
  lock.
- `spotstate.playback_text`: `construct_playback_text` fills a playback
  format string such as `"{status} {track} • {artists}\n{album}\n{metadata}"`
  into lines of `StyledSpan`s, and `progress_ratio` gives a progress bar's
  fill in whole seconds, clamped to [0, 1].

## Example

```python
from spotstate.model import Playlist, PlaylistFolderNode, PlaylistId, UserId
from spotstate.playlist_folders import structurize

playlists = [
    Playlist(
        id=PlaylistId("abc"),
        collaborative=False,
        name="Morning",
        owner=("me", UserId("me")),
        desc="",
    ),
]
nodes = [
    PlaylistFolderNode.from_dict(
        {
            "name": "Daily",
            "type": "folder",
            "uri": "spotify:user:me:folder:1",
            "children": [{"type": "playlist", "uri": "spotify:playlist:abc"}],
        }
    )
]

for item in structurize(playlists, nodes):
    print(item)
# Daily/
# ← Daily/
# Morning • me
```

```python
from spotstate.line_input import EditKey, LineInput

line = LineInput()
for ch in "hello":
    line.input(ch, False)
line.input(EditKey.BACKSPACE, False)
print(line.get_text())  # "hell"
```

## What it does not do

This is a library, not a player. It has no command to run, makes no
network requests to Spotify, plays no audio, and draws nothing on the
terminal. It holds and changes the state that a client, an audio backend
and a renderer would work with; those parts have to be supplied by the
application using it.