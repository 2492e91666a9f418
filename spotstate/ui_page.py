"""Page states of the UI: focus, selection and scroll positions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from .line_input import LineInput
from .model import AlbumId, ArtistId, Category, ContextId, PlaylistId, TracksId


@dataclass
class SelectionState:
    """Selected row of a list or table window."""

    index: Optional[int] = None

    def select(self, index: Optional[int]) -> None:
        self.index = index

    def selected(self) -> Optional[int]:
        return self.index

    def adjust(self, length: int) -> None:
        """Clamp the selection to a window holding ``length`` items."""
        if self.index is not None:
            if self.index >= length:
                self.index = length - 1 if length > 0 else 0
        elif length > 0:
            self.index = 0


@dataclass
class ScrollState:
    """Scroll offset of a text or table page."""

    offset: int = 0

    def select(self, index: int) -> None:
        self.offset = index

    def selected(self) -> int:
        return self.offset


WindowState = Union[SelectionState, ScrollState]


def _step(member: Enum, offset: int) -> Enum:
    members = list(type(member))
    return members[(members.index(member) + offset) % len(members)]


class LibraryFocusState(Enum):
    PLAYLISTS = "playlists"
    SAVED_ALBUMS = "saved_albums"
    FOLLOWED_ARTISTS = "followed_artists"

    def next(self) -> "LibraryFocusState":
        return _step(self, 1)  # type: ignore[return-value]

    def previous(self) -> "LibraryFocusState":
        return _step(self, -1)  # type: ignore[return-value]


class ArtistFocusState(Enum):
    TOP_TRACKS = "top_tracks"
    ALBUMS = "albums"
    RELATED_ARTISTS = "related_artists"

    def next(self) -> "ArtistFocusState":
        return _step(self, 1)  # type: ignore[return-value]

    def previous(self) -> "ArtistFocusState":
        return _step(self, -1)  # type: ignore[return-value]


class SearchFocusState(Enum):
    INPUT = "input"
    TRACKS = "tracks"
    ALBUMS = "albums"
    ARTISTS = "artists"
    PLAYLISTS = "playlists"

    def next(self) -> "SearchFocusState":
        return _step(self, 1)  # type: ignore[return-value]

    def previous(self) -> "SearchFocusState":
        return _step(self, -1)  # type: ignore[return-value]


class PageType(Enum):
    LIBRARY = "library"
    CONTEXT = "context"
    SEARCH = "search"
    BROWSE = "browse"
    LYRIC = "lyric"
    QUEUE = "queue"
    COMMAND_HELP = "command_help"


@dataclass
class LibraryPageUIState:
    playlist_list: SelectionState = field(default_factory=SelectionState)
    saved_album_list: SelectionState = field(default_factory=SelectionState)
    followed_artist_list: SelectionState = field(default_factory=SelectionState)
    focus: LibraryFocusState = LibraryFocusState.PLAYLISTS
    playlist_folder_id: int = 0


@dataclass
class SearchPageUIState:
    track_list: SelectionState = field(default_factory=SelectionState)
    album_list: SelectionState = field(default_factory=SelectionState)
    artist_list: SelectionState = field(default_factory=SelectionState)
    playlist_list: SelectionState = field(default_factory=SelectionState)
    focus: SearchFocusState = SearchFocusState.INPUT


@dataclass
class ContextPageType:
    """The context a page shows; no id means the currently playing context."""

    context_id: Optional[ContextId] = None

    def title(self) -> str:
        context_id = self.context_id
        if context_id is None:
            return "Current Playing"
        if isinstance(context_id, PlaylistId):
            return "Playlist"
        if isinstance(context_id, AlbumId):
            return "Album"
        if isinstance(context_id, ArtistId):
            return "Artist"
        if isinstance(context_id, TracksId):
            return context_id.kind
        raise TypeError(f"unknown context id: {context_id!r}")


@dataclass
class ContextPageUIState:
    """Window states of a context page.

    ``kind`` is one of "playlist", "album", "artist" or "tracks". For an artist
    page ``track_table`` is the top-track table and the other windows are used.
    """

    kind: str
    track_table: SelectionState = field(default_factory=SelectionState)
    album_table: SelectionState = field(default_factory=SelectionState)
    related_artist_list: SelectionState = field(default_factory=SelectionState)
    focus: ArtistFocusState = ArtistFocusState.TOP_TRACKS

    @classmethod
    def new_playlist(cls) -> "ContextPageUIState":
        return cls("playlist")

    @classmethod
    def new_album(cls) -> "ContextPageUIState":
        return cls("album")

    @classmethod
    def new_artist(cls) -> "ContextPageUIState":
        return cls("artist")

    @classmethod
    def new_tracks(cls) -> "ContextPageUIState":
        return cls("tracks")

    @property
    def is_artist(self) -> bool:
        return self.kind == "artist"

    def _focused_window(self) -> SelectionState:
        if not self.is_artist or self.focus is ArtistFocusState.TOP_TRACKS:
            return self.track_table
        if self.focus is ArtistFocusState.ALBUMS:
            return self.album_table
        return self.related_artist_list


@dataclass
class CategoryListState:
    state: SelectionState = field(default_factory=SelectionState)


@dataclass
class CategoryPlaylistListState:
    category: Category
    state: SelectionState = field(default_factory=SelectionState)


BrowsePageUIState = Union[CategoryListState, CategoryPlaylistListState]


class PageState(ABC):
    """A page in the UI history."""

    @abstractmethod
    def page_type(self) -> PageType:
        """The type of the page."""

    @abstractmethod
    def focus_window_state(self) -> Optional[WindowState]:
        """The state of the currently focused window, if any."""

    def select(self, index: int) -> None:
        """Select the ``index``-th item of the focused window."""
        state = self.focus_window_state()
        if state is not None:
            state.select(index)

    def selected(self) -> Optional[int]:
        state = self.focus_window_state()
        return state.selected() if state is not None else None

    def _move_focus(self, forward: bool) -> None:
        """Move focus between windows; pages with one window do nothing."""

    def next(self) -> None:
        """Focus the next window and reset its selection."""
        self._move_focus(True)
        self.select(0)

    def previous(self) -> None:
        """Focus the previous window and reset its selection."""
        self._move_focus(False)
        self.select(0)


@dataclass
class LibraryPage(PageState):
    state: LibraryPageUIState = field(default_factory=LibraryPageUIState)

    def page_type(self) -> PageType:
        return PageType.LIBRARY

    def focus_window_state(self) -> Optional[WindowState]:
        focus = self.state.focus
        if focus is LibraryFocusState.PLAYLISTS:
            return self.state.playlist_list
        if focus is LibraryFocusState.SAVED_ALBUMS:
            return self.state.saved_album_list
        return self.state.followed_artist_list

    def _move_focus(self, forward: bool) -> None:
        focus = self.state.focus
        self.state.focus = focus.next() if forward else focus.previous()


@dataclass
class ContextPage(PageState):
    id: Optional[ContextId] = None
    context_page_type: ContextPageType = field(default_factory=ContextPageType)
    state: Optional[ContextPageUIState] = None

    def page_type(self) -> PageType:
        return PageType.CONTEXT

    def focus_window_state(self) -> Optional[WindowState]:
        return self.state._focused_window() if self.state is not None else None

    def _move_focus(self, forward: bool) -> None:
        if self.state is not None and self.state.is_artist:
            focus = self.state.focus
            self.state.focus = focus.next() if forward else focus.previous()


@dataclass
class SearchPage(PageState):
    line_input: LineInput = field(default_factory=LineInput)
    current_query: str = ""
    state: SearchPageUIState = field(default_factory=SearchPageUIState)

    def page_type(self) -> PageType:
        return PageType.SEARCH

    def focus_window_state(self) -> Optional[WindowState]:
        focus = self.state.focus
        if focus is SearchFocusState.INPUT:
            return None
        if focus is SearchFocusState.TRACKS:
            return self.state.track_list
        if focus is SearchFocusState.ALBUMS:
            return self.state.album_list
        if focus is SearchFocusState.ARTISTS:
            return self.state.artist_list
        return self.state.playlist_list

    def _move_focus(self, forward: bool) -> None:
        focus = self.state.focus
        self.state.focus = focus.next() if forward else focus.previous()


@dataclass
class LyricPage(PageState):
    track: str
    artists: str
    scroll_offset: ScrollState = field(default_factory=ScrollState)

    def page_type(self) -> PageType:
        return PageType.LYRIC

    def focus_window_state(self) -> Optional[WindowState]:
        return self.scroll_offset


@dataclass
class BrowsePage(PageState):
    state: BrowsePageUIState = field(default_factory=CategoryListState)

    def page_type(self) -> PageType:
        return PageType.BROWSE

    def focus_window_state(self) -> Optional[WindowState]:
        return self.state.state


@dataclass
class QueuePage(PageState):
    scroll_offset: ScrollState = field(default_factory=ScrollState)

    def page_type(self) -> PageType:
        return PageType.QUEUE

    def focus_window_state(self) -> Optional[WindowState]:
        return self.scroll_offset


@dataclass
class CommandHelpPage(PageState):
    scroll_offset: ScrollState = field(default_factory=ScrollState)

    def page_type(self) -> PageType:
        return PageType.COMMAND_HELP

    def focus_window_state(self) -> Optional[WindowState]:
        return self.scroll_offset