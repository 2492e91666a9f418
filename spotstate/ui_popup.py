"""Popup states of the UI."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from .line_input import LineInput
from .model import Album, Artist, Playlist, Track, TrackId
from .ui_page import SelectionState


class PlaylistCreateCurrentField(Enum):
    NAME = "name"
    DESC = "desc"


class ArtistPopupAction(Enum):
    """What choosing an artist in an artist popup does."""

    BROWSE = "browse"
    SHOW_ACTIONS = "show_actions"


@dataclass(frozen=True)
class BrowsePlaylists:
    """Browse the user's playlists inside a folder."""

    folder_id: int = 0


@dataclass(frozen=True)
class AddTrackToPlaylist:
    """Pick a playlist inside a folder to add a track to."""

    folder_id: int
    track_id: TrackId


PlaylistPopupAction = Union[BrowsePlaylists, AddTrackToPlaylist]


@dataclass
class ActionListItem:
    """An item together with the actions that can be applied to it."""

    item: Union[Track, Artist, Album, Playlist]
    actions: list[Any] = field(default_factory=list)

    def n_actions(self) -> int:
        return len(self.actions)

    def name(self) -> str:
        return self.item.name

    def actions_desc(self) -> list[str]:
        return [a.name if isinstance(a, Enum) else str(a) for a in self.actions]


class PopupState(ABC):
    """A popup shown on top of the current page."""

    @abstractmethod
    def list_state(self) -> Optional[SelectionState]:
        """The selection state of a list popup; None for other popups."""

    def list_selected(self) -> Optional[int]:
        state = self.list_state()
        return state.selected() if state is not None else None

    def list_select(self, index: Optional[int]) -> None:
        state = self.list_state()
        if state is not None:
            state.select(index)


class _ListPopup(PopupState):
    selection: SelectionState

    def list_state(self) -> Optional[SelectionState]:
        return self.selection


@dataclass
class SearchPopup(PopupState):
    query: str = ""

    def list_state(self) -> Optional[SelectionState]:
        return None


@dataclass
class UserPlaylistListPopup(_ListPopup):
    action: PlaylistPopupAction = field(default_factory=BrowsePlaylists)
    selection: SelectionState = field(default_factory=SelectionState)


@dataclass
class UserFollowedArtistListPopup(_ListPopup):
    selection: SelectionState = field(default_factory=SelectionState)


@dataclass
class UserSavedAlbumListPopup(_ListPopup):
    selection: SelectionState = field(default_factory=SelectionState)


@dataclass
class DeviceListPopup(_ListPopup):
    selection: SelectionState = field(default_factory=SelectionState)


@dataclass
class ArtistListPopup(_ListPopup):
    action: ArtistPopupAction
    artists: list[Artist] = field(default_factory=list)
    selection: SelectionState = field(default_factory=SelectionState)


@dataclass
class ThemeListPopup(_ListPopup):
    themes: list[Any] = field(default_factory=list)
    selection: SelectionState = field(default_factory=SelectionState)


@dataclass
class ActionListPopup(_ListPopup):
    item: ActionListItem
    selection: SelectionState = field(default_factory=SelectionState)


@dataclass
class PlaylistCreatePopup(PopupState):
    name: LineInput = field(default_factory=LineInput)
    desc: LineInput = field(default_factory=LineInput)
    current_field: PlaylistCreateCurrentField = PlaylistCreateCurrentField.NAME

    def list_state(self) -> Optional[SelectionState]:
        return None