"""The application's UI state: page history, popup and key input."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, TypeVar

from .model import TracksId
from .ui_page import ContextPage, ContextPageType, LibraryPage, PageState
from .ui_popup import PopupState, SearchPopup

T = TypeVar("T")


def _default_history() -> list[PageState]:
    return [LibraryPage()]


@dataclass
class UIState:
    is_running: bool = True
    theme: Any = None
    input_key_sequence: list[Any] = field(default_factory=list)
    history: list[PageState] = field(default_factory=_default_history)
    popup: Optional[PopupState] = None
    # (x, y, width, height) of the playback progress bar, used for mouse seeking
    playback_progress_bar_rect: tuple[int, int, int, int] = (0, 0, 0, 0)

    def current_page(self) -> PageState:
        if not self.history:
            raise LookupError("the page history is empty")
        return self.history[-1]

    def new_search_popup(self) -> None:
        self.current_page().select(0)
        self.popup = SearchPopup(query="")

    def new_page(self, page: PageState) -> None:
        self.history.append(page)
        self.popup = None

    def new_radio_page(self, uri: str) -> None:
        self.new_page(
            ContextPage(
                id=None,
                context_page_type=ContextPageType(
                    TracksId(f"radio:{uri}", "Recommendations")
                ),
                state=None,
            )
        )

    def has_focused_popup(self) -> bool:
        """Whether a popup holds the focus; an open search popup does not."""
        return self.popup is not None and not isinstance(self.popup, SearchPopup)

    def search_filtered_items(self, items: Iterable[T]) -> list[T]:
        """Items whose text contains every word of the search popup's query."""
        if not isinstance(self.popup, SearchPopup):
            return list(items)
        words = [w for w in self.popup.query.lower().split(" ") if w]
        if not words:
            return list(items)
        result = []
        for item in items:
            text = str(item).lower()
            if all(w in text for w in words):
                result.append(item)
        return result