import pytest

from spotstate.ui_page import LibraryPage, PageType, QueuePage
from spotstate.ui_popup import DeviceListPopup, SearchPopup
from spotstate.ui_state import UIState


def test_default_state():
    ui = UIState()
    assert ui.is_running
    assert len(ui.history) == 1
    assert ui.current_page().page_type() is PageType.LIBRARY
    assert ui.popup is None
    assert not ui.has_focused_popup()


def test_current_page_empty_history():
    ui = UIState(history=[])
    with pytest.raises(LookupError):
        ui.current_page()


def test_new_page_clears_popup():
    ui = UIState()
    ui.popup = DeviceListPopup()
    page = QueuePage()
    ui.new_page(page)
    assert ui.current_page() is page
    assert ui.popup is None
    assert len(ui.history) == 2


def test_new_search_popup_selects_first_item():
    ui = UIState()
    ui.new_search_popup()
    assert ui.popup == SearchPopup("")
    page = ui.current_page()
    assert isinstance(page, LibraryPage)
    assert page.state.playlist_list.selected() == 0
    assert not ui.has_focused_popup()


def test_has_focused_popup_for_list_popup():
    ui = UIState()
    ui.popup = DeviceListPopup()
    assert ui.has_focused_popup()


def test_new_radio_page():
    ui = UIState()
    ui.new_radio_page("spotify:track:abc")
    page = ui.current_page()
    assert page.page_type() is PageType.CONTEXT
    assert page.id is None
    assert page.context_page_type.title() == "Recommendations"
    assert page.context_page_type.context_id.uri() == "radio:spotify:track:abc"


def test_search_filtered_items_without_popup():
    ui = UIState()
    items = ["Alpha", "Beta"]
    assert ui.search_filtered_items(items) == items


def test_search_filtered_items_matches_all_words():
    ui = UIState(popup=SearchPopup("ROCK  band"))
    items = ["Rock Band Live", "rock only", "The band rocks", "jazz"]
    assert ui.search_filtered_items(items) == ["Rock Band Live", "The band rocks"]


def test_search_filtered_items_empty_query():
    ui = UIState(popup=SearchPopup("   "))
    assert ui.search_filtered_items(["a", "b"]) == ["a", "b"]


def test_search_filtered_items_no_match():
    ui = UIState(popup=SearchPopup("zzz"))
    assert ui.search_filtered_items(["a", "b"]) == []