"""The application's shared state."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Optional, Union

from .data import AppData
from .player import PlayerState
from .ui_state import UIState


class State:
    """UI, player and data state shared between the application's threads.

    Each part has its own lock, to be held while reading or changing it.
    """

    def __init__(
        self,
        is_daemon: bool = False,
        cache_folder: Optional[Union[str, Path]] = None,
        theme: Any = None,
    ) -> None:
        ui = UIState()
        if theme is not None:
            ui.theme = theme
        self.ui = ui
        self.player = PlayerState()
        self.data = (
            AppData.from_cache_folder(cache_folder) if cache_folder is not None else AppData()
        )
        self.is_daemon = is_daemon
        self.ui_lock = threading.RLock()
        self.player_lock = threading.RLock()
        self.data_lock = threading.RLock()